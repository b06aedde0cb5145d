"""
Tolerant extraction of a JSON object from free-text model output.

Replies may wrap the object in prose or markdown fences; the first
balanced `{...}` that decodes to a JSON object wins.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

_FENCE_RE = re.compile(r"```(?:json)?\s*|\s*```", re.IGNORECASE)


@dataclass
class ExtractionResult:
    ok: bool
    value: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


def extract_json_object(text: Optional[str]) -> ExtractionResult:
    if not text or not text.strip():
        return ExtractionResult(ok=False, error="empty reply")

    cleaned = _FENCE_RE.sub("", text)
    decoder = json.JSONDecoder()
    start = cleaned.find("{")
    if start < 0:
        return ExtractionResult(ok=False, error="no JSON object found")

    last_error = None
    while start >= 0:
        try:
            value, _ = decoder.raw_decode(cleaned, start)
        except json.JSONDecodeError as e:
            last_error = str(e)
        else:
            if isinstance(value, dict):
                return ExtractionResult(ok=True, value=value)
        start = cleaned.find("{", start + 1)

    return ExtractionResult(ok=False, error=last_error or "no JSON object found")


def as_str(value: Any, default: str = "") -> str:
    if value is None or value == "":
        return default
    return str(value)


def as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number == number else default  # NaN


def as_str_list(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]
