from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from planner_config.api_config import INFERENCE_CONFIG, get_inference_api_key
from planner_config.logging_config import is_detailed_logging_enabled
from trip_planner.utils.logger import get_logger, log_detailed

logger = get_logger('inference')


class InferenceClient:
    """Best-effort text generation over the Gemini REST API.

    `generate` returns the reply text, or None when the service is not
    configured or the call fails for any reason. It never raises.
    """

    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None,
                 config: Optional[Dict[str, Any]] = None):
        self.config = config or INFERENCE_CONFIG
        self.api_key = api_key if api_key is not None else get_inference_api_key()
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.config['base_url']}/{self.config['model']}:generateContent"

    def _payload(self, prompt: str, temperature: float, max_output_tokens: Optional[int],
                 json_response: bool) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {'temperature': temperature}
        if max_output_tokens:
            generation_config['maxOutputTokens'] = max_output_tokens
        if json_response:
            generation_config['responseMimeType'] = self.config['response_mime_type']
        return {
            'contents': [{'parts': [{'text': prompt}]}],
            'generationConfig': generation_config,
        }

    @staticmethod
    def _reply_text(data: Any) -> Optional[str]:
        try:
            return data['candidates'][0]['content']['parts'][0]['text']
        except (KeyError, IndexError, TypeError):
            return None

    def generate(self, prompt: str, temperature: float = 0.3, max_output_tokens: Optional[int] = None,
                 json_response: bool = True) -> Optional[str]:
        if not self.enabled:
            logger.debug("Inference service not configured; skipping request")
            return None

        if is_detailed_logging_enabled('inference'):
            log_detailed(f"PROMPT:\n{prompt}", "inference")

        try:
            response = self.session.post(
                self.endpoint,
                params={'key': self.api_key},
                json=self._payload(prompt, temperature, max_output_tokens, json_response),
                timeout=self.config['timeout_seconds'],
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Inference request failed: {e}")
            return None

        if not response.ok:
            logger.warning(f"Inference service returned {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Inference response is not JSON: {e}")
            return None

        text = self._reply_text(data)
        if not text:
            logger.warning("Inference response contained no text")
            return None

        if is_detailed_logging_enabled('inference'):
            log_detailed(f"REPLY:\n{text}", "inference")
        return text
