import logging

import pytest

from planner_config import logging_config
from trip_planner.utils.logger import get_logger, setup_logger


def test_setup_logger_from_mode():
    planner_logger = setup_logger("PRODUCTION")

    assert planner_logger.log_file is None
    assert not planner_logger.detailed_logging
    assert logging.getLogger("ev_trip").level == logging.WARNING

    setup_logger("DEVELOPMENT")


def test_module_loggers_share_hierarchy():
    assert get_logger("charge_optimizer").name == "ev_trip.charge_optimizer"


def test_disabled_module_logger(monkeypatch):
    monkeypatch.setitem(logging_config.MODULE_LOGGING, "traffic_cache", False)
    assert get_logger("traffic_cache").disabled

    monkeypatch.setitem(logging_config.MODULE_LOGGING, "traffic_cache", True)
    assert not get_logger("traffic_cache").disabled


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        logging_config.switch_mode("VERBOSE")
