"""Tests for the logging helpers."""

import logging

from crop_claims.utils.logging import ContextFormatter, get_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("crop_claims.test", logging.INFO, __file__, 10, "Claim recorded", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_extra_fields_are_appended():
    line = ContextFormatter("%(message)s").format(_record(policy_id="pol_01", payout=125000))
    assert line == "Claim recorded | payout=125000 policy_id=pol_01"


def test_plain_record_is_unchanged():
    assert ContextFormatter("%(message)s").format(_record()) == "Claim recorded"


def test_get_logger_configures_once():
    logger = get_logger("crop_claims.test.once", level="debug")
    assert logger.level == logging.DEBUG

    get_logger("crop_claims.test.once", level="debug")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, ContextFormatter)
