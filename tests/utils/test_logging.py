import logging

from mgm.utils import logging as mgm_logging
from mgm.utils import normalize_collection_name
from mgm.utils.logging import (
    get_correlation_id,
    get_logger,
    resolve_slow_operation_ms,
    set_correlation_id,
    time_call,
)


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, collection="doc", threshold_ms=0):
        pass
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.message for record in records)
    assert records[-1].levelno == logging.WARNING
    assert records[-1].collection == "doc"


def test_slow_threshold_resolution(monkeypatch):
    monkeypatch.delenv("MGM_SLOW_OPERATION_MS", raising=False)
    assert resolve_slow_operation_ms(default=100) == 100
    monkeypatch.setenv("MGM_SLOW_OPERATION_MS", "250")
    assert resolve_slow_operation_ms(default=100) == 250
    assert resolve_slow_operation_ms(default=100, override=5) == 5
    monkeypatch.setenv("MGM_SLOW_OPERATION_MS", "fast")
    assert resolve_slow_operation_ms(default=100) == 100


def test_collection_name_normalization():
    assert normalize_collection_name("Doc") == "doc"
    assert normalize_collection_name("ReadingListEntry") == "reading_list_entry"
    assert normalize_collection_name("HTTPRequestLog") == "http_request_log"


def test_time_call_redacts_filter_in_emitted_records(caplog):
    logger = get_logger("tests.redacted")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("find", logger, filter={"name": "Ada", "password": "hunter2"}, threshold_ms=10_000):
        pass
    record = [record for record in caplog.records if record.name == logger.name][-1]
    assert record.filter == {"name": "Ada", "password": "***"}


def test_time_call_skips_redaction_when_level_disabled(monkeypatch):
    calls = []
    monkeypatch.setattr(mgm_logging, "redact_filter", lambda value: calls.append(value) or value)
    logger = get_logger("tests.quiet")
    logger.setLevel(logging.INFO)
    try:
        with time_call("find", logger, filter={"name": "Ada"}, threshold_ms=10_000):
            pass
    finally:
        logger.setLevel(logging.NOTSET)
    assert calls == []
