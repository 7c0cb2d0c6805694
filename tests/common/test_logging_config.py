import json
import logging

import pytest

from common.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_fields_and_extra():
    record = logging.LogRecord(
        "odl.test", logging.WARNING, __file__, 10, "port %s", (7777,), None
    )
    record.component = "rest-port"

    entry = json.loads(JSONFormatter("odl-installer").format(record))

    assert entry["level"] == "WARNING"
    assert entry["service"] == "odl-installer"
    assert entry["logger"] == "odl.test"
    assert entry["message"] == "port 7777"
    assert entry["extra"] == {"component": "rest-port"}


def test_setup_logging_console_level(monkeypatch):
    monkeypatch.delenv("ODL_LOG_FORMAT", raising=False)
    logger = setup_logging(log_level="debug")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, JSONFormatter)
    assert logger.name == "odl-installer"


def test_setup_logging_json_and_invalid_level(monkeypatch):
    monkeypatch.setenv("ODL_LOG_FORMAT", "json")
    setup_logging(log_level="bogus")

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert isinstance(root.handlers[0].formatter, JSONFormatter)


def test_setup_logging_file_handler(tmp_path):
    log_file = tmp_path / "installer.log"
    setup_logging(log_level="INFO", enable_file=True, log_file_path=str(log_file))
    get_logger("odl.file").info("written")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_file.read_text().splitlines()
    assert json.loads(lines[-1])["message"] == "written"
