import logging
from pathlib import Path

import pytest

from seismic_feed.utils.logging_utils import ApplicationLogger, resolve_level

LOGGER_NAME = "seismic_feed_logging_test"


@pytest.fixture
def app_logger(tmp_path: Path):
    app_logger = ApplicationLogger(tmp_path / "logs", logger_name=LOGGER_NAME, level="info")
    yield app_logger
    app_logger.close()


def test_messages_are_written_to_the_log_file(app_logger: ApplicationLogger) -> None:
    app_logger.get_logger("parser").info("Parsed 23 records")
    app_logger.get_logger("parser").debug("Flushing batch 1")
    app_logger.close()

    content = app_logger.log_file.read_text(encoding="utf-8")
    assert f"{LOGGER_NAME}.parser - INFO - Parsed 23 records" in content
    assert "Flushing batch 1" not in content


def test_console_carries_warnings_on_stderr_only(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    app_logger = ApplicationLogger(tmp_path, logger_name=LOGGER_NAME)
    try:
        app_logger.get_logger().info("routine")
        app_logger.get_logger().warning("field could not be parsed")
    finally:
        app_logger.close()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "field could not be parsed" in captured.err
    assert "routine" not in captured.err


def test_debug_flag_overrides_configured_level(tmp_path: Path) -> None:
    app_logger = ApplicationLogger(tmp_path, logger_name=LOGGER_NAME, level="ERROR", debug=True)
    try:
        assert app_logger.logger.level == logging.DEBUG
    finally:
        app_logger.close()


def test_reconfiguring_replaces_handlers(tmp_path: Path) -> None:
    first = ApplicationLogger(tmp_path, logger_name=LOGGER_NAME)
    second = ApplicationLogger(tmp_path, logger_name=LOGGER_NAME)

    assert len(second.logger.handlers) == 2
    second.close()
    assert first.logger.handlers == []


def test_transport_loggers_are_quieted(app_logger: ApplicationLogger) -> None:
    assert logging.getLogger("urllib3").level == logging.WARNING


@pytest.mark.parametrize("level, expected", [
    ("debug", logging.DEBUG),
    (" WARNING ", logging.WARNING),
    (logging.ERROR, logging.ERROR),
])
def test_resolve_level(level, expected) -> None:
    assert resolve_level(level) == expected


def test_resolve_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        resolve_level("chatty")
