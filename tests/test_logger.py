"""
Tests for Structured Logging
"""

import json
import logging

from licensesnip.logging import StructuredFormatter, configure_logging, get_logger


def _record(message, **extra):
    record = logging.LogRecord(
        name="licensesnip.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_outputs_json():
    """Test every record is one JSON object with the run id"""
    formatter = StructuredFormatter(run_id="run-42")
    data = json.loads(formatter.format(_record("Failed to process a.rs")))

    assert data["level"] == "WARNING"
    assert data["run_id"] == "run-42"
    assert data["message"] == "Failed to process a.rs"
    assert "timestamp" in data


def test_formatter_merges_extra_fields():
    """Test extra_fields are lifted into the JSON object"""
    formatter = StructuredFormatter()
    data = json.loads(formatter.format(_record("x", extra_fields={"path": "src/a.rs"})))
    assert data["path"] == "src/a.rs"


def test_get_logger_configures_once():
    """Test repeated calls reuse the handler and update the level"""
    logger = get_logger("licensesnip.test_once", level=logging.ERROR)
    again = get_logger("licensesnip.test_once", level=logging.DEBUG)

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0].formatter, StructuredFormatter)
    assert not logger.propagate


def test_configure_logging_without_file():
    """Test fallback to basicConfig when no YAML is given"""
    assert configure_logging(None) is False


def test_configure_logging_from_yaml(tmp_path):
    """Test a dictConfig YAML file is applied"""
    log_file = tmp_path / "logs" / "run.log"
    config = tmp_path / "logging.yaml"
    config.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "formatters:\n"
        "  structured:\n"
        "    (): licensesnip.logging.logger.StructuredFormatter\n"
        "    run_id: yaml-run\n"
        "handlers:\n"
        "  file:\n"
        "    class: logging.FileHandler\n"
        "    formatter: structured\n"
        f"    filename: {log_file.as_posix()}\n"
        "loggers:\n"
        "  licensesnip.yaml_test:\n"
        "    level: INFO\n"
        "    handlers: [file]\n"
        "    propagate: false\n",
        encoding="utf-8"
    )

    assert configure_logging(str(config)) is True
    logger = logging.getLogger("licensesnip.yaml_test")
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    data = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
    assert data["run_id"] == "yaml-run"
    assert data["message"] == "hello"


def test_configure_logging_bad_yaml(tmp_path):
    """Test an empty YAML file falls back"""
    config = tmp_path / "logging.yaml"
    config.write_text("", encoding="utf-8")
    assert configure_logging(str(config)) is False
