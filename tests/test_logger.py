"""Tests for KSail logging setup."""
import logging

import pytest

from ksail.core.logger import PACKAGE_LOGGER, get_logger, setup_file_logging


@pytest.fixture(autouse=True)
def drop_file_handlers():
    """Detach file handlers added by a test."""
    yield
    root = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


def _file_handlers():
    return [h for h in logging.getLogger(PACKAGE_LOGGER).handlers
            if isinstance(h, logging.FileHandler)]


def test_no_log_file_configured(monkeypatch):
    monkeypatch.delenv("KSAIL_LOG_FILE", raising=False)

    assert setup_file_logging() is None
    assert _file_handlers() == []


def test_log_file_from_environment(tmp_path, monkeypatch):
    target = tmp_path / "logs" / "ksail.log"
    monkeypatch.setenv("KSAIL_LOG_FILE", str(target))

    assert setup_file_logging() == target

    get_logger("ksail.scaffold.core").info("scaffold started")
    assert "scaffold started" in target.read_text()


def test_verbose_records_debug(tmp_path):
    target = tmp_path / "ksail.log"
    setup_file_logging(str(target), verbose=True)

    get_logger("ksail.scaffold.emitter").debug("mtime advanced")

    assert "DEBUG | mtime advanced" in target.read_text()


def test_debug_not_recorded_by_default(tmp_path):
    target = tmp_path / "ksail.log"
    setup_file_logging(str(target))

    get_logger("ksail.scaffold.emitter").debug("mtime advanced")

    assert "mtime advanced" not in target.read_text()


def test_later_file_replaces_earlier(tmp_path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    setup_file_logging(str(first))
    setup_file_logging(str(second))
    get_logger("ksail.cli").info("switched")

    assert len(_file_handlers()) == 1
    assert "switched" not in first.read_text()
    assert "switched" in second.read_text()


def test_module_loggers_share_package_handlers():
    logger = get_logger("ksail.scaffold.mirrors")

    assert logger.name == "ksail.scaffold.mirrors"
    assert logger.handlers == []
    assert logger.propagate
