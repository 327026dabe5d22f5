"""Tests for run logging setup."""

import logging

from loadgate.verbose import setup_logger


def test_logger_creates_debug_log(tmp_path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_logger_writes_to_file(tmp_path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "DEBUG" in content


def test_child_logger_propagates_to_file(tmp_path):
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    logging.getLogger("loadgate.stats").debug("from child")

    assert "from child" in debug_file.read_text()


def test_verbose_mode_adds_stderr_handler(tmp_path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    handler_types = [type(h).__name__ for h in logger.handlers]
    assert sorted(handler_types) == ["FileHandler", "StreamHandler"]


def test_setup_twice_replaces_handlers(tmp_path):
    setup_logger(debug_file=tmp_path / "a.log", verbose=True)
    logger = setup_logger(debug_file=tmp_path / "b.log", verbose=False)

    assert len(logger.handlers) == 1
    logger.info("second run")
    assert "second run" in (tmp_path / "b.log").read_text()
    assert "second run" not in (tmp_path / "a.log").read_text()


def test_logger_creates_parent_directories(tmp_path):
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    assert debug_file.exists()
