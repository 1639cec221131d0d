"""
Tests for logging setup

Tests for archiscape/utils/logger.py
"""

import logging

from archiscape.utils.logger import LOG_FORMAT, get_logger, logger, setup_logger


class TestSetupLogger:
    """Handlers and levels."""

    def test_console_only_without_log_dir(self):
        test_logger = setup_logger("archiscape-test-console", "DEBUG", log_dir=None)

        assert test_logger.level == logging.DEBUG
        assert test_logger.propagate is False
        assert len(test_logger.handlers) == 1
        assert isinstance(test_logger.handlers[0], logging.StreamHandler)
        assert test_logger.handlers[0].formatter._fmt == LOG_FORMAT

    def test_file_handler_in_log_dir(self, tmp_path):
        log_dir = tmp_path / "logs"
        test_logger = setup_logger("archiscape-test-file", "INFO", log_dir=str(log_dir))

        file_handlers = [h for h in test_logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == str(log_dir / "archiscape-test-file.log")

        test_logger.info("렌더링 완료")
        file_handlers[0].flush()
        assert "렌더링 완료" in (log_dir / "archiscape-test-file.log").read_text(encoding="utf-8")

        for handler in file_handlers:
            test_logger.removeHandler(handler)
            handler.close()

    def test_setup_is_idempotent(self):
        first = setup_logger("archiscape-test-repeat", log_dir=None)
        second = setup_logger("archiscape-test-repeat", log_dir=None)

        assert first is second
        assert len(second.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        test_logger = setup_logger("archiscape-test-level", "LOUD", log_dir=None)

        assert test_logger.level == logging.INFO


class TestGetLogger:
    """Per-module child loggers."""

    def test_child_of_application_logger(self):
        child = get_logger("gemini")

        assert child.name == "archiscape.gemini"
        assert child.parent is logger
        assert child.handlers == []
