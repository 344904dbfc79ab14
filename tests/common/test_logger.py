"""Tests for logging utilities."""

import logging

from rich.logging import RichHandler

from common.logger import get_logger, setup_logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_named_logger(self):
        """Test that get_logger returns a logger with the given name."""
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_default_level_is_info(self, monkeypatch):
        """Test that default logging level is INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = get_logger("test.default")
        assert logger.level == logging.INFO

    def test_level_from_env(self, monkeypatch):
        """Test that LOG_LEVEL sets the level when none is given."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        logger = get_logger("test.env_level")
        assert logger.level == logging.DEBUG

    def test_custom_level(self):
        """Test that custom logging level can be set."""
        logger = get_logger("test.custom", level="WARNING")
        assert logger.level == logging.WARNING

    def test_rich_handler_added_once(self):
        """Test that repeated calls do not stack handlers."""
        logger1 = get_logger("test.reuse")
        logger2 = get_logger("test.reuse")
        assert logger1 is logger2
        assert len(logger1.handlers) == 1
        assert isinstance(logger1.handlers[0], RichHandler)

    def test_records_reach_caplog(self, caplog):
        """Test that records propagate for capture."""
        logger = get_logger("test.output")

        with caplog.at_level(logging.INFO):
            logger.info("Generating book 6502")

        assert "Generating book 6502" in caplog.text


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_file_handler(self, tmp_path, monkeypatch):
        """Test that setup_logging can also write to a file."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        log_file = tmp_path / "build.log"

        try:
            setup_logging(level="INFO", log_file=str(log_file))
            logging.getLogger("test.file").info("written to file")
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers:
                if handler not in saved_handlers:
                    handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        assert "written to file" in log_file.read_text(encoding="utf-8")
