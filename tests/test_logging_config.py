"""Unit tests for logging setup."""
import json
import logging

import pytest
import structlog

from termchat.logging_config import configure_logging, level_from_string


@pytest.fixture
def restore_logging():
    """Put root logging and structlog back after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


class TestLevelFromString:
    """Tests for level_from_string."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("error", logging.ERROR)],
    )
    def test_known_levels(self, name, expected):
        assert level_from_string(name) == expected

    def test_unknown_level_falls_back_to_info(self):
        assert level_from_string("verbose") == logging.INFO


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_records_go_to_log_file(self, tmp_path, restore_logging):
        """Test that records are written as key=value lines."""
        log_file = tmp_path / "logs" / "termchat.log"
        configure_logging("info", log_file)

        structlog.get_logger("termchat.test").info("message_sent", author="alice")

        contents = log_file.read_text(encoding="utf-8")
        assert "event='message_sent'" in contents
        assert "author='alice'" in contents
        assert "level='info'" in contents

    def test_records_below_level_are_dropped(self, tmp_path, restore_logging):
        log_file = tmp_path / "termchat.log"
        configure_logging("warning", log_file)

        logger = structlog.get_logger("termchat.test")
        logger.info("quiet")
        logger.warning("loud")

        contents = log_file.read_text(encoding="utf-8")
        assert "quiet" not in contents
        assert "loud" in contents

    def test_json_output(self, tmp_path, restore_logging):
        """Test that json_output writes one JSON object per line."""
        log_file = tmp_path / "termchat.log"
        configure_logging("debug", log_file, json_output=True)

        structlog.get_logger("termchat.test").debug("tick", count=3)

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert record["event"] == "tick"
        assert record["count"] == 3
        assert record["logger"] == "termchat.test"

    def test_without_log_file_nothing_is_printed(self, capsys, restore_logging):
        """Test that records are discarded when no file is given."""
        configure_logging("debug")

        structlog.get_logger("termchat.test").error("hidden")

        captured = capsys.readouterr()
        assert "hidden" not in captured.out
        assert "hidden" not in captured.err
