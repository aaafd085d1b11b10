"""Tests for logging setup."""

import io
import logging

import pytest
from rich.logging import RichHandler

from treemarks.utils.log import APP_LOGGER, LogConfig, get_logger, setup_logging


class FakeStream(io.StringIO):
    def __init__(self, tty: bool):
        super().__init__()
        self._tty = tty

    def isatty(self):
        return self._tty


@pytest.fixture(autouse=True)
def restore_loggers():
    app = logging.getLogger(APP_LOGGER)
    uic = logging.getLogger("PyQt6.uic")
    saved = list(app.handlers), app.level, app.propagate, uic.level
    yield
    app.handlers[:] = saved[0]
    app.setLevel(saved[1])
    app.propagate = saved[2]
    uic.setLevel(saved[3])


class TestSetupLogging:
    def test_plain_handler_without_tty(self, monkeypatch):
        monkeypatch.setattr("sys.stderr", FakeStream(tty=False))
        logger = setup_logging(LogConfig(level="DEBUG"))
        assert logger.name == APP_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], RichHandler)

    def test_rich_handler_on_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setattr("sys.stderr", FakeStream(tty=True))
        logger = setup_logging(LogConfig())
        assert isinstance(logger.handlers[0], RichHandler)

    def test_no_color_disables_rich(self, monkeypatch):
        monkeypatch.setattr("sys.stderr", FakeStream(tty=True))
        logger = setup_logging(LogConfig(no_color=True))
        assert not isinstance(logger.handlers[0], RichHandler)

    def test_unknown_level_falls_back(self):
        logger = setup_logging(LogConfig(level="chatty"))
        assert logger.level == logging.INFO

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        before = list(root.handlers)
        setup_logging(LogConfig())
        assert root.handlers == before

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging(LogConfig())
        logger = setup_logging(LogConfig())
        assert len(logger.handlers) == 1

    def test_module_records_reach_app_handler(self, monkeypatch):
        stream = FakeStream(tty=False)
        monkeypatch.setattr("sys.stderr", stream)
        setup_logging(LogConfig(level="INFO"))
        get_logger("treemarks.models.tree").info("moved 3 into 1")
        assert "treemarks.models.tree: moved 3 into 1" in stream.getvalue()

    def test_quiet_loggers(self):
        setup_logging(LogConfig(quiet=("PyQt6.uic",)))
        assert logging.getLogger("PyQt6.uic").level == logging.WARNING


class TestLogConfig:
    def test_from_empty_section(self):
        assert LogConfig.from_section({}) == LogConfig()

    def test_from_section(self):
        cfg = LogConfig.from_section({"level": "debug", "no_color": True, "quiet": ["urllib3"]})
        assert cfg.levelno == logging.DEBUG
        assert cfg.no_color is True
        assert cfg.quiet == ("urllib3",)

    def test_single_quiet_name(self):
        assert LogConfig.from_section({"quiet": "urllib3"}).quiet == ("urllib3",)


class TestGetLogger:
    def test_app_names_kept(self):
        assert get_logger("treemarks.x").name == "treemarks.x"
        assert get_logger(APP_LOGGER).name == APP_LOGGER

    def test_other_names_scoped(self):
        assert get_logger("__main__").name == "treemarks.__main__"
