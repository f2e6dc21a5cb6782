"""
tests/core/test_logger.py

Tests for the logging setup.
"""

import logging

import pytest

from app.core import logger as logger_module
from app.core.config import settings


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest set it up."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestResolveLevel:

    def test_info_by_default(self) -> None:
        assert logger_module.resolve_level(debug=False) == "INFO"

    def test_debug_flag(self) -> None:
        assert logger_module.resolve_level(debug=True) == "DEBUG"

    def test_override_wins(self) -> None:
        assert logger_module.resolve_level(debug=True, override="warning") == "WARNING"


class TestBuildLoggingConfig:

    def test_root_uses_stdout_handler_at_level(self) -> None:
        config = logger_module.build_logging_config("INFO")

        assert config["root"] == {"level": "INFO", "handlers": ["stdout"]}
        assert config["handlers"]["stdout"]["stream"] == "ext://sys.stdout"
        assert config["formatters"]["service"]["format"] == logger_module.LOG_FORMAT

    def test_access_log_is_quietened(self) -> None:
        config = logger_module.build_logging_config("DEBUG")

        assert config["loggers"]["uvicorn.access"] == {"level": "WARNING"}

    def test_existing_loggers_survive(self) -> None:
        assert logger_module.build_logging_config("INFO")["disable_existing_loggers"] is False


class TestConfigureLogging:

    def test_leaves_configured_root_alone(self, restore_root_logger) -> None:
        restore_root_logger.addHandler(logging.NullHandler())

        assert logger_module.configure_logging() is False

    def test_force_installs_service_handler(
        self, restore_root_logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "log_level", "warning")

        assert logger_module.configure_logging(force=True) is True

        root = restore_root_logger
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == logger_module.LOG_FORMAT
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_get_logger_returns_named_logger(self) -> None:
        assert logger_module.get_logger("app.test").name == "app.test"
