"""Default configuration file and the entry-point logging decorator."""

from __future__ import annotations

import pytest
from loguru import logger

from studly.config import app_config_model
from studly.custom_logger import logged
from studly.config.app_config_model import ENV_DEFAULT_CONTENT, ConfigPaths


@pytest.fixture
def messages():
    """Collect loguru messages at debug level and above."""
    captured: list[str] = []
    sink_id = logger.add(lambda message: captured.append(message.record["message"]), level="DEBUG")
    yield captured
    logger.remove(sink_id)


# ============================================================================
# Default env file
# ============================================================================


class TestEnsureEnvFile:
    """A commented .env is written once and never overwritten."""

    def test_creates_default_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr(app_config_model, "app_data", tmp_path)
        paths = ConfigPaths()
        paths.ensure_env_file()
        assert paths.env_file_path == tmp_path / "config" / ".env"
        assert paths.env_file_path.read_text(encoding="utf-8") == ENV_DEFAULT_CONTENT

    def test_existing_file_is_kept(self, monkeypatch, tmp_path):
        monkeypatch.setattr(app_config_model, "app_data", tmp_path)
        env_file = tmp_path / "config" / ".env"
        env_file.parent.mkdir(parents=True)
        env_file.write_text("LOG_CONSOLE_LEVEL=DEBUG\n", encoding="utf-8")
        ConfigPaths().ensure_env_file()
        assert env_file.read_text(encoding="utf-8") == "LOG_CONSOLE_LEVEL=DEBUG\n"


# ============================================================================
# logged decorator
# ============================================================================


class TestLogged:
    """Entry and completion are traced; failures are logged and re-raised."""

    def test_traces_call(self, messages):
        @logged
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert any("Calling" in message and "add" in message for message in messages)
        assert any("Completed" in message and "add" in message for message in messages)

    def test_reraises_errors(self, messages):
        @logged
        def explode():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            explode()
        assert any("Error in" in message and "boom" in message for message in messages)

    def test_keeps_metadata(self):
        @logged
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
