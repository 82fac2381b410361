"""
Unit tests for Settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from playground.infrastructure.config.settings import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.script_timeout_ms == 1000
        assert settings.script_outer_timeout_ms == 1200
        assert settings.judge_base_url == "https://ce.judge0.com"
        assert settings.judge_catalog_ttl_seconds == 6 * 60 * 60
        assert settings.python_capture_output is True
        assert settings.items_file == Path("data") / "items.json"

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("PING_MESSAGE", "hello")
        monkeypatch.setenv("JUDGE_API_KEY", "k")
        monkeypatch.setenv("DATA_DIR", "/tmp/playground")

        settings = Settings(_env_file=None)

        assert settings.ping_message == "hello"
        assert settings.judge_api_key == "k"
        assert settings.items_file == Path("/tmp/playground/items.json")

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("field, value", [("log_level", "LOUD"), ("log_format", "xml"), ("environment", "qa")])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})
