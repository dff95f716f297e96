"""
PasteBin Backend — Settings Tests
===================================
"""

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:

    def test_defaults_match_service_limits(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("BACKEND_PORT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.max_content_length == 50_000
        assert settings.max_title_length == 100
        assert settings.default_language == "plaintext"
        assert settings.paste_id_bytes == 4
        assert settings.max_body_size == 10 * 1024 * 1024
        assert settings.rate_limit_requests == 100
        assert settings.rate_limit_window == 15 * 60
        assert settings.backend_port == 3001

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_split(self):
        settings = Settings(cors_origins="http://a.example, http://b.example")
        assert settings.cors_origins_list == ["http://a.example", "http://b.example"]

    def test_port_read_from_port_env(self, monkeypatch):
        monkeypatch.delenv("BACKEND_PORT", raising=False)
        monkeypatch.setenv("PORT", "8080")
        assert Settings().backend_port == 8080
