"""
Postboard Backend — Settings Tests
====================================

What:  Validation rules of postboard.config.Settings.
"""

import pytest
from pydantic import ValidationError

from postboard.config import Settings


class TestSettings:

    def test_database_url_required(self, monkeypatch):
        """Without DATABASE_URL the service cannot be configured at all."""
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_blank_database_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(database_url="   ", _env_file=None)

    def test_defaults(self):
        settings = Settings(database_url="sqlite+aiosqlite:///./x.db", _env_file=None)

        assert settings.cors_origins_list == ["*"]
        assert settings.backend_port == 5000
        assert settings.store_timeout_seconds == 10.0

    def test_log_level_normalized(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///./x.db", log_level="debug", _env_file=None
        )
        assert settings.log_level == "DEBUG"

    def test_log_level_invalid(self):
        with pytest.raises(ValidationError):
            Settings(database_url="sqlite+aiosqlite:///./x.db", log_level="LOUD", _env_file=None)

    def test_cors_origins_list(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///./x.db",
            cors_origins="http://a.example, http://b.example",
            _env_file=None,
        )
        assert settings.cors_origins_list == ["http://a.example", "http://b.example"]

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(database_url="sqlite+aiosqlite:///./x.db", store_timeout_seconds=0, _env_file=None)
