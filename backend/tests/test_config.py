"""
Portfolio API — Settings Unit Tests
====================================

What:  Environment parsing: aliases, prefix normalization, validation.
How:   Fresh Settings instances with `_env_file=None` and monkeypatched env.
"""

import pytest
from pydantic import ValidationError

from portfolio.config import Settings


class TestSettings:

    def test_next_public_aliases(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("CLOUDINARY_CLOUD_NAME", raising=False)
        monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://ref.supabase.co")
        monkeypatch.setenv("NEXT_PUBLIC_CLOUDINARY_CLOUD_NAME", "studio-cloud")

        config = Settings(_env_file=None)

        assert config.supabase_url == "https://ref.supabase.co"
        assert config.cloudinary_cloud_name == "studio-cloud"

    @pytest.mark.parametrize("raw, expected", [("/api", "/api"), ("api/", "/api"), ("/", ""), ("", "")])
    def test_api_prefix_normalized(self, monkeypatch, raw, expected):
        monkeypatch.setenv("API_PREFIX", raw)
        assert Settings(_env_file=None).api_prefix == expected

    def test_cors_origins_list(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
        assert Settings(_env_file=None).cors_origins_list == ["https://a.example", "https://b.example"]

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_missing_credentials_reported(self, monkeypatch):
        for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "CLOUDINARY_API_SECRET"):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(ValueError) as exc_info:
            Settings(_env_file=None).validate_required_for_production()
        message = str(exc_info.value)
        assert "SUPABASE_URL" in message
        assert "CLOUDINARY_API_SECRET" in message
