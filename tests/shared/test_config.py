"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.profiles_table == "profiles"
        assert settings.avatars_bucket == "avatars"
        assert settings.site_url == "http://localhost:5173"
        assert settings.base_path == ""
        assert settings.min_password_length == 6

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"PROFILES_TABLE": "staff_profiles", "AVATARS_BUCKET": "photos"}):
            settings = Settings(_env_file=None)
            assert settings.profiles_table == "staff_profiles"
            assert settings.avatars_bucket == "photos"

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"


class TestRedirectUrls:
    def test_urls_in_development(self):
        """Without a base path, routes hang off the site root."""
        settings = Settings(site_url="http://localhost:5173", base_path="", _env_file=None)
        assert settings.login_path == "/login"
        assert settings.auth_callback_url == "http://localhost:5173/auth/callback"
        assert settings.password_reset_url == "http://localhost:5173/reset-password"

    def test_urls_under_base_path(self):
        """A deploy base path prefixes every route."""
        settings = Settings(
            site_url="https://paulkuff.github.io/",
            base_path="/hrmis-web-beta",
            _env_file=None,
        )
        assert settings.login_path == "/hrmis-web-beta/login"
        assert settings.auth_callback_url == "https://paulkuff.github.io/hrmis-web-beta/auth/callback"
        assert settings.url_for("/dashboard") == "https://paulkuff.github.io/hrmis-web-beta/dashboard"


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
