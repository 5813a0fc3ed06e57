"""Tests for configuration classes."""

import os
import pytest
from unittest.mock import patch


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        """Test that default CORS origins are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            from config import CORSConfig

            config = CORSConfig()

            assert "http://localhost:8000" in config.allowed_origins

    def test_cors_parses_env_var(self):
        """Test that CORS origins are parsed from environment variable."""
        env_origins = "http://example.com,  http://localhost:3000 ,"
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            from config import _parse_cors_origins

            origins = _parse_cors_origins()

            assert origins == ["http://example.com", "http://localhost:3000"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        """Test default rate limit values."""
        with patch.dict(os.environ, {}, clear=True):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 60

    def test_rate_limit_from_env(self):
        """Test rate limit configuration from environment."""
        with patch.dict(
            os.environ,
            {"RATE_LIMIT_ENABLED": "false", "RATE_LIMIT_RPM": "120"},
        ):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 120


class TestSecurityConfig:
    """Tests for SecurityConfig class."""

    def test_secret_key_auto_generates(self):
        """Test that secret key is auto-generated when not in env."""
        with patch.dict(os.environ, {}, clear=True):
            from config import SecurityConfig

            assert SecurityConfig().secret_key

    def test_secret_key_from_env(self):
        """Test that secret key is read from environment."""
        with patch.dict(os.environ, {"SECRET_KEY": "my-super-secret-key-12345"}):
            from config import SecurityConfig

            assert SecurityConfig().secret_key == "my-super-secret-key-12345"


class TestDeckApiConfig:
    """Tests for DeckApiConfig class."""

    def test_defaults(self):
        """Test the deck API defaults."""
        with patch.dict(os.environ, {}, clear=True):
            from config import DeckApiConfig

            config = DeckApiConfig()

            assert config.base_url == "https://deckofcardsapi.com/api/deck/"
            assert config.deck_count == 2
            assert config.timeout == 10.0
            assert config.provider == "remote"
            assert config.card_back_uri.endswith("/back.png")

    def test_from_env(self):
        """Test deck API configuration from environment."""
        with patch.dict(
            os.environ,
            {
                "DECK_API_URL": "http://localhost:9000/api/deck/",
                "DECK_COUNT": "6",
                "DECK_API_TIMEOUT": "2.5",
                "DECK_PROVIDER": "Local",
            },
        ):
            from config import DeckApiConfig

            config = DeckApiConfig()

            assert config.base_url == "http://localhost:9000/api/deck/"
            assert config.deck_count == 6
            assert config.timeout == 2.5
            assert config.provider == "local"

    def test_invalid_provider(self):
        """Test an unknown provider name is rejected."""
        with patch.dict(os.environ, {"DECK_PROVIDER": "carrier-pigeon"}):
            from config import DeckApiConfig

            with pytest.raises(ValueError):
                DeckApiConfig()

    def test_frozen(self):
        """Test that DeckApiConfig is frozen (immutable)."""
        from config import DeckApiConfig

        config = DeckApiConfig()

        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            config.deck_count = 8


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_level_from_env(self):
        """Test the log level is read and upper-cased."""
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            from config import LoggingConfig

            assert LoggingConfig().level == "DEBUG"

    def test_default_level(self):
        """Test the default log level."""
        with patch.dict(os.environ, {}, clear=True):
            from config import LoggingConfig

            assert LoggingConfig().level == "INFO"


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_app_config_defaults(self):
        """Test default AppConfig values."""
        with patch.dict(os.environ, {}, clear=True):
            from config import AppConfig

            config = AppConfig()

            assert config.debug is False
            assert config.host == "0.0.0.0"
            assert config.port == 8000
            assert config.session_ttl == 3600

    def test_app_config_has_nested_configs(self):
        """Test that AppConfig has nested configuration objects."""
        from config import AppConfig

        config = AppConfig()

        assert hasattr(config, "deck_api")
        assert hasattr(config, "cors")
        assert hasattr(config, "rate_limit")
        assert hasattr(config, "security")
        assert hasattr(config, "logging")
