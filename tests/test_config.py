"""Tests for settings loading."""

import logging
from unittest.mock import patch

import pytest

from solenrich.config import CacheTTL, Settings, configure_logging


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = Settings(_env_file=None)

        assert settings.upstash_redis_rest_url == ""
        assert settings.upstash_redis_rest_token == ""
        assert settings.cache_prefix == "solenrich:"
        assert settings.parallel_timeout_seconds == 10.0
        assert settings.cache_ttl == CacheTTL()

    def test_default_ttls(self) -> None:
        """Test default cache TTLs."""
        ttl = CacheTTL()
        assert ttl.token_price == 60
        assert ttl.token_metadata == 600
        assert ttl.wallet_profile == 300
        assert ttl.transaction == 3600
        assert ttl.defi_protocol == 600
        assert ttl.jupiter_price == 60
        assert ttl.holder_data == 300

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variables override defaults."""
        monkeypatch.setenv("UPSTASH_REDIS_REST_URL", "https://eu1-fancy-cat.upstash.io")
        monkeypatch.setenv("UPSTASH_REDIS_REST_TOKEN", "AXXXabc123")
        monkeypatch.setenv("PARALLEL_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("CACHE_TTL__TOKEN_PRICE", "30")

        settings = Settings(_env_file=None)

        assert settings.upstash_redis_rest_url == "https://eu1-fancy-cat.upstash.io"
        assert settings.upstash_redis_rest_token == "AXXXabc123"
        assert settings.parallel_timeout_seconds == 2.5
        assert settings.cache_ttl.token_price == 30
        assert settings.cache_ttl.holder_data == 300


def test_configure_logging_level() -> None:
    with patch("logging.basicConfig") as basic_config:
        configure_logging("debug")
        configure_logging("not-a-level")

    assert basic_config.call_args_list[0].kwargs["level"] == logging.DEBUG
    assert basic_config.call_args_list[1].kwargs["level"] == logging.INFO
