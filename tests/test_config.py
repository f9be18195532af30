"""Tests for core/config.py."""

# pylint: disable=missing-function-docstring

import pytest

from likerid_gateway.core.config import Settings
from likerid_gateway.utils.exceptions import ConfigurationError

from conftest import TEST_PRIVATE_KEY


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self, monkeypatch):
        # Clear env vars that conftest sets, to test actual defaults
        monkeypatch.delenv("PRIVATE_KEY", raising=False)

        settings = Settings(_env_file=None)
        assert settings.private_key is None
        assert settings.ttl == 300
        assert settings.development is False
        assert settings.port == 8080

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TTL", "60")
        monkeypatch.setenv("DEVELOPMENT", "true")
        monkeypatch.setenv("PORT", "9000")

        settings = Settings(_env_file=None)
        assert settings.ttl == 60
        assert settings.development is True
        assert settings.port == 9000

    def test_api_base_url_mainnet(self):
        settings = Settings(development=False, _env_file=None)
        assert settings.api_base_url == "https://api.like.co"

    def test_api_base_url_testnet(self):
        settings = Settings(development=True, _env_file=None)
        assert settings.api_base_url == "https://api.rinkeby.like.co"

    def test_profile_base_url_like_co(self):
        settings = Settings(development=False, _env_file=None)
        assert settings.profile_base_url("id.like.co") == "https://like.co/in"

    def test_profile_base_url_liker_land_testnet(self):
        settings = Settings(development=True, _env_file=None)
        assert (
            settings.profile_base_url("id.liker.land") == "https://rinkeby.liker.land"
        )


class TestSigningKey:
    """Tests for signing key loading."""

    def test_hex_key_with_prefix(self):
        settings = Settings(private_key=TEST_PRIVATE_KEY, _env_file=None)
        assert settings.signing_key == bytes.fromhex(TEST_PRIVATE_KEY[2:])

    def test_hex_key_without_prefix(self):
        settings = Settings(private_key=TEST_PRIVATE_KEY[2:], _env_file=None)
        assert len(settings.signing_key) == 32

    def test_key_from_file(self, tmp_path):
        key_file = tmp_path / "gateway.key"
        key_file.write_text(TEST_PRIVATE_KEY + "\n", encoding="utf-8")

        settings = Settings(private_key=f"@{key_file}", _env_file=None)
        assert settings.signing_key == bytes.fromhex(TEST_PRIVATE_KEY[2:])

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("PRIVATE_KEY", raising=False)
        settings = Settings(_env_file=None)

        with pytest.raises(ConfigurationError):
            _ = settings.signing_key

    def test_missing_key_file_raises(self, tmp_path):
        settings = Settings(private_key=f"@{tmp_path / 'nope.key'}", _env_file=None)

        with pytest.raises(ConfigurationError, match="Cannot read"):
            _ = settings.signing_key

    def test_non_hex_key_raises(self):
        settings = Settings(private_key="not-a-key", _env_file=None)

        with pytest.raises(ConfigurationError, match="not valid hex"):
            _ = settings.signing_key

    def test_short_key_raises(self):
        settings = Settings(private_key="0xdeadbeef", _env_file=None)

        with pytest.raises(ConfigurationError, match="32 bytes"):
            _ = settings.signing_key
