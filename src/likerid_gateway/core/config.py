"""Centralized configuration using Pydantic BaseSettings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from eth_utils import decode_hex
from pydantic_settings import BaseSettings, SettingsConfigDict

from likerid_gateway.utils.exceptions import ConfigurationError

# Hostname prefix used for the test network
TESTNET_PREFIX = "rinkeby."

# Name suffix -> host and path of the public profile page
PROFILE_HOSTS = {
    "id.like.co": "like.co/in",
    "id.liker.land": "liker.land",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Signing key: hex string, or "@path" to a file holding the hex string
    private_key: Optional[str] = None

    # Gateway behaviour
    ttl: int = 300
    development: bool = False

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8080

    # Identity API
    upstream_timeout: float = 10.0

    # Sentry configuration (optional)
    sentry_dsn: Optional[str] = None
    sentry_environment: str = "production"
    sentry_traces_sample_rate: float = 1.0

    @property
    def network_prefix(self) -> str:
        """Return the hostname prefix for the selected network."""
        return TESTNET_PREFIX if self.development else ""

    @property
    def api_base_url(self) -> str:
        """Return the identity API base URL."""
        return f"https://api.{self.network_prefix}like.co"

    def profile_base_url(self, suffix: str) -> str:
        """Return the public profile URL prefix for a name suffix."""
        return f"https://{self.network_prefix}{PROFILE_HOSTS[suffix]}"

    @property
    def signing_key(self) -> bytes:
        """
        Return the raw 32-byte signing key.

        Raises ConfigurationError if the key is missing or malformed.
        """
        if not self.private_key:
            raise ConfigurationError("No private key configured")

        key = self.private_key.strip()

        if key.startswith("@"):
            try:
                key = Path(key[1:]).read_text(encoding="utf-8").strip()
            except OSError as e:
                raise ConfigurationError(f"Cannot read private key file: {e}") from e

        try:
            raw = decode_hex(key)
        except ValueError as e:
            raise ConfigurationError("Private key is not valid hex") from e

        if len(raw) != 32:
            raise ConfigurationError(
                f"Private key must be 32 bytes, got {len(raw)}"
            )

        return raw


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
