"""Configuration module for dohjson.

Reads configuration from environment variables with validation.
"""
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_UPSTREAM = "https://dns.google.com/resolve"


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""
    pass


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Upstream DNS-over-HTTPS server
    upstream: str = DEFAULT_UPSTREAM
    timeout: float = 30.0
    allow_http: bool = False

    # Web server
    path: str = "/resolve"
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Optional environment variables:
        - DOH_UPSTREAM: Upstream DoH server URL (default: Google DNS)
        - DOH_TIMEOUT: Query timeout in seconds (default: 30)
        - DOH_ALLOW_HTTP: Allow plaintext HTTP (default: false)
        - DOH_PATH: Path the server answers on (default: /resolve)
        - HOST: Web server bind address (default: 0.0.0.0)
        - PORT: Web server port (default: 8080)
        - DEBUG: Enable debug mode (default: false)

        Returns:
            Config: Configuration object

        Raises:
            ConfigurationError: If a variable has an invalid value
        """
        upstream = os.environ.get("DOH_UPSTREAM", DEFAULT_UPSTREAM)
        if not upstream:
            raise ConfigurationError("DOH_UPSTREAM must not be empty")

        path = os.environ.get("DOH_PATH", "/resolve")
        if not path.startswith("/"):
            raise ConfigurationError(f"DOH_PATH must start with '/', got {path!r}")

        timeout = cls._parse_number("DOH_TIMEOUT", "30", float)
        if not timeout > 0:
            raise ConfigurationError(f"DOH_TIMEOUT must be positive, got {timeout}")

        port = cls._parse_number("PORT", "8080", int)
        if not 1 <= port <= 65535:
            raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}")

        return cls(
            upstream=upstream,
            timeout=timeout,
            allow_http=cls.parse_flag(os.environ.get("DOH_ALLOW_HTTP", "")),
            path=path,
            host=os.environ.get("HOST", "0.0.0.0"),
            port=port,
            debug=cls.parse_flag(os.environ.get("DEBUG", "")),
        )

    @staticmethod
    def _parse_number(key: str, default: str, kind: type):
        raw = os.environ.get(key, default)
        try:
            return kind(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got {raw!r}") from None

    @staticmethod
    def parse_flag(value: Optional[str]) -> bool:
        """Parse a boolean environment flag ("true", "1", "yes")."""
        return (value or "").lower() in ("true", "1", "yes")
