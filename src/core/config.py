"""Runtime configuration model for the Kaggle client.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from core.constants import (
    CACHE_ROOT_ENV_VAR,
    DEFAULT_CACHE_ROOT,
    DEFAULT_DOWNLOAD_ROOT,
    DEFAULT_TIMEOUT_SECONDS,
    DOWNLOAD_ROOT_ENV_VAR,
    TIMEOUT_ENV_VAR,
)
from core.credentials import resolve_credentials
from core.errors import AuthenticationError, ConfigError


@dataclass(frozen=True)
class ClientConfig:
    """Validated client configuration.

    Attributes:
        username: Kaggle username, ``None`` in credential-less cache-only mode.
        api_key: Kaggle API key, ``None`` in credential-less cache-only mode.
        download_root: Directory for archives and extraction directories.
        cache_root: Directory for parsed-result cache files.
        timeout_seconds: Per-request network timeout.
        cache_only: Serve only from local disk and never touch the network.
    """

    username: str | None
    api_key: str | None
    download_root: Path
    cache_root: Path
    timeout_seconds: float
    cache_only: bool = False

    @classmethod
    def create(
        cls,
        *,
        username: str | None = None,
        api_key: str | None = None,
        credentials_file: str | Path | None = None,
        download_root: str | Path | None = None,
        cache_root: str | Path | None = None,
        timeout_seconds: float | None = None,
        cache_only: bool = False,
    ) -> "ClientConfig":
        """Build config from arguments, credential files, and environment.

        Unset roots and timeout fall back to ``KAGGLE_DOWNLOAD_ROOT``,
        ``KAGGLE_CACHE_ROOT``, ``KAGGLE_TIMEOUT``, then built-in defaults.
        Both roots are created as a side effect.

        Returns:
            A validated config object.

        Raises:
            AuthenticationError: If credentials are missing outside cache-only mode.
            ConfigError: If the timeout is invalid.
        """
        credentials = resolve_credentials(username, api_key, credentials_file)
        if not cache_only and not credentials.is_complete():
            raise AuthenticationError(
                "Username and API key are required "
                "(or set cache_only=True for cache-only access)"
            )
        config = cls(
            username=credentials.username,
            api_key=credentials.api_key,
            download_root=_resolve_root(download_root, DOWNLOAD_ROOT_ENV_VAR, DEFAULT_DOWNLOAD_ROOT),
            cache_root=_resolve_root(cache_root, CACHE_ROOT_ENV_VAR, DEFAULT_CACHE_ROOT),
            timeout_seconds=_resolve_timeout(timeout_seconds),
            cache_only=cache_only,
        )
        config.ensure_directories()
        return config

    def ensure_directories(self) -> None:
        """Create download and cache roots if they do not exist."""
        self.download_root.mkdir(parents=True, exist_ok=True)
        self.cache_root.mkdir(parents=True, exist_ok=True)


def _resolve_root(value: str | Path | None, env_var: str, default: Path) -> Path:
    """Pick a directory from argument, environment, or default."""
    if value is not None:
        return Path(value).expanduser()
    env_value = os.getenv(env_var)
    if env_value:
        return Path(env_value).expanduser()
    return default


def _resolve_timeout(value: float | None) -> float:
    """Pick and validate the request timeout.

    Args:
        value: Explicit timeout argument.

    Returns:
        Positive timeout in seconds.

    Raises:
        ConfigError: If the timeout is not a positive number.
    """
    if value is not None:
        return _validate_timeout(float(value), str(value))
    raw_value = os.getenv(TIMEOUT_ENV_VAR)
    if raw_value is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        parsed = float(raw_value)
    except ValueError as error:
        raise ConfigError(
            f"Invalid {TIMEOUT_ENV_VAR} value: expected number of seconds, got '{raw_value}'. "
            f"Set {TIMEOUT_ENV_VAR} to a positive number."
        ) from error
    return _validate_timeout(parsed, raw_value)


def _validate_timeout(timeout: float, raw_value: str) -> float:
    if timeout <= 0:
        raise ConfigError(
            f"Invalid request timeout '{raw_value}': expected a positive number of seconds."
        )
    return timeout
