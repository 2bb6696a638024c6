"""Kaggle credential resolution.

This module loads ``kaggle.json`` style credential files and applies
the lookup order: explicit arguments, explicit file, default file,
then environment variables.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from core.constants import (
    API_KEY_ENV_VAR,
    CREDENTIALS_KEY_FIELD,
    CREDENTIALS_USERNAME_FIELD,
    DEFAULT_CREDENTIALS_FILE,
    USERNAME_ENV_VAR,
)
from core.errors import AuthenticationError


@dataclass(frozen=True)
class KaggleCredentials:
    """Resolved username and API key pair."""

    username: str | None
    api_key: str | None

    def is_complete(self) -> bool:
        """Return whether both values are present and non-blank."""
        return _is_valid_credential(self.username) and _is_valid_credential(self.api_key)


def resolve_credentials(
    username: str | None,
    api_key: str | None,
    credentials_file: str | Path | None,
    default_credentials_file: Path = DEFAULT_CREDENTIALS_FILE,
) -> KaggleCredentials:
    """Resolve credentials from arguments, files, and environment.

    Args:
        username: Explicit username argument.
        api_key: Explicit API key argument.
        credentials_file: Optional explicit credentials file path.
        default_credentials_file: Conventional credentials file, relative
            to the working directory.

    Returns:
        Resolved credentials, possibly incomplete.

    Raises:
        AuthenticationError: If a credentials file cannot be loaded.
    """
    if credentials_file is not None:
        file_credentials = load_credentials_file(Path(credentials_file).expanduser())
        return KaggleCredentials(
            username=username or file_credentials.username,
            api_key=api_key or file_credentials.api_key,
        )
    if username is None and api_key is None and default_credentials_file.is_file():
        return load_credentials_file(default_credentials_file)
    return KaggleCredentials(
        username=username or os.getenv(USERNAME_ENV_VAR),
        api_key=api_key or os.getenv(API_KEY_ENV_VAR),
    )


def load_credentials_file(file_path: Path) -> KaggleCredentials:
    """Load a ``{"username": ..., "key": ...}`` JSON credentials file.

    Args:
        file_path: Credentials file path.

    Returns:
        Credentials read from the file.

    Raises:
        AuthenticationError: If the file is missing, unreadable, or invalid.
    """
    if not file_path.is_file():
        raise AuthenticationError(
            f"Credentials file not found at {file_path}. "
            "Provide an existing kaggle.json file or pass credentials explicitly."
        )
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise AuthenticationError(
            f"Invalid credentials file format at {file_path}: {error.msg}."
        ) from error
    except (OSError, UnicodeDecodeError) as error:
        raise AuthenticationError(
            f"Failed to read credentials file at {file_path}: {error}."
        ) from error
    if not isinstance(payload, dict):
        raise AuthenticationError(
            f"Invalid credentials file format at {file_path}: expected a JSON object "
            f"with '{CREDENTIALS_USERNAME_FIELD}' and '{CREDENTIALS_KEY_FIELD}' fields."
        )
    return KaggleCredentials(
        username=_optional_str(payload.get(CREDENTIALS_USERNAME_FIELD)),
        api_key=_optional_str(payload.get(CREDENTIALS_KEY_FIELD)),
    )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _is_valid_credential(value: str | None) -> bool:
    return value is not None and bool(value.strip())
