"""Public SDK surface for the Kaggle dataset client.

This module provides a stable import path for library users.
It re-exports the primary client, config, and error types.
"""

from __future__ import annotations

from core.config import ClientConfig
from core.constants import CLIENT_VERSION as __version__
from core.dataset_ref import DatasetRef
from core.errors import (
    AuthenticationError,
    CacheNotFoundError,
    ConfigError,
    DatasetNotFoundError,
    DownloadError,
    KaggleError,
    ParseError,
    RequestError,
    ValidationError,
)
from core.types import DownloadOptions, ParsedRecord, ParsedResult
from ingest.csv_reader import parse_csv_file
from store.dataset_sdk import KaggleClient

__all__ = [
    "AuthenticationError",
    "CacheNotFoundError",
    "ClientConfig",
    "ConfigError",
    "DatasetNotFoundError",
    "DatasetRef",
    "DownloadError",
    "DownloadOptions",
    "KaggleClient",
    "KaggleError",
    "ParseError",
    "ParsedRecord",
    "ParsedResult",
    "RequestError",
    "ValidationError",
    "__version__",
    "parse_csv_file",
]
