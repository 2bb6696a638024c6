"""Kaggle client exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class KaggleError(Exception):
    """Base exception for all Kaggle client failures."""


class AuthenticationError(KaggleError):
    """Raised for missing credentials or unreadable credentials files."""


class DatasetNotFoundError(KaggleError):
    """Raised when the remote API reports a dataset as missing or inaccessible."""


class DownloadError(KaggleError):
    """Raised when an archive download or its extraction fails."""


class ParseError(KaggleError):
    """Raised for malformed JSON bodies, CSV files, or cached payloads."""


class CacheNotFoundError(KaggleError):
    """Raised when a forced cache lookup cannot be satisfied."""


class RequestError(KaggleError):
    """Raised for transport failures such as timeouts or refused connections."""


class ValidationError(KaggleError):
    """Raised for invalid caller input."""


class ConfigError(KaggleError):
    """Raised for invalid runtime configuration."""
