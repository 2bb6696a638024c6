"""Parsed-result cache persistence.

This module reads and writes parsed CSV payloads as JSON files named
by dataset cache key under the cache root.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.errors import KaggleError, ParseError
from core.logging_config import get_logger
from core.types import ParsedResult

_LOGGER = get_logger(__name__)


class ParsedCache:
    """Filesystem-backed parsed-result cache."""

    def __init__(self, cache_root: Path) -> None:
        self._cache_root = cache_root

    def path_for(self, cache_key: str) -> Path:
        return self._cache_root / cache_key

    def exists(self, cache_key: str) -> bool:
        """Return whether a cache file exists for the key."""
        return self.path_for(cache_key).is_file()

    def load(self, cache_key: str) -> ParsedResult:
        """Load a cached parsed payload.

        Args:
            cache_key: Cache file name.

        Returns:
            Cached record list or mapping of record lists.

        Raises:
            ParseError: If the cache file is unreadable, not valid JSON, or has
                the wrong shape.
        """
        cache_path = self.path_for(cache_key)
        try:
            payload = json.loads(cache_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise ParseError(
                f"Failed to parse cached data at {cache_path}: {error}. "
                "Delete the cache file to rebuild it on the next download."
            ) from error
        except OSError as error:
            raise ParseError(f"Failed to read cached data at {cache_path}: {error}") from error
        if not isinstance(payload, (list, dict)):
            raise ParseError(
                f"Failed to parse cached data at {cache_path}: "
                "expected a JSON array or object at top level."
            )
        return payload

    def save(self, cache_key: str, data: ParsedResult) -> Path:
        """Write a parsed payload, replacing any existing entry.

        Args:
            cache_key: Cache file name.
            data: Parsed record list or mapping.

        Returns:
            Written cache file path.

        Raises:
            KaggleError: If the cache file cannot be written.
        """
        cache_path = self.path_for(cache_key)
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            cache_path.write_text(content, encoding="utf-8")
        except OSError as error:
            raise KaggleError(
                f"Failed to write parsed cache {cache_path}: {error}. "
                "Check that the cache root is a writable directory."
            ) from error
        _LOGGER.info("parsed_cache_written", cache_file=str(cache_path))
        return cache_path
