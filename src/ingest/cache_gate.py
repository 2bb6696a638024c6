"""Local cache checks that run before any network access.

This module decides whether a download can be served from a parsed
cache file or an existing extraction directory, or whether the
archive has to be fetched.
"""

from __future__ import annotations

from core.config import ClientConfig
from core.dataset_ref import DatasetRef
from core.errors import CacheNotFoundError
from core.logging_config import get_logger
from core.types import CacheLookup, DownloadOptions
from store.archive_store import directory_has_entries
from store.parsed_cache import ParsedCache

_LOGGER = get_logger(__name__)


class CacheGate:
    """Resolve cache hits in priority order."""

    def __init__(self, config: ClientConfig, parsed_cache: ParsedCache) -> None:
        self._config = config
        self._parsed_cache = parsed_cache

    def lookup(self, ref: DatasetRef, options: DownloadOptions) -> CacheLookup:
        """Check parsed cache, then extraction directory, then cache-only policy.

        The parsed cache is consulted only when both ``use_cache`` and
        ``parse_csv`` are set, and it wins over an extraction directory.

        Args:
            ref: Dataset reference.
            options: Download options.

        Returns:
            Cache lookup outcome.

        Raises:
            CacheNotFoundError: If cache-only mode has no hit and
                ``force_cache`` is set.
            ParseError: If the parsed cache file is malformed.
        """
        if options.use_cache and options.parse_csv and self._parsed_cache.exists(ref.cache_key):
            _LOGGER.info("dataset_cache_hit", dataset=ref.path, source="parsed_cache")
            return CacheLookup(status="parsed", parsed=self._parsed_cache.load(ref.cache_key))
        extraction_dir = ref.extraction_dir(self._config.download_root)
        if options.use_cache and directory_has_entries(extraction_dir):
            _LOGGER.info("dataset_cache_hit", dataset=ref.path, source="extraction_dir")
            return CacheLookup(status="extracted", extraction_dir=extraction_dir)
        if not self._config.cache_only:
            return CacheLookup(status="fetch")
        if options.force_cache:
            raise CacheNotFoundError(
                f"Dataset '{ref.path}' not found in cache and force_cache is enabled"
            )
        _LOGGER.info("dataset_cache_miss", dataset=ref.path, cache_only=True)
        return CacheLookup(status="absent")
