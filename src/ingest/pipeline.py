"""Download orchestration for dataset requests.

This module coordinates cache checks, archive fetches, extraction,
CSV parsing, and parsed-cache writes for one dataset call.
"""

from __future__ import annotations

from pathlib import Path

from core.config import ClientConfig
from core.dataset_ref import DatasetRef
from core.logging_config import get_logger
from core.types import CacheLookup, DownloadOptions, DownloadResult
from ingest.cache_gate import CacheGate
from ingest.materializer import Materializer
from remote.fetcher import DatasetFetcher
from store.parsed_cache import ParsedCache

_LOGGER = get_logger(__name__)


class DatasetPipeline:
    """Synchronous cache-gate, fetch, and materialize pipeline."""

    def __init__(self, config: ClientConfig, fetcher: DatasetFetcher) -> None:
        self._config = config
        self._fetcher = fetcher
        parsed_cache = ParsedCache(config.cache_root)
        self._cache_gate = CacheGate(config, parsed_cache)
        self._materializer = Materializer(config, parsed_cache)

    def download_dataset(self, ref: DatasetRef, options: DownloadOptions) -> DownloadResult:
        """Return dataset contents from cache or a fresh download.

        Args:
            ref: Dataset reference.
            options: Download options.

        Returns:
            Parsed records, the extraction directory, or ``None`` when
            cache-only mode has nothing cached.

        Raises:
            CacheNotFoundError: If a forced cache-only lookup misses.
            DownloadError: If the archive fetch or extraction fails.
            ParseError: If cached or extracted content is malformed.
            RequestError: On transport failures.
        """
        lookup = self._cache_gate.lookup(ref, options)
        if lookup.is_hit:
            return self._serve_cache_hit(lookup, options)
        if lookup.status == "absent":
            return None
        archive_bytes = self._fetcher.fetch_archive(ref)
        result = self._materializer.materialize(ref, archive_bytes, options)
        _log_download_completion(ref, options, result)
        return result

    def _serve_cache_hit(self, lookup: CacheLookup, options: DownloadOptions) -> DownloadResult:
        if lookup.status == "parsed" or lookup.extraction_dir is None:
            return lookup.parsed
        return self._materializer.finalize(lookup.extraction_dir, options)


def _log_download_completion(
    ref: DatasetRef,
    options: DownloadOptions,
    result: DownloadResult,
) -> None:
    _LOGGER.info(
        "dataset_download_materialized",
        dataset=ref.path,
        use_cache=options.use_cache,
        parse_csv=options.parse_csv,
        result_kind=_result_kind(result),
    )


def _result_kind(result: DownloadResult) -> str:
    if isinstance(result, Path):
        return "directory"
    if isinstance(result, dict):
        return "multi_file"
    return "single_file"
