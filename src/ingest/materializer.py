"""Archive materialization for fetched datasets.

This module saves and extracts archive bytes, parses extracted CSV
files when requested, and writes parsed results back to the cache.
"""

from __future__ import annotations

from pathlib import Path

from core.config import ClientConfig
from core.dataset_ref import DatasetRef
from core.logging_config import get_logger
from core.types import DownloadOptions, ParsedResult
from ingest.csv_reader import find_csv_files, parse_csv_files
from store.archive_store import extract_archive, remove_archive, write_archive
from store.parsed_cache import ParsedCache

_LOGGER = get_logger(__name__)


class Materializer:
    """Turn archive bytes into an extraction directory or parsed records."""

    def __init__(self, config: ClientConfig, parsed_cache: ParsedCache) -> None:
        self._config = config
        self._parsed_cache = parsed_cache

    def materialize(
        self,
        ref: DatasetRef,
        archive_bytes: bytes,
        options: DownloadOptions,
    ) -> ParsedResult | Path:
        """Save, extract, parse, and cache a downloaded archive.

        Args:
            ref: Dataset reference.
            archive_bytes: Raw zip payload.
            options: Download options.

        Returns:
            Parsed records when requested and CSV files exist, otherwise
            the extraction directory.

        Raises:
            DownloadError: If extraction fails.
            ParseError: If an extracted CSV file is malformed.
        """
        archive_path = write_archive(self._config.download_root / ref.archive_name, archive_bytes)
        extraction_dir = ref.extraction_dir(self._config.download_root)
        try:
            extract_archive(archive_path, extraction_dir)
        finally:
            remove_archive(archive_path)
        result = self.finalize(extraction_dir, options)
        if options.use_cache and not isinstance(result, Path):
            self._parsed_cache.save(ref.cache_key, result)
        return result

    def finalize(self, extraction_dir: Path, options: DownloadOptions) -> ParsedResult | Path:
        """Parse CSV files under an extraction directory if requested.

        Args:
            extraction_dir: Directory holding extracted dataset files.
            options: Download options.

        Returns:
            Parsed records, or the directory when parsing was not requested
            or no CSV files were found.
        """
        if not options.parse_csv:
            return extraction_dir
        csv_files = find_csv_files(extraction_dir)
        if not csv_files:
            _LOGGER.info("csv_files_not_found", extraction_dir=str(extraction_dir))
            return extraction_dir
        _LOGGER.info("csv_files_found", extraction_dir=str(extraction_dir), file_count=len(csv_files))
        return parse_csv_files(csv_files)
