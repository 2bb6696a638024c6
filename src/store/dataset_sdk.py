"""Python SDK for Kaggle dataset operations.

This module exposes the high-level client used by library callers
and the CLI. It wires configuration, transport, and the download
pipeline together once per client instance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import requests

from core.config import ClientConfig
from core.dataset_ref import DatasetRef
from core.types import DownloadOptions, DownloadResult, RecordSequence
from ingest.csv_reader import parse_csv_file
from ingest.pipeline import DatasetPipeline
from remote.fetcher import DatasetFetcher
from remote.http_client import KaggleHttpClient


class KaggleClient:
    """Primary SDK entry point for dataset workflows."""

    def __init__(
        self,
        username: str | None = None,
        api_key: str | None = None,
        credentials_file: str | Path | None = None,
        download_root: str | Path | None = None,
        cache_root: str | Path | None = None,
        timeout_seconds: float | None = None,
        cache_only: bool = False,
        session: requests.Session | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            username: Kaggle username.
            api_key: Kaggle API key.
            credentials_file: Optional ``kaggle.json`` style credentials file.
            download_root: Directory for archives and extracted datasets.
            cache_root: Directory for parsed-result cache files.
            timeout_seconds: Per-request network timeout.
            cache_only: Serve only from local disk.
            session: Optional requests session used for every API call.
            config: Prebuilt config; when given, the other settings are ignored.

        Raises:
            AuthenticationError: If credentials are missing outside cache-only mode.
        """
        if config is None:
            config = ClientConfig.create(
                username=username,
                api_key=api_key,
                credentials_file=credentials_file,
                download_root=download_root,
                cache_root=cache_root,
                timeout_seconds=timeout_seconds,
                cache_only=cache_only,
            )
        else:
            config.ensure_directories()
        self._config = config
        self._fetcher = DatasetFetcher(KaggleHttpClient(config, session=session))
        self._pipeline = DatasetPipeline(config, self._fetcher)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def username(self) -> str | None:
        return self._config.username

    @property
    def api_key(self) -> str | None:
        return self._config.api_key

    @property
    def download_root(self) -> Path:
        return self._config.download_root

    @property
    def cache_root(self) -> Path:
        return self._config.cache_root

    @property
    def timeout_seconds(self) -> float:
        return self._config.timeout_seconds

    @property
    def cache_only(self) -> bool:
        return self._config.cache_only

    def download_dataset(
        self,
        owner: str,
        name: str,
        *,
        use_cache: bool = False,
        parse_csv: bool = False,
        force_cache: bool = False,
    ) -> DownloadResult:
        """Download a dataset archive, or serve it from local cache.

        Args:
            owner: Dataset owner slug.
            name: Dataset slug.
            use_cache: Reuse parsed cache files and extraction directories.
            parse_csv: Parse extracted CSV files into records.
            force_cache: In cache-only mode, raise on a cache miss.

        Returns:
            A record list for a single CSV file, a mapping of file stem to
            records for several, the extraction directory when nothing was
            parsed, or ``None`` for a cache-only miss.

        Raises:
            ValidationError: If owner or name is invalid.
            CacheNotFoundError: If ``force_cache`` is set and nothing is cached.
            DownloadError: If the download or extraction fails.
            ParseError: If cached or extracted content is malformed.
            RequestError: On transport failures.
        """
        options = DownloadOptions(
            use_cache=use_cache,
            parse_csv=parse_csv,
            force_cache=force_cache,
        )
        return self._pipeline.download_dataset(DatasetRef(owner, name), options)

    def dataset_files(self, owner: str, name: str) -> dict[str, Any]:
        """Return the remote file listing for a dataset.

        Raises:
            DatasetNotFoundError: If the dataset is missing or inaccessible.
            ParseError: If the response body is malformed.
        """
        return self._fetcher.list_files(DatasetRef(owner, name))

    def list_dataset_files(self, owner: str, name: str) -> dict[str, Any]:
        """Alias for :meth:`dataset_files`."""
        return self.dataset_files(owner, name)

    def view_dataset(self, owner: str, name: str) -> dict[str, Any]:
        """Return remote dataset metadata.

        Raises:
            DatasetNotFoundError: If the dataset is missing or inaccessible.
            ParseError: If the response body is malformed.
        """
        return self._fetcher.view(DatasetRef(owner, name))

    def parse_csv_file(self, file_path: str | Path) -> RecordSequence:
        """Parse a local CSV file into header-keyed records.

        Raises:
            ValidationError: If the path is missing or not a CSV file.
            ParseError: If the file is malformed.
        """
        return parse_csv_file(file_path)
