"""Dataset fetch operations.

This module downloads raw dataset archives and reads dataset
listing and metadata endpoints. It never retries.
"""

from __future__ import annotations

from typing import Any

import requests

from core.constants import (
    DATASET_DOWNLOAD_ENDPOINT,
    DATASET_FILES_ENDPOINT,
    DATASET_VIEW_ENDPOINT,
)
from core.dataset_ref import DatasetRef
from core.errors import DatasetNotFoundError, DownloadError, ParseError
from core.logging_config import get_logger
from remote.http_client import KaggleHttpClient

_LOGGER = get_logger(__name__)


class DatasetFetcher:
    """Fetch archives and JSON documents for dataset references."""

    def __init__(self, http_client: KaggleHttpClient) -> None:
        self._http = http_client

    def fetch_archive(self, ref: DatasetRef) -> bytes:
        """Download the raw archive bytes for a dataset.

        Args:
            ref: Dataset reference.

        Returns:
            Archive payload.

        Raises:
            DownloadError: If the API answers with a non-success status.
            RequestError: On transport failures.
        """
        _LOGGER.info("dataset_download_started", dataset=ref.path)
        response = self._http.get(f"{DATASET_DOWNLOAD_ENDPOINT}/{ref.path}")
        if not _is_success(response):
            raise DownloadError(
                f"Failed to download dataset {ref.path}: {_status_message(response)}"
            )
        content = response.content
        _LOGGER.info("dataset_download_completed", dataset=ref.path, size_bytes=len(content))
        return content

    def list_files(self, ref: DatasetRef) -> dict[str, Any]:
        """Return the remote file listing for a dataset.

        Raises:
            DatasetNotFoundError: If the API answers with a non-success status.
            ParseError: If the body is not a JSON object.
        """
        return self._get_json_document(f"{DATASET_FILES_ENDPOINT}/{ref.path}", ref, "files")

    def view(self, ref: DatasetRef) -> dict[str, Any]:
        """Return the remote metadata document for a dataset.

        Raises:
            DatasetNotFoundError: If the API answers with a non-success status.
            ParseError: If the body is not a JSON object.
        """
        return self._get_json_document(f"{DATASET_VIEW_ENDPOINT}/{ref.path}", ref, "view")

    def _get_json_document(self, endpoint: str, ref: DatasetRef, label: str) -> dict[str, Any]:
        response = self._http.get(endpoint)
        if not _is_success(response):
            raise DatasetNotFoundError(f"Dataset not found or accessible: {ref.path}")
        return _parse_json_object(response, ref, label)


def _parse_json_object(response: requests.Response, ref: DatasetRef, label: str) -> dict[str, Any]:
    """Decode a JSON object response body.

    Args:
        response: Successful HTTP response.
        ref: Dataset reference for error context.
        label: Endpoint label for error context.

    Returns:
        Decoded JSON object.

    Raises:
        ParseError: If the body is malformed or not an object.
    """
    try:
        payload = response.json()
    except ValueError as error:
        raise ParseError(
            f"Failed to parse dataset {label} response for {ref.path}: {error}"
        ) from error
    if not isinstance(payload, dict):
        raise ParseError(
            f"Failed to parse dataset {label} response for {ref.path}: "
            "expected JSON object at top level."
        )
    return payload


def _is_success(response: requests.Response) -> bool:
    """Return whether a response carries a 2xx status; redirects are failures."""
    return 200 <= response.status_code < 300


def _status_message(response: requests.Response) -> str:
    reason = response.reason or "Unknown status"
    return f"HTTP {response.status_code} {reason}"
