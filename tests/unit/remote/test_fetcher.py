"""Unit tests for dataset fetch operations."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import ClientConfig
from core.dataset_ref import DatasetRef
from core.errors import DatasetNotFoundError, DownloadError, ParseError
from remote.fetcher import DatasetFetcher
from remote.http_client import KaggleHttpClient
from tests.fake_http import API_ROOT, FakeSession, build_response

FILES_URL = f"{API_ROOT}/datasets/data/owner/dataset"
DOWNLOAD_URL = f"{API_ROOT}/datasets/download/owner/dataset"
VIEW_URL = f"{API_ROOT}/datasets/view/owner/dataset"
REF = DatasetRef("owner", "dataset")


def _fetcher(tmp_path: Path, session: FakeSession) -> DatasetFetcher:
    config = ClientConfig.create(
        username="test_user",
        api_key="test_key",
        download_root=tmp_path / "downloads",
        cache_root=tmp_path / "cache",
    )
    return DatasetFetcher(KaggleHttpClient(config, session=session))


def test_list_files_returns_parsed_json(tmp_path: Path) -> None:
    """Successful listing should return the decoded JSON object."""
    body = '{"files": [{"name": "data.csv", "size": 1024}]}'
    fetcher = _fetcher(tmp_path, FakeSession({FILES_URL: build_response(200, body)}))

    result = fetcher.list_files(REF)

    assert result == {"files": [{"name": "data.csv", "size": 1024}]}


def test_list_files_raises_not_found_for_error_status(tmp_path: Path) -> None:
    """Non-success listing status should raise DatasetNotFoundError."""
    session = FakeSession({FILES_URL: build_response(404, "Not found", reason="Not Found")})
    fetcher = _fetcher(tmp_path, session)

    with pytest.raises(DatasetNotFoundError) as error:
        fetcher.list_files(REF)

    assert "Dataset not found or accessible: owner/dataset" in str(error.value)


def test_list_files_raises_parse_error_for_invalid_json(tmp_path: Path) -> None:
    """Malformed JSON on a success response should raise ParseError."""
    fetcher = _fetcher(tmp_path, FakeSession({FILES_URL: build_response(200, "invalid json")}))

    with pytest.raises(ParseError):
        fetcher.list_files(REF)


def test_list_files_raises_parse_error_for_non_object(tmp_path: Path) -> None:
    """A JSON array is not a valid listing document."""
    fetcher = _fetcher(tmp_path, FakeSession({FILES_URL: build_response(200, "[1, 2]")}))

    with pytest.raises(ParseError):
        fetcher.list_files(REF)


def test_view_returns_metadata(tmp_path: Path) -> None:
    """View should read the dataset metadata endpoint."""
    body = '{"ref": "owner/dataset", "title": "Demo"}'
    fetcher = _fetcher(tmp_path, FakeSession({VIEW_URL: build_response(200, body)}))

    assert fetcher.view(REF)["title"] == "Demo"


def test_fetch_archive_returns_bytes(tmp_path: Path) -> None:
    """Archive fetch should return the raw response body."""
    session = FakeSession({DOWNLOAD_URL: build_response(200, b"PK\x03\x04payload")})

    content = _fetcher(tmp_path, session).fetch_archive(REF)

    assert content == b"PK\x03\x04payload"


def test_fetch_archive_raises_download_error_with_status(tmp_path: Path) -> None:
    """Non-success archive status should raise DownloadError naming the status."""
    session = FakeSession({DOWNLOAD_URL: build_response(403, "nope", reason="Forbidden")})

    with pytest.raises(DownloadError) as error:
        _fetcher(tmp_path, session).fetch_archive(REF)

    assert "owner/dataset" in str(error.value) and "403 Forbidden" in str(error.value)


def test_list_files_treats_redirect_status_as_not_found(tmp_path: Path) -> None:
    """Only 2xx responses count as success for listings."""
    session = FakeSession({FILES_URL: build_response(304, '{"files": []}', reason="Not Modified")})

    with pytest.raises(DatasetNotFoundError):
        _fetcher(tmp_path, session).list_files(REF)


def test_fetch_archive_treats_redirect_status_as_failure(tmp_path: Path) -> None:
    """An unfollowed redirect must not be handed to extraction."""
    session = FakeSession({DOWNLOAD_URL: build_response(302, b"", reason="Found")})

    with pytest.raises(DownloadError) as error:
        _fetcher(tmp_path, session).fetch_archive(REF)

    assert "302 Found" in str(error.value)
