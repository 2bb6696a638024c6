"""Integration tests for the download, cache, and offline workflow."""

from __future__ import annotations

import json
from pathlib import Path

from kaggle_datasets import KaggleClient
from tests.fake_http import API_ROOT, FakeSession, build_response, build_zip

DOWNLOAD_URL = f"{API_ROOT}/datasets/download/zillow/zecon"


def test_online_download_then_offline_cache_flow(tmp_path: Path) -> None:
    """Data cached online should be served by a later cache-only client."""
    archive = build_zip(
        {
            "train.csv": "id,price\n1,100\n2,",
            "nested/test.csv": "id,price\n3,300",
            "README.md": "about",
        }
    )
    session = FakeSession({DOWNLOAD_URL: build_response(200, archive)})
    online = KaggleClient(
        username="test_user",
        api_key="test_key",
        download_root=tmp_path / "downloads",
        cache_root=tmp_path / "cache",
        session=session,
    )

    online_result = online.download_dataset("zillow", "zecon", use_cache=True, parse_csv=True)
    offline = KaggleClient(
        download_root=tmp_path / "downloads",
        cache_root=tmp_path / "cache",
        cache_only=True,
    )
    offline_result = offline.download_dataset("zillow", "zecon", use_cache=True, parse_csv=True)
    cache_payload = json.loads(
        (tmp_path / "cache" / "zillow_zecon_parsed.json").read_text(encoding="utf-8")
    )

    assert online_result == {
        "train": [{"id": "1", "price": "100"}, {"id": "2", "price": None}],
        "test": [{"id": "3", "price": "300"}],
    }
    assert offline_result == online_result == cache_payload
    assert len(session.calls) == 1
    assert not (tmp_path / "downloads" / "zillow_zecon.zip").exists()


def test_offline_client_uses_extracted_directory(tmp_path: Path) -> None:
    """Cache-only mode can serve a previously extracted directory."""
    session = FakeSession(
        {DOWNLOAD_URL: build_response(200, build_zip({"data.csv": "k\nv"}))}
    )
    KaggleClient(
        username="test_user",
        api_key="test_key",
        download_root=tmp_path / "downloads",
        cache_root=tmp_path / "cache",
        session=session,
    ).download_dataset("zillow", "zecon")
    offline = KaggleClient(
        download_root=tmp_path / "downloads",
        cache_root=tmp_path / "cache",
        cache_only=True,
    )

    directory = offline.download_dataset("zillow", "zecon", use_cache=True)
    records = offline.download_dataset("zillow", "zecon", use_cache=True, parse_csv=True)

    assert directory == Path(tmp_path / "downloads" / "zillow_zecon")
    assert records == [{"k": "v"}]
