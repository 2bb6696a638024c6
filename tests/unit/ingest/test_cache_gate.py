"""Unit tests for cache lookup ordering."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import ClientConfig
from core.dataset_ref import DatasetRef
from core.errors import CacheNotFoundError
from core.types import DownloadOptions
from ingest.cache_gate import CacheGate
from store.parsed_cache import ParsedCache

REF = DatasetRef("owner", "dataset")


def _gate(tmp_path: Path, cache_only: bool = False) -> tuple[CacheGate, ClientConfig, ParsedCache]:
    config = ClientConfig.create(
        username=None if cache_only else "test_user",
        api_key=None if cache_only else "test_key",
        download_root=tmp_path / "downloads",
        cache_root=tmp_path / "cache",
        cache_only=cache_only,
    )
    parsed_cache = ParsedCache(config.cache_root)
    return CacheGate(config, parsed_cache), config, parsed_cache


def _populate_extraction_dir(config: ClientConfig) -> Path:
    extraction_dir = REF.extraction_dir(config.download_root)
    extraction_dir.mkdir(parents=True)
    (extraction_dir / "data.csv").write_text("a\n1", encoding="utf-8")
    return extraction_dir


def test_parsed_cache_wins_over_extraction_dir(tmp_path: Path) -> None:
    """A parsed cache hit should be preferred to an extraction directory."""
    gate, config, parsed_cache = _gate(tmp_path)
    _populate_extraction_dir(config)
    parsed_cache.save(REF.cache_key, [{"a": "cached"}])

    lookup = gate.lookup(REF, DownloadOptions(use_cache=True, parse_csv=True))

    assert lookup.status == "parsed"
    assert lookup.parsed == [{"a": "cached"}]
    assert lookup.is_hit


def test_parsed_cache_ignored_without_parse_csv(tmp_path: Path) -> None:
    """Parsed cache files are only consulted when parsing is requested."""
    gate, config, parsed_cache = _gate(tmp_path)
    extraction_dir = _populate_extraction_dir(config)
    parsed_cache.save(REF.cache_key, [{"a": "cached"}])

    lookup = gate.lookup(REF, DownloadOptions(use_cache=True))

    assert lookup.status == "extracted"
    assert lookup.extraction_dir == extraction_dir


def test_empty_extraction_dir_is_not_a_hit(tmp_path: Path) -> None:
    """An empty extraction directory should trigger a fetch."""
    gate, config, _ = _gate(tmp_path)
    REF.extraction_dir(config.download_root).mkdir(parents=True)

    lookup = gate.lookup(REF, DownloadOptions(use_cache=True))

    assert lookup.status == "fetch"
    assert not lookup.is_hit


def test_without_use_cache_always_fetches(tmp_path: Path) -> None:
    """Local artifacts are ignored when caching is not requested."""
    gate, config, parsed_cache = _gate(tmp_path)
    _populate_extraction_dir(config)
    parsed_cache.save(REF.cache_key, [{"a": "cached"}])

    lookup = gate.lookup(REF, DownloadOptions(parse_csv=True))

    assert lookup.status == "fetch"


def test_cache_only_miss_returns_absent(tmp_path: Path) -> None:
    """Cache-only mode without a hit reports absence."""
    gate, _, _ = _gate(tmp_path, cache_only=True)

    lookup = gate.lookup(REF, DownloadOptions(use_cache=True))

    assert lookup.status == "absent"


def test_cache_only_miss_with_force_cache_raises(tmp_path: Path) -> None:
    """Forced cache-only lookups fail on a miss."""
    gate, _, _ = _gate(tmp_path, cache_only=True)

    with pytest.raises(CacheNotFoundError) as error:
        gate.lookup(REF, DownloadOptions(use_cache=True, force_cache=True))

    assert "owner/dataset" in str(error.value)


def test_force_cache_ignored_outside_cache_only_mode(tmp_path: Path) -> None:
    """Force-cache has no effect when the network is allowed."""
    gate, _, _ = _gate(tmp_path)

    lookup = gate.lookup(REF, DownloadOptions(use_cache=True, force_cache=True))

    assert lookup.status == "fetch"
