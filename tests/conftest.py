"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_KAGGLE_ENV_VARS = (
    "KAGGLE_USERNAME",
    "KAGGLE_KEY",
    "KAGGLE_DOWNLOAD_ROOT",
    "KAGGLE_CACHE_ROOT",
    "KAGGLE_TIMEOUT",
)


def pytest_sessionstart() -> None:
    """Add src and repository root directories to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_path in (project_root / "src", project_root):
        if str(import_path) not in sys.path:
            sys.path.insert(0, str(import_path))


@pytest.fixture(autouse=True)
def isolated_kaggle_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear Kaggle env vars and run each test from an empty directory."""
    for env_var in _KAGGLE_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
