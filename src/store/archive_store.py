"""Archive persistence and extraction helpers.

This module writes downloaded archive bytes to the download root,
extracts zip entries into a dataset extraction directory, and
removes the working archive afterwards. Extraction runs in a staging
directory that replaces the extraction directory only when every
entry was written.
"""

from __future__ import annotations

import shutil
import tempfile
import zipfile
import zlib
from pathlib import Path

from core.errors import DownloadError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_STAGING_PREFIX = ".extracting-"


def write_archive(archive_path: Path, content: bytes) -> Path:
    """Write raw archive bytes to disk.

    Args:
        archive_path: Destination archive file.
        content: Archive payload.

    Returns:
        The written archive path.

    Raises:
        DownloadError: If the archive cannot be written.
    """
    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        archive_path.write_bytes(content)
    except OSError as error:
        remove_archive(archive_path)
        raise DownloadError(f"Failed to save archive {archive_path}: {error}") from error
    return archive_path


def extract_archive(archive_path: Path, target_dir: Path) -> list[Path]:
    """Extract every zip entry into a target directory.

    Relative entry paths are preserved. Directory entries create empty
    directories and file entries are written in full. On failure the
    target directory is left as it was before the call.

    Args:
        archive_path: Zip archive on disk.
        target_dir: Extraction directory.

    Returns:
        Extracted file paths in archive order.

    Raises:
        DownloadError: If the archive is corrupt, unreadable, or has entries
            that would land outside the target directory.
    """
    staging_dir = _create_staging_dir(target_dir)
    try:
        relative_paths = _extract_entries(archive_path, staging_dir)
        _replace_directory(staging_dir, target_dir)
    finally:
        _remove_tree(staging_dir)
    _LOGGER.info("archive_extracted", archive=str(archive_path), file_count=len(relative_paths))
    return [target_dir / relative_path for relative_path in relative_paths]


def remove_archive(archive_path: Path) -> None:
    """Delete a working archive file, logging instead of raising on failure."""
    try:
        archive_path.unlink(missing_ok=True)
    except OSError as error:
        _LOGGER.warning("archive_cleanup_failed", archive=str(archive_path), error=str(error))


def directory_has_entries(directory: Path) -> bool:
    """Return whether a directory exists and is non-empty."""
    if not directory.is_dir():
        return False
    return any(directory.iterdir())


def _create_staging_dir(target_dir: Path) -> Path:
    try:
        target_dir.parent.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix=_STAGING_PREFIX, dir=target_dir.parent))
    except OSError as error:
        raise DownloadError(
            f"Failed to prepare extraction directory next to {target_dir}: {error}"
        ) from error


def _extract_entries(archive_path: Path, staging_dir: Path) -> list[Path]:
    """Write archive entries below a staging directory.

    Returns:
        Extracted file paths relative to the staging directory.

    Raises:
        DownloadError: If any entry cannot be read or written.
    """
    relative_paths: list[Path] = []
    try:
        with zipfile.ZipFile(archive_path) as archive:
            for entry in archive.infolist():
                entry_path = _safe_entry_path(staging_dir, entry.filename)
                if entry.is_dir():
                    entry_path.mkdir(parents=True, exist_ok=True)
                    continue
                entry_path.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(entry) as source, entry_path.open("wb") as sink:
                    shutil.copyfileobj(source, sink)
                relative_paths.append(entry_path.relative_to(staging_dir.resolve()))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError, OSError) as error:
        raise DownloadError(f"Failed to extract zip file {archive_path}: {error}") from error
    return relative_paths


def _replace_directory(staging_dir: Path, target_dir: Path) -> None:
    try:
        if target_dir.exists():
            shutil.rmtree(target_dir)
        staging_dir.rename(target_dir)
    except OSError as error:
        raise DownloadError(
            f"Failed to move extracted files into {target_dir}: {error}"
        ) from error


def _remove_tree(directory: Path) -> None:
    if not directory.exists():
        return
    try:
        shutil.rmtree(directory)
    except OSError as error:
        _LOGGER.warning("staging_cleanup_failed", directory=str(directory), error=str(error))


def _safe_entry_path(target_dir: Path, entry_name: str) -> Path:
    """Resolve an archive entry path and reject traversal outside the target.

    Raises:
        DownloadError: If the entry escapes the target directory.
    """
    target_resolved = target_dir.resolve()
    entry_path = (target_dir / entry_name).resolve()
    if entry_path != target_resolved and target_resolved not in entry_path.parents:
        raise DownloadError(f"Unsafe zip entry path: {entry_name!r}")
    return entry_path
