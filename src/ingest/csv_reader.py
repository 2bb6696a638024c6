"""CSV readers for extracted dataset files.

This module parses header-first CSV files into ordered record lists.
Empty and missing cells become ``None`` and malformed input fails
without partial results.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Iterator

from core.constants import CSV_EXTENSION
from core.errors import ParseError, ValidationError
from core.logging_config import get_logger
from core.types import ParsedResult, RecordSequence

_LOGGER = get_logger(__name__)


def is_csv_file(file_path: str | Path) -> bool:
    """Return whether a path has a CSV extension, ignoring case."""
    return Path(file_path).suffix.lower() == CSV_EXTENSION


def parse_csv_file(file_path: str | Path) -> RecordSequence:
    """Parse one CSV file into header-keyed records.

    Args:
        file_path: Path to a ``.csv`` file.

    Returns:
        One record per data row, in file order.

    Raises:
        ValidationError: If the path is missing, not a regular file, or not a CSV file.
        ParseError: If the file cannot be read or its content is malformed.
    """
    path = Path(file_path)
    if not path.exists():
        raise ValidationError(f"File does not exist: {path}")
    if not path.is_file():
        raise ValidationError(f"Path is not a regular file: {path}")
    if not is_csv_file(path):
        raise ValidationError(f"File is not a CSV: {path}")
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            return _rows_to_records(path, csv.reader(handle, strict=True))
    except csv.Error as error:
        raise ParseError(f"Failed to parse CSV file {path}: {error}") from error
    except UnicodeDecodeError as error:
        raise ParseError(f"Failed to parse CSV file {path}: invalid UTF-8 ({error.reason})") from error
    except OSError as error:
        raise ParseError(f"Failed to read CSV file {path}: {error}") from error


def find_csv_files(directory: Path) -> list[Path]:
    """Find CSV files anywhere under a directory, in sorted order."""
    return sorted(
        file_path
        for file_path in directory.rglob("*")
        if file_path.is_file() and is_csv_file(file_path)
    )


def parse_csv_files(csv_files: Iterable[Path]) -> ParsedResult:
    """Parse several CSV files keyed by file stem.

    Args:
        csv_files: CSV file paths.

    Returns:
        The single file's records when exactly one stem was parsed,
        otherwise a mapping from stem to records.
    """
    parsed: dict[str, RecordSequence] = {}
    for csv_file in csv_files:
        stem = csv_file.stem
        if stem in parsed:
            _LOGGER.warning("csv_stem_collision", stem=stem, replaced_by=str(csv_file))
        parsed[stem] = parse_csv_file(csv_file)
    if len(parsed) == 1:
        return next(iter(parsed.values()))
    return parsed


def _rows_to_records(path: Path, rows: Iterator[list[str]]) -> RecordSequence:
    header = next((row for row in rows if row), None)
    if header is None:
        return []
    records: RecordSequence = []
    for row_number, row in enumerate(rows, 1):
        if not row:
            continue
        if len(row) > len(header):
            _LOGGER.warning(
                "csv_extra_cells_dropped",
                file=str(path),
                row=row_number,
                extra_cells=len(row) - len(header),
            )
        records.append({column: _cell_value(row, index) for index, column in enumerate(header)})
    return records


def _cell_value(row: list[str], index: int) -> str | None:
    if index >= len(row) or row[index] == "":
        return None
    return row[index]
