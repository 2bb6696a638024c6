"""Shared typed models.

This module defines the request options and stage results passed
between the cache gate, fetcher, and materializer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Union

ParsedRecord = dict[str, Union[str, None]]
RecordSequence = list[ParsedRecord]
ParsedResult = Union[RecordSequence, dict[str, RecordSequence]]
DownloadResult = Union[ParsedResult, Path, None]

CacheLookupStatus = Literal["parsed", "extracted", "fetch", "absent"]


@dataclass(frozen=True)
class DownloadOptions:
    """Options for one dataset download call.

    Attributes:
        use_cache: Reuse parsed cache files and extraction directories.
        parse_csv: Parse extracted CSV files into records.
        force_cache: In cache-only mode, fail instead of returning nothing.
    """

    use_cache: bool = False
    parse_csv: bool = False
    force_cache: bool = False


@dataclass(frozen=True)
class CacheLookup:
    """Outcome of a cache gate check.

    Attributes:
        status: ``parsed`` and ``extracted`` are local hits, ``fetch`` means
            the archive must be downloaded, ``absent`` means cache-only mode
            has nothing to return.
        parsed: Cached parsed payload for ``parsed`` hits.
        extraction_dir: Existing extraction directory for ``extracted`` hits.
    """

    status: CacheLookupStatus
    parsed: ParsedResult | None = None
    extraction_dir: Path | None = None

    @property
    def is_hit(self) -> bool:
        """Return whether the request can be served from local disk."""
        return self.status in ("parsed", "extracted")
