"""Fixed-format, tab-separated rendering of listing entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo

from .sorting import canonical_timestamp
from .types import ListingEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
VERSION_WIDTH = 5
UPDATED_WIDTH = 19
NAME_WIDTH = 42
COLUMN_SEPARATOR = "\t"


@dataclass(frozen=True)
class ListingFormat:
    """Optional columns enabled for a listing."""

    long: bool = False
    physical: bool = False
    digest: bool = False


def format_updated(value: datetime, display_tz: tzinfo | None = None) -> str:
    """Format ``value`` in ``display_tz`` (local zone when ``None``)."""
    return canonical_timestamp(value).astimezone(display_tz).strftime(TIMESTAMP_FORMAT)


def render_entry(entry: ListingEntry, fmt: ListingFormat, display_tz: tzinfo | None = None) -> str:
    """Render one entry as a single output line without a trailing newline.

    The name is padded, never truncated, and written verbatim: embedded tabs
    or newlines in it are not escaped. The digest column is emitted only for
    entries that carry digest data, regardless of ``fmt.digest``.
    """
    columns: list[str] = []
    if fmt.long:
        columns.append(f"{entry.version.version_str:>{VERSION_WIDTH}}")
        columns.append(f"{format_updated(entry.updated, display_tz):<{UPDATED_WIDTH}}")
    columns.append(f"{entry.display_name:<{NAME_WIDTH}}")
    if fmt.physical:
        columns.append(entry.storage_path)
    if fmt.digest and entry.has_digest:
        columns.append(f"{entry.digest_algorithm}:{entry.digest}")
    return COLUMN_SEPARATOR.join(columns)


__all__ = [
    "COLUMN_SEPARATOR",
    "ListingFormat",
    "NAME_WIDTH",
    "TIMESTAMP_FORMAT",
    "UPDATED_WIDTH",
    "VERSION_WIDTH",
    "format_updated",
    "render_entry",
]
