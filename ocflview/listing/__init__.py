"""Listing subsystem: normalization, ordering, rendering, and request resolution."""

from .normalize import entries_from_version, entry_from_file, entry_from_summary
from .render import ListingFormat, render_entry
from .resolver import ListingRequest, parse_version_selector, run_listing
from .sorting import sort_entries
from .types import ListingEntry, SortField

__all__ = [
    "ListingEntry",
    "ListingFormat",
    "ListingRequest",
    "SortField",
    "entries_from_version",
    "entry_from_file",
    "entry_from_summary",
    "parse_version_selector",
    "render_entry",
    "run_listing",
    "sort_entries",
]
