"""Resolves a listing request against a repository and emits output lines.

Whole-repository listings stream one object at a time, reporting per-object
failures and moving on. Single-object listings are materialized, sorted, then
rendered. Request-level failures propagate to the caller.
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from typing import TextIO

from ..display import DisplayConfig
from ..errors import ConfigurationError, RepositoryQueryError
from ..report import ErrorReporter
from ..repository.base import OcflRepository
from ..repository.types import VersionId
from .normalize import entries_from_version, entry_from_summary
from .render import ListingFormat, render_entry
from .sorting import sort_entries
from .types import SortField

logger = logging.getLogger(__name__)

_SELECTOR_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ListingRequest:
    """Options of one ``ls`` invocation."""

    long: bool = False
    physical: bool = False
    digest: bool = False
    version: str | int | None = None
    sort: SortField = SortField.NAME
    reverse: bool = False
    object_id: str | None = None

    @property
    def format(self) -> ListingFormat:
        return ListingFormat(long=self.long, physical=self.physical, digest=self.digest)


def parse_version_selector(value: str | int | None) -> VersionId | None:
    """Convert a ``-v`` selector to a ``VersionId``.

    Accepts integers or decimal strings. Zero, negative, and non-numeric
    selectors raise ``ConfigurationError``.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid version number: {value!r}")
    if isinstance(value, int):
        return VersionId.from_int(value)
    text = str(value).strip()
    if _SELECTOR_RE.fullmatch(text) is None:
        raise ConfigurationError(f"Invalid version number: {value!r}")
    return VersionId.from_int(int(text))


def _emit(out: TextIO, line: str) -> None:
    out.write(line + "\n")


def list_objects(
    repo: OcflRepository,
    request: ListingRequest,
    reporter: ErrorReporter,
    out: TextIO,
    display: DisplayConfig,
) -> int:
    """Render every object in enumeration order; returns the number of lines."""
    try:
        results = repo.list_objects()
    except RepositoryQueryError as exc:
        raise RepositoryQueryError("Failed to list objects") from exc

    if request.sort is not SortField.NAME or request.reverse:
        logger.debug("sorting is not applied to whole-repository listings")

    fmt = request.format
    rendered = 0
    for result in results:
        if result.error is not None:
            reporter.error(result.error)
            continue
        _emit(out, render_entry(entry_from_summary(result.summary), fmt, display.timezone))
        rendered += 1
    return rendered


def list_object_contents(
    repo: OcflRepository,
    request: ListingRequest,
    reporter: ErrorReporter,
    out: TextIO,
    display: DisplayConfig,
) -> int:
    """Render the file state of one object version; returns the number of lines."""
    object_id = request.object_id
    version = parse_version_selector(request.version)
    view = repo.get_object(object_id, version)
    if view is None:
        reporter.not_found(object_id, version)
        return 0

    fmt = request.format
    entries = sort_entries(entries_from_version(view), request.sort, request.reverse)
    for entry in entries:
        _emit(out, render_entry(entry, fmt, display.timezone))
    return len(entries)


def run_listing(
    repo: OcflRepository,
    request: ListingRequest,
    reporter: ErrorReporter,
    out: TextIO | None = None,
    display: DisplayConfig | None = None,
) -> int:
    """Dispatch ``request`` to a whole-repository or single-object listing.

    Raises ``ConfigurationError`` for a bad version selector and
    ``RepositoryQueryError`` for request-level repository failures.
    """
    stream = out or sys.stdout
    active_display = display or reporter.display
    if request.object_id is not None:
        return list_object_contents(repo, request, reporter, stream, active_display)
    return list_objects(repo, request, reporter, stream, active_display)


__all__ = [
    "ListingRequest",
    "list_object_contents",
    "list_objects",
    "parse_version_selector",
    "run_listing",
]
