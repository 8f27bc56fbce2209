"""Projections from repository results to ``ListingEntry`` rows."""

from __future__ import annotations

from ..repository.types import FileDetails, ObjectSummary, ObjectVersionView
from .types import ListingEntry


def entry_from_summary(summary: ObjectSummary) -> ListingEntry:
    return ListingEntry(
        version=summary.head_version,
        updated=summary.created,
        display_name=summary.identifier,
        storage_path=summary.root_path,
    )


def entry_from_file(path: str, details: FileDetails, digest_algorithm: str | None) -> ListingEntry:
    return ListingEntry(
        version=details.last_update_version,
        updated=details.last_update_created,
        display_name=path,
        storage_path=details.storage_path,
        digest_algorithm=digest_algorithm,
        digest=details.digest,
    )


def entries_from_version(view: ObjectVersionView) -> list[ListingEntry]:
    """Materialize one entry per logical path, in the view's state order."""
    return [entry_from_file(path, details, view.digest_algorithm) for path, details in view.state.items()]


__all__ = ["entry_from_summary", "entry_from_file", "entries_from_version"]
