"""Abstract repository interface consumed by the listing subsystem."""

from __future__ import annotations

from typing import Iterator, Protocol

from .types import ObjectResult, ObjectVersionView, VersionId


class OcflRepository(Protocol):
    def list_objects(self) -> Iterator[ObjectResult]:
        """Enumerate every object in the repository.

        Returns a lazy, forward-only iterator. Failures for individual objects
        are yielded as ``ObjectResult.failed`` so enumeration can continue.
        Raises ``RepositoryQueryError`` when enumeration cannot start at all.
        """
        ...

    def get_object(self, object_id: str, version: VersionId | None = None) -> ObjectVersionView | None:
        """Return the view of ``object_id`` at ``version`` (HEAD when ``None``).

        Returns ``None`` when the object, or the requested version of it, does
        not exist. Raises ``RepositoryQueryError`` on any other failure.
        """
        ...
