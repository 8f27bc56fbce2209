"""Filesystem-backed OCFL repository.

Discovers object roots under a storage root and loads their inventories.
Version state is rebuilt from the inventory on every call; nothing is cached.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from ..errors import OcflViewError, RepositoryQueryError
from .types import FileDetails, ObjectResult, ObjectSummary, ObjectVersionView, VersionId

logger = logging.getLogger(__name__)

INVENTORY_FILENAME = "inventory.json"
OBJECT_MARKER_PREFIX = "0=ocfl_object_"
EXTENSIONS_DIRNAME = "extensions"


@dataclass(frozen=True)
class VersionRecord:
    """One entry of an inventory ``versions`` block."""

    created: datetime
    state: dict[str, list[str]]


@dataclass(frozen=True)
class Inventory:
    """The subset of an OCFL inventory needed for listings."""

    id: str
    head: VersionId
    digest_algorithm: str
    manifest: dict[str, list[str]]
    versions: dict[VersionId, VersionRecord]


def parse_timestamp(value: object) -> datetime:
    """Parse an ISO 8601 inventory timestamp into an aware ``datetime``.

    A trailing ``Z`` is accepted. Naive timestamps are taken as UTC.
    """
    if not isinstance(value, str):
        raise ValueError(f"expected timestamp string, got {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _digest_map(value: object, label: str) -> dict[str, list[str]]:
    if not isinstance(value, dict):
        raise ValueError(f"{label} must be a JSON object")
    out: dict[str, list[str]] = {}
    for digest, paths in value.items():
        if not isinstance(paths, list) or not all(isinstance(path, str) for path in paths):
            raise ValueError(f"{label} entry {digest!r} must be a list of paths")
        # Digests are case-insensitive in OCFL.
        out[str(digest).lower()] = list(paths)
    return out


def parse_inventory(data: object) -> Inventory:
    """Validate decoded inventory JSON and convert it to an ``Inventory``.

    Raises ``ValueError`` (or ``OcflViewError`` for bad version ids) when a
    required field is missing or malformed.
    """
    if not isinstance(data, dict):
        raise ValueError("inventory must be a JSON object")
    for key in ("id", "head", "digestAlgorithm", "manifest", "versions"):
        if key not in data:
            raise ValueError(f"inventory is missing {key!r}")

    raw_versions = data["versions"]
    if not isinstance(raw_versions, dict):
        raise ValueError("versions must be a JSON object")
    versions: dict[VersionId, VersionRecord] = {}
    for key, raw in raw_versions.items():
        if not isinstance(raw, dict):
            raise ValueError(f"version {key!r} must be a JSON object")
        versions[VersionId.parse(key)] = VersionRecord(
            created=parse_timestamp(raw.get("created")),
            state=_digest_map(raw.get("state", {}), f"state of {key}"),
        )

    head = VersionId.parse(str(data["head"]))
    if head not in versions:
        raise ValueError(f"head version {head} is not present in versions")

    return Inventory(
        id=str(data["id"]),
        head=head,
        digest_algorithm=str(data["digestAlgorithm"]),
        manifest=_digest_map(data["manifest"], "manifest"),
        versions=versions,
    )


def read_inventory_data(object_root: Path) -> object:
    """Read the decoded, unvalidated JSON of ``inventory.json``."""
    inventory_path = object_root / INVENTORY_FILENAME
    logger.debug("loading inventory %s", inventory_path)
    try:
        return json.loads(inventory_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RepositoryQueryError(f"Failed to read inventory {inventory_path}") from exc


def inventory_from_data(data: object, object_root: Path) -> Inventory:
    inventory_path = object_root / INVENTORY_FILENAME
    try:
        return parse_inventory(data)
    except (ValueError, OcflViewError) as exc:
        raise RepositoryQueryError(f"Invalid inventory {inventory_path}") from exc


def load_inventory(object_root: Path) -> Inventory:
    """Read and parse ``inventory.json`` from ``object_root``."""
    return inventory_from_data(read_inventory_data(object_root), object_root)


def summarize(inventory: Inventory, object_root: Path) -> ObjectSummary:
    return ObjectSummary(
        identifier=inventory.id,
        head_version=inventory.head,
        created=inventory.versions[inventory.head].created,
        root_path=str(object_root),
    )


def build_version_view(inventory: Inventory, object_root: Path, version: VersionId) -> ObjectVersionView | None:
    """Rebuild the file state of ``version``, or ``None`` if it does not exist.

    Each path's last-update version is the latest version, up to ``version``,
    in which the path was added or its digest changed.
    """
    if version not in inventory.versions:
        return None

    current: dict[str, str] = {}
    last_update: dict[str, VersionId] = {}
    for number in range(1, version.number + 1):
        version_id = VersionId(number)
        record = inventory.versions.get(version_id)
        if record is None:
            raise RepositoryQueryError(f"Object {inventory.id} is missing version {version_id}")
        state = {path: digest for digest, paths in record.state.items() for path in paths}
        for path, digest in state.items():
            if current.get(path) != digest:
                last_update[path] = version_id
        current = state

    files: dict[str, FileDetails] = {}
    for path, digest in current.items():
        content_paths = inventory.manifest.get(digest)
        if not content_paths:
            raise RepositoryQueryError(f"Object {inventory.id} manifest has no content for digest {digest}")
        update_version = last_update[path]
        files[path] = FileDetails(
            last_update_version=update_version,
            last_update_created=inventory.versions[update_version].created,
            storage_path=str(object_root / content_paths[0]),
            digest=digest,
        )

    return ObjectVersionView(
        id=inventory.id,
        version=version,
        created=inventory.versions[version].created,
        root=str(object_root),
        digest_algorithm=inventory.digest_algorithm,
        state=files,
    )


def _is_object_root(entries: list[os.DirEntry]) -> bool:
    return any(entry.name.startswith(OBJECT_MARKER_PREFIX) and entry.is_file() for entry in entries)


def iter_object_roots(storage_root: Path) -> Iterator[tuple[Path, Exception | None]]:
    """Depth-first walk yielding ``(object_root, None)`` or ``(directory, scan_error)``.

    Object roots are not descended into. Hidden directories and the top-level
    ``extensions`` directory are skipped. Siblings are visited in name order.
    """
    pending: list[Path] = [storage_root]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            yield directory, exc
            continue

        if directory != storage_root and _is_object_root(entries):
            logger.debug("found object root %s", directory)
            yield directory, None
            continue

        children: list[Path] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            if directory == storage_root and entry.name == EXTENSIONS_DIRNAME:
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if is_dir:
                children.append(Path(entry.path))
        pending.extend(reversed(children))


class FsOcflRepository:
    """OCFL repository rooted at a local storage-root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _require_root(self) -> None:
        if not self.root.is_dir():
            raise RepositoryQueryError(f"Storage root {self.root} is not a directory")

    def list_objects(self) -> Iterator[ObjectResult]:
        self._require_root()
        return self._iter_objects()

    def _iter_objects(self) -> Iterator[ObjectResult]:
        for path, scan_error in iter_object_roots(self.root):
            if scan_error is not None:
                error = RepositoryQueryError(f"Failed to scan directory {path}")
                error.__cause__ = scan_error
                yield ObjectResult.failed(error)
                continue
            try:
                inventory = load_inventory(path)
            except RepositoryQueryError as exc:
                yield ObjectResult.failed(exc)
                continue
            yield ObjectResult.ok(summarize(inventory, path))

    def get_object(self, object_id: str, version: VersionId | None = None) -> ObjectVersionView | None:
        self._require_root()
        for path, scan_error in iter_object_roots(self.root):
            if scan_error is not None:
                logger.warning("skipping unreadable directory %s: %s", path, scan_error)
                continue
            try:
                data = read_inventory_data(path)
            except RepositoryQueryError as exc:
                logger.warning("skipping object at %s while looking up %s: %s", path, object_id, exc.__cause__ or exc)
                continue
            if not isinstance(data, dict) or data.get("id") != object_id:
                continue
            # Errors in the requested object's own inventory propagate.
            inventory = inventory_from_data(data, path)
            return build_version_view(inventory, path, version or inventory.head)
        return None


__all__ = [
    "FsOcflRepository",
    "Inventory",
    "VersionRecord",
    "build_version_view",
    "iter_object_roots",
    "inventory_from_data",
    "load_inventory",
    "parse_inventory",
    "parse_timestamp",
    "read_inventory_data",
    "summarize",
]
