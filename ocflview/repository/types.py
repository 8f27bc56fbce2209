"""Domain datatypes returned by OCFL repositories."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from ..errors import ConfigurationError

_VERSION_RE = re.compile(r"v([0-9]+)")


@dataclass(frozen=True, order=True)
class VersionId:
    """Positive OCFL version number.

    Ordering is numeric. The canonical string form is ``v<N>`` without zero
    padding, so ``VersionId(3)`` always prints as ``v3``.
    """

    number: int

    def __post_init__(self) -> None:
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise ConfigurationError(f"Version number must be an integer, got {self.number!r}")
        if self.number < 1:
            raise ConfigurationError(f"Version number must be greater than 0, got {self.number}")

    @classmethod
    def from_int(cls, number: int) -> "VersionId":
        return cls(number)

    @classmethod
    def parse(cls, value: str) -> "VersionId":
        """Parse an inventory version key such as ``v1`` or ``v003``."""
        match = _VERSION_RE.fullmatch(value)
        if match is None:
            raise ConfigurationError(f"Invalid version id: {value!r}")
        return cls(int(match.group(1)))

    @property
    def version_str(self) -> str:
        return f"v{self.number}"

    def __str__(self) -> str:
        return self.version_str


@dataclass(frozen=True)
class ObjectSummary:
    """HEAD-level description of one object, as enumerated from a repository."""

    identifier: str
    head_version: VersionId
    created: datetime
    root_path: str


@dataclass(frozen=True)
class FileDetails:
    """Per-path file state inside one object version."""

    last_update_version: VersionId
    last_update_created: datetime
    storage_path: str
    digest: str


@dataclass(frozen=True)
class ObjectVersionView:
    """File state of one object at one version."""

    id: str
    version: VersionId
    created: datetime
    root: str
    digest_algorithm: str
    state: Mapping[str, FileDetails] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "state", MappingProxyType(dict(self.state)))


@dataclass(frozen=True)
class ObjectResult:
    """One element of a whole-repository enumeration: a summary or an error."""

    summary: ObjectSummary | None = None
    error: Exception | None = None

    @classmethod
    def ok(cls, summary: ObjectSummary) -> "ObjectResult":
        return cls(summary=summary)

    @classmethod
    def failed(cls, error: Exception) -> "ObjectResult":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None


__all__ = [
    "VersionId",
    "ObjectSummary",
    "FileDetails",
    "ObjectVersionView",
    "ObjectResult",
]
