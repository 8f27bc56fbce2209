"""Canonical listing entry and sort-field datatypes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime

from ..errors import ConfigurationError
from ..repository.types import VersionId


@dataclass(frozen=True)
class ListingEntry:
    """One renderable row, built from either an object summary or a file record.

    Object-level entries never carry digest fields.
    """

    version: VersionId
    updated: datetime
    display_name: str
    storage_path: str
    digest_algorithm: str | None = None
    digest: str | None = None

    @property
    def has_digest(self) -> bool:
        return self.digest_algorithm is not None and self.digest is not None


class SortField(enum.Enum):
    NAME = "name"
    VERSION = "version"
    UPDATED = "updated"
    NONE = "none"

    @classmethod
    def parse(cls, value: "str | SortField") -> "SortField":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(field.value for field in cls)
            raise ConfigurationError(f"Invalid sort field {value!r}; expected one of: {choices}") from exc


__all__ = ["ListingEntry", "SortField"]
