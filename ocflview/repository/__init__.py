"""Repository collaborators: abstract interface, domain types, filesystem backend."""

from .base import OcflRepository
from .fs import FsOcflRepository
from .types import FileDetails, ObjectResult, ObjectSummary, ObjectVersionView, VersionId

__all__ = [
    "OcflRepository",
    "FsOcflRepository",
    "FileDetails",
    "ObjectResult",
    "ObjectSummary",
    "ObjectVersionView",
    "VersionId",
]
