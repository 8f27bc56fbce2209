"""Exception hierarchy and cause-chain formatting.

Library code raises these; the CLI is the only top-level handler.
"""

from __future__ import annotations


class OcflViewError(Exception):
    """Base class for every error raised by ocflview."""


class ConfigurationError(OcflViewError, ValueError):
    """Invalid user input or configuration, detected before any query runs."""


class RepositoryQueryError(OcflViewError):
    """I/O, parse, or corruption failure reported by a repository."""


def error_chain(exc: BaseException) -> list[BaseException]:
    """Return ``exc`` followed by its explicit causes, outermost first."""
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(current)
        current = current.__cause__
    return chain


def format_error_chain(exc: BaseException) -> str:
    """Join messages of ``exc`` and its causes with ``": "``.

    Exceptions with an empty message contribute their class name instead.
    """
    parts: list[str] = []
    for item in error_chain(exc):
        message = str(item).strip()
        parts.append(message or type(item).__name__)
    return ": ".join(parts)


__all__ = [
    "OcflViewError",
    "ConfigurationError",
    "RepositoryQueryError",
    "error_chain",
    "format_error_chain",
]
