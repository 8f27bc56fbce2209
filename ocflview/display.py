"""Per-invocation display settings shared by the renderer and error reporter.

Color capability is decided once, from the target stream and environment,
and then carried explicitly instead of being re-probed at each write.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Mapping, TextIO

from .errors import ConfigurationError

COLOR_MODES = ("auto", "always", "never")


@dataclass(frozen=True)
class DisplayConfig:
    """Output switches for one invocation.

    ``timezone`` is the zone timestamps are rendered in; ``None`` means the
    local system zone.
    """

    color: bool = False
    quiet: bool = False
    timezone: tzinfo | None = None


def stream_is_tty(stream: TextIO) -> bool:
    try:
        return os.isatty(stream.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def resolve_color(mode: str, stream: TextIO, environ: Mapping[str, str] | None = None) -> bool:
    """Decide whether to colorize output written to ``stream``.

    ``auto`` colors only a real terminal and honors ``NO_COLOR``.
    """
    if mode not in COLOR_MODES:
        raise ConfigurationError(f"Invalid color mode {mode!r}; expected one of: {', '.join(COLOR_MODES)}")
    if mode == "always":
        return True
    if mode == "never":
        return False
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    return stream_is_tty(stream)


__all__ = ["COLOR_MODES", "DisplayConfig", "resolve_color", "stream_is_tty"]
