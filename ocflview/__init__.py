"""Public package surface for ocflview.

Exports ``main`` for programmatic CLI invocation.
The listing subsystem lives in ``ocflview.listing``; repositories in
``ocflview.repository``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
