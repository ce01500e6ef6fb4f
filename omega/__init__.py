"""Public package surface for omega.

Exports ``Session``, ``Document`` and ``EditorSync`` for host UIs and
``main`` for programmatic CLI invocation.
"""

from __future__ import annotations

from .session import Session
from .state import Document, ScrollOffset
from .sync import EditorSync


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["Document", "EditorSync", "ScrollOffset", "Session", "main"]
