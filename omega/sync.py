"""Editing-surface event handlers.

Edits, cursor moves and scrolls are applied to the current document only.
Each handler builds the updated ``Document`` first and publishes it to the
store in one assignment.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .session import DIRTY_MARKER, Session
from .state import Document, ScrollOffset

ScrollArg = ScrollOffset | tuple[int, int]


@dataclass
class EditorSync:
    """Apply editing-surface events to the session's current document."""

    session: Session
    set_title: Callable[[str], None] | None = None
    dirty_marker: str = DIRTY_MARKER

    def _current(self) -> tuple[Path, Document] | None:
        path = self.session.current_file
        document = self.session.store.get(path)
        if path is None or document is None:
            return None
        return path, document

    def _publish_title(self) -> None:
        if self.set_title is None:
            return
        self.set_title(self.session.current_title(self.dirty_marker))

    def on_edit(self, content: str, scroll_offset: ScrollArg, cursor: Any) -> None:
        current = self._current()
        if current is None:
            return
        path, document = current
        self.session.store.put(
            path,
            replace(
                document,
                content=content,
                scroll_offset=ScrollOffset.coerce(scroll_offset),
                cursor=cursor,
            ),
        )
        self.session.mark_dirty(path)
        self._publish_title()

    def on_interact(self, scroll_offset: ScrollArg, cursor: Any) -> None:
        """Cursor or selection moved without a text change."""
        current = self._current()
        if current is None:
            return
        path, document = current
        self.session.store.put(
            path,
            replace(document, scroll_offset=ScrollOffset.coerce(scroll_offset), cursor=cursor),
        )

    def on_scroll(self, scroll_offset: ScrollArg) -> None:
        current = self._current()
        if current is None:
            return
        path, document = current
        self.session.store.put(path, replace(document, scroll_offset=ScrollOffset.coerce(scroll_offset)))

    def on_current_file_changed(self) -> None:
        self._publish_title()
