from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple


class ScrollOffset(NamedTuple):
    row: int = 0
    column: int = 0

    @classmethod
    def coerce(cls, value: ScrollOffset | tuple[int, int]) -> ScrollOffset:
        if isinstance(value, ScrollOffset):
            return value
        row, column = value
        return cls(int(row), int(column))


@dataclass(frozen=True)
class Document:
    """In-memory state of one open file.

    ``cursor`` belongs to the editing surface and is stored as-is.
    """

    content: str = ""
    scroll_offset: ScrollOffset = ScrollOffset()
    cursor: Any = None


@dataclass
class DocumentStore:
    documents: dict[Path, Document] = field(default_factory=dict)
    dirty: set[Path] = field(default_factory=set)

    def __contains__(self, path: object) -> bool:
        return path in self.documents

    def __iter__(self) -> Iterator[Path]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def get(self, path: Path | None) -> Document | None:
        if path is None:
            return None
        return self.documents.get(path)

    def put(self, path: Path, document: Document) -> None:
        self.documents[path] = document

    def discard(self, path: Path) -> bool:
        """Drop ``path`` and its dirty mark; return whether it was open."""
        self.dirty.discard(path)
        return self.documents.pop(path, None) is not None
