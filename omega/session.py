"""Process-wide editor session: open documents, dirty marks, current file.

A ``Session`` is built once at startup and handed to every handler; it is
never reached through a global. All keys are canonical paths produced by
``omega.paths.normalize``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from . import rename
from .paths import DEFAULT_FALLBACK_ROOT, anchor_path, canonical_key, normalize
from .state import Document, DocumentStore

logger = logging.getLogger(__name__)

DIRTY_MARKER = " *"

PathArg = str | os.PathLike[str]


def file_title(path: Path | None, dirty: bool, marker: str = DIRTY_MARKER) -> str:
    """Title-widget text: ``"<name>"`` or ``"<name> *"``."""
    if path is None:
        return ""
    name = path.name or str(path)
    return name + marker if dirty else name


@dataclass
class Session:
    project_root: Path = DEFAULT_FALLBACK_ROOT
    current_file: Path | None = None
    store: DocumentStore = field(default_factory=DocumentStore)
    fallback_root: Path = DEFAULT_FALLBACK_ROOT

    @property
    def documents(self) -> Mapping[Path, Document]:
        return MappingProxyType(self.store.documents)

    @property
    def dirty(self) -> frozenset[Path]:
        return frozenset(self.store.dirty)

    def _insert_key(self, path: PathArg) -> Path:
        return canonical_key(path, self.fallback_root)

    def _lookup_key(self, path: PathArg) -> Path:
        """Key for querying an existing entry.

        A path that no longer resolves finds the entry it had while it
        existed (its anchored form); otherwise it maps to the fallback key,
        the same key ``_insert_key`` stored it under.
        """
        raw = Path(path)
        if raw in self.store:
            return raw
        resolved = normalize(raw, self.fallback_root)
        if resolved.is_fallback:
            anchored = anchor_path(raw)
            if anchored in self.store or anchored in self.store.dirty:
                return anchored
        return resolved.key

    # Document store

    def open_or_get(self, path: PathArg, initial: Document) -> Path:
        """Make ``path`` current, inserting ``initial`` only if not yet open."""
        key = self._insert_key(path)
        if key not in self.store:
            self.store.put(key, initial)
            logger.debug("opened %s", key)
        self.current_file = key
        return key

    def get(self, path: PathArg) -> Document | None:
        return self.store.get(self._lookup_key(path))

    def get_current(self) -> Document | None:
        return self.store.get(self.current_file)

    def close(self, path: PathArg) -> bool:
        """Close ``path``; closing a document that is not open is a no-op."""
        key = self._lookup_key(path)
        closed = self.store.discard(key)
        if self.current_file == key:
            self.current_file = None
        if closed:
            logger.debug("closed %s", key)
        return closed

    def close_subtree(self, root: PathArg) -> list[Path]:
        """Close every document equal to or under ``root`` (e.g. after a delete)."""
        anchor = self._lookup_key(root)
        closed = sorted(key for key in self.store if key.is_relative_to(anchor))
        for key in closed:
            self.store.discard(key)
        if self.current_file is not None and self.current_file not in self.store:
            self.current_file = None
        return closed

    def mark_dirty(self, path: PathArg) -> None:
        key = self._lookup_key(path)
        if key in self.store:
            self.store.dirty.add(key)

    def clear_dirty(self, path: PathArg) -> None:
        """Drop the dirty mark, typically after an external save succeeded."""
        self.store.dirty.discard(self._lookup_key(path))

    def is_dirty(self, path: PathArg) -> bool:
        return self._lookup_key(path) in self.store.dirty

    def is_current_dirty(self) -> bool:
        return self.current_file is not None and self.current_file in self.store.dirty

    def dirty_paths(self) -> frozenset[Path]:
        return self.dirty

    def document_paths(self) -> list[Path]:
        return sorted(self.store)

    # Session cursor

    def open_project(self, project_path: PathArg, initial_file: PathArg | None = None) -> None:
        """Switch the project root and optionally point at an open document.

        Documents are left alone. An ``initial_file`` that is not open yet
        leaves ``current_file`` unset until it is opened with ``open_file``.
        """
        self.project_root = self._insert_key(project_path)
        self.current_file = None
        if initial_file is not None:
            key = self._insert_key(initial_file)
            if key in self.store:
                self.current_file = key
        logger.debug("project %s (current file %s)", self.project_root, self.current_file)

    def open_file(self, path: PathArg, document: Document) -> Path:
        """Store a freshly loaded ``document`` at ``path`` and make it current."""
        key = self._insert_key(path)
        self.store.put(key, document)
        self.store.dirty.discard(key)
        self.current_file = key
        logger.debug("loaded %s", key)
        return key

    def current_title(self, marker: str = DIRTY_MARKER) -> str:
        return file_title(self.current_file, self.is_current_dirty(), marker)

    # Rename propagation

    def propagate_rename(self, old_root: PathArg, new_root: PathArg) -> dict[Path, Path]:
        return rename.propagate_rename(self, old_root, new_root)
