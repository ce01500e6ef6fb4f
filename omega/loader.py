"""Launch-target resolution and loading files into a session.

Mirrors how the editor starts: a file argument opens its parent directory
as the project with the file current; a directory opens just the project.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .session import Session
from .state import Document

logger = logging.getLogger(__name__)

INVALID_TARGET_MESSAGE = "An invalid/not existing directory/file was specified!"


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def load_document(path: Path) -> Document:
    """Fresh document for ``path`` with the cursor and scroll at the origin."""
    return Document(content=read_text(path))


def resolve_launch_target(target: str | os.PathLike[str]) -> tuple[Path, Path | None]:
    """Return ``(project_path, file_path)`` for a launch argument.

    Raises ``ValueError`` when ``target`` is neither a file nor a directory.
    """
    path = Path(target).expanduser()
    if path.is_file():
        return path.parent, path
    if path.is_dir():
        return path, None
    raise ValueError(f"{INVALID_TARGET_MESSAGE} ({path})")


def open_paths(session: Session, project_path: Path, file_path: Path | None = None) -> Path | None:
    """Open ``project_path`` in ``session`` and load ``file_path`` if given.

    Returns the current file key, or ``None`` when only a project was opened.
    """
    session.open_project(project_path, file_path)
    if file_path is None:
        return None
    document = session.get(file_path)
    if document is None:
        document = load_document(file_path)
        logger.debug("read %d characters from %s", len(document.content), file_path)
        return session.open_file(file_path, document)
    return session.open_or_get(file_path, document)
