"""Canonical path keys for open documents.

Every document is addressed by one canonical key no matter how it was
referenced. Resolution failures are reported as ``FallbackPath`` values
instead of being raised or silently replaced by a sentinel.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ROOT = Path(os.sep)


@dataclass(frozen=True)
class ResolvedPath:
    key: Path

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class FallbackPath:
    """Path that could not be canonicalized.

    ``key`` is the fixed fallback root, not the original path. Callers must
    treat it as "unknown/root".
    """

    original: Path
    key: Path
    reason: str = ""

    @property
    def is_fallback(self) -> bool:
        return True


PathKey = ResolvedPath | FallbackPath


def normalize(path: str | os.PathLike[str], fallback_root: Path = DEFAULT_FALLBACK_ROOT) -> PathKey:
    """Resolve ``path`` to an absolute, symlink-free key.

    Missing files, permission errors and symlink loops produce a
    ``FallbackPath`` keyed by ``fallback_root``; this function never raises.
    """
    raw = Path(path)
    try:
        resolved = raw.expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        logger.debug("cannot canonicalize %s: %s", raw, exc)
        return FallbackPath(original=raw, key=Path(fallback_root), reason=str(exc))
    return ResolvedPath(key=resolved)


def canonical_key(path: str | os.PathLike[str], fallback_root: Path = DEFAULT_FALLBACK_ROOT) -> Path:
    return normalize(path, fallback_root).key


def anchor_path(path: str | os.PathLike[str]) -> Path:
    """Best-effort absolute form for a path that may no longer exist.

    Existing ancestors are symlink-resolved so the result lines up with keys
    produced by ``normalize`` before the path disappeared.
    """
    raw = Path(path).expanduser()
    try:
        return raw.resolve(strict=False)
    except (OSError, RuntimeError):
        return Path(os.path.abspath(raw))


def rebase_path(path: Path, old_root: Path, new_root: Path) -> Path:
    """Move ``path`` from under ``old_root`` to under ``new_root``.

    Matching is done per path segment, so ``/foo2`` is not under ``/foo``.
    Paths outside ``old_root`` (including ones whose absolute/relative form
    differs) are returned unchanged.
    """
    try:
        relative = path.relative_to(old_root)
    except ValueError:
        return path
    if relative == Path("."):
        return new_root
    return new_root / relative
