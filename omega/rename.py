"""Rename propagation: make open documents follow an external move.

Each container is rebuilt from a pure per-key plan; nothing is rewritten in
place, so the old state stays intact until the new one is published.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from .paths import anchor_path, normalize, rebase_path

if TYPE_CHECKING:
    from .session import Session

logger = logging.getLogger(__name__)

V = TypeVar("V")


def rename_plan(keys: Iterable[Path], old_root: Path, new_root: Path) -> dict[Path, Path]:
    """Map every key to its post-rename key.

    Keys outside ``old_root`` map to themselves. A moved key whose target is
    already taken by a key outside the subtree stays where it is, so distinct
    keys remain distinct.
    """
    keys = set(keys)
    moved = {key: rebase_path(key, old_root, new_root) for key in keys}
    stationary = {key for key, target in moved.items() if target == key}

    plan: dict[Path, Path] = {}
    for key, target in moved.items():
        if target != key and target in stationary:
            logger.warning("rename target %s already open; keeping %s", target, key)
            target = key
        plan[key] = target
    return plan


def rebuild_mapping(mapping: Mapping[Path, V], plan: Mapping[Path, Path]) -> dict[Path, V]:
    return {plan.get(key, key): value for key, value in mapping.items()}


def rebuild_set(paths: Iterable[Path], plan: Mapping[Path, Path]) -> set[Path]:
    return {plan.get(path, path) for path in paths}


def _rename_target(new_root: str | os.PathLike[str]) -> Path:
    resolved = normalize(new_root)
    if resolved.is_fallback:
        return anchor_path(new_root)
    return resolved.key


def propagate_rename(
    session: Session,
    old_root: str | os.PathLike[str],
    new_root: str | os.PathLike[str],
) -> dict[Path, Path]:
    """Rewrite every session key under ``old_root`` to live under ``new_root``.

    Returns the applied plan restricted to keys that actually moved.
    """
    old_anchor = anchor_path(old_root)
    new_anchor = _rename_target(new_root)

    store = session.store
    keys = set(store.documents) | store.dirty
    if session.current_file is not None:
        keys.add(session.current_file)
    plan = rename_plan(keys, old_anchor, new_anchor)

    store.documents = rebuild_mapping(store.documents, plan)
    store.dirty = rebuild_set(store.dirty, plan)
    if session.current_file is not None:
        session.current_file = plan.get(session.current_file, session.current_file)
    session.project_root = rebase_path(session.project_root, old_anchor, new_anchor)

    applied = {key: target for key, target in plan.items() if key != target}
    logger.debug("renamed %s -> %s (%d keys moved)", old_anchor, new_anchor, len(applied))
    return applied
