"""Pytest bootstrap for local source imports and config isolation.

Puts the repository root on ``sys.path`` so ``import omega`` resolves to the
local package, and points the persisted config at a per-test temp file so no
test reads or writes the real user config.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    from omega import config

    config_dir = tmp_path_factory.mktemp("omega-config")
    monkeypatch.setattr(config, "CONFIG_PATH", config_dir / config.CONFIG_FILENAME)
    monkeypatch.delenv("OMEGA_LOG_LEVEL", raising=False)
