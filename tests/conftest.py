"""Pytest configuration to ensure the gametext package is importable."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)

import sitecustomize  # noqa: F401,E402  # Ensure src/ is on sys.path via sitecustomize hook.
import pytest  # noqa: E402

from gametext import FontBank, GameTextVersion, get_font_bank  # noqa: E402


@pytest.fixture
def jak1_v1() -> FontBank:
    return get_font_bank(GameTextVersion.JAK1_V1)


@pytest.fixture
def jak1_v2() -> FontBank:
    return get_font_bank(GameTextVersion.JAK1_V2)


@pytest.fixture
def jak2() -> FontBank:
    return get_font_bank(GameTextVersion.JAK2)
