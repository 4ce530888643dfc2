"""Process-wide registry of the built-in font banks."""
from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from .bank_config import load_builtin_font_bank
from .font_bank import FontBank
from .jamo import JamoSequenceCollector
from .versions import GameTextVersion, resolve_version


@lru_cache()
def _builtin_font_banks() -> Mapping[GameTextVersion, FontBank]:
    """Return the cached built-in banks, loading all of them on first use."""

    return MappingProxyType(
        {version: load_builtin_font_bank(version) for version in GameTextVersion}
    )


def get_font_bank(version: GameTextVersion | str) -> FontBank:
    """Return the built-in bank for a version tag or version name."""

    return _builtin_font_banks()[resolve_version(version)]


def font_bank_exists(version: GameTextVersion) -> bool:
    return version in _builtin_font_banks()


def encode(text: str, version: GameTextVersion | str, escape: bool = True) -> bytes:
    """Shortcut for ``get_font_bank(version).encode(text, escape)``."""

    return get_font_bank(version).encode(text, escape)


def decode(
    payload: bytes,
    version: GameTextVersion | str,
    korean: bool = False,
    *,
    collector: JamoSequenceCollector | None = None,
) -> str:
    """Shortcut for ``get_font_bank(version).decode(payload, korean, collector=...)``."""

    return get_font_bank(version).decode(payload, korean, collector=collector)


__all__ = ["decode", "encode", "font_bank_exists", "get_font_bank"]
