"""Game text encoding versions and their canonical names."""
from __future__ import annotations

from enum import Enum
from typing import Final

from .errors import UnknownVersionError


class GameTextVersion(Enum):
    """Font encodings shipped by the supported game releases."""

    JAK1_V1 = 0
    JAK1_V2 = 1
    JAK2 = 2


_VERSION_NAMES: Final[dict[GameTextVersion, str]] = {
    GameTextVersion.JAK1_V1: "jak1-v1",
    GameTextVersion.JAK1_V2: "jak1-v2",
    GameTextVersion.JAK2: "jak2",
}

_VERSIONS_BY_NAME: Final[dict[str, GameTextVersion]] = {
    name: version for version, name in _VERSION_NAMES.items()
}


def version_name(version: GameTextVersion) -> str:
    """Return the canonical name for ``version``."""

    if not isinstance(version, GameTextVersion):
        raise UnknownVersionError(f"invalid text version {version!r}")
    return _VERSION_NAMES[version]


def version_from_name(name: str) -> GameTextVersion:
    """Return the :class:`GameTextVersion` registered under ``name``."""

    version = _VERSIONS_BY_NAME.get(name)
    if version is None:
        raise UnknownVersionError(f"unknown text version {name}")
    return version


def resolve_version(version: GameTextVersion | str) -> GameTextVersion:
    """Accept either a version tag or its name and return the tag."""

    if isinstance(version, str):
        return version_from_name(version)
    version_name(version)
    return version


def available_versions() -> list[str]:
    return [_VERSION_NAMES[version] for version in GameTextVersion]


__all__ = [
    "GameTextVersion",
    "available_versions",
    "resolve_version",
    "version_from_name",
    "version_name",
]
