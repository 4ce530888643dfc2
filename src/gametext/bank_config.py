"""Load font bank tables from TOML documents."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Any, List, Mapping

import tomllib

from .errors import FontBankConfigError, UnknownVersionError
from .font_bank import FontBank
from .substitution import EncodeEntry, ReplaceEntry
from .versions import GameTextVersion, version_from_name, version_name

LOGGER = logging.getLogger(__name__)

MAX_GLYPH_BYTES = 2
_DATA_DIRECTORY = "data"


def load_font_bank_config(config_path: Path) -> FontBank:
    """Parse and validate the font bank table file at ``config_path``."""

    with config_path.open("rb") as stream:
        try:
            raw_data = tomllib.load(stream)
        except tomllib.TOMLDecodeError as exc:
            raise FontBankConfigError(f"{config_path}: {exc}") from exc
    return parse_font_bank(raw_data, source=str(config_path))


def load_builtin_font_bank(version: GameTextVersion) -> FontBank:
    """Load the table file packaged for ``version``."""

    name = version_name(version)
    resource = resources.files(__package__) / _DATA_DIRECTORY / f"{name}.toml"
    raw_data = tomllib.loads(resource.read_text(encoding="utf-8"))
    bank = parse_font_bank(raw_data, source=f"<builtin {name}>")
    if bank.version is not version:
        raise FontBankConfigError(
            f"<builtin {name}>: table declares version {bank.name}"
        )
    return bank


def parse_font_bank(data: Mapping[str, Any], *, source: str = "<config>") -> FontBank:
    """Build a :class:`FontBank` from an already-parsed TOML mapping."""

    version = _parse_version(data.get("version"), source=source)
    passthrough = _parse_passthrough(data.get("passthrough", ""), source=source)
    encode_entries = _parse_encode_entries(data.get("encode", []), source=source)
    replace_entries = _parse_replace_entries(data.get("replace", []), source=source)

    LOGGER.debug(
        "Loaded %s tables from %s (%d encode, %d replace, %d passthrough)",
        version_name(version),
        source,
        len(encode_entries),
        len(replace_entries),
        len(passthrough),
    )
    return FontBank(version, encode_entries, replace_entries, passthrough)


def _parse_version(raw_version: Any, *, source: str) -> GameTextVersion:
    if raw_version is None:
        raise FontBankConfigError(f"{source}: font bank requires a version")
    if not isinstance(raw_version, str):
        raise FontBankConfigError(f"{source}: version must be a string")
    try:
        return version_from_name(raw_version)
    except UnknownVersionError as exc:
        raise FontBankConfigError(f"{source}: {exc}") from exc


def _parse_passthrough(raw_chars: Any, *, source: str) -> frozenset[int]:
    if not isinstance(raw_chars, str):
        raise FontBankConfigError(f"{source}: passthrough must be a string")
    if not raw_chars.isascii():
        raise FontBankConfigError(
            f"{source}: passthrough characters must be single-byte ASCII"
        )
    if "\\" in raw_chars:
        raise FontBankConfigError(f"{source}: backslash cannot be a passthrough character")
    return frozenset(raw_chars.encode("ascii"))


def _parse_encode_entries(entries: Any, *, source: str) -> List[EncodeEntry]:
    if not isinstance(entries, list):
        raise FontBankConfigError(f"{source}: encode must be an array of tables")

    parsed: List[EncodeEntry] = []
    owners: dict[bytes, str] = {}
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            raise FontBankConfigError(
                f"{source}: encode entry #{index} must be a table, received {type(entry)!r}"
            )
        chars = entry.get("chars")
        if not isinstance(chars, str) or not chars:
            raise FontBankConfigError(
                f"{source}: encode entry #{index} requires non-empty chars"
            )
        raw = _coerce_glyph_bytes(entry.get("bytes"), label=f"{source}: encode entry #{index}")
        if raw in owners:
            raise FontBankConfigError(
                f"{source}: encode entry #{index} ({chars!r}) reuses bytes "
                f"{raw.hex(' ')} already assigned to {owners[raw]!r}"
            )
        owners[raw] = chars
        parsed.append(EncodeEntry(chars, raw))
    return parsed


def _coerce_glyph_bytes(raw_bytes: Any, *, label: str) -> bytes:
    if not isinstance(raw_bytes, list) or not raw_bytes:
        raise FontBankConfigError(f"{label} requires a non-empty bytes array")
    if len(raw_bytes) > MAX_GLYPH_BYTES:
        raise FontBankConfigError(
            f"{label} has {len(raw_bytes)} bytes; glyphs use at most {MAX_GLYPH_BYTES}"
        )
    for value in raw_bytes:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
            raise FontBankConfigError(f"{label} has invalid byte value {value!r}")
    return bytes(raw_bytes)


def _parse_replace_entries(entries: Any, *, source: str) -> List[ReplaceEntry]:
    if not isinstance(entries, list):
        raise FontBankConfigError(f"{source}: replace must be an array of tables")

    parsed: List[ReplaceEntry] = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            raise FontBankConfigError(
                f"{source}: replace entry #{index} must be a table, received {type(entry)!r}"
            )
        game = entry.get("from")
        readable = entry.get("to")
        for key, value in (("from", game), ("to", readable)):
            if not isinstance(value, str) or not value:
                raise FontBankConfigError(
                    f"{source}: replace entry #{index} requires a non-empty '{key}' string"
                )
        parsed.append(ReplaceEntry(game, readable))
    return parsed


__all__ = [
    "FontBankConfigError",
    "load_builtin_font_bank",
    "load_font_bank_config",
    "parse_font_bank",
]
