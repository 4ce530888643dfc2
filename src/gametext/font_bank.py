"""Per-version font banks that convert between readable text and game bytes."""
from __future__ import annotations

import logging
from typing import AbstractSet, Final, Iterable, Sequence

from . import escapes
from .jamo import JamoSequenceCollector, retag_korean
from .substitution import EncodeEntry, ReplaceEntry, SubstitutionTable
from .versions import GameTextVersion, version_name

LOGGER = logging.getLogger(__name__)

_DIGITS: Final[frozenset[int]] = frozenset(range(ord("0"), ord("9") + 1))
_UPPERCASE: Final[frozenset[int]] = frozenset(range(ord("A"), ord("Z") + 1))
_LOWERCASE: Final[frozenset[int]] = frozenset(range(ord("a"), ord("z") + 1))
_ALWAYS_VERBATIM: Final[frozenset[int]] = frozenset(b'\n\t\\"')
_BACKSLASH: Final[int] = ord("\\")


class FontBank:
    """Glyph tables and character policy for one :class:`GameTextVersion`.

    Entries are stable-sorted once on construction (encode entries by
    descending byte length, replace entries by descending game-side length)
    and the bank is read-only afterwards.
    """

    def __init__(
        self,
        version: GameTextVersion,
        encode_entries: Iterable[EncodeEntry],
        replace_entries: Iterable[ReplaceEntry],
        passthrough: AbstractSet[int] | bytes | str,
    ) -> None:
        self._version = version
        self._encode_entries = tuple(
            sorted(encode_entries, key=lambda entry: len(entry.raw), reverse=True)
        )
        self._replace_entries = tuple(
            sorted(replace_entries, key=lambda entry: len(entry.game_text), reverse=True)
        )
        if isinstance(passthrough, str):
            passthrough = passthrough.encode("ascii")
        self._passthrough = frozenset(passthrough)

        self._encode_to_game = SubstitutionTable.encode_to_game(self._encode_entries)
        self._encode_to_readable = SubstitutionTable.encode_to_readable(self._encode_entries)
        self._replace_to_game = SubstitutionTable.replace_to_game(self._replace_entries)
        self._replace_to_readable = SubstitutionTable.replace_to_readable(self._replace_entries)

        plain = _DIGITS | _UPPERCASE | self._passthrough
        if version is GameTextVersion.JAK2:
            plain |= _LOWERCASE
        self._plain = plain - {_BACKSLASH}

        LOGGER.debug(
            "Built %s font bank: %d encode entries, %d replace entries",
            version_name(version),
            len(self._encode_entries),
            len(self._replace_entries),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({version_name(self._version)!r})"

    @property
    def version(self) -> GameTextVersion:
        return self._version

    @property
    def name(self) -> str:
        return version_name(self._version)

    @property
    def encode_entries(self) -> Sequence[EncodeEntry]:
        return self._encode_entries

    @property
    def replace_entries(self) -> Sequence[ReplaceEntry]:
        return self._replace_entries

    @property
    def passthrough(self) -> frozenset[int]:
        return self._passthrough

    def is_plain(self, byte: int | str) -> bool:
        """Return ``True`` when ``byte`` may appear unescaped in readable text."""

        if isinstance(byte, str):
            if len(byte) != 1:
                return False
            byte = ord(byte)
        return byte in self._plain

    def encode(self, text: str, escape: bool = True) -> bytes:
        """Convert readable ``text`` into the game's font encoding.

        With ``escape`` set, ``\\cXX`` and the other escape codes are resolved
        first; otherwise ``text`` is taken literally.
        """

        data = escapes.unescape(text) if escape else text.encode("utf-8")
        data = self._replace_to_game.apply(data)
        return self._encode_to_game.apply(data)

    def decode(
        self,
        payload: bytes | bytearray | Sequence[int],
        korean: bool = False,
        *,
        collector: JamoSequenceCollector | None = None,
    ) -> str:
        """Convert game-encoded ``payload`` into readable text.

        Bytes with no glyph and no plain spelling come out as ``\\cXX``.
        ``korean`` re-tags the jamo span protocol first; ``collector``
        receives the jamo sequences seen by that pass and is only accepted
        together with ``korean``.
        """

        if collector is not None and not korean:
            raise ValueError("a jamo collector requires korean decoding")
        data = bytes(payload)
        if korean:
            data = retag_korean(data, collector=collector)

        decoded = bytearray()
        index = 0
        while index < len(data):
            rule = self._encode_to_readable.find_longest(data, index)
            if rule is not None:
                decoded += rule.output
                index += len(rule.pattern)
                continue
            byte = data[index]
            if byte in self._plain or byte in _ALWAYS_VERBATIM:
                decoded.append(byte)
            else:
                decoded += escapes.byte_escape(byte)
            index += 1

        text = self._replace_to_readable.apply(bytes(decoded))
        text = escapes.escape(text)
        # Second pass picks up patterns that only exist once escaped, such as a doubled backslash.
        text = self._replace_to_readable.apply(text)
        return text.decode("utf-8")


__all__ = ["FontBank"]
