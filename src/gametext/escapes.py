"""Escape syntax used by the readable side of the codec.

Readable text may spell bytes the font cannot show as ``\\cXX`` and uses
``\\n``, ``\\t``, ``\\\\`` and ``\\"`` the way source files expect. Both passes
work on UTF-8 bytes so that byte offsets match the substitution tables.
"""
from __future__ import annotations

import string
from typing import Final

from .errors import IncompleteEscapeError, InvalidEscapeHexError, UnknownEscapeCodeError

_BACKSLASH: Final[int] = ord("\\")
_QUOTE: Final[int] = ord('"')
_BYTE_ESCAPE: Final[int] = ord("c")
_HEX_DIGITS: Final[frozenset[int]] = frozenset(string.hexdigits.encode("ascii"))

_ESCAPED_BYTES: Final[dict[int, bytes]] = {
    ord("\n"): b"\\n",
    ord("\t"): b"\\t",
    _QUOTE: b'\\"',
}


def _character_at(data: bytes, position: int) -> str:
    return data[position : position + 4].decode("utf-8", errors="replace")[0]


def unescape(text: str | bytes) -> bytes:
    """Resolve escape sequences in readable ``text`` into raw bytes."""

    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    output = bytearray()
    index = 0
    size = len(data)
    while index < size:
        byte = data[index]
        if byte == _QUOTE:
            # A bare quote also swallows the unit after it.
            output.append(_QUOTE)
            index += 2
            continue
        if byte != _BACKSLASH:
            output.append(byte)
            index += 1
            continue

        if index + 1 >= size:
            raise IncompleteEscapeError("incomplete string escape code", position=index)
        code = data[index + 1]
        if code == _BYTE_ESCAPE:
            if index + 3 >= size:
                raise IncompleteEscapeError("incomplete string escape code", position=index)
            digits = data[index + 2 : index + 4]
            if not all(digit in _HEX_DIGITS for digit in digits):
                bad = index + 2 if digits[0] not in _HEX_DIGITS else index + 3
                raise InvalidEscapeHexError(
                    "invalid character escape hex number",
                    position=index,
                    character=_character_at(data, bad),
                )
            value = int(digits, 16)
            output.append(value)
            index += 4
        elif code in (_QUOTE, _BACKSLASH):
            output.append(code)
            index += 2
        else:
            character = _character_at(data, index + 1)
            raise UnknownEscapeCodeError(
                f"unknown string escape code '{character}' (0x{ord(character):x})",
                position=index,
                character=character,
            )
    return bytes(output)


def escape(data: bytes) -> bytes:
    """Spell newlines, tabs, quotes and backslashes in escape syntax.

    A backslash that already starts a ``\\cXX`` fallback is kept as is.
    """

    output = bytearray()
    last = len(data) - 1
    for index, byte in enumerate(data):
        if byte == _BACKSLASH:
            if index < last and data[index + 1] == _BYTE_ESCAPE:
                output.append(byte)
            else:
                output += b"\\\\"
            continue
        replacement = _ESCAPED_BYTES.get(byte)
        if replacement is None:
            output.append(byte)
        else:
            output += replacement
    return bytes(output)


def byte_escape(value: int) -> bytes:
    """Return the ``\\cXX`` fallback spelling of ``value``."""

    return f"\\c{value & 0xFF:02x}".encode("ascii")


__all__ = ["byte_escape", "escape", "unescape"]
