"""Re-tag the in-band glyph protocol used by Korean game text.

Korean strings interleave two kinds of spans. A ``0x03`` byte opens a span
that is copied through untouched. Any other byte opens a component span: the
byte after it is a length counter, and each following byte names one jamo
glyph, optionally preceded by ``0x05`` to select the alternate glyph page.
Both span kinds end at the next ``0x03`` or ``0x04``.

:func:`retag_korean` rewrites component spans into ``0x01 <glyph>`` for
alternate glyphs and ``0x03 <glyph>`` for normal ones so the font bank's
two-byte encode entries can resolve them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final, Iterable

LOGGER = logging.getLogger(__name__)

PASSTHROUGH_MARK: Final[int] = 0x03
SPAN_TERMINATORS: Final[frozenset[int]] = frozenset({0x03, 0x04})
ALTERNATE_MARK: Final[int] = 0x05
ALTERNATE_TAG: Final[int] = 0x01
NORMAL_TAG: Final[int] = 0x03

SEQUENCE_POSITIONS: Final[int] = 4
_ALTERNATE_KEY: Final[int] = 0x100
_NORMAL_KEY: Final[int] = 0x300


def pack_jamo(position: int, glyph: int, *, alternate: bool) -> int:
    """Return the 16-bit key for ``glyph`` shifted into ``position``."""

    key = (_ALTERNATE_KEY if alternate else _NORMAL_KEY) | (glyph & 0xFF)
    return key << (position * 16)


def unpack_sequence(sequence: int) -> list[int]:
    """Split a packed sequence back into its per-position jamo keys."""

    keys: list[int] = []
    for position in range(SEQUENCE_POSITIONS):
        key = (sequence >> (position * 16)) & 0xFFFF
        if key == 0:
            break
        keys.append(key)
    return keys


@dataclass
class JamoSequenceCollector:
    """Record the distinct jamo sequences seen while re-tagging."""

    sequences: set[int] = field(default_factory=set)

    def record(self, sequence: int) -> None:
        self.sequences.add(sequence)

    def clear(self) -> None:
        self.sequences.clear()

    def jamo_by_position(self) -> list[list[int]]:
        """Return the sorted distinct jamo keys observed at each position."""

        seen: list[set[int]] = [set() for _ in range(SEQUENCE_POSITIONS)]
        for sequence in self.sequences:
            for position, key in enumerate(unpack_sequence(sequence)):
                seen[position].add(key)
        return [sorted(keys) for keys in seen]

    def all_jamo(self) -> list[tuple[int, int]]:
        """Return every jamo key with the first position (1-based) it appears in."""

        by_position = self.jamo_by_position()
        keys = sorted({key for keys in by_position for key in keys})
        return [
            (key, next(index for index, keys in enumerate(by_position, start=1) if key in keys))
            for key in keys
        ]

    def report(self) -> list[str]:
        """Render the collected sequences as human-readable report lines."""

        if not self.sequences:
            return []
        lines = ["all seqs:"]
        for label, keys in zip(("first", "second", "third", "fourth"), self.jamo_by_position()):
            lines.append("")
            lines.append(f"all {label} jamo:")
            lines.extend(f"0x{key:x}" for key in keys)
        lines.append("")
        lines.append("all jamo:")
        lines.extend(f"{key:x} pos {position}" for key, position in self.all_jamo())
        return lines

    def log_report(self, logger: logging.Logger | None = None) -> None:
        """Emit :meth:`report` through ``logger`` and reset the collector."""

        target = logger or LOGGER
        for line in self.report():
            target.info("%s", line)
        self.clear()


def retag_korean(
    payload: bytes | bytearray | Iterable[int],
    *,
    collector: JamoSequenceCollector | None = None,
) -> bytes:
    """Rewrite Korean component spans in ``payload`` into tagged glyph pairs."""

    data = bytes(payload)
    size = len(data)
    output = bytearray()
    index = 0
    while index < size:
        if data[index] == PASSTHROUGH_MARK:
            index += 1
            while index < size and data[index] not in SPAN_TERMINATORS:
                output.append(data[index])
                index += 1
            continue

        # Span header, then the length counter, which the output does not need.
        index += 2
        position = 0
        sequence = 0
        while index < size and data[index] not in SPAN_TERMINATORS:
            alternate = data[index] == ALTERNATE_MARK
            if alternate:
                index += 1
                if index >= size:
                    break
            glyph = data[index]
            if position < SEQUENCE_POSITIONS:
                sequence |= pack_jamo(position, glyph, alternate=alternate)
            output.append(ALTERNATE_TAG if alternate else NORMAL_TAG)
            output.append(glyph)
            index += 1
            position += 1
        if collector is not None:
            collector.record(sequence)
    return bytes(output)


__all__ = [
    "ALTERNATE_MARK",
    "ALTERNATE_TAG",
    "JamoSequenceCollector",
    "NORMAL_TAG",
    "PASSTHROUGH_MARK",
    "SPAN_TERMINATORS",
    "pack_jamo",
    "retag_korean",
    "unpack_sequence",
]
