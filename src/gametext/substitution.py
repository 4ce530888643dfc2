"""Substitution tables and the longest-match scanner behind every transcode pass.

Font banks describe two kinds of mappings. :class:`EncodeEntry` ties a short
run of characters to the one or two bytes the in-game font uses for it, while
:class:`ReplaceEntry` collapses a visually composed sequence (a letter plus
positioning codes plus a diacritic glyph) into the precomposed character a
human would type.

Both kinds are compiled into directional :class:`SubstitutionTable` objects.
A table scans its input left to right; at each offset the longest rule whose
pattern matches is applied, otherwise one byte is copied verbatim.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence


@dataclass(frozen=True)
class EncodeEntry:
    """A character sequence and the font bytes that draw it."""

    chars: str
    raw: bytes
    text: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", bytes(self.raw))
        object.__setattr__(self, "text", self.chars.encode("utf-8"))


@dataclass(frozen=True)
class ReplaceEntry:
    """A composed game-side sequence and its readable replacement."""

    game: str
    readable: str
    game_text: bytes = field(init=False, repr=False, compare=False)
    readable_text: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "game_text", self.game.encode("utf-8"))
        object.__setattr__(self, "readable_text", self.readable.encode("utf-8"))


@dataclass(frozen=True)
class SubstitutionRule:
    """One directional rewrite: consume ``pattern`` and emit ``output``."""

    pattern: bytes
    output: bytes


def find_longest(
    rules: Sequence[SubstitutionRule], buffer: bytes, offset: int
) -> SubstitutionRule | None:
    """Return the rule with the longest pattern matching ``buffer`` at ``offset``.

    Rules with empty patterns or patterns longer than the remaining input are
    skipped. When several matches share the longest length, the first one in
    ``rules`` wins.
    """

    remaining = len(buffer) - offset
    best: SubstitutionRule | None = None
    best_length = 0
    for rule in rules:
        length = len(rule.pattern)
        if length == 0 or length > remaining or length <= best_length:
            continue
        if buffer.startswith(rule.pattern, offset):
            best = rule
            best_length = length
    return best


class SubstitutionTable:
    """Ordered rules for one transcoding direction."""

    def __init__(self, rules: Iterable[SubstitutionRule]) -> None:
        self._rules = tuple(rules)
        buckets: dict[int, list[SubstitutionRule]] = {}
        for rule in self._rules:
            if rule.pattern:
                buckets.setdefault(rule.pattern[0], []).append(rule)
        self._buckets = {first: tuple(bucket) for first, bucket in buckets.items()}

    @classmethod
    def encode_to_game(cls, entries: Iterable[EncodeEntry]) -> "SubstitutionTable":
        return cls(SubstitutionRule(entry.text, entry.raw) for entry in entries)

    @classmethod
    def encode_to_readable(cls, entries: Iterable[EncodeEntry]) -> "SubstitutionTable":
        return cls(SubstitutionRule(entry.raw, entry.text) for entry in entries)

    @classmethod
    def replace_to_game(cls, entries: Iterable[ReplaceEntry]) -> "SubstitutionTable":
        return cls(
            SubstitutionRule(entry.readable_text, entry.game_text) for entry in entries
        )

    @classmethod
    def replace_to_readable(cls, entries: Iterable[ReplaceEntry]) -> "SubstitutionTable":
        return cls(
            SubstitutionRule(entry.game_text, entry.readable_text) for entry in entries
        )

    @property
    def rules(self) -> tuple[SubstitutionRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def find_longest(self, buffer: bytes, offset: int) -> SubstitutionRule | None:
        """Return the longest rule matching at ``offset`` or ``None``."""

        if offset >= len(buffer):
            return None
        return find_longest(self._buckets.get(buffer[offset], ()), buffer, offset)

    def apply(self, buffer: bytes) -> bytes:
        """Rewrite ``buffer`` greedily, copying unmatched bytes through."""

        output = bytearray()
        index = 0
        while index < len(buffer):
            rule = self.find_longest(buffer, index)
            if rule is None:
                output.append(buffer[index])
                index += 1
            else:
                output += rule.output
                index += len(rule.pattern)
        return bytes(output)


__all__ = [
    "EncodeEntry",
    "ReplaceEntry",
    "SubstitutionRule",
    "SubstitutionTable",
    "find_longest",
]
