"""Exception hierarchy shared by the game text codec."""
from __future__ import annotations


class GameTextError(ValueError):
    """Base class for failures raised while transcoding game text."""


class UnknownVersionError(GameTextError):
    """Raised when a version tag or name is outside the supported set."""


class FontBankConfigError(GameTextError):
    """Raised when font bank table data fails validation."""


class EscapeError(GameTextError):
    """Raised when readable text contains a malformed escape sequence."""

    def __init__(self, message: str, *, position: int, character: str | None = None) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position
        self.character = character


class IncompleteEscapeError(EscapeError):
    """Raised when ``\\`` or ``\\c`` ends before its operands."""


class InvalidEscapeHexError(EscapeError):
    """Raised when a ``\\cXX`` escape has a non-hex digit."""


class UnknownEscapeCodeError(EscapeError):
    """Raised when ``\\`` is followed by an unsupported code."""


__all__ = [
    "EscapeError",
    "FontBankConfigError",
    "GameTextError",
    "IncompleteEscapeError",
    "InvalidEscapeHexError",
    "UnknownEscapeCodeError",
    "UnknownVersionError",
]
