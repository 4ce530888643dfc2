"""Public game text codec API."""
from __future__ import annotations

from .bank_config import load_builtin_font_bank, load_font_bank_config, parse_font_bank
from .banks import decode, encode, font_bank_exists, get_font_bank
from .errors import (
    EscapeError,
    FontBankConfigError,
    GameTextError,
    IncompleteEscapeError,
    InvalidEscapeHexError,
    UnknownEscapeCodeError,
    UnknownVersionError,
)
from .escapes import escape, unescape
from .font_bank import FontBank
from .jamo import JamoSequenceCollector, retag_korean
from .substitution import EncodeEntry, ReplaceEntry, SubstitutionTable, find_longest
from .versions import GameTextVersion, available_versions, version_from_name, version_name

__version__ = "0.1.0"

__all__ = [
    "EncodeEntry",
    "EscapeError",
    "FontBank",
    "FontBankConfigError",
    "GameTextError",
    "GameTextVersion",
    "IncompleteEscapeError",
    "InvalidEscapeHexError",
    "JamoSequenceCollector",
    "ReplaceEntry",
    "SubstitutionTable",
    "UnknownEscapeCodeError",
    "UnknownVersionError",
    "available_versions",
    "decode",
    "encode",
    "escape",
    "find_longest",
    "font_bank_exists",
    "get_font_bank",
    "load_builtin_font_bank",
    "load_font_bank_config",
    "parse_font_bank",
    "retag_korean",
    "unescape",
    "version_from_name",
    "version_name",
]
