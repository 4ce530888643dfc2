from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from gametext.bank_config import (
    load_builtin_font_bank,
    load_font_bank_config,
    parse_font_bank,
)
from gametext.errors import FontBankConfigError
from gametext.versions import GameTextVersion


def write_config(tmp_path: Path, body: str) -> Path:
    config_path = tmp_path / "bank.toml"
    config_path.write_text(textwrap.dedent(body), encoding="utf-8")
    return config_path


def test_load_font_bank_config_builds_a_working_bank(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        version = "jak2"
        passthrough = "~ ,."

        encode = [
          { chars = "海", bytes = [0x1a] },
          { chars = "谷", bytes = [1, 0xac] },
        ]

        replace = [
          { from = "~~", to = "世" },
        ]
        """,
    )

    bank = load_font_bank_config(config_path)

    assert bank.version is GameTextVersion.JAK2
    assert bank.passthrough == frozenset(b"~ ,.")
    assert [entry.chars for entry in bank.encode_entries] == ["谷", "海"]
    assert bank.decode(b"\x1a\x01\xac ~~.") == "海谷 世."
    assert bank.encode("海世") == b"\x1a~~"


def test_missing_tables_default_to_empty(tmp_path: Path) -> None:
    bank = load_font_bank_config(write_config(tmp_path, 'version = "jak1-v1"\n'))

    assert bank.encode_entries == ()
    assert bank.replace_entries == ()
    assert bank.decode(b"A~") == "A\\c7e"


@pytest.mark.parametrize(
    "body, message",
    [
        ('passthrough = ""', "requires a version"),
        ('version = "jak3"', "unknown text version jak3"),
        ("version = 2", "version must be a string"),
        ('version = "jak2"\npassthrough = "\\\\"', "backslash"),
        ('version = "jak2"\npassthrough = "é"', "single-byte ASCII"),
        ('version = "jak2"\nencode = "nope"', "encode must be an array"),
        ('version = "jak2"\nencode = [{ chars = "", bytes = [1] }]', "non-empty chars"),
        ('version = "jak2"\nencode = [{ chars = "A" }]', "non-empty bytes array"),
        ('version = "jak2"\nencode = [{ chars = "A", bytes = [1, 2, 3] }]', "at most 2"),
        ('version = "jak2"\nencode = [{ chars = "A", bytes = [256] }]', "invalid byte value 256"),
        ('version = "jak2"\nencode = [{ chars = "A", bytes = [true] }]', "invalid byte value True"),
        ('version = "jak2"\nreplace = [{ from = "AB" }]', "non-empty 'to' string"),
        ('version = "jak2"\nreplace = [{ from = "", to = "X" }]', "non-empty 'from' string"),
        ('version = "jak2"\nreplace = [1]', "must be a table"),
    ],
)
def test_invalid_tables_are_rejected(tmp_path: Path, body: str, message: str) -> None:
    config_path = write_config(tmp_path, body + "\n")

    with pytest.raises(FontBankConfigError, match=message):
        load_font_bank_config(config_path)


def test_duplicate_glyph_bytes_are_rejected() -> None:
    data = {
        "version": "jak1-v2",
        "encode": [
            {"chars": "A", "bytes": [0x80]},
            {"chars": "B", "bytes": [0x80]},
        ],
    }

    with pytest.raises(FontBankConfigError, match="reuses bytes 80 already assigned to 'A'"):
        parse_font_bank(data, source="inline")


def test_malformed_toml_is_reported_as_config_error(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, 'version = "jak2\n')

    with pytest.raises(FontBankConfigError, match="bank.toml"):
        load_font_bank_config(config_path)


@pytest.mark.parametrize("version", list(GameTextVersion))
def test_builtin_tables_load_for_every_version(version: GameTextVersion) -> None:
    bank = load_builtin_font_bank(version)

    assert bank.version is version
    assert bank.encode_entries
    assert bank.replace_entries
    assert ord("~") in bank.passthrough


def test_builtin_jak2_tables_carry_jamo_and_page_glyphs() -> None:
    bank = load_builtin_font_bank(GameTextVersion.JAK2)
    raws = {entry.raw: entry.chars for entry in bank.encode_entries}

    assert raws[b"\x03\x06"] == "<H306>"
    assert raws[b"\x10"] == "ˇ"
    assert ord("]") in bank.passthrough
