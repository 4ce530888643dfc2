import os
import subprocess
import sys
from pathlib import Path

_SCRIPT = Path(__file__).resolve().parents[1] / "tools" / "font_bank_audit.py"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ, PYTHONIOENCODING="utf-8")
    return subprocess.run(
        [sys.executable, str(_SCRIPT), *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=env,
        check=False,
    )


def test_every_builtin_glyph_survives_the_audit() -> None:
    result = _run()

    assert result.returncode == 0, result.stdout + result.stderr
    assert "jak1-v1 glyphs: 199 checked, 0 failed [PASS]" in result.stdout
    assert "jak1-v2 glyphs: 201 checked, 0 failed [PASS]" in result.stdout
    assert "jak2 glyphs: 669 checked, 0 failed [PASS]" in result.stdout
    assert "All font bank audits passed." in result.stdout


def test_byte_audit_flags_newline_and_tab() -> None:
    result = _run("jak1-v1", "--check", "bytes")

    assert result.returncode == 1
    assert "jak1-v1 bytes: 256 checked" in result.stdout
    assert "  byte 0a ('\\\\n'): unknown string escape code 'n'" in result.stdout
    assert "  byte 09 ('\\\\t'): unknown string escape code 't'" in result.stdout
    assert "byte 80" not in result.stdout
    assert "One or more font bank audits failed." in result.stderr


def test_unknown_version_is_rejected() -> None:
    result = _run("jak9")

    assert result.returncode == 2
    assert "unknown text version jak9" in result.stderr
