#!/usr/bin/env python3
"""Audit font banks for glyphs and bytes whose readable spelling does not survive a round trip.

Two checks are available:

``glyphs``
    Every encode-table entry is encoded from its characters and decoded again.
``bytes``
    Every single byte ``00``-``ff`` is decoded and the readable result encoded
    again, which exercises the ``\\cXX`` fallback and the plain-character policy.
    Newlines and tabs are expected to fail here: decode spells them ``\\n`` and
    ``\\t`` but encode does not accept those escapes.
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

# Ensure the package is importable when running the script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from gametext.banks import get_font_bank  # noqa: E402  (import after sys.path tweak)
from gametext.errors import GameTextError  # noqa: E402
from gametext.font_bank import FontBank  # noqa: E402
from gametext.versions import available_versions  # noqa: E402


@dataclass(frozen=True)
class AuditFailure:
    subject: str
    detail: str


@dataclass
class AuditResult:
    """Outcome of one check against one bank."""

    check: str
    bank: str
    checked: int = 0
    failures: list[AuditFailure] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures


def audit_glyphs(bank: FontBank) -> AuditResult:
    result = AuditResult("glyphs", bank.name)
    for entry in bank.encode_entries:
        result.checked += 1
        subject = f"glyph {entry.chars!r} ({entry.raw.hex(' ')})"
        try:
            decoded = bank.decode(bank.encode(entry.chars))
        except GameTextError as exc:
            result.failures.append(AuditFailure(subject, str(exc)))
            continue
        if decoded != entry.chars:
            result.failures.append(AuditFailure(subject, f"decoded as {decoded!r}"))
    return result


def audit_bytes(bank: FontBank) -> AuditResult:
    result = AuditResult("bytes", bank.name)
    for value in range(0x100):
        result.checked += 1
        payload = bytes([value])
        readable = bank.decode(payload)
        subject = f"byte {value:02x} ({readable!r})"
        try:
            encoded = bank.encode(readable)
        except GameTextError as exc:
            result.failures.append(AuditFailure(subject, str(exc)))
            continue
        if encoded != payload:
            result.failures.append(
                AuditFailure(subject, f"encoded as {encoded.hex(' ') or '<empty>'}")
            )
    return result


CHECKS: dict[str, Callable[[FontBank], AuditResult]] = {
    "glyphs": audit_glyphs,
    "bytes": audit_bytes,
}


def render_result(result: AuditResult) -> str:
    status = "PASS" if result.passed else "FAIL"
    lines = [
        f"{result.bank} {result.check}: {result.checked} checked, "
        f"{len(result.failures)} failed [{status}]"
    ]
    lines.extend(f"  {failure.subject}: {failure.detail}" for failure in result.failures)
    return "\n".join(lines)


def _parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Round-trip every glyph or every byte of the built-in font banks "
            "and list the ones that do not come back unchanged."
        )
    )
    parser.add_argument(
        "versions",
        nargs="*",
        metavar="VERSION",
        help=f"Banks to audit: {', '.join(available_versions())} (default: all of them).",
    )
    parser.add_argument(
        "--check",
        action="append",
        choices=sorted(CHECKS),
        help="Check to run; may be repeated (default: glyphs).",
    )
    args = parser.parse_args(argv)
    unknown = [name for name in args.versions if name not in available_versions()]
    if unknown:
        parser.error(f"unknown text version {unknown[0]}")
    args.versions = args.versions or list(available_versions())
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    checks = args.check or ["glyphs"]

    all_passed = True
    for version in args.versions:
        bank = get_font_bank(version)
        for check in checks:
            result = CHECKS[check](bank)
            print(render_result(result))
            all_passed = all_passed and result.passed
    if all_passed:
        print("All font bank audits passed.")
        return 0
    print("One or more font bank audits failed.", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
