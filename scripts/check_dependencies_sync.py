#!/usr/bin/env python3
"""Check that requirements.txt pins what pyproject.toml declares.

Requirements are keyed by normalized distribution name so ``PyYAML`` and
``pyyaml`` compare equal; a name present on both sides with a different
version specifier is reported as drift.
"""

from __future__ import annotations

import re
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PYPROJECT = ROOT / "pyproject.toml"
REQUIREMENTS = ROOT / "requirements.txt"
# extras installed by the requirements file besides the base dependencies
PINNED_EXTRAS = ("test",)

_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)\s*(.*)$")


def _split(requirement: str) -> tuple[str, str]:
    match = _NAME.match(requirement)
    if match is None:
        raise SystemExit(f"Cannot parse requirement line: {requirement!r}")
    name, specifier = match.groups()
    return re.sub(r"[-_.]+", "-", name).lower(), specifier.replace(" ", "")


def declared() -> dict[str, str]:
    """Return ``{name: specifier}`` for base and pinned-extra dependencies."""
    project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]
    entries = list(project.get("dependencies", []))
    extras = project.get("optional-dependencies", {})
    for extra in PINNED_EXTRAS:
        entries.extend(extras.get(extra, []))
    return dict(_split(entry) for entry in entries if entry.strip())


def pinned() -> dict[str, str]:
    """Return ``{name: specifier}`` from requirements.txt, ignoring comments."""
    result: dict[str, str] = {}
    for line in REQUIREMENTS.read_text(encoding="utf-8").splitlines():
        entry = line.split("#", 1)[0].strip()
        if entry:
            name, specifier = _split(entry)
            result[name] = specifier
    return result


def main() -> None:
    want = declared()
    have = pinned()

    problems = [f"missing: {name}{want[name]}" for name in sorted(want.keys() - have.keys())]
    problems += [f"unexpected: {name}{have[name]}" for name in sorted(have.keys() - want.keys())]
    problems += [
        f"drift: {name} declares '{want[name]}' but requirements.txt has '{have[name]}'"
        for name in sorted(want.keys() & have.keys())
        if want[name] != have[name]
    ]
    if problems:
        raise SystemExit(
            "requirements.txt does not match pyproject.toml "
            "(regenerate with scripts/generate_requirements.py):\n  "
            + "\n  ".join(problems)
        )
    print(f"requirements.txt matches pyproject.toml ({len(want)} packages).")


if __name__ == "__main__":
    main()
