#!/usr/bin/env python3
"""Examples for converting ISO-8859-1 files (single file, folder, glob) to UTF-8."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from utf8_converter import convert_to_utf8

SAMPLE_TEXT = "Crème brûlée, jalapeño, Øresund, Fußgänger\n" * 200


def _write_samples(folder: Path) -> None:
    folder.mkdir(parents=True, exist_ok=True)
    for name in ("prices.dat", "orders.dat", "notes.txt"):
        (folder / name).write_bytes(SAMPLE_TEXT.encode("iso-8859-1"))


def _assert_utf8(path: Path) -> None:
    text = path.read_bytes().decode("utf-8")
    if text != SAMPLE_TEXT:
        raise SystemExit(f"FAIL: {path} does not round-trip the sample text.")
    print(f"OK: {path.name} ({path.stat().st_size} bytes)")


def example_single_file(root: Path) -> None:
    """Convert one file to a literal destination path."""
    print("\n" + "=" * 60)
    print("Example 1: Single file")
    print("=" * 60)

    source = root / "in" / "prices.dat"
    dest = root / "single" / "prices.txt"
    result = convert_to_utf8(str(source), str(dest), "ISO-8859-1")
    assert result.mode == "single"
    _assert_utf8(dest)


def example_folder_with_regex(root: Path) -> None:
    """Convert only the .dat files of a folder."""
    print("\n" + "=" * 60)
    print("Example 2: Folder filtered by regular expression")
    print("=" * 60)

    dest = root / "folder"
    result = convert_to_utf8(
        str(root / "in"), str(dest), "ISO-8859-1", file_regex=r".*\.dat"
    )
    for outcome in result.converted:
        _assert_utf8(Path(str(outcome.output_path)))


def example_glob(root: Path) -> None:
    """Convert a glob pattern into a destination folder."""
    print("\n" + "=" * 60)
    print("Example 3: Glob pattern")
    print("=" * 60)

    dest = root / "glob"
    result = convert_to_utf8(str(root / "in" / "*.txt"), str(dest), "latin-1")
    for outcome in result.converted:
        _assert_utf8(Path(str(outcome.output_path)))


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    with tempfile.TemporaryDirectory(prefix="utf8-example-") as tmp:
        root = Path(tmp)
        _write_samples(root / "in")
        example_single_file(root)
        example_folder_with_regex(root)
        example_glob(root)
    print("\nAll examples passed.")


if __name__ == "__main__":
    main()
