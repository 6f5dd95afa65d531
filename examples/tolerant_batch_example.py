#!/usr/bin/env python3
"""Example: tolerate undecodable files in a Shift-JIS batch."""

from __future__ import annotations

import tempfile
from pathlib import Path

from utf8_converter import convert_to_utf8
from utf8_converter.errors import FileConversionError


def main() -> None:
    with tempfile.TemporaryDirectory(prefix="utf8-tolerant-") as tmp:
        root = Path(tmp)
        source = root / "in"
        source.mkdir()
        (source / "a.txt").write_bytes("こんにちは\n".encode("shift_jis"))
        (source / "b.txt").write_bytes(b"\x81\x00 not shift-jis")
        (source / "c.txt").write_bytes("さようなら\n".encode("shift_jis"))

        try:
            convert_to_utf8(str(source), str(root / "strict"), "shift_jis")
        except FileConversionError as exc:
            print(f"Strict mode aborted: {exc.source_path}")

        result = convert_to_utf8(
            str(source), str(root / "tolerant"), "shift_jis", continue_on_error=True
        )
        for outcome in result.outcomes:
            print(f"{outcome.status.value:>9}: {outcome.input_path} {outcome.reason or ''}")
        if len(result.converted) != 2 or len(result.failed) != 1:
            raise SystemExit("FAIL: expected two converted files and one failure.")
        print("Tolerant mode converted the valid files.")


if __name__ == "__main__":
    main()
