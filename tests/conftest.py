"""Shared pytest configuration, marker assignment and filesystem fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from utf8_converter.adapters.filesystem import LocalFileSystem
from utf8_converter.types import BinaryReader

LATIN1_TEXT = "Señor Müller paid 12£ at the café.\n"
LATIN1_BYTES = LATIN1_TEXT.encode("iso-8859-1")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


class UnreadableFileSystem(LocalFileSystem):
    """Local filesystem refusing to open selected file names for reading."""

    def __init__(self, unreadable: set[str]) -> None:
        self.unreadable = unreadable
        self.opened: list[str] = []

    def open_read(self, path: str) -> BinaryReader:
        name = Path(path).name
        self.opened.append(name)
        if name in self.unreadable:
            raise PermissionError(13, "Permission denied", path)
        return super().open_read(path)


@pytest.fixture
def latin1_dir(tmp_path: Path) -> Path:
    """Directory holding ``a.dat``, ``b.dat`` and ``c.txt`` encoded as ISO-8859-1."""
    folder = tmp_path / "source"
    folder.mkdir()
    for name in ("a.dat", "b.dat", "c.txt"):
        (folder / name).write_bytes(LATIN1_BYTES)
    return folder


@pytest.fixture
def unreadable_fs() -> Callable[..., UnreadableFileSystem]:
    """Factory for filesystems that fail to open the given file names."""

    def _factory(*names: str) -> UnreadableFileSystem:
        return UnreadableFileSystem(set(names))

    return _factory


@pytest.fixture
def latin1_text() -> str:
    """Text stored (ISO-8859-1 encoded) in every ``latin1_dir`` file."""
    return LATIN1_TEXT
