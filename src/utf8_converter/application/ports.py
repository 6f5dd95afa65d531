"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from typing import Protocol

from utf8_converter.types import BinaryReader, BinaryWriter, NameFilter


class FileSystem(Protocol):
    """Filesystem capability consumed by the resolver and engine."""

    def exists(self, path: str) -> bool:
        """Return whether ``path`` exists."""

    def is_file(self, path: str) -> bool:
        """Return whether ``path`` is an existing regular file."""

    def is_dir(self, path: str) -> bool:
        """Return whether ``path`` is an existing directory."""

    def glob(self, pattern: str, name_filter: NameFilter) -> list[str]:
        """Expand ``pattern`` and keep entries whose name matches the filter."""

    def list_dir(self, path: str, name_filter: NameFilter) -> list[str]:
        """List children of ``path`` whose name matches the filter."""

    def join(self, directory: str, name: str) -> str:
        """Join a directory and a child name."""

    def parent(self, path: str) -> str:
        """Return the parent directory of ``path``."""

    def mkdirs(self, path: str) -> None:
        """Create ``path`` and any missing parents."""

    def open_read(self, path: str) -> BinaryReader:
        """Open ``path`` for binary reading."""

    def open_write(self, path: str) -> BinaryWriter:
        """Create or truncate ``path`` for binary writing."""


class Transcoder(Protocol):
    """Re-encode a byte stream into UTF-8."""

    def transcode(
        self,
        source: BinaryReader,
        target: BinaryWriter,
        charset: str,
        chunk_size: int,
    ) -> tuple[int, int]:
        """Copy ``source`` into ``target`` and return (bytes read, bytes written)."""
