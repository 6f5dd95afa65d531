"""Filesystem adapters used by source resolution and conversion."""

from __future__ import annotations

import glob as globlib
import os
from urllib.parse import unquote, urlsplit

from utf8_converter.application.ports import FileSystem
from utf8_converter.errors import SourceUnreadableError
from utf8_converter.types import BinaryReader, BinaryWriter, NameFilter

LOCAL_SCHEMES = frozenset({"", "file"})


def _local_path(path: str) -> str:
    """Strip a ``file://`` prefix and return a plain OS path."""
    if path.startswith("file:"):
        parts = urlsplit(path)
        return unquote(parts.path) or os.sep
    return path


def path_scheme(path: str) -> str:
    """Return the URL scheme of ``path`` (empty for plain paths)."""
    scheme = urlsplit(path).scheme.lower()
    # Windows drive letters parse as one-letter schemes.
    if len(scheme) == 1:
        return ""
    return scheme


class LocalFileSystem:
    """``FileSystem`` implementation over the local disk."""

    def exists(self, path: str) -> bool:
        return os.path.exists(_local_path(path))

    def is_file(self, path: str) -> bool:
        return os.path.isfile(_local_path(path))

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(_local_path(path))

    def glob(self, pattern: str, name_filter: NameFilter) -> list[str]:
        matches = globlib.glob(_local_path(pattern), include_hidden=True)
        return sorted(
            match
            for match in matches
            if name_filter.fullmatch(os.path.basename(match.rstrip(os.sep)))
        )

    def list_dir(self, path: str, name_filter: NameFilter) -> list[str]:
        local = _local_path(path)
        try:
            names = os.listdir(local)
        except (FileNotFoundError, NotADirectoryError):
            return []
        return [
            os.path.join(local, name)
            for name in sorted(names)
            if name_filter.fullmatch(name)
        ]

    def join(self, directory: str, name: str) -> str:
        return os.path.join(_local_path(directory), name)

    def parent(self, path: str) -> str:
        return os.path.dirname(_local_path(path).rstrip(os.sep))

    def mkdirs(self, path: str) -> None:
        local = _local_path(path)
        if local:
            os.makedirs(local, exist_ok=True)

    def open_read(self, path: str) -> BinaryReader:
        return open(_local_path(path), "rb")

    def open_write(self, path: str) -> BinaryWriter:
        return open(_local_path(path), "wb")


def filesystem_for(path: str) -> FileSystem:
    """Return the filesystem able to serve ``path``.

    Parameters
    ----------
    path : str
        Plain path or URL.

    Returns
    -------
    FileSystem
        Filesystem adapter for the path's scheme.

    Raises
    ------
    SourceUnreadableError
        If no adapter handles the path's URL scheme.
    """
    scheme = path_scheme(path)
    if scheme in LOCAL_SCHEMES:
        return LocalFileSystem()
    raise SourceUnreadableError(
        f"Cannot determine the file system for '{path}' (scheme '{scheme}')."
    )
