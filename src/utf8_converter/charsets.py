"""Charset name helpers backed by the runtime codec registry."""

from __future__ import annotations

import codecs
from encodings.aliases import aliases


class UnsupportedCharsetError(LookupError):
    """Charset name is not known to the runtime codec registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


def normalize_charset(name: str) -> str:
    """Return the canonical codec name for ``name``.

    Parameters
    ----------
    name : str
        Charset identifier such as ``ISO-8859-1`` or ``windows-1252``.

    Returns
    -------
    str
        Canonical Python codec name (e.g. ``"iso8859-1"``).

    Raises
    ------
    UnsupportedCharsetError
        If no text codec is registered under ``name``.
    """
    candidate = (name or "").strip()
    if not candidate:
        raise UnsupportedCharsetError(name)
    try:
        info = codecs.lookup(candidate)
    except LookupError as exc:
        raise UnsupportedCharsetError(candidate) from exc
    # bytes-to-bytes codecs (base64, zlib, ...) are not charsets.
    if not getattr(info, "_is_text_encoding", True):
        raise UnsupportedCharsetError(candidate)
    return info.name


def is_supported_charset(name: str) -> bool:
    """Check whether ``name`` resolves to a text codec."""
    try:
        normalize_charset(name)
    except UnsupportedCharsetError:
        return False
    return True


def available_charsets() -> list[str]:
    """Return sorted canonical names of every decodable charset."""
    names: set[str] = set()
    for codec_name in set(aliases.values()):
        try:
            names.add(normalize_charset(codec_name))
        except UnsupportedCharsetError:
            continue
    return sorted(names)
