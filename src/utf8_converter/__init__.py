"""Top-level API for charset-to-UTF-8 file conversion."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from utf8_converter.application.options import DEFAULT_CHUNK_SIZE

if TYPE_CHECKING:
    from utf8_converter.application.ports import FileSystem
    from utf8_converter.application.results import BatchResult
    from utf8_converter.errors import ValidationFailure

__version__ = "0.1.0"


def convert_to_utf8(
    source_path: str,
    dest_path: str,
    charset: str,
    *,
    file_regex: str | None = None,
    continue_on_error: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    filesystem: FileSystem | None = None,
    logger: logging.Logger | None = None,
) -> BatchResult:
    """Convert one or more files from ``charset`` into UTF-8.

    Parameters
    ----------
    source_path : str
        A single file, a directory, or a glob pattern such as ``data/*.dat``.
    dest_path : str
        Output file (single-file source) or directory. In directory mode each
        output is written as ``<dest_path>/<name>.utf8``.
    charset : str
        Source charset, e.g. ``ISO-8859-1``.
    file_regex : str, optional
        Regular expression matched against file names in directory/glob
        mode. Defaults to ``.*``.
    continue_on_error : bool, default=False
        Record failing files and keep going instead of aborting the batch.
    chunk_size : int, default=4096
        Bytes read per transcoding step.
    filesystem : FileSystem, optional
        Filesystem adapter. Defaults to the local disk.
    logger : logging.Logger, optional
        Logger receiving run events. Defaults to the module loggers.

    Returns
    -------
    BatchResult
        Per-file outcomes of the run.

    Raises
    ------
    ConfigurationError
        If the settings are invalid.
    SourceUnreadableError
        If the source cannot be reached.
    DestinationConflictError
        If a directory source targets an existing file.
    FileConversionError
        If a file fails and ``continue_on_error`` is false.
    """
    from .api import convert_to_utf8 as _impl

    return _impl(
        source_path=source_path,
        dest_path=dest_path,
        charset=charset,
        file_regex=file_regex,
        continue_on_error=continue_on_error,
        chunk_size=chunk_size,
        filesystem=filesystem,
        logger=logger,
    )


def validate_settings(
    settings: Mapping[str, object],
) -> list[ValidationFailure]:
    """Validate stage-property settings.

    Parameters
    ----------
    settings : Mapping[str, object]
        Settings keyed by ``sourceFilePath``, ``destFilePath``,
        ``fileRegex``, ``charset``, ``continueOnError`` and ``chunkSize``.

    Returns
    -------
    list[ValidationFailure]
        Ordered ``(field_id, message)`` failures; empty when valid.
    """
    from .validate import validate_settings as _impl

    return _impl(settings)


__all__ = [
    "convert_to_utf8",
    "validate_settings",
]
