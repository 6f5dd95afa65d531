"""Typed request objects shared across conversion use-cases."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from utf8_converter.types import NameFilter

DEFAULT_FILE_REGEX = ".*"
DEFAULT_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class ConversionRequest:
    """Validated settings for a single conversion run.

    Parameters
    ----------
    source_path : str
        Literal file, directory or glob pattern.
    dest_path : str
        Destination file or directory.
    source_charset : str
        Canonical codec name used to decode source bytes.
    file_filter : re.Pattern[str], default=``.*``
        Pattern matched against candidate file names in directory/glob mode.
    continue_on_error : bool, default=False
        Record per-file failures instead of aborting the batch.
    chunk_size : int, default=4096
        Number of bytes read per transcoding step.
    """

    source_path: str
    dest_path: str
    source_charset: str
    file_filter: NameFilter = field(
        default_factory=lambda: re.compile(DEFAULT_FILE_REGEX)
    )
    continue_on_error: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE
