"""Public conversion API (delegates to application use-cases)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from utf8_converter.application.options import DEFAULT_CHUNK_SIZE
from utf8_converter.application.ports import FileSystem
from utf8_converter.application.results import BatchResult
from utf8_converter.application.use_cases import build_conversion_request
from utf8_converter.application.use_cases import build_request_from_settings
from utf8_converter.application.use_cases import run_conversion


def convert_to_utf8(
    source_path: str,
    dest_path: str,
    charset: str,
    file_regex: Optional[str] = None,
    continue_on_error: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    filesystem: Optional[FileSystem] = None,
    logger: Optional[logging.Logger] = None,
) -> BatchResult:
    """Convert a file, directory or glob of files from ``charset`` to UTF-8."""
    request = build_conversion_request(
        source_path=source_path,
        dest_path=dest_path,
        charset=charset,
        file_regex=file_regex,
        continue_on_error=continue_on_error,
        chunk_size=chunk_size,
        check_filesystem=filesystem is None,
    )
    return run_conversion(request, filesystem=filesystem, log=logger)


def convert_settings_to_utf8(
    settings: Mapping[str, object],
    filesystem: Optional[FileSystem] = None,
    logger: Optional[logging.Logger] = None,
) -> BatchResult:
    """Run a conversion described by stage-property settings."""
    request = build_request_from_settings(
        settings,
        check_filesystem=filesystem is None,
    )
    return run_conversion(request, filesystem=filesystem, log=logger)
