"""Application-layer use-cases and request objects."""

from __future__ import annotations

import logging

from utf8_converter.application.options import DEFAULT_CHUNK_SIZE, ConversionRequest
from utf8_converter.application.ports import FileSystem, Transcoder
from utf8_converter.application.results import (
    BatchResult,
    ConversionOutcome,
    OutcomeStatus,
    Resolution,
    ResolvedFile,
)
from utf8_converter.types import NameFilter


def build_conversion_request(
    *,
    source_path: str,
    dest_path: str,
    charset: str,
    file_regex: str | None = None,
    continue_on_error: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    check_filesystem: bool = True,
) -> ConversionRequest:
    """Build a validated request via lazy use-case import."""
    from utf8_converter.application.use_cases import build_conversion_request as _impl

    return _impl(
        source_path=source_path,
        dest_path=dest_path,
        charset=charset,
        file_regex=file_regex,
        continue_on_error=continue_on_error,
        chunk_size=chunk_size,
        check_filesystem=check_filesystem,
    )


def resolve_sources(
    source_path: str,
    file_filter: str | NameFilter | None = None,
    *,
    filesystem: FileSystem | None = None,
    log: logging.Logger | None = None,
) -> Resolution:
    """Resolve source files via lazy resolver import."""
    from utf8_converter.application.resolver import resolve_sources as _impl

    return _impl(source_path, file_filter, filesystem=filesystem, log=log)


def convert_file(
    resolved: ResolvedFile,
    dest_path: str,
    is_directory_mode: bool,
    *,
    request: ConversionRequest,
    filesystem: FileSystem | None = None,
    transcoder: Transcoder | None = None,
    log: logging.Logger | None = None,
) -> ConversionOutcome:
    """Convert one file via lazy use-case import."""
    from utf8_converter.application.use_cases import convert_file as _impl

    return _impl(
        resolved,
        dest_path,
        is_directory_mode,
        request=request,
        filesystem=filesystem,
        transcoder=transcoder,
        log=log,
    )


def run_conversion(
    request: ConversionRequest,
    *,
    filesystem: FileSystem | None = None,
    transcoder: Transcoder | None = None,
    log: logging.Logger | None = None,
) -> BatchResult:
    """Run a conversion batch via lazy use-case import."""
    from utf8_converter.application.use_cases import run_conversion as _impl

    return _impl(request, filesystem=filesystem, transcoder=transcoder, log=log)


__all__ = [
    "BatchResult",
    "ConversionOutcome",
    "ConversionRequest",
    "OutcomeStatus",
    "Resolution",
    "ResolvedFile",
    "build_conversion_request",
    "convert_file",
    "resolve_sources",
    "run_conversion",
]
