"""Application use-cases orchestrating UTF-8 conversion runs."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from utf8_converter.adapters.filesystem import filesystem_for
from utf8_converter.application.options import DEFAULT_CHUNK_SIZE, ConversionRequest
from utf8_converter.application.ports import FileSystem, Transcoder
from utf8_converter.application.resolver import resolve_sources
from utf8_converter.application.results import (
    BatchResult,
    ConversionOutcome,
    OutcomeStatus,
    ResolvedFile,
)
from utf8_converter.errors import (
    ConversionError,
    DestinationConflictError,
    FileConversionError,
)
from utf8_converter.infrastructure.transcoding import IncrementalTranscoder
from utf8_converter.schemas import (
    CHARSET,
    CHUNK_SIZE,
    CONTINUE_ON_ERROR,
    DEST_FILE_PATH,
    FILE_REGEX,
    SOURCE_FILE_PATH,
)
from utf8_converter.validate import parse_settings, request_from_config

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".utf8"


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
    """Build a validated request from command/API params.

    Raises
    ------
    ConfigurationError
        If any setting is invalid.
    """
    return build_request_from_settings(
        {
            SOURCE_FILE_PATH: source_path,
            DEST_FILE_PATH: dest_path,
            FILE_REGEX: file_regex,
            CHARSET: charset,
            CONTINUE_ON_ERROR: continue_on_error,
            CHUNK_SIZE: chunk_size,
        },
        check_filesystem=check_filesystem,
    )


def build_request_from_settings(
    settings: Mapping[str, object],
    *,
    check_filesystem: bool = True,
) -> ConversionRequest:
    """Build a validated request from stage-property settings."""
    config = parse_settings(settings, check_filesystem=check_filesystem)
    return request_from_config(config)


def derive_output_path(
    resolved: ResolvedFile,
    dest_path: str,
    *,
    dest_is_directory: bool,
    filesystem: FileSystem,
) -> str:
    """Return ``dest/<name>.utf8`` for directory targets, else ``dest_path``.

    Files found by directory or glob expansion always take the derived name.
    """
    if dest_is_directory or resolved.from_expansion:
        return filesystem.join(dest_path, f"{resolved.name}{OUTPUT_SUFFIX}")
    return dest_path


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
    """Use-case: transcode one resolved file into UTF-8.

    Parameters
    ----------
    resolved : ResolvedFile
        Input file. Directory entries are skipped.
    dest_path : str
        Destination root (directory) or literal output file.
    is_directory_mode : bool
        Treat ``dest_path`` as a directory even if it does not exist yet.
    request : ConversionRequest
        Charset, chunk size and failure policy.
    filesystem : FileSystem | None, default=None
        Filesystem serving both input and output.
    transcoder : Transcoder | None, default=None
        Byte-stream re-encoder.
    log : logging.Logger | None, default=None
        Logger receiving per-file events.

    Returns
    -------
    ConversionOutcome
        ``CONVERTED``, ``SKIPPED`` or, in tolerant mode, ``FAILED``.

    Raises
    ------
    FileConversionError
        If the file fails and ``request.continue_on_error`` is false.
    """
    log = log or logger
    fs = filesystem or filesystem_for(resolved.path)
    transcoder = transcoder or IncrementalTranscoder()

    if resolved.is_directory:
        log.debug("Skipping directory %s", resolved.path)
        return ConversionOutcome(
            input_path=resolved.path,
            output_path=None,
            status=OutcomeStatus.SKIPPED,
            reason="directory",
        )

    output_path = derive_output_path(
        resolved,
        dest_path,
        dest_is_directory=is_directory_mode or fs.is_dir(dest_path),
        filesystem=fs,
    )
    try:
        with fs.open_read(resolved.path) as source, fs.open_write(output_path) as target:
            bytes_read, bytes_written = transcoder.transcode(
                source,
                target,
                request.source_charset,
                request.chunk_size,
            )
    except (OSError, UnicodeError, LookupError) as exc:
        if not request.continue_on_error:
            raise FileConversionError(
                f"Failed to convert file {resolved.path} to {output_path}: {exc}",
                source_path=resolved.path,
                dest_path=output_path,
            ) from exc
        log.warning(
            "Exception converting file %s to %s",
            resolved.path,
            output_path,
            exc_info=exc,
        )
        return ConversionOutcome(
            input_path=resolved.path,
            output_path=output_path,
            status=OutcomeStatus.FAILED,
            reason=f"{type(exc).__name__}: {exc}",
        )

    log.debug(
        "Converted %s -> %s (%d bytes in, %d bytes out)",
        resolved.path,
        output_path,
        bytes_read,
        bytes_written,
    )
    return ConversionOutcome(
        input_path=resolved.path,
        output_path=output_path,
        status=OutcomeStatus.CONVERTED,
        bytes_read=bytes_read,
        bytes_written=bytes_written,
    )


def _prepare_destination(
    request: ConversionRequest,
    multi: bool,
    fs: FileSystem,
) -> None:
    dest = request.dest_path
    if multi and fs.exists(dest) and not fs.is_dir(dest):
        raise DestinationConflictError(
            f"Destination {dest} needs to be a directory since the source is a "
            "directory"
        )
    try:
        fs.mkdirs(dest if multi else fs.parent(dest))
    except OSError as exc:
        raise ConversionError(
            f"Cannot create destination directory for {dest}: {exc}"
        ) from exc


def run_conversion(
    request: ConversionRequest,
    *,
    filesystem: FileSystem | None = None,
    transcoder: Transcoder | None = None,
    log: logging.Logger | None = None,
) -> BatchResult:
    """Use-case: resolve the source and convert every file to UTF-8.

    Files are processed sequentially in resolution order. Pre-flight
    failures abort before any file is opened.

    Raises
    ------
    FilterPatternError
        If the request filter does not compile.
    SourceUnreadableError
        If the source filesystem cannot be reached.
    DestinationConflictError
        If a multi-file batch targets an existing regular file.
    FileConversionError
        On the first per-file failure when errors are not tolerated.
    """
    log = log or logger
    fs = filesystem or filesystem_for(request.source_path)
    transcoder = transcoder or IncrementalTranscoder()

    resolution = resolve_sources(
        request.source_path,
        request.file_filter,
        filesystem=fs,
        log=log,
    )
    multi = resolution.mode == "multi"
    _prepare_destination(request, multi, fs)

    outcomes = [
        convert_file(
            resolved,
            request.dest_path,
            multi,
            request=request,
            filesystem=fs,
            transcoder=transcoder,
            log=log,
        )
        for resolved in resolution.files
    ]
    result = BatchResult(
        mode=resolution.mode,
        dest_path=request.dest_path,
        outcomes=tuple(outcomes),
    )
    log.info(
        "Converted %d file(s) to UTF-8 (%d failed, %d skipped)",
        len(result.converted),
        len(result.failed),
        len(result.skipped),
    )
    return result
