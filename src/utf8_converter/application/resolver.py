"""Source resolution: single file, directory listing or glob expansion."""

from __future__ import annotations

import glob
import logging
import re

from utf8_converter.adapters.filesystem import filesystem_for
from utf8_converter.application.options import DEFAULT_FILE_REGEX
from utf8_converter.application.ports import FileSystem
from utf8_converter.application.results import Resolution, ResolvedFile
from utf8_converter.errors import (
    FilterPatternError,
    SourceUnreadableError,
    ValidationFailure,
)
from utf8_converter.schemas import CORRECTIVE_ACTIONS, FILE_REGEX, FILE_REGEX_INVALID
from utf8_converter.types import NameFilter

logger = logging.getLogger(__name__)


def compile_filter(file_filter: str | NameFilter | None) -> NameFilter:
    """Return a compiled file-name filter, defaulting to match-all.

    Raises
    ------
    FilterPatternError
        If ``file_filter`` is not a valid regular expression.
    """
    if isinstance(file_filter, re.Pattern):
        return file_filter
    try:
        return re.compile(file_filter or DEFAULT_FILE_REGEX)
    except re.error as exc:
        failure = ValidationFailure(
            field_id=FILE_REGEX,
            message=FILE_REGEX_INVALID,
            corrective_action=CORRECTIVE_ACTIONS[FILE_REGEX],
        )
        raise FilterPatternError(
            f"{FILE_REGEX_INVALID} ({file_filter!r}: {exc})", [failure]
        ) from exc


def resolve_sources(
    source_path: str,
    file_filter: str | NameFilter | None = None,
    *,
    filesystem: FileSystem | None = None,
    log: logging.Logger | None = None,
) -> Resolution:
    """Resolve a source path or glob into ordered input files.

    A path naming an existing regular file resolves to that file alone and
    the filter is ignored. Anything else is expanded as a glob with the
    filter applied to candidate names; when the glob finds nothing, or only
    a single directory, the source is listed as a plain directory instead.
    A pattern without wildcards that names nothing is an error, while an
    unmatched wildcard pattern resolves to an empty batch.

    Parameters
    ----------
    source_path : str
        File, directory or glob pattern.
    file_filter : str | re.Pattern[str] | None, default=None
        Regular expression that candidate file names must fully match.
    filesystem : FileSystem | None, default=None
        Filesystem to query. Defaults to the adapter for ``source_path``.
    log : logging.Logger | None, default=None
        Logger receiving resolution events.

    Returns
    -------
    Resolution
        Mode and files in filesystem order. Directory entries are flagged
        so callers can exclude them.

    Raises
    ------
    FilterPatternError
        If the filter does not compile.
    SourceUnreadableError
        If the source filesystem cannot be determined or queried, or a
        literal source path does not exist.
    """
    log = log or logger
    name_filter = compile_filter(file_filter)
    fs = filesystem or filesystem_for(source_path)

    try:
        if fs.is_file(source_path):
            log.info("Resolved single source file %s", source_path)
            return Resolution(mode="single", files=(ResolvedFile(path=source_path),))

        matches = fs.glob(source_path, name_filter)
        if not matches or (len(matches) == 1 and fs.is_dir(matches[0])):
            # Only wildcard patterns may match nothing; a literal path must exist.
            if not glob.has_magic(source_path) and not fs.exists(source_path):
                raise SourceUnreadableError(
                    f"Cannot read source '{source_path}': no such file or directory"
                )
            matches = fs.list_dir(source_path, name_filter)

        files = tuple(
            ResolvedFile(path=match, from_expansion=True, is_directory=fs.is_dir(match))
            for match in matches
        )
    except OSError as exc:
        raise SourceUnreadableError(
            f"Cannot read source '{source_path}': {exc}"
        ) from exc

    resolution = Resolution(mode="multi", files=files)
    if not resolution.convertible:
        log.warning(
            "Not converting any files from source %s matching regular expression %s",
            source_path,
            name_filter.pattern,
        )
    else:
        log.info(
            "Resolved %d file(s) from source %s",
            len(resolution.convertible),
            source_path,
        )
    return resolution
