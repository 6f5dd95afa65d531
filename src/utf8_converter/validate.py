"""Configuration validation producing setting-attributed failures."""

from __future__ import annotations

import re
from collections.abc import Mapping

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from utf8_converter.application.options import DEFAULT_CHUNK_SIZE, ConversionRequest
from utf8_converter.errors import ConfigurationError, ValidationFailure
from utf8_converter.schemas import (
    CHARSET,
    CHUNK_SIZE,
    CONTINUE_ON_ERROR,
    CORRECTIVE_ACTIONS,
    DEST_FILE_PATH,
    FILE_REGEX,
    SOURCE_FILE_PATH,
    SOURCE_REQUIRED,
    ToUtf8Config,
)

_PYTHON_TO_SETTING = {
    "source_path": SOURCE_FILE_PATH,
    "dest_path": DEST_FILE_PATH,
    "file_regex": FILE_REGEX,
    "charset": CHARSET,
    "continue_on_error": CONTINUE_ON_ERROR,
    "chunk_size": CHUNK_SIZE,
}


def _to_failure(error: ErrorDetails) -> ValidationFailure:
    loc = error.get("loc") or ()
    field_id = str(loc[0]) if loc else "config"
    field_id = _PYTHON_TO_SETTING.get(field_id, field_id)
    ctx = error.get("ctx") or {}
    if error["type"] == "value_error" and "error" in ctx:
        message = str(ctx["error"])
    else:
        message = error["msg"]
    return ValidationFailure(
        field_id=field_id,
        message=message,
        corrective_action=CORRECTIVE_ACTIONS.get(field_id),
    )


def _summarize(failures: list[ValidationFailure]) -> str:
    details = "; ".join(f"{item.field_id}: {item.message}" for item in failures)
    return f"Invalid conversion settings ({details})"


def parse_settings(
    settings: Mapping[str, object],
    *,
    check_filesystem: bool = True,
) -> ToUtf8Config:
    """Validate raw stage settings.

    Parameters
    ----------
    settings : Mapping[str, object]
        Settings keyed by stage property names or Python field names.
    check_filesystem : bool, default=True
        Reject source paths whose URL scheme has no filesystem adapter.

    Returns
    -------
    ToUtf8Config
        Validated, normalized settings.

    Raises
    ------
    ConfigurationError
        With the ordered failures when any setting is invalid. A missing
        source path is reported alone.
    """
    raw_source = settings.get(SOURCE_FILE_PATH, settings.get("source_path"))
    if raw_source is None or not str(raw_source).strip():
        failure = ValidationFailure(
            field_id=SOURCE_FILE_PATH,
            message=SOURCE_REQUIRED,
            corrective_action=CORRECTIVE_ACTIONS[SOURCE_FILE_PATH],
        )
        raise ConfigurationError(_summarize([failure]), [failure])

    try:
        return ToUtf8Config.model_validate(
            dict(settings),
            context={"check_filesystem": check_filesystem},
        )
    except ValidationError as exc:
        failures = [_to_failure(error) for error in exc.errors()]
        raise ConfigurationError(_summarize(failures), failures) from exc


def validate_settings(
    settings: Mapping[str, object],
    *,
    check_filesystem: bool = True,
) -> list[ValidationFailure]:
    """Return ordered validation failures for raw settings (empty when valid)."""
    try:
        parse_settings(settings, check_filesystem=check_filesystem)
    except ConfigurationError as exc:
        return list(exc.failures)
    return []


def validate_config(
    source_path: str | None,
    dest_path: str | None,
    charset: str | None,
    file_regex: str | None = None,
    continue_on_error: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    *,
    check_filesystem: bool = True,
) -> list[ValidationFailure]:
    """Validate conversion settings given as keyword values."""
    return validate_settings(
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


def request_from_config(config: ToUtf8Config) -> ConversionRequest:
    """Build the immutable run request from validated settings."""
    return ConversionRequest(
        source_path=config.source_path,
        dest_path=config.dest_path,
        source_charset=config.charset,
        file_filter=re.compile(config.file_regex),
        continue_on_error=config.continue_on_error,
        chunk_size=config.chunk_size,
    )
