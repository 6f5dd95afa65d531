"""Pydantic schemas for runtime validation of conversion settings."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from utf8_converter.adapters.filesystem import LOCAL_SCHEMES, path_scheme
from utf8_converter.application.options import DEFAULT_CHUNK_SIZE, DEFAULT_FILE_REGEX
from utf8_converter.charsets import UnsupportedCharsetError, normalize_charset
from utf8_converter.types import SettingScalar

# Stable setting identifiers reported with validation failures.
SOURCE_FILE_PATH = "sourceFilePath"
DEST_FILE_PATH = "destFilePath"
FILE_REGEX = "fileRegex"
CHARSET = "charset"
CONTINUE_ON_ERROR = "continueOnError"
CHUNK_SIZE = "chunkSize"

SOURCE_REQUIRED = "Source file or folder is required."
SOURCE_FILESYSTEM_UNKNOWN = "Cannot determine the file system of the source file."
DEST_REQUIRED = "Destination file or folder is required."
FILE_REGEX_INVALID = (
    "The regular expression pattern provided is not a valid regular expression."
)
CHARSET_REQUIRED = "Source charset is required."

CORRECTIVE_ACTIONS: dict[str, str] = {
    SOURCE_FILE_PATH: "Set source file or folder.",
    DEST_FILE_PATH: "Set destination file or folder.",
    FILE_REGEX: "Set correct regular expression pattern.",
    CHARSET: (
        "The charset entered is not valid. Run 'convert-to-utf8 charsets' "
        "to list supported names."
    ),
}


class ToUtf8Config(BaseModel):
    """Validated settings for a UTF-8 conversion stage.

    Fields accept both their Python names and the stage property names
    (``sourceFilePath``, ``destFilePath``, ``fileRegex``, ``charset``,
    ``continueOnError``, ``chunkSize``).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    source_path: str = Field(default="", alias=SOURCE_FILE_PATH)
    dest_path: str = Field(default="", alias=DEST_FILE_PATH)
    file_regex: str = Field(default=DEFAULT_FILE_REGEX, alias=FILE_REGEX)
    charset: str = Field(default="", alias=CHARSET)
    continue_on_error: bool = Field(default=False, alias=CONTINUE_ON_ERROR)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0, alias=CHUNK_SIZE)

    @field_validator("source_path", "dest_path", "charset", mode="before")
    @classmethod
    def _none_as_empty(cls, value: SettingScalar) -> SettingScalar:
        return "" if value is None else value

    @field_validator("source_path")
    @classmethod
    def _validate_source(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise ValueError(SOURCE_REQUIRED)
        check_filesystem = (info.context or {}).get("check_filesystem", True)
        if check_filesystem and path_scheme(value) not in LOCAL_SCHEMES:
            raise ValueError(SOURCE_FILESYSTEM_UNKNOWN)
        return value

    @field_validator("dest_path")
    @classmethod
    def _validate_dest(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(DEST_REQUIRED)
        return value

    @field_validator("file_regex", mode="before")
    @classmethod
    def _default_file_regex(cls, value: SettingScalar) -> SettingScalar:
        if value is None or value == "":
            return DEFAULT_FILE_REGEX
        return value

    @field_validator("file_regex")
    @classmethod
    def _validate_file_regex(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(FILE_REGEX_INVALID) from exc
        return value

    @field_validator("charset")
    @classmethod
    def _validate_charset(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(CHARSET_REQUIRED)
        try:
            return normalize_charset(value)
        except UnsupportedCharsetError as exc:
            raise ValueError(value) from exc

    @field_validator("continue_on_error", mode="before")
    @classmethod
    def _none_as_false(cls, value: SettingScalar) -> SettingScalar:
        return False if value is None else value
