"""Unit tests for settings validation and failure attribution."""

from __future__ import annotations

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from utf8_converter.errors import ConfigurationError
from utf8_converter.schemas import (
    CHARSET,
    CHUNK_SIZE,
    DEST_FILE_PATH,
    FILE_REGEX,
    SOURCE_FILE_PATH,
    ToUtf8Config,
)
from utf8_converter.validate import (
    parse_settings,
    request_from_config,
    validate_config,
    validate_settings,
)


def _settings(**overrides: object) -> dict[str, object]:
    settings: dict[str, object] = {
        SOURCE_FILE_PATH: "source_path",
        DEST_FILE_PATH: "dest_path",
        FILE_REGEX: r".*\.dat",
        CHARSET: "ISO-8859-1",
    }
    settings.update(overrides)
    return settings


def test_valid_settings_have_no_failures() -> None:
    assert validate_settings(_settings()) == []


def test_empty_source_path_is_reported_alone() -> None:
    """An empty source stops validation with a single source failure."""
    failures = validate_config("", "", r".*\.dat", "ISO-8859-1")

    assert len(failures) == 1
    assert failures[0].field_id == SOURCE_FILE_PATH
    assert failures[0].message == "Source file or folder is required."
    assert failures[0].corrective_action == "Set source file or folder."


def test_empty_destination_path_is_attributed() -> None:
    failures = validate_config("_12_test", "", "ISO-8859-1", r".*\.dat")

    assert len(failures) == 1
    assert failures[0].field_id == DEST_FILE_PATH
    assert failures[0].message == "Destination file or folder is required."


def test_invalid_regex_is_attributed_to_filter_setting() -> None:
    failures = validate_settings(_settings(fileRegex=r"*\.dat"))

    assert len(failures) == 1
    assert failures[0].field_id == FILE_REGEX
    assert failures[0].message == (
        "The regular expression pattern provided is not a valid regular expression."
    )


def test_unknown_charset_is_attributed_with_name_as_message() -> None:
    failures = validate_settings(_settings(charset="ISO-885-1"))

    assert len(failures) == 1
    assert failures[0].field_id == CHARSET
    assert failures[0].message == "ISO-885-1"


def test_failures_are_ordered_by_setting() -> None:
    """Report every invalid setting in declaration order."""
    failures = validate_settings(
        _settings(destFilePath="", fileRegex="(", charset="nope")
    )
    assert [failure.field_id for failure in failures] == [
        DEST_FILE_PATH,
        FILE_REGEX,
        CHARSET,
    ]


def test_unknown_source_scheme_is_rejected() -> None:
    failures = validate_settings(_settings(sourceFilePath="hdfs://namenode/data/*.dat"))

    assert [failure.field_id for failure in failures] == [SOURCE_FILE_PATH]
    assert "file system" in failures[0].message


def test_unknown_source_scheme_allowed_without_filesystem_check() -> None:
    settings = _settings(sourceFilePath="mem://bucket/a.dat")
    assert validate_settings(settings, check_filesystem=False) == []


def test_file_scheme_source_is_accepted() -> None:
    assert validate_settings(_settings(sourceFilePath="file:///tmp/in.dat")) == []


def test_non_positive_chunk_size_is_attributed() -> None:
    failures = validate_settings(_settings(chunkSize=0))
    assert [failure.field_id for failure in failures] == [CHUNK_SIZE]


def test_unknown_setting_is_reported() -> None:
    failures = validate_settings(_settings(compression="gzip"))
    assert [failure.field_id for failure in failures] == ["compression"]


def test_parse_settings_raises_configuration_error_with_failures() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        parse_settings(_settings(charset="ISO-885-1"))

    assert excinfo.value.exit_code == 2
    assert excinfo.value.failures[0].field_id == CHARSET
    assert "charset: ISO-885-1" in str(excinfo.value)


def test_parse_settings_normalizes_defaults() -> None:
    """Empty regex and missing flags fall back to their defaults."""
    config = parse_settings(_settings(fileRegex="", continueOnError=None))

    assert config.file_regex == ".*"
    assert config.continue_on_error is False
    assert config.charset == "iso8859-1"
    assert config.chunk_size == 4096


def test_config_accepts_python_field_names() -> None:
    config = ToUtf8Config(
        source_path="in",
        dest_path="out",
        charset="cp1252",
        continue_on_error="true",
    )
    assert config.continue_on_error is True
    assert config.charset == "cp1252"


def test_request_from_config_compiles_filter() -> None:
    request = request_from_config(parse_settings(_settings(continueOnError=True)))

    assert request.source_path == "source_path"
    assert request.dest_path == "dest_path"
    assert request.source_charset == "iso8859-1"
    assert request.continue_on_error is True
    assert request.file_filter.fullmatch("x.dat")
    assert not request.file_filter.fullmatch("x.txt")


@given(st.text(alphabet="abc.*+?()[]\\", max_size=8))
def test_regex_validation_agrees_with_re_module(pattern: str) -> None:
    """Accept exactly the patterns the regex engine compiles."""
    try:
        re.compile(pattern or ".*")
        compiles = True
    except re.error:
        compiles = False

    failures = validate_settings(_settings(fileRegex=pattern))
    assert (failures == []) is compiles
