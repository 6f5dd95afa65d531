"""Unit tests for CLI command behavior."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from utf8_converter.application.results import (
    BatchResult,
    ConversionOutcome,
    OutcomeStatus,
)
from utf8_converter.cli import cli as cli_module
from utf8_converter.errors import DestinationConflictError

runner = CliRunner()


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the available subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "convert" in result.output
    assert "validate" in result.output
    assert "charsets" in result.output


def test_convert_forwards_settings_to_api(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Ensure CLI flags are forwarded as stage-property settings."""
    called: dict[str, object] = {}

    def fake_convert(settings: dict[str, object]) -> BatchResult:
        called.update(settings)
        return BatchResult(
            mode="multi",
            dest_path=str(settings["destFilePath"]),
            outcomes=(
                ConversionOutcome(
                    input_path="in/a.dat",
                    output_path="out/a.dat.utf8",
                    status=OutcomeStatus.CONVERTED,
                ),
            ),
        )

    import utf8_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_settings_to_utf8", fake_convert)

    result = runner.invoke(
        cli_module.app,
        [
            "convert",
            "in",
            "out",
            "--charset",
            "ISO-8859-1",
            "--file-regex",
            r".*\.dat",
            "--continue-on-error",
            "--chunk-size",
            "128",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Converted: in/a.dat -> out/a.dat.utf8" in result.output
    assert "1 converted, 0 failed, 0 skipped." in result.output
    assert called == {
        "sourceFilePath": "in",
        "destFilePath": "out",
        "charset": "ISO-8859-1",
        "fileRegex": r".*\.dat",
        "continueOnError": True,
        "chunkSize": 128,
    }


def test_convert_omits_unset_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, object] = {}

    def fake_convert(settings: dict[str, object]) -> BatchResult:
        called.update(settings)
        return BatchResult(mode="single", dest_path="out")

    import utf8_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_settings_to_utf8", fake_convert)

    result = runner.invoke(cli_module.app, ["convert", "in", "out", "--charset", "cp1252"])

    assert result.exit_code == 0
    assert called == {"sourceFilePath": "in", "destFilePath": "out", "charset": "cp1252"}


def test_convert_reports_configuration_failures() -> None:
    result = runner.invoke(
        cli_module.app, ["convert", "in", "out", "--charset", "ISO-885-1"]
    )

    assert result.exit_code == 2
    assert "charset: ISO-885-1" in result.output
    assert "ConfigurationError" in result.output


def test_convert_handles_conversion_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Return the error's exit code and print its name."""

    def fake_convert(settings: dict[str, object]) -> BatchResult:
        raise DestinationConflictError("Destination out needs to be a directory")

    import utf8_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_settings_to_utf8", fake_convert)
    result = runner.invoke(cli_module.app, ["convert", "in", "out", "--charset", "latin-1"])

    assert result.exit_code == 4
    assert "DestinationConflictError" in result.output
    assert "Traceback" not in result.output


def test_convert_debug_prints_traceback(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_convert(settings: dict[str, object]) -> BatchResult:
        raise RuntimeError("boom")

    import utf8_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_settings_to_utf8", fake_convert)
    result = runner.invoke(
        cli_module.app, ["--debug", "convert", "in", "out", "--charset", "latin-1"]
    )

    assert result.exit_code == 1
    assert "RuntimeError: boom" in result.output
    assert "Traceback" in result.output


def test_convert_reads_yaml_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Config file settings are used and explicit flags override them."""
    config = tmp_path / "stage.yaml"
    config.write_text(
        "sourceFilePath: data/\n"
        "destFilePath: converted/\n"
        "charset: ISO-8859-1\n"
        "continueOnError: true\n",
        encoding="utf-8",
    )
    called: dict[str, object] = {}

    def fake_convert(settings: dict[str, object]) -> BatchResult:
        called.update(settings)
        return BatchResult(mode="multi", dest_path="converted/")

    import utf8_converter.api as api_module

    monkeypatch.setattr(api_module, "convert_settings_to_utf8", fake_convert)
    result = runner.invoke(
        cli_module.app,
        ["convert", "--config", str(config), "--charset", "cp1252"],
    )

    assert result.exit_code == 0, result.output
    assert called == {
        "sourceFilePath": "data/",
        "destFilePath": "converted/",
        "charset": "cp1252",
        "continueOnError": True,
    }


def test_convert_rejects_non_mapping_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    Path("stage.json").write_text(json.dumps(["not", "a", "mapping"]), encoding="utf-8")

    result = runner.invoke(cli_module.app, ["convert", "--config", "stage.json"])

    # error panels may wrap long lines; compare on collapsed words
    output = " ".join(result.output.replace("\u2502", " ").split())
    assert result.exit_code == 2
    assert "must contain a mapping" in output


def test_validate_reports_attributed_failures() -> None:
    result = runner.invoke(
        cli_module.app,
        ["validate", "source_path", "dest_path", "--charset", "latin-1", "--file-regex", r"*\.dat"],
    )

    assert result.exit_code == 2
    assert "fileRegex: The regular expression pattern provided" in result.output
    assert "Set correct regular expression pattern." in result.output


def test_validate_empty_source() -> None:
    result = runner.invoke(cli_module.app, ["validate", "--charset", "latin-1"])

    assert result.exit_code == 2
    assert "sourceFilePath: Source file or folder is required." in result.output


def test_validate_accepts_valid_settings() -> None:
    result = runner.invoke(
        cli_module.app, ["validate", "in", "out", "--charset", "windows-1252"]
    )

    assert result.exit_code == 0
    assert "Settings are valid." in result.output


def test_validate_reads_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UTF8_CONVERTER_SOURCE", "in")
    monkeypatch.setenv("UTF8_CONVERTER_DEST", "out")
    monkeypatch.setenv("UTF8_CONVERTER_CHARSET", "not-a-charset")

    result = runner.invoke(cli_module.app, ["validate"])

    assert result.exit_code == 2
    assert "charset: not-a-charset" in result.output


def test_charsets_lists_filtered_names() -> None:
    result = runner.invoke(cli_module.app, ["charsets", "--filter", "8859"])

    assert result.exit_code == 0
    names = result.output.split()
    assert "iso8859-1" in names
    assert all("8859" in name for name in names)


def test_unknown_log_level_is_rejected() -> None:
    result = runner.invoke(cli_module.app, ["--log-level", "LOUD", "charsets"])
    assert result.exit_code != 0
