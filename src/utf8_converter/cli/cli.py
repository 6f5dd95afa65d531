#!/usr/bin/env python3
"""
utf8_converter.cli.cli

Typer-based CLI for converting files from a source charset to UTF-8.

Settings can come from a YAML/JSON stage configuration file, from
environment variables, or from command-line flags (highest precedence).

Examples
--------
Convert one file:

    convert-to-utf8 convert data/report.dat out/report.txt --charset ISO-8859-1

Convert every ``.dat`` file in a folder, tolerating failures:

    convert-to-utf8 convert data/ out/ --charset cp1252 \\
        --file-regex '.*\\.dat' --continue-on-error

Check stage settings without converting:

    convert-to-utf8 validate --config stage.yaml
"""

from __future__ import annotations

import json
import logging
import traceback
from collections.abc import Sequence
from pathlib import Path

import typer
import yaml

from utf8_converter.application.results import BatchResult
from utf8_converter.errors import ConfigurationError, ConversionError, ValidationFailure
from utf8_converter.schemas import (
    CHARSET,
    CHUNK_SIZE,
    CONTINUE_ON_ERROR,
    DEST_FILE_PATH,
    FILE_REGEX,
    SOURCE_FILE_PATH,
)
from utf8_converter.types import SettingMap

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="convert-to-utf8",
    help="Convert files from a source charset to UTF-8.",
    no_args_is_help=True,
)

ENV_PREFIX = "UTF8_CONVERTER_"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
SOURCE_HELP = "Source file, directory, or glob pattern such as 'data/*.dat'."
DEST_HELP = "Destination file (single source) or directory."
CHARSET_HELP = "Source charset, e.g. ISO-8859-1."
FILE_REGEX_HELP = "Regular expression for file names in directory/glob mode."
CONTINUE_HELP = "Record failing files and continue instead of aborting."
CHUNK_SIZE_HELP = "Bytes read per transcoding step."
CONFIG_HELP = "YAML or JSON file with stage settings (sourceFilePath, charset, ...)."


# -----------------------------
# Settings / output utilities
# -----------------------------
def _load_config_file(path: Path | None) -> SettingMap:
    """Load stage settings from a YAML or JSON file.

    Parameters
    ----------
    path : Path | None
        Configuration file; ``None`` yields no settings.

    Returns
    -------
    dict[str, object]
        Settings keyed by stage property name.

    Raises
    ------
    typer.BadParameter
        If the file cannot be parsed or is not a mapping.
    """
    if path is None:
        return {}
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            loaded = json.loads(text)
        else:
            loaded = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Cannot parse config file {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter(f"Config file {path} must contain a mapping.")
    return {str(key): value for key, value in loaded.items()}


def _collect_settings(
    config: Path | None,
    *,
    source: str | None,
    dest: str | None,
    charset: str | None,
    file_regex: str | None,
    continue_on_error: bool | None,
    chunk_size: int | None,
) -> SettingMap:
    """Overlay explicitly given CLI values on top of config-file settings."""
    settings = _load_config_file(config)
    overrides = {
        SOURCE_FILE_PATH: source,
        DEST_FILE_PATH: dest,
        CHARSET: charset,
        FILE_REGEX: file_regex,
        CONTINUE_ON_ERROR: continue_on_error,
        CHUNK_SIZE: chunk_size,
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})
    return settings


def _print_failures(failures: Sequence[ValidationFailure]) -> None:
    for failure in failures:
        typer.secho(
            f"✗ {failure.field_id}: {failure.message}",
            fg=typer.colors.RED,
            err=True,
        )
        if failure.corrective_action:
            typer.echo(f"  {failure.corrective_action}", err=True)


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _print_result(result: BatchResult) -> None:
    for outcome in result.converted:
        typer.secho(
            f"✓ Converted: {outcome.input_path} -> {outcome.output_path}",
            fg=typer.colors.GREEN,
        )
    for outcome in result.failed:
        typer.secho(
            f"✗ Failed: {outcome.input_path} ({outcome.reason})",
            fg=typer.colors.YELLOW,
            err=True,
        )
    typer.echo(
        f"{len(result.converted)} converted, {len(result.failed)} failed, "
        f"{len(result.skipped)} skipped."
    )


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar=f"{ENV_PREFIX}LOG_LEVEL",
        help=f"Logging level ({', '.join(LOG_LEVELS)}).",
    ),
) -> None:
    """Initialize shared CLI state and logging.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    log_level : str, default="WARNING"
        Root logging level.
    """
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Unknown log level '{log_level}'.", param_hint="--log-level"
        )
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    source: str | None = typer.Argument(
        None, envvar=f"{ENV_PREFIX}SOURCE", help=SOURCE_HELP
    ),
    dest: str | None = typer.Argument(None, envvar=f"{ENV_PREFIX}DEST", help=DEST_HELP),
    charset: str | None = typer.Option(
        None, "--charset", envvar=f"{ENV_PREFIX}CHARSET", help=CHARSET_HELP
    ),
    file_regex: str | None = typer.Option(
        None, "--file-regex", envvar=f"{ENV_PREFIX}FILE_REGEX", help=FILE_REGEX_HELP
    ),
    continue_on_error: bool = typer.Option(
        False,
        "--continue-on-error",
        envvar=f"{ENV_PREFIX}CONTINUE_ON_ERROR",
        help=CONTINUE_HELP,
    ),
    chunk_size: int | None = typer.Option(
        None, "--chunk-size", min=1, help=CHUNK_SIZE_HELP
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        readable=True,
        help=CONFIG_HELP,
    ),
) -> None:
    """Convert a file, directory, or glob of files to UTF-8.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    source : str | None
        Source file, directory or glob pattern.
    dest : str | None
        Destination file or directory.
    charset : str | None
        Source charset name.

    Notes
    -----
    - In directory/glob mode outputs are written as ``<dest>/<name>.utf8``.
    - Tolerated per-file failures are reported but exit with code 0.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    settings = _collect_settings(
        config,
        source=source,
        dest=dest,
        charset=charset,
        file_regex=file_regex,
        continue_on_error=continue_on_error or None,
        chunk_size=chunk_size,
    )

    try:
        from utf8_converter.api import convert_settings_to_utf8

        result = convert_settings_to_utf8(settings)
    except ConfigurationError as exc:
        _print_failures(exc.failures)
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        logger.debug("unexpected error during conversion", exc_info=exc)
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    _print_result(result)


@app.command("validate")
def validate_cmd(
    source: str | None = typer.Argument(
        None, envvar=f"{ENV_PREFIX}SOURCE", help=SOURCE_HELP
    ),
    dest: str | None = typer.Argument(None, envvar=f"{ENV_PREFIX}DEST", help=DEST_HELP),
    charset: str | None = typer.Option(
        None, "--charset", envvar=f"{ENV_PREFIX}CHARSET", help=CHARSET_HELP
    ),
    file_regex: str | None = typer.Option(
        None, "--file-regex", envvar=f"{ENV_PREFIX}FILE_REGEX", help=FILE_REGEX_HELP
    ),
    continue_on_error: bool = typer.Option(
        False,
        "--continue-on-error",
        envvar=f"{ENV_PREFIX}CONTINUE_ON_ERROR",
        help=CONTINUE_HELP,
    ),
    chunk_size: int | None = typer.Option(
        None, "--chunk-size", help=CHUNK_SIZE_HELP
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        readable=True,
        help=CONFIG_HELP,
    ),
) -> None:
    """Check conversion settings and report failures per setting."""
    from utf8_converter.validate import validate_settings

    settings = _collect_settings(
        config,
        source=source,
        dest=dest,
        charset=charset,
        file_regex=file_regex,
        continue_on_error=continue_on_error or None,
        chunk_size=chunk_size,
    )
    failures = validate_settings(settings)
    if failures:
        _print_failures(failures)
        raise typer.Exit(code=ConfigurationError.exit_code)
    typer.secho("✓ Settings are valid.", fg=typer.colors.GREEN)


@app.command("charsets")
def charsets_cmd(
    name_filter: str | None = typer.Option(
        None, "--filter", help="Only list charsets containing this text."
    ),
) -> None:
    """List charset names the runtime can decode."""
    from utf8_converter.charsets import available_charsets

    needle = (name_filter or "").lower()
    for name in available_charsets():
        if needle in name.lower():
            typer.echo(name)


if __name__ == "__main__":
    app()
