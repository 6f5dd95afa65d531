"""Error taxonomy for UTF-8 conversion runs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationFailure:
    """Single configuration failure attributed to a stage setting.

    Parameters
    ----------
    field_id : str
        Stable identifier of the offending setting (e.g. ``"charset"``).
    message : str
        Human readable failure message.
    corrective_action : str | None, default=None
        Optional hint describing how to fix the setting.
    """

    field_id: str
    message: str
    corrective_action: str | None = None


class ConversionError(Exception):
    """Base error for every conversion failure."""

    exit_code = 1


class ConfigurationError(ConversionError):
    """Invalid or incomplete conversion settings."""

    exit_code = 2

    def __init__(
        self,
        message: str,
        failures: Sequence[ValidationFailure] = (),
    ) -> None:
        super().__init__(message)
        self.failures: tuple[ValidationFailure, ...] = tuple(failures)


class FilterPatternError(ConfigurationError):
    """File-name filter does not compile as a regular expression."""


class SourceUnreadableError(ConversionError):
    """Source path cannot be mapped to a reachable filesystem."""

    exit_code = 3


class DestinationConflictError(ConversionError):
    """Multi-file batch targets an existing non-directory destination."""

    exit_code = 4


class FileConversionError(ConversionError):
    """Reading, decoding or writing a single file failed."""

    exit_code = 5

    def __init__(self, message: str, source_path: str, dest_path: str) -> None:
        super().__init__(message)
        self.source_path = source_path
        self.dest_path = dest_path
