"""Application-layer result objects."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from utf8_converter.types import ResolveMode


@dataclass(frozen=True)
class ResolvedFile:
    """Concrete input path produced by source resolution."""

    path: str
    from_expansion: bool = False
    is_directory: bool = False

    @property
    def name(self) -> str:
        """Final path component used for destination naming."""
        return os.path.basename(self.path.rstrip("/" + os.sep))


@dataclass(frozen=True)
class Resolution:
    """Ordered input files plus the mode they were resolved in."""

    mode: ResolveMode
    files: tuple[ResolvedFile, ...] = ()

    @property
    def convertible(self) -> tuple[ResolvedFile, ...]:
        """Entries that are regular files."""
        return tuple(item for item in self.files if not item.is_directory)


class OutcomeStatus(str, Enum):
    """Per-file conversion status."""

    CONVERTED = "converted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionOutcome:
    """Structured per-file conversion outcome."""

    input_path: str
    output_path: str | None
    status: OutcomeStatus
    reason: str | None = None
    bytes_read: int = 0
    bytes_written: int = 0


@dataclass(frozen=True)
class BatchResult:
    """Aggregated outcome of a conversion run."""

    mode: ResolveMode
    dest_path: str
    outcomes: tuple[ConversionOutcome, ...] = ()

    @property
    def converted(self) -> tuple[ConversionOutcome, ...]:
        return self._with_status(OutcomeStatus.CONVERTED)

    @property
    def skipped(self) -> tuple[ConversionOutcome, ...]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> tuple[ConversionOutcome, ...]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def all_converted(self) -> bool:
        """True when no file was recorded as failed."""
        return not self.failed

    def _with_status(self, status: OutcomeStatus) -> tuple[ConversionOutcome, ...]:
        return tuple(item for item in self.outcomes if item.status is status)
