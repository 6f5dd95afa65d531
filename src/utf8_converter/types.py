"""Shared type aliases for conversion modules."""

from __future__ import annotations

import re
from typing import IO, Literal

type ResolveMode = Literal["single", "multi"]

type NameFilter = re.Pattern[str]
type BinaryReader = IO[bytes]
type BinaryWriter = IO[bytes]

type SettingScalar = str | int | bool | None
type SettingMap = dict[str, SettingScalar]
