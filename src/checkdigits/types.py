"""Type definitions for checkdigits."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

import polars as pl

# Using Any for pandas DataFrame to avoid import issues
DataInput = Union[str, pl.DataFrame, pl.LazyFrame, dict, Any]


class Severity(str, Enum):
    """Severity levels for check digit failures."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def _order(cls) -> list["Severity"]:
        return [cls.LOW, cls.MEDIUM, cls.HIGH, cls.CRITICAL]

    def __ge__(self, other: "Severity") -> bool:
        return self._order().index(self) >= self._order().index(other)

    def __gt__(self, other: "Severity") -> bool:
        return self._order().index(self) > self._order().index(other)

    def __le__(self, other: "Severity") -> bool:
        return self._order().index(self) <= self._order().index(other)

    def __lt__(self, other: "Severity") -> bool:
        return self._order().index(self) < self._order().index(other)
