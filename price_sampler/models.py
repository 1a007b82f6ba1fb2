"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

CSV_HEADER: tuple[str, str] = ("timestamp", "price")


@dataclass(frozen=True)
class Observation:
    """Single price sample: RFC3339 timestamp plus the fetched value."""

    timestamp: str = ""
    value: float = 0.0

    def to_row(self) -> list[str]:
        """Return the CSV row for this observation."""
        return [self.timestamp, repr(float(self.value))]

    @classmethod
    def from_row(cls, row: Sequence[str]) -> Observation:
        """Parse a ``timestamp,price`` CSV row back into an observation."""
        if len(row) != 2:
            raise ValueError(f"Expected 2 columns, got {len(row)}: {row!r}")
        return cls(timestamp=row[0], value=float(row[1]))
