"""Append-only CSV sink — one file per tracked asset."""
from __future__ import annotations

import csv
import logging
import os
from pathlib import Path

from ..errors import SinkError
from ..models import CSV_HEADER, Observation

logger = logging.getLogger(__name__)


class CsvSink:
    """Append ``timestamp,price`` rows to a single file, never rewriting it."""

    def __init__(self, path: str | Path, source: str = "") -> None:
        self.path = Path(path)
        self.source = source or self.path.stem

    def append(self, observation: Observation) -> None:
        """Append one row, writing the header first if the file is empty.

        The file is opened and closed within this call.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                if os.fstat(f.fileno()).st_size == 0:
                    writer.writerow(CSV_HEADER)
                writer.writerow(observation.to_row())
        except OSError as e:
            raise SinkError(self.source, self.path, e) from e

        logger.info("[%s] %s,%s", self.source, *observation.to_row())


def read_observations(path: str | Path) -> list[Observation]:
    """Read every observation back from a sink file, skipping the header."""
    with open(path, encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))

    if rows and tuple(rows[0]) == CSV_HEADER:
        rows = rows[1:]
    return [Observation.from_row(row) for row in rows if row]
