"""Observation sinks."""
from .csv_sink import CsvSink, read_observations

__all__ = ["CsvSink", "read_observations"]
