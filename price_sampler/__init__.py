"""Periodic price sampler — polls quote APIs and appends observations to CSV."""

__version__ = "0.1.0"
