"""Asset source protocol — one tracked instrument, its endpoint and its sink."""
from pathlib import Path
from typing import Protocol

from ..models import Observation


class AssetSource(Protocol):
    """Abstract interface for fetching and persisting one instrument's price."""

    @property
    def name(self) -> str: ...

    @property
    def sink_path(self) -> Path: ...

    @property
    def observation(self) -> Observation: ...

    async def fetch(self) -> Observation: ...

    def persist(self) -> Observation: ...
