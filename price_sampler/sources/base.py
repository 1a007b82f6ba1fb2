"""Shared fetch-then-persist flow for HTTP quote sources."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from ..models import Observation
from ..sinks import CsvSink
from .http import get_json

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current local time, timezone-aware so isoformat() yields RFC3339."""
    return datetime.now().astimezone()


class QuoteSource(ABC):
    """One instrument bound to one JSON endpoint and one CSV sink.

    Subclasses supply the query parameters and the price extraction; this
    class owns the in-memory observation and replaces it only after a
    successful extraction.
    """

    def __init__(
        self,
        name: str,
        endpoint: str,
        sink_path: str | Path,
        request_timeout: float = 30.0,
        clock: Clock | None = None,
    ) -> None:
        self._name = name
        self.endpoint = endpoint
        self.request_timeout = request_timeout
        self._clock = clock or local_now
        self._sink = CsvSink(sink_path, source=name)
        self._observation = Observation()

    @property
    def name(self) -> str:
        return self._name

    @property
    def sink_path(self) -> Path:
        return self._sink.path

    @property
    def observation(self) -> Observation:
        return self._observation

    @property
    def value(self) -> float:
        return self._observation.value

    @property
    def timestamp(self) -> str:
        return self._observation.timestamp

    @abstractmethod
    def _request_params(self) -> dict[str, str]:
        """Query parameters identifying the instrument."""

    @abstractmethod
    def _extract_price(self, data: Any) -> float:
        """Pull the price out of the decoded body, raising ParseError if absent."""

    async def fetch(self) -> Observation:
        """Fetch the current price and replace the held observation.

        On any failure the previous observation is left untouched.
        """
        data = await get_json(
            self._name, self.endpoint, self._request_params(), self.request_timeout
        )
        price = self._extract_price(data)
        self._observation = Observation(
            timestamp=self._clock().isoformat(), value=price
        )
        logger.debug("%s fetched %s", self._name, price)
        return self._observation

    def persist(self) -> Observation:
        """Append the held observation to this source's sink file."""
        self._sink.append(self._observation)
        return self._observation

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, sink={str(self.sink_path)!r})"
