"""Scheduler loop — polls every registered source once per tick, then pauses."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ..config import AppConfig
from ..errors import FetchError, SamplerError, SinkError
from ..registry import Registry, build_registry
from ..sources.base import Clock

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class TickResult:
    """Outcome of one pass over the registry."""

    persisted: list[str] = field(default_factory=list)
    failures: list[tuple[str, SamplerError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class Sampler:
    """Drives fetch-then-persist over the registry, isolating per-source failures."""

    def __init__(
        self,
        registry: Registry,
        interval_seconds: float = 10.0,
        fatal_sink_errors: bool = False,
        sleep: Sleep | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self._registry = registry
        self._interval = interval_seconds
        self._fatal_sink_errors = fatal_sink_errors
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: AppConfig, clock: Clock | None = None) -> Sampler:
        return cls(
            build_registry(config, clock=clock),
            interval_seconds=config.sampler.interval_seconds,
            fatal_sink_errors=config.sampler.fatal_sink_errors,
        )

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def interval(self) -> float:
        return self._interval

    # ------------------------------------------------------------------
    # Core workflows
    # ------------------------------------------------------------------

    async def run_tick(self) -> TickResult:
        """Fetch and persist each source in registry order.

        Fetch errors are logged and skipped. Sink errors are logged and
        skipped too, unless ``fatal_sink_errors`` is set, in which case they
        propagate and end the run.
        """
        result = TickResult()

        for source in self._registry:
            try:
                await source.fetch()
            except FetchError as e:
                logger.error("Error fetching price: %s", e)
                result.failures.append((source.name, e))
                continue

            try:
                source.persist()
            except SinkError as e:
                if self._fatal_sink_errors:
                    logger.critical("Sink failure, stopping: %s", e)
                    raise
                logger.error("Error saving price: %s", e)
                result.failures.append((source.name, e))
                continue

            result.persisted.append(source.name)
            logger.info("Successfully updated price for %s", source.name)

        return result

    async def run(
        self,
        stop: asyncio.Event | None = None,
        max_ticks: int | None = None,
    ) -> int:
        """Run ticks until ``stop`` is set or ``max_ticks`` is reached.

        With neither given the loop runs forever. Returns the number of
        completed ticks.
        """
        logger.info(
            "Starting sampler: %d source(s), every %.1f seconds",
            len(self._registry),
            self._interval,
        )
        stop = stop or asyncio.Event()
        ticks = 0

        while not stop.is_set():
            if max_ticks is not None and ticks >= max_ticks:
                break
            if ticks:
                await self._pause(stop)
                if stop.is_set():
                    break
            await self.run_tick()
            ticks += 1

        logger.info("Sampler stopped after %d tick(s)", ticks)
        return ticks

    async def _pause(self, stop: asyncio.Event) -> None:
        """Wait one interval, returning early if ``stop`` is set."""
        if self._sleep is not None:
            await self._sleep(self._interval)
            return
        try:
            await asyncio.wait_for(stop.wait(), timeout=self._interval)
        except asyncio.TimeoutError:
            pass
