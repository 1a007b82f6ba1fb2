"""Ordered registry of asset sources, built once at startup from config."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator

from .config import AppConfig
from .interfaces.asset_source import AssetSource
from .sources import AlphaVantageSource, CoinGeckoSource
from .sources.base import Clock

logger = logging.getLogger(__name__)

SourceFactory = Callable[..., AssetSource]

# Source factories keyed by config ``kind``.
_SOURCE_FACTORIES: dict[str, SourceFactory] = {
    "crypto": lambda cfg, sink, timeout, clock: CoinGeckoSource(
        name=cfg.name,
        coin_id=cfg.instrument,
        sink_path=sink,
        vs_currency=cfg.vs_currency,
        endpoint=cfg.endpoint,
        request_timeout=timeout,
        clock=clock,
    ),
    "equity": lambda cfg, sink, timeout, clock: AlphaVantageSource(
        name=cfg.name,
        symbol=cfg.instrument,
        api_key=cfg.api_key,
        sink_path=sink,
        endpoint=cfg.endpoint,
        request_timeout=timeout,
        clock=clock,
    ),
}


class Registry:
    """Immutable, ordered collection of sources. Order is polling order."""

    def __init__(self, sources: Iterable[AssetSource]) -> None:
        self._sources: tuple[AssetSource, ...] = tuple(sources)

        names: set[str] = set()
        sinks: set[Path] = set()
        for source in self._sources:
            if source.name in names:
                raise ValueError(f"Duplicate source name '{source.name}'")
            sink = Path(source.sink_path).resolve()
            if sink in sinks:
                raise ValueError(f"Sink {sink} is shared by more than one source")
            names.add(source.name)
            sinks.add(sink)

    def __iter__(self) -> Iterator[AssetSource]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self._sources)

    def get(self, name: str) -> AssetSource | None:
        for source in self._sources:
            if source.name == name:
                return source
        return None


def build_registry(config: AppConfig, clock: Clock | None = None) -> Registry:
    """Instantiate one source per configured entry, preserving config order."""
    sources: list[AssetSource] = []
    for source_cfg in config.sources:
        factory = _SOURCE_FACTORIES.get(source_cfg.kind)
        if factory is None:
            raise ValueError(
                f"No source factory for kind '{source_cfg.kind}' ({source_cfg.name})"
            )
        sink = source_cfg.sink_path(config.sampler.output_dir)
        sources.append(
            factory(source_cfg, sink, config.sampler.request_timeout, clock)
        )

    registry = Registry(sources)
    logger.info("Registered %d source(s): %s", len(registry), ", ".join(registry.names))
    return registry
