"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SOURCE_KINDS = ("crypto", "equity")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SamplerConfig:
    interval_seconds: float = 10.0
    output_dir: str = "data"
    request_timeout: float = 30.0
    fatal_sink_errors: bool = False


@dataclass(frozen=True)
class SourceConfig:
    name: str = ""
    kind: str = ""
    instrument: str = ""
    endpoint: str = ""
    api_key: str = ""
    vs_currency: str = "usd"
    sink: str = ""

    def sink_path(self, output_dir: str | Path) -> Path:
        """Resolve the sink file, defaulting to ``<output_dir>/<name>_prices.csv``."""
        if self.sink:
            return Path(self.sink)
        return Path(output_dir) / f"{self.name}_prices.csv"


@dataclass(frozen=True)
class AppConfig:
    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    sources: tuple[SourceConfig, ...] = ()


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0", "")


def _get(raw: dict[str, Any], key: str, default: Any) -> Any:
    """Return ``raw[key]``, treating a missing key or YAML null as ``default``."""
    value = raw.get(key)
    return default if value is None else value


def _text(raw: dict[str, Any], key: str, default: str = "") -> str:
    return str(_get(raw, key, default)).strip()


def _flag(raw: dict[str, Any], key: str, default: bool = False) -> bool:
    value = _get(raw, key, default)
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")


def _build_sampler(raw: dict[str, Any]) -> SamplerConfig:
    return SamplerConfig(
        interval_seconds=float(_get(raw, "interval_seconds", 10.0)),
        output_dir=_text(raw, "output_dir", "data") or "data",
        request_timeout=float(_get(raw, "request_timeout", 30.0)),
        fatal_sink_errors=_flag(raw, "fatal_sink_errors"),
    )


def _build_sources(raw: list[dict[str, Any]]) -> tuple[SourceConfig, ...]:
    sources: list[SourceConfig] = []
    for s in raw:
        sources.append(
            SourceConfig(
                name=_text(s, "name"),
                kind=_text(s, "kind"),
                instrument=_text(s, "instrument"),
                endpoint=_text(s, "endpoint"),
                api_key=_text(s, "api_key"),
                vs_currency=_text(s, "vs_currency", "usd") or "usd",
                sink=_text(s, "sink"),
            )
        )
    return tuple(sources)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        sampler=_build_sampler(raw.get("sampler") or {}),
        sources=_build_sources(raw.get("sources") or []),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.sampler.interval_seconds <= 0:
        raise ValueError("interval_seconds must be positive")

    if not cfg.sources:
        raise ValueError("At least one source must be configured")

    names: set[str] = set()
    sinks: dict[Path, str] = {}
    for source in cfg.sources:
        if not source.name:
            raise ValueError("Every source needs a name")
        if source.name in names:
            raise ValueError(f"Duplicate source name '{source.name}'")
        names.add(source.name)

        if source.kind not in SOURCE_KINDS:
            raise ValueError(
                f"Source '{source.name}' has unknown kind '{source.kind}'"
            )
        if not source.instrument:
            raise ValueError(f"Source '{source.name}' has no instrument")
        if source.kind == "equity" and not source.api_key:
            raise ValueError(f"Source '{source.name}' requires an api_key")

        sink = source.sink_path(cfg.sampler.output_dir).resolve()
        if sink in sinks:
            raise ValueError(
                f"Source '{source.name}' shares sink {sink} with '{sinks[sink]}'"
            )
        sinks[sink] = source.name
