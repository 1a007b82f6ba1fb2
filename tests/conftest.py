"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from price_sampler.config import AppConfig, SamplerConfig, SourceConfig


# ---------------------------------------------------------------------------
# Clock fixture
# ---------------------------------------------------------------------------


class FakeClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 14, 9, 30, 0, tzinfo=timezone(timedelta(hours=1))))


# ---------------------------------------------------------------------------
# aiohttp session mock
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_session() -> Callable[..., AsyncMock]:
    """Build a mocked aiohttp.ClientSession returning one canned response."""

    def _make(
        data: Any = None,
        status: int = 200,
        json_error: Exception | None = None,
        get_error: Exception | None = None,
    ) -> AsyncMock:
        mock_response = AsyncMock()
        mock_response.status = status
        mock_response.reason = "OK" if status == 200 else "Error"
        if json_error is not None:
            mock_response.json = AsyncMock(side_effect=json_error)
        else:
            mock_response.json = AsyncMock(return_value=data)
        mock_response.__aenter__ = AsyncMock(return_value=mock_response)
        mock_response.__aexit__ = AsyncMock(return_value=None)

        mock_session = AsyncMock()
        if get_error is not None:
            mock_session.get = MagicMock(side_effect=get_error)
        else:
            mock_session.get = MagicMock(return_value=mock_response)
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)
        return mock_session

    return _make


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        sampler=SamplerConfig(
            interval_seconds=10.0,
            output_dir=str(tmp_path / "data"),
            request_timeout=5.0,
        ),
        sources=(
            SourceConfig(name="bitcoin", kind="crypto", instrument="bitcoin"),
            SourceConfig(name="ethereum", kind="crypto", instrument="ethereum"),
            SourceConfig(
                name="sp500", kind="equity", instrument="SPY", api_key="demo-key"
            ),
        ),
    )


SAMPLE_YAML = textwrap.dedent("""\
    sampler:
      interval_seconds: 5
      output_dir: out
      request_timeout: 12
      fatal_sink_errors: true
    sources:
      - name: bitcoin
        kind: crypto
        instrument: bitcoin
      - name: spy
        kind: equity
        instrument: SPY
        api_key: "abc123"
        sink: out/spy.csv
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
