"""Exception hierarchy for fetch and sink failures."""
from __future__ import annotations

from pathlib import Path


class SamplerError(Exception):
    """Base class for all sampler errors. Carries the source name."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"[{source}] {message}")
        self.source = source


class FetchError(SamplerError):
    """Any failure while fetching a quote. Isolated per source by the loop."""


class TransportError(FetchError):
    """Network unreachable, DNS failure, connection reset, timeout."""


class ProtocolError(FetchError):
    """Non-2xx HTTP response."""

    def __init__(self, source: str, status: int, reason: str = "") -> None:
        super().__init__(source, f"HTTP {status} {reason}".rstrip())
        self.status = status


class ParseError(FetchError):
    """Body is not JSON, or the expected field is absent, null or mistyped."""


class ConversionError(ParseError):
    """A string-encoded number could not be converted to float."""


class SinkError(SamplerError):
    """The sink file could not be opened, inspected or written."""

    def __init__(self, source: str, path: Path, cause: OSError) -> None:
        super().__init__(source, f"Cannot write {path}: {cause}")
        self.path = path
