"""Shared HTTP GET helper for quote sources."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..errors import ParseError, ProtocolError, TransportError

logger = logging.getLogger(__name__)


async def get_json(
    source: str,
    url: str,
    params: dict[str, str],
    timeout: float,
) -> Any:
    """Issue a single GET and return the decoded JSON body.

    Raises:
        TransportError: the request never produced a response.
        ProtocolError: the response status was not 2xx.
        ParseError: the body was not valid JSON.
    """
    logger.debug("GET %s for %s", url, source)
    ssl_context = ssl.create_default_context(cafile=certifi.where())
    connector = aiohttp.TCPConnector(ssl=ssl_context)

    try:
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                if not 200 <= response.status < 300:
                    raise ProtocolError(source, response.status, response.reason or "")
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ParseError(source, f"Invalid JSON body: {e}") from e
    except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as e:
        raise TransportError(source, f"Request to {url} failed: {e!r}") from e
