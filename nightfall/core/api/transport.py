"""
HTTP transport.

A transport performs exactly one request and returns the raw status and body.
It knows nothing about retries, status classification or JSON; that is the
request handler's job.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

import aiohttp

from .config import APIConfig
from ..exceptions import NightfallTransportError
from ..logging import get_logger


@dataclass(frozen=True)
class TransportResponse:
    """Raw result of a single HTTP exchange."""
    status: int
    body: bytes = b''
    headers: Dict[str, str] = field(default_factory=dict)


class Transport(Protocol):
    """Protocol for objects able to issue one HTTP request."""

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None
    ) -> TransportResponse:
        """
        Perform one request.

        Returns:
            Status code, body and headers of the response

        Raises:
            NightfallTransportError: If no response was obtained
        """
        ...

    async def close(self) -> None:
        """Release any held resources."""
        ...


class AiohttpTransport:
    """
    Transport backed by a shared aiohttp ClientSession.

    Reuses one session for all requests (connection pooling matters for
    chunked uploads). The session is created lazily and only closed here if
    this transport created it.
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize transport.

        Args:
            config: API configuration (timeouts, SSL, pool limits)
            session: Optional externally owned session
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger('nightfall.api')

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None
    ) -> TransportResponse:
        session = await self._get_session()
        try:
            async with session.request(method, url, headers=headers, data=body) as response:
                payload = await response.read()
                return TransportResponse(
                    status=response.status,
                    body=payload,
                    headers=dict(response.headers)
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.debug(f"{method} {url} failed: {e!r}")
            raise NightfallTransportError(
                f"{method} {url} failed: {e or type(e).__name__}",
                method=method,
                url=url
            ) from e
