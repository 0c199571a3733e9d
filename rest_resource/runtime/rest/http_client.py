"""HTTP client helper."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from ssl import SSLContext
from typing import Any

import aiohttp
from multidict import CIMultiDict

from ...core.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPResponse:
    """Body and metadata of a completed HTTP call."""

    status: int
    text: str
    content_type: str = ""
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)

    @property
    def is_json(self) -> bool:
        return "json" in self.content_type.lower()

    def decode(self) -> Any:
        """Parsed JSON for JSON content types, raw text otherwise.

        Raises:
            TransportError: If a JSON content type carries an unparseable body
        """
        if not self.is_json or not self.text.strip():
            return self.text
        try:
            return json.loads(self.text)
        except ValueError as e:
            raise TransportError(
                f"Response declared {self.content_type} but body is not valid JSON",
                status_code=self.status,
                body=self.text,
            ) from e


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, timeout: float = 30.0, ssl: bool | SSLContext = True) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._ssl = ssl
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: CIMultiDict[str] | dict[str, str] | None = None,
        json_body: Any = None,
        data: Any = None,
        skip_auto_headers: Iterable[str] = (),
    ) -> HTTPResponse:
        """Perform one HTTP call and return the buffered response.

        ``skip_auto_headers`` names headers aiohttp must not add on its own
        (e.g. its default User-Agent).

        Raises:
            TransportError: On network, TLS or timeout failure, or a non-2xx status
        """
        try:
            async with self.session.request(
                method,
                url,
                headers=headers,
                json=json_body,
                data=data,
                skip_auto_headers=frozenset(skip_auto_headers),
                ssl=self._ssl,
            ) as response:
                text = await response.text()
                result = HTTPResponse(
                    status=response.status,
                    text=text,
                    content_type=response.content_type or "",
                    headers=CIMultiDict(response.headers),
                )
        except asyncio.TimeoutError as e:
            logger.warning("HTTP request timed out", extra={"method": method, "url": url})
            raise TransportError(
                f"{method} {url} timed out after {self.timeout.total}s",
                method=method,
                url=url,
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(
                "HTTP request failed",
                extra={"method": method, "url": url, "error": str(e)},
            )
            raise TransportError(f"{method} {url} failed: {e}", method=method, url=url) from e

        logger.debug(
            "HTTP response received",
            extra={"method": method, "url": url, "status": result.status},
        )

        if not 200 <= result.status < 300:
            raise TransportError(
                f"{method} {url} returned HTTP {result.status}",
                status_code=result.status,
                body=result.text,
                method=method,
                url=url,
            )
        return result

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
