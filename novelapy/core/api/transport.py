"""
Async HTTP transport.

Thin aiohttp wrapper used by the downloader and the login workflow.
Non-2xx responses raise TransportError carrying the HTTP status.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import aiohttp

from .config import APIConfig
from ..exceptions import TransportError
from ..logging import get_logger


@dataclass(frozen=True)
class ContentMeta:
    """Response metadata read from a HEAD request."""
    content_length: Optional[int]
    content_type: Optional[str]

    @classmethod
    def from_headers(cls, headers) -> 'ContentMeta':
        """Build from response headers; unparsable lengths become None."""
        raw_length = headers.get('content-length')
        try:
            content_length = int(raw_length) if raw_length is not None else None
        except ValueError:
            content_length = None
        return cls(content_length=content_length, content_type=headers.get('content-type'))


class Transport(Protocol):
    """HTTP operations the client depends on."""

    async def head_meta(
        self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None
    ) -> ContentMeta:
        ...

    async def get(
        self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None
    ) -> bytes:
        ...

    async def get_json(
        self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None
    ) -> Any:
        ...

    async def post_json(
        self, url: str, data: Any, headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> Any:
        ...

    async def close(self) -> None:
        ...


class AiohttpTransport:
    """
    Transport implementation on top of aiohttp.

    Example:
        >>> async with AiohttpTransport(APIConfig.default()) as http:
        ...     meta = await http.head_meta('https://example.com/a.png')
    """

    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize transport.

        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None

        self._logger = get_logger('novelapy.http')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        return self._config

    async def __aenter__(self) -> 'AiohttpTransport':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close the session and release connections."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]],
        timeout: Optional[float],
        body: str,
        json_body: Any = None
    ) -> Any:
        session = await self._ensure_session()
        kwargs: Dict[str, Any] = {'headers': headers or {}}
        if timeout is not None:
            kwargs['timeout'] = aiohttp.ClientTimeout(total=timeout)
        if json_body is not None:
            kwargs['json'] = json_body
        if self._config.proxy:
            kwargs['proxy'] = self._config.proxy.to_aiohttp_proxy()

        self._logger.debug(f"{method} {url}")

        try:
            async with session.request(method, url, **kwargs) as response:
                if response.status >= 400:
                    reason = response.reason or ''
                    raise TransportError(
                        f"{method} {url} failed: {response.status} {reason}".rstrip(),
                        status_code=response.status,
                        url=url
                    )
                if body == 'meta':
                    return ContentMeta.from_headers(response.headers)
                if body == 'json':
                    return await response.json(content_type=None)
                return await response.read()
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error on {method} {url}: {e}")
            raise TransportError(f"Network error: {e}", url=url) from e

    async def head_meta(
        self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None
    ) -> ContentMeta:
        """Fetch content length and type without the body."""
        return await self._request('HEAD', url, headers, timeout, 'meta')

    async def get(
        self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None
    ) -> bytes:
        """Fetch the response body as raw bytes."""
        return await self._request('GET', url, headers, timeout, 'bytes')

    async def get_json(
        self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None
    ) -> Any:
        """Fetch and decode a JSON response."""
        return await self._request('GET', url, headers, timeout, 'json')

    async def post_json(
        self, url: str, data: Any, headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> Any:
        """POST a JSON body and decode the JSON response."""
        return await self._request('POST', url, headers, timeout, 'json', json_body=data)
