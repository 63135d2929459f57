"""
NovelAIClient - High-level async client for NovelAI.

Example:
    >>> config = APIConfig.from_credentials("me@example.com", "secret")
    >>> async with NovelAIClient(config) as novelai:
    ...     token = await novelai.login()
    ...     image, size = await novelai.prepare_image("https://example.com/cat.png")
"""
from typing import Dict, Optional, Tuple

from .core.api import (
    APIConfig,
    AiohttpTransport,
    AsyncAuthService,
    Subscription,
    Transport,
)
from .core.crypto import Argon2KeyDeriver
from .core.download import SafeDownloader
from .core.image import Size, probe_size, resize_input
from .core.logging import get_logger

logger = get_logger('novelapy.client')


class NovelAIClient:
    """
    Async client combining login, downloads and size fitting.

    The access token obtained by login() is kept on the client and used
    for request_headers() and get_subscription().
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        transport: Optional[Transport] = None,
        key_deriver: Optional[Argon2KeyDeriver] = None
    ):
        """
        Initialize client.

        Args:
            config: API configuration (uses defaults if not provided)
            transport: HTTP transport (an AiohttpTransport by default)
            key_deriver: Key deriver for credential login
        """
        self._config = config or APIConfig.default()
        self._owns_transport = transport is None
        self._transport = transport or AiohttpTransport(self._config)
        self._key_deriver = key_deriver or Argon2KeyDeriver()
        self._auth = AsyncAuthService(self._transport, self._config, self._key_deriver)
        self._downloader = SafeDownloader(self._transport, self._config.download)
        self._access_token: Optional[str] = None
        self._subscription: Optional[Subscription] = None

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def is_logged_in(self) -> bool:
        return self._access_token is not None

    async def __aenter__(self) -> 'NovelAIClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()

    async def login(self) -> str:
        """
        Authenticate with the configured method.

        Returns:
            Access token
        """
        result = await self._auth.login()
        self._access_token = result.access_token
        self._subscription = result.subscription
        return result.access_token

    async def get_subscription(self, refresh: bool = False) -> Subscription:
        """
        Get the subscription of the logged in account.

        A subscription already fetched during token login is reused
        unless refresh is set.
        """
        if self._access_token is None:
            await self.login()
        if refresh or self._subscription is None:
            self._subscription = await self._auth.get_subscription(self._access_token)
        return self._subscription

    def request_headers(self) -> Dict[str, str]:
        """Headers for image generation requests."""
        return self._config.api_headers(self._access_token)

    async def download(
        self,
        source: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> bytes:
        """Download image bytes from a data URI or URL."""
        return await self._downloader.download(source, headers, timeout)

    async def derive_access_key(self, email: str, password: str) -> str:
        return await self._key_deriver.access_key(email, password)

    async def derive_encryption_key(self, email: str, password: str) -> str:
        return await self._key_deriver.encryption_key(email, password)

    @staticmethod
    def fit_size(width: int, height: int) -> Size:
        """Fit a requested size to what the endpoint accepts."""
        return resize_input(Size(width, height))

    async def prepare_image(
        self,
        source: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> Tuple[bytes, Size]:
        """
        Download an input image and compute the output size for it.

        Returns:
            Tuple of (image bytes, fitted size)
        """
        data = await self.download(source, headers, timeout)
        original = probe_size(data)
        fitted = resize_input(original)
        logger.debug(f"Input image {original} fitted to {fitted}")
        return data, fitted
