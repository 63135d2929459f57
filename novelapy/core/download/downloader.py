"""
Constrained binary downloads.

Sources are either inline ``data:image/<type>;base64,`` URIs, decoded
locally, or network URLs, checked with a HEAD request before the GET.
"""
import binascii
import re
from typing import Dict, Optional

from ..api.config import DownloadConfig
from ..api.transport import Transport
from ..crypto.utils.encoding import Base64Encoder
from ..exceptions import InvalidDataURIError, TooLargeError, UnsupportedTypeError
from ..logging import get_logger

logger = get_logger('novelapy.download')

DATA_URI_PATTERN = re.compile(r'^data:(image/\w+);base64,(.*)$', re.DOTALL)


class SafeDownloader:
    """
    Downloads image bytes with type and size checks.

    Example:
        >>> downloader = SafeDownloader(transport)
        >>> data = await downloader.download('https://example.com/cat.png')
    """

    def __init__(self, transport: Transport, config: Optional[DownloadConfig] = None):
        self._transport = transport
        self._config = config or DownloadConfig()

    @property
    def config(self) -> DownloadConfig:
        return self._config

    async def download(
        self,
        source: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> bytes:
        """
        Fetch binary content.

        Args:
            source: Data URI or network URL
            headers: Extra request headers (network path only)
            timeout: Total timeout applied to each network request

        Returns:
            Raw bytes

        Raises:
            UnsupportedTypeError: If the content type is rejected
            TooLargeError: If the declared size exceeds the limit
            InvalidDataURIError: If a data URI is malformed
        """
        if source.startswith('data:'):
            return self._decode_data_uri(source)
        return await self._download_url(source, headers or {}, timeout)

    def _decode_data_uri(self, source: str) -> bytes:
        match = DATA_URI_PATTERN.match(source)
        if match is None:
            raise InvalidDataURIError("Malformed image data URI")

        content_type, payload = match.groups()
        if content_type not in self._config.allowed_types:
            raise UnsupportedTypeError("unsupported image type", content_type)

        # no size ceiling on inline payloads
        try:
            return Base64Encoder.decode_standard(payload)
        except (binascii.Error, ValueError) as e:
            raise InvalidDataURIError(f"Invalid base64 payload: {e}") from e

    async def _download_url(
        self,
        url: str,
        headers: Dict[str, str],
        timeout: Optional[float]
    ) -> bytes:
        meta = await self._transport.head_meta(url, headers, timeout)

        limit = self._config.max_content_size
        if meta.content_length is not None and meta.content_length > limit:
            raise TooLargeError("file too large", meta.content_length, limit)

        if self._is_rejected_type(meta.content_type):
            raise UnsupportedTypeError("unsupported file type", meta.content_type)

        logger.debug(f"Downloading {url} ({meta.content_length} bytes, {meta.content_type})")
        return await self._transport.get(url, headers, timeout)

    def _is_rejected_type(self, content_type: Optional[str]) -> bool:
        allowed = content_type in self._config.allowed_types
        if self._config.strict_content_type:
            return not allowed
        # TODO: confirm with the API owners whether allowed types should be the accepted ones
        return allowed
