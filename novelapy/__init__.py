"""
novelapy - Async Python client support for the NovelAI image API.

Usage:
    >>> from novelapy import NovelAIClient, APIConfig
    >>>
    >>> async with NovelAIClient(APIConfig.from_token("pst-...")) as novelai:
    ...     await novelai.login()
    ...     size = novelai.fit_size(1000, 100)
"""
import logging
from .client import NovelAIClient

# Configuration
from .core.api import (
    APIConfig,
    AuthConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    DownloadConfig,
    AiohttpTransport,
    AsyncAuthService,
    Subscription,
)

from .core.crypto import (
    Argon2KeyDeriver,
    CryptoReadiness,
    derive_access_key,
    derive_encryption_key,
)
from .core.download import SafeDownloader
from .core.image import Size, closest_multiple, resize_input, fit, probe_size
from .core.exceptions import (
    NovelAIException,
    UnsupportedTypeError,
    TooLargeError,
    InvalidDataURIError,
    TransportError,
    AuthError,
    CryptoInitError,
    KeyDerivationError,
)

__version__ = '1.7.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for novelapy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'novelapy',
        'novelapy.client',
        'novelapy.auth',
        'novelapy.http',
        'novelapy.download',
        'novelapy.crypto',
        'novelapy.crypto.kdf',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'NovelAIClient',
    'APIConfig',
    'AuthConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'DownloadConfig',
    'AiohttpTransport',
    'AsyncAuthService',
    'Subscription',
    'Argon2KeyDeriver',
    'CryptoReadiness',
    'derive_access_key',
    'derive_encryption_key',
    'SafeDownloader',
    'Size',
    'closest_multiple',
    'resize_input',
    'fit',
    'probe_size',
    'NovelAIException',
    'UnsupportedTypeError',
    'TooLargeError',
    'InvalidDataURIError',
    'TransportError',
    'AuthError',
    'CryptoInitError',
    'KeyDerivationError',
    'setup_logging',
]
