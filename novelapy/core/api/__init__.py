"""NovelAI API module: configuration, transport and login."""
from .config import (
    APIConfig,
    AuthConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    DownloadConfig,
    DEFAULT_HEADERS,
    MAX_CONTENT_SIZE,
    ALLOWED_TYPES,
)
from .transport import Transport, AiohttpTransport, ContentMeta
from .models import Subscription, Perks, ImageGenerationLimit, PaymentProcessorData, TrainingStepsLeft
from .auth import AsyncAuthService, AuthResult, INVALID_TOKEN, INVALID_PASSWORD

__all__ = [
    # Configuration
    'APIConfig',
    'AuthConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'DownloadConfig',
    'DEFAULT_HEADERS',
    'MAX_CONTENT_SIZE',
    'ALLOWED_TYPES',

    # Transport
    'Transport',
    'AiohttpTransport',
    'ContentMeta',

    # Models
    'Subscription',
    'Perks',
    'ImageGenerationLimit',
    'PaymentProcessorData',
    'TrainingStepsLeft',

    # Auth
    'AsyncAuthService',
    'AuthResult',
    'INVALID_TOKEN',
    'INVALID_PASSWORD',
]
