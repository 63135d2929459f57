"""
API configuration module.

Provides configuration for the NovelAI client: endpoint, login
method, HTTP transport settings and download limits.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple
import ssl

MAX_CONTENT_SIZE = 10485760
ALLOWED_TYPES: Tuple[str, ...] = ('image/jpeg', 'image/png')

DEFAULT_HEADERS: Dict[str, str] = {
    'authority': 'api.novelai.net',
    'path': '/ai/generate-image',
    'content-type': 'application/json',
    'referer': 'https://novelai.net/',
    'user-agent': (
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/106.0.0.0 Safari/537.36'
    ),
}


@dataclass
class AuthConfig:
    """
    Login method.

    ``type`` is ``'token'`` (use a persistent API token) or ``'login'``
    (exchange email and password for an access token).
    """
    type: str = 'token'
    token: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    def __repr__(self) -> str:
        return f"AuthConfig(type={self.type!r}, email={self.email!r})"


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password and '://' in self.url:
            protocol, rest = self.url.split('://', 1)
            return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()
        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        context.check_hostname = self.check_hostname
        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Granular control over different timeout types.
    """
    total: float = 120.0  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_read: float = 60.0  # Socket read timeout

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class DownloadConfig:
    """
    Download limits.

    ``strict_content_type`` switches the network path to rejecting
    content types outside ``allowed_types``. When off, types inside
    ``allowed_types`` are rejected, as the web client does.
    """
    max_content_size: int = MAX_CONTENT_SIZE
    allowed_types: Tuple[str, ...] = ALLOWED_TYPES
    strict_content_type: bool = False


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the NovelAI client.
    """
    endpoint: str = 'https://api.novelai.net'

    auth: AuthConfig = field(default_factory=AuthConfig)

    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)

    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_token(cls, token: str, **kwargs) -> 'APIConfig':
        """Create configuration that authenticates with an API token."""
        return cls(auth=AuthConfig(type='token', token=token), **kwargs)

    @classmethod
    def from_credentials(cls, email: str, password: str, **kwargs) -> 'APIConfig':
        """Create configuration that logs in with email and password."""
        return cls(auth=AuthConfig(type='login', email=email, password=password), **kwargs)

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def url(self, path: str) -> str:
        """Join a request path onto the endpoint."""
        return self.endpoint.rstrip('/') + '/' + path.lstrip('/')

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def api_headers(self, token: Optional[str] = None) -> Dict[str, str]:
        """Headers for image generation requests, with bearer auth if given."""
        headers = dict(self.headers)
        if token:
            headers['authorization'] = f"Bearer {token}"
        return headers

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        # the API-specific headers are not sent to third-party download hosts
        headers = {}
        if 'user-agent' in self.headers:
            headers['user-agent'] = self.headers['user-agent']

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
