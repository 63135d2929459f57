"""
Async authentication service.

Resolves the access token used for image generation requests, either
by validating a persistent API token or by logging in with email and
password.
"""
from dataclasses import dataclass
from typing import Optional

from .config import APIConfig, AuthConfig
from .models import Subscription
from .transport import Transport
from ..crypto import Argon2KeyDeriver
from ..exceptions import AuthError
from ..logging import get_logger, mask_secret

logger = get_logger('novelapy.auth')

INVALID_TOKEN = '.invalid-token'
INVALID_PASSWORD = '.invalid-password'


@dataclass
class AuthResult:
    """
    Authentication result.

    Token login validates the token by fetching the subscription, which is
    kept here; credential login leaves it unset.
    """
    access_token: str
    method: str
    subscription: Optional[Subscription] = None


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Handles token validation, credential login and subscription lookup.
    """

    def __init__(
        self,
        transport: Transport,
        config: Optional[APIConfig] = None,
        key_deriver: Optional[Argon2KeyDeriver] = None
    ):
        """
        Initialize auth service.

        Args:
            transport: HTTP transport
            config: API configuration
            key_deriver: Access key deriver for credential login
        """
        self._transport = transport
        self._config = config or APIConfig.default()
        self._key_deriver = key_deriver or Argon2KeyDeriver()

    async def login(self, auth: Optional[AuthConfig] = None) -> AuthResult:
        """
        Resolve an access token.

        Args:
            auth: Login method (defaults to the configured one)

        Returns:
            AuthResult with the access token

        Raises:
            AuthError: If the token or the credentials are rejected
            ValueError: If the login method is unknown or incomplete
        """
        auth = auth or self._config.auth

        if auth.type == 'token':
            if not auth.token:
                raise ValueError("Token login requires a token")
            with AuthError.catch({401: INVALID_TOKEN}):
                subscription = await self.get_subscription(auth.token)
            logger.info(f"Authenticated with token {mask_secret(auth.token)}")
            return AuthResult(access_token=auth.token, method='token', subscription=subscription)

        if auth.type == 'login':
            if not auth.email or auth.password is None:
                raise ValueError("Credential login requires email and password")
            access_token = await self._login_with_credentials(auth.email, auth.password)
            logger.info(f"Logged in as {auth.email}")
            return AuthResult(access_token=access_token, method='login')

        raise ValueError(f"Unknown login type: {auth.type!r}")

    async def _login_with_credentials(self, email: str, password: str) -> str:
        key = await self._key_deriver.access_key(email, password)
        with AuthError.catch({401: INVALID_PASSWORD}):
            response = await self._transport.post_json(
                self._config.url('/user/login'),
                {'key': key}
            )
        return response['accessToken']

    async def get_subscription(self, token: str) -> Subscription:
        """
        Fetch the account subscription.

        Args:
            token: Access token

        Returns:
            Parsed Subscription
        """
        data = await self._transport.get_json(
            self._config.url('/user/subscription'),
            headers={'authorization': f"Bearer {token}"}
        )
        return Subscription.from_dict(data)
