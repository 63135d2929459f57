"""Credential-based key derivation using Strategy Pattern."""
import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from Crypto.Hash import BLAKE2b

from ..readiness import CryptoReadiness, default_readiness
from ..utils.encoding import Base64Encoder
from ...exceptions import KeyDerivationError
from ...logging import get_logger

logger = get_logger('novelapy.crypto.kdf')

ACCESS_KEY_DOMAIN = 'novelai_data_access_key'
ENCRYPTION_KEY_DOMAIN = 'novelai_data_encryption_key'
ACCESS_KEY_BYTES = 64
ACCESS_KEY_LENGTH = 64
ENCRYPTION_KEY_BYTES = 128

SALT_BYTES = 16  # crypto_pwhash_SALTBYTES
OPS_LIMIT = 2
MEM_LIMIT = 2_000_000  # bytes, as libsodium's crypto_pwhash takes it
ARGON2_VERSION = 19  # 0x13


class KeyDeriver(ABC):
    """Abstract base class for credential-based key derivation."""

    @abstractmethod
    async def derive(self, email: str, password: str, domain: str, length: int) -> str:
        """Derives an encoded key of ``length`` bytes for a domain string."""
        pass


class Argon2KeyDeriver(KeyDeriver):
    """
    Argon2id key derivation compatible with NovelAI's login.

    The salt is a 16-byte keyless BLAKE2b digest of
    ``password[:6] + email + domain``. The hash runs with libsodium's
    crypto_pwhash parameters (ops limit 2, 2 MB memory, one lane) and is
    encoded as URL-safe base64 without padding.

    Example:
        >>> deriver = Argon2KeyDeriver()
        >>> key = await deriver.access_key('user@example.com', 'hunter2')
    """

    def __init__(
        self,
        readiness: Optional[CryptoReadiness] = None,
        ops_limit: int = OPS_LIMIT,
        mem_limit: int = MEM_LIMIT
    ):
        """
        Initialize the deriver.

        Args:
            readiness: Readiness gate to await before hashing
            ops_limit: Argon2 time cost
            mem_limit: Memory limit in bytes
        """
        self._readiness = readiness or default_readiness
        self.ops_limit = ops_limit
        self.mem_limit = mem_limit
        self.encoder = Base64Encoder()

    @staticmethod
    def salt(email: str, password: str, domain: str) -> bytes:
        """Computes the domain-separated salt."""
        message = (password[:6] + email + domain).encode('utf-8')
        return BLAKE2b.new(digest_bytes=SALT_BYTES, data=message).digest()

    def _hash(self, password: bytes, salt: bytes, length: int) -> bytes:
        return hash_secret_raw(
            password,
            salt,
            time_cost=self.ops_limit,
            memory_cost=self.mem_limit // 1024,
            parallelism=1,
            hash_len=length,
            type=Type.ID,
            version=ARGON2_VERSION,
        )

    def _hash_with_retry(self, password: bytes, salt: bytes, length: int) -> bytes:
        # allocation failure is the only transient outcome; retry it once
        for attempt in range(2):
            try:
                return self._hash(password, salt, length)
            except (MemoryError, HashingError) as e:
                if not _is_allocation_failure(e):
                    raise KeyDerivationError(f"Key derivation failed: {e}") from e
                if attempt:
                    raise KeyDerivationError(f"Key derivation failed after retry: {e}") from e
                logger.warning("Memory allocation failed during key derivation, retrying once")
            except (ValueError, TypeError) as e:
                raise KeyDerivationError(f"Invalid key derivation parameters: {e}") from e

    async def derive(self, email: str, password: str, domain: str, length: int) -> str:
        """
        Derives an encoded key.

        Args:
            email: Account email
            password: Account password
            domain: Domain separation string
            length: Output length in bytes

        Returns:
            URL-safe base64 encoded key

        Raises:
            CryptoInitError: If the primitives are unavailable
            KeyDerivationError: If hashing fails
        """
        await self._readiness.wait()

        salt = self.salt(email, password, domain)
        logger.debug(f"Deriving {length}-byte key for domain {domain}")
        raw = await asyncio.to_thread(
            self._hash_with_retry, password.encode('utf-8'), salt, length
        )
        return self.encoder.encode(raw)

    async def access_key(self, email: str, password: str) -> str:
        """Derives the 64-character access key used by /user/login."""
        key = await self.derive(email, password, ACCESS_KEY_DOMAIN, ACCESS_KEY_BYTES)
        return key[:ACCESS_KEY_LENGTH]

    async def encryption_key(self, email: str, password: str) -> str:
        """Derives the encryption key for user data."""
        return await self.derive(email, password, ENCRYPTION_KEY_DOMAIN, ENCRYPTION_KEY_BYTES)


def _is_allocation_failure(error: Exception) -> bool:
    if isinstance(error, MemoryError):
        return True
    return 'memory allocation' in str(error).lower()
