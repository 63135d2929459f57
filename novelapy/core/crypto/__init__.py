"""Crypto module: credential key derivation and primitive readiness."""
from .utils import Base64Encoder
from .readiness import CryptoReadiness, default_readiness, ready
from .key_derivation import Argon2KeyDeriver, KeyDeriver

_key_deriver = Argon2KeyDeriver()


async def derive_access_key(email: str, password: str) -> str:
    """Derives the NovelAI access key."""
    return await _key_deriver.access_key(email, password)


async def derive_encryption_key(email: str, password: str) -> str:
    """Derives the NovelAI encryption key."""
    return await _key_deriver.encryption_key(email, password)


__all__ = [
    'Base64Encoder',
    'CryptoReadiness',
    'default_readiness',
    'ready',
    'KeyDeriver',
    'Argon2KeyDeriver',
    'derive_access_key',
    'derive_encryption_key',
]
