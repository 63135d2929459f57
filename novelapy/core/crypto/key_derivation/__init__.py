"""
Key derivation from credentials.
"""
from .argon2_key_deriver import (
    KeyDeriver,
    Argon2KeyDeriver,
    ACCESS_KEY_DOMAIN,
    ENCRYPTION_KEY_DOMAIN,
    ACCESS_KEY_LENGTH,
    ENCRYPTION_KEY_BYTES,
    MEM_LIMIT,
    OPS_LIMIT,
    SALT_BYTES,
)

__all__ = [
    'KeyDeriver',
    'Argon2KeyDeriver',
    'ACCESS_KEY_DOMAIN',
    'ENCRYPTION_KEY_DOMAIN',
    'ACCESS_KEY_LENGTH',
    'ENCRYPTION_KEY_BYTES',
    'MEM_LIMIT',
    'OPS_LIMIT',
    'SALT_BYTES',
]
