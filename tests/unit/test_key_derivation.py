"""Tests for credential key derivation."""
import asyncio
import base64
import hashlib

import pytest
from unittest.mock import AsyncMock, patch
from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from novelapy.core.crypto import derive_access_key, derive_encryption_key
from novelapy.core.crypto.key_derivation import (
    Argon2KeyDeriver,
    ACCESS_KEY_DOMAIN,
    ENCRYPTION_KEY_DOMAIN,
)
from novelapy.core.exceptions import KeyDerivationError

HASH_TARGET = 'novelapy.core.crypto.key_derivation.argon2_key_deriver.hash_secret_raw'


@pytest.fixture
def readiness():
    """Readiness gate that is always open."""
    gate = AsyncMock()
    gate.wait = AsyncMock()
    return gate


@pytest.fixture
def deriver(readiness):
    return Argon2KeyDeriver(readiness=readiness)


class TestSalt:
    """Test suite for the domain-separated salt."""

    def test_salt_is_blake2b_of_domain_string(self):
        salt = Argon2KeyDeriver.salt('a@b.c', 'password123', ACCESS_KEY_DOMAIN)
        expected = hashlib.blake2b(
            ('passwo' + 'a@b.c' + ACCESS_KEY_DOMAIN).encode(), digest_size=16
        ).digest()

        assert salt == expected
        assert len(salt) == 16

    def test_short_password_used_whole(self):
        salt = Argon2KeyDeriver.salt('a@b.c', 'abc', ENCRYPTION_KEY_DOMAIN)
        expected = hashlib.blake2b(
            ('abc' + 'a@b.c' + ENCRYPTION_KEY_DOMAIN).encode(), digest_size=16
        ).digest()

        assert salt == expected

    def test_domains_give_different_salts(self):
        access = Argon2KeyDeriver.salt('a@b.c', 'pw', ACCESS_KEY_DOMAIN)
        encryption = Argon2KeyDeriver.salt('a@b.c', 'pw', ENCRYPTION_KEY_DOMAIN)

        assert access != encryption


class TestArgon2Parameters:
    """The hash runs with the web client's crypto_pwhash parameters."""

    @pytest.mark.asyncio
    async def test_access_key_parameters(self, deriver):
        with patch(HASH_TARGET, return_value=b'\x00' * 64) as mock_hash:
            key = await deriver.access_key('a@b.c', 'secret')

        args, kwargs = mock_hash.call_args
        assert args[0] == b'secret'
        assert args[1] == Argon2KeyDeriver.salt('a@b.c', 'secret', ACCESS_KEY_DOMAIN)
        assert kwargs['time_cost'] == 2
        assert kwargs['memory_cost'] == 1953
        assert kwargs['parallelism'] == 1
        assert kwargs['hash_len'] == 64
        assert kwargs['type'] == Type.ID
        assert kwargs['version'] == 19
        assert key == 'A' * 64

    @pytest.mark.asyncio
    async def test_encryption_key_parameters(self, deriver):
        with patch(HASH_TARGET, return_value=b'\xff' * 128) as mock_hash:
            key = await deriver.encryption_key('a@b.c', 'secret')

        _, kwargs = mock_hash.call_args
        assert kwargs['hash_len'] == 128
        assert len(key) == 171
        assert set(key) == {'_', '8'}

    @pytest.mark.asyncio
    async def test_waits_for_readiness(self, deriver, readiness):
        with patch(HASH_TARGET, return_value=b'\x00' * 64):
            await deriver.access_key('a@b.c', 'secret')

        readiness.wait.assert_awaited()


class TestRetry:
    """Only memory allocation failures are retried, once."""

    @pytest.mark.asyncio
    async def test_allocation_failure_retried_once(self, deriver):
        side_effect = [HashingError('Memory allocation error'), b'\x01' * 64]
        with patch(HASH_TARGET, side_effect=side_effect) as mock_hash:
            key = await deriver.access_key('a@b.c', 'secret')

        assert mock_hash.call_count == 2
        assert len(key) == 64

    @pytest.mark.asyncio
    async def test_memory_error_retried_once(self, deriver):
        with patch(HASH_TARGET, side_effect=[MemoryError(), b'\x01' * 64]) as mock_hash:
            await deriver.access_key('a@b.c', 'secret')

        assert mock_hash.call_count == 2

    @pytest.mark.asyncio
    async def test_repeated_allocation_failure_raises(self, deriver):
        with patch(HASH_TARGET, side_effect=MemoryError()) as mock_hash:
            with pytest.raises(KeyDerivationError, match="after retry"):
                await deriver.access_key('a@b.c', 'secret')

        assert mock_hash.call_count == 2

    @pytest.mark.asyncio
    async def test_other_hashing_error_not_retried(self, deriver):
        with patch(HASH_TARGET, side_effect=HashingError('Memory cost is too small')) as mock_hash:
            with pytest.raises(KeyDerivationError):
                await deriver.access_key('a@b.c', 'secret')

        assert mock_hash.call_count == 1

    @pytest.mark.asyncio
    async def test_bad_parameters_not_retried(self, deriver):
        with patch(HASH_TARGET, side_effect=TypeError('bad salt')) as mock_hash:
            with pytest.raises(KeyDerivationError, match="Invalid"):
                await deriver.access_key('a@b.c', 'secret')

        assert mock_hash.call_count == 1


class TestDerivedKeys:
    """End-to-end derivation with the real primitives."""

    @pytest.mark.asyncio
    async def test_access_key_is_deterministic(self, credentials):
        first = await derive_access_key(**credentials)
        second = await derive_access_key(**credentials)

        assert first == second
        assert len(first) == 64

    @pytest.mark.asyncio
    async def test_access_key_is_url_safe(self, credentials):
        key = await derive_access_key(**credentials)

        assert '+' not in key
        assert '/' not in key
        assert '=' not in key

    @pytest.mark.asyncio
    async def test_encryption_key_length(self, credentials):
        key = await derive_encryption_key(**credentials)

        assert len(key) == 171

    @pytest.mark.asyncio
    async def test_access_and_encryption_keys_differ(self, credentials):
        access = await derive_access_key(**credentials)
        encryption = await derive_encryption_key(**credentials)

        assert access != encryption
        assert access != encryption[:64]

    @pytest.mark.asyncio
    async def test_password_change_changes_key(self, credentials):
        base = await derive_access_key(**credentials)
        changed = await derive_access_key(credentials['email'], credentials['password'][:-1] + 'X')

        assert base != changed

    @pytest.mark.asyncio
    async def test_no_collisions_in_sample(self, random_password):
        passwords = [random_password, random_password + '1', 'a', 'b', 'ab', 'hunter2']
        keys = [await derive_access_key('user@example.com', pw) for pw in passwords]

        assert len(set(keys)) == len(passwords)

    @pytest.mark.asyncio
    async def test_email_changes_key(self, credentials):
        base = await derive_access_key(**credentials)
        other = await derive_access_key('other@example.com', credentials['password'])

        assert base != other

    @pytest.mark.asyncio
    async def test_concurrent_calls_agree(self, credentials):
        keys = await asyncio.gather(*[derive_access_key(**credentials) for _ in range(4)])

        assert len(set(keys)) == 1


class TestKnownAnswers:
    """Keys must match what the NovelAI web client sends."""

    @pytest.mark.asyncio
    async def test_access_key_vector(self):
        key = await derive_access_key('artist@example.com', 'correct horse battery')

        assert key == 'OhmRYYtT3qlN2v-p1cLMMuiQEJY3itpR8cEXl-rpCNasDRp7n7exGyi5xSm3GTnC'

    @pytest.mark.asyncio
    async def test_encryption_key_vector(self):
        key = await derive_encryption_key('artist@example.com', 'correct horse battery')

        assert key.startswith('9lPC5sj7GZAuUos1o_FeVAJxuHiIHKRu')
        assert len(key) == 171

    @pytest.mark.asyncio
    @pytest.mark.parametrize('domain, length', [
        (ACCESS_KEY_DOMAIN, 64),
        (ENCRYPTION_KEY_DOMAIN, 128),
    ])
    async def test_non_ascii_password(self, domain, length):
        email, password = 'künstler@example.com', 'pässwörd€'
        # crypto_pwhash(len, pw, blake2b16(pw[:6] + email + domain), 2, 2_000_000, ARGON2ID13)
        salt = hashlib.blake2b(
            ('pässwö' + email + domain).encode('utf-8'), digest_size=16
        ).digest()
        raw = hash_secret_raw(
            password.encode('utf-8'), salt,
            time_cost=2, memory_cost=1953, parallelism=1,
            hash_len=length, type=Type.ID, version=0x13,
        )
        expected = base64.urlsafe_b64encode(raw).decode().rstrip('=')

        if domain == ACCESS_KEY_DOMAIN:
            key = await derive_access_key(email, password)
            assert key == expected[:64]
        else:
            key = await derive_encryption_key(email, password)
            assert key == expected
