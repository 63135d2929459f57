"""
One-time readiness gate for the crypto primitives.

The first waiter starts a probe of the Argon2 and BLAKE2b bindings in a
worker thread; every other waiter awaits the same task. Once the probe
has succeeded, wait() returns immediately. A failed probe is final.
"""
import asyncio
from typing import Optional

from argon2.low_level import Type, hash_secret_raw
from Crypto.Hash import BLAKE2b

from ..exceptions import CryptoInitError
from ..logging import get_logger

logger = get_logger('novelapy.crypto')


def _probe_primitives() -> None:
    salt = BLAKE2b.new(digest_bytes=16, data=b'novelapy').digest()
    hash_secret_raw(
        b'novelapy',
        salt,
        time_cost=1,
        memory_cost=8,
        parallelism=1,
        hash_len=16,
        type=Type.ID,
        version=19,
    )


class CryptoReadiness:
    """Shared, idempotent initialization of the crypto primitives."""

    def __init__(self) -> None:
        self._ready = False
        self._error: Optional[CryptoInitError] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def wait(self) -> None:
        """
        Wait until the primitives are usable.

        Raises:
            CryptoInitError: If the primitives failed to initialize
        """
        if self._ready:
            return
        if self._error is not None:
            raise self._error

        loop = asyncio.get_running_loop()
        if self._task is None or self._task.get_loop() is not loop:
            self._task = loop.create_task(self._initialize())
        await asyncio.shield(self._task)

    async def _initialize(self) -> None:
        logger.debug("Initializing crypto primitives")
        try:
            await asyncio.to_thread(_probe_primitives)
        except Exception as e:
            self._error = CryptoInitError(f"Crypto primitives failed to initialize: {e}")
            logger.error(str(self._error))
            raise self._error from e
        self._ready = True
        logger.debug("Crypto primitives ready")


default_readiness = CryptoReadiness()


async def ready() -> None:
    """Await the process-wide readiness gate."""
    await default_readiness.wait()
