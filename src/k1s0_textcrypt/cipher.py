"""単一鍵で暗号化・復号を繰り返すためのラッパー"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from . import aes
from .config import CipherConfig
from .envelope import Alphabet
from .key import SymmetricKey, derive_key, validate_passphrase

logger = logging.getLogger(__name__)


class CipherState(Enum):
    UNINITIALIZED = "uninitialized"
    KEY_PENDING = "key_pending"
    KEY_READY = "key_ready"


class SingleCryptText:
    """パスフレーズから導出した鍵を保持し、encrypt/decrypt に使い回す。

    Key derivation starts at construction when an event loop is running,
    otherwise on the first call that needs the key.  Concurrent callers
    share one derivation task; the resolved key is cached and the task
    reference dropped.

    An invalid passphrase raises ValidationError from the constructor
    itself, not from a later awaited call.
    """

    def __init__(self, passphrase: str, config: CipherConfig | None = None) -> None:
        validate_passphrase(passphrase)
        self._config = config if config is not None else CipherConfig()
        self._key: SymmetricKey | None = None
        self._pending: asyncio.Future[SymmetricKey] | None = None
        self._factory: Callable[[], Awaitable[SymmetricKey]] | None = functools.partial(
            derive_key, passphrase, self._config.extractable
        )
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self._start()

    def _start(self) -> asyncio.Future[SymmetricKey]:
        factory, self._factory = self._factory, None
        if factory is None:
            raise RuntimeError("Key derivation already started")
        self._pending = asyncio.ensure_future(factory())
        return self._pending

    @property
    def config(self) -> CipherConfig:
        return self._config

    @property
    def state(self) -> CipherState:
        if self._key is not None:
            return CipherState.KEY_READY
        if self._pending is not None:
            return CipherState.KEY_PENDING
        return CipherState.UNINITIALIZED

    async def get_key(self) -> SymmetricKey:
        """導出済みの鍵を返す。導出中なら同じタスクの完了を待つ。"""
        if self._key is not None:
            return self._key
        pending = self._pending if self._pending is not None else self._start()
        # shield: a cancelled caller must not cancel the shared derivation
        key = await asyncio.shield(pending)
        if self._key is None:
            self._key = key
            self._pending = None
            logger.debug("Cipher key ready", extra={"extractable": key.extractable})
        return self._key

    async def encrypt(self, text: str, alphabet: Alphabet | None = None) -> str:
        """text を暗号化する。alphabet 省略時は設定値を使う。"""
        return await aes.encrypt(
            await self.get_key(),
            text,
            alphabet if alphabet is not None else self._config.alphabet,
        )

    async def decrypt(self, envelope: str, alphabet: Alphabet | None = None) -> str:
        """encrypt で生成したエンベロープを復号する。"""
        return await aes.decrypt(
            await self.get_key(),
            envelope,
            alphabet if alphabet is not None else self._config.alphabet,
        )
