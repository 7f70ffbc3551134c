"""Passphrase-based symmetric key derivation.

The key is the SHA-256 digest of the UTF-8 encoded passphrase, used
directly as an AES-256-GCM key.  Derivation is unsalted and therefore
deterministic: parties sharing a passphrase obtain interchangeable keys
without exchanging key material.
"""

from __future__ import annotations

import hmac
import logging

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .constants import ALGORITHM, KEY_SIZE, KEY_USAGES
from .exceptions import CryptoOperationError, ValidationError

logger = logging.getLogger(__name__)


class SymmetricKey:
    """AES-GCM 鍵ハンドル。生成後は変更不可。"""

    __slots__ = ("_material", "_aead", "_extractable")

    def __init__(self, material: bytes, extractable: bool = False) -> None:
        if len(material) != KEY_SIZE:
            raise CryptoOperationError(
                f"{ALGORITHM} key must be {KEY_SIZE} bytes, got {len(material)}"
            )
        object.__setattr__(self, "_material", bytes(material))
        object.__setattr__(self, "_aead", AESGCM(self._material))
        object.__setattr__(self, "_extractable", bool(extractable))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"SymmetricKey is immutable: cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"SymmetricKey is immutable: cannot delete {name!r}")

    @property
    def algorithm(self) -> str:
        return ALGORITHM

    @property
    def extractable(self) -> bool:
        return self._extractable

    @property
    def usages(self) -> frozenset[str]:
        return KEY_USAGES

    @property
    def aead(self) -> AESGCM:
        return self._aead

    def export(self) -> bytes:
        """生の鍵バイト列を返す。extractable=False の鍵では失敗する。"""
        if not self._extractable:
            raise CryptoOperationError("Key is not extractable")
        return self._material

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymmetricKey):
            return NotImplemented
        return hmac.compare_digest(self._material, other._material)

    def __hash__(self) -> int:
        return hash((SymmetricKey, self._material))

    def __repr__(self) -> str:
        return f"SymmetricKey(algorithm={ALGORITHM!r}, extractable={self._extractable})"


def validate_passphrase(passphrase: str) -> bytes:
    """パスフレーズを検証し UTF-8 バイト列を返す。"""
    if not isinstance(passphrase, str):
        raise ValidationError(
            f"Passphrase must be str, got {type(passphrase).__name__}"
        )
    try:
        return passphrase.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError("Passphrase is not encodable as UTF-8", cause=e) from e


async def derive_key(passphrase: str, extractable: bool = False) -> SymmetricKey:
    """Derive an AES-256-GCM key from *passphrase*.

    Parameters
    ----------
    passphrase:
        Arbitrary text.  A high-entropy value of 32+ characters is
        recommended since no salt or work factor is applied.
    extractable:
        Whether :meth:`SymmetricKey.export` may return the raw key.

    Returns
    -------
    SymmetricKey
        A key usable only for ``encrypt`` and ``decrypt``.

    Raises
    ------
    ValidationError
        If *passphrase* is not a str or cannot be encoded as UTF-8.
    """
    data = validate_passphrase(passphrase)
    digest = hashes.Hash(hashes.SHA256())
    digest.update(data)
    key = SymmetricKey(digest.finalize(), extractable=extractable)
    logger.debug("Symmetric key derived", extra={"extractable": key.extractable})
    return key
