"""AES-GCM authenticated encryption of text values.

Uses the ``cryptography`` library's AESGCM primitive with a random
12-byte nonce per encryption.  The wire format is::

    base64( nonce ‖ ciphertext ‖ tag )

where *nonce* is 12 bytes, and the 16-byte authentication tag is
appended by AESGCM automatically.  See :mod:`k1s0_textcrypt.envelope`.
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag

from .constants import MAX_PLAINTEXT_SIZE, NONCE_SIZE
from .envelope import Alphabet, pack, unpack
from .exceptions import (
    AuthenticationError,
    CryptoOperationError,
    FormatError,
    ValidationError,
)
from .key import SymmetricKey


def _require_key(key: SymmetricKey, usage: str) -> SymmetricKey:
    if not isinstance(key, SymmetricKey):
        raise CryptoOperationError(
            f"Expected SymmetricKey, got {type(key).__name__}"
        )
    if usage not in key.usages:
        raise CryptoOperationError(f"Key does not permit {usage!r}")
    return key


async def encrypt(
    key: SymmetricKey,
    plaintext: str,
    alphabet: Alphabet = Alphabet.URL_SAFE,
) -> str:
    """Encrypt *plaintext* with AES-256-GCM and return an envelope string.

    A fresh random nonce is generated for every call so identical
    plaintexts produce different ciphertexts.

    Parameters
    ----------
    key:
        A key from :func:`k1s0_textcrypt.derive_key`.
    plaintext:
        UTF-8 text to encrypt.
    alphabet:
        base64 alphabet of the envelope.  Defaults to base64url.

    Returns
    -------
    str
        Base64-encoded ``nonce + ciphertext + tag``.

    Raises
    ------
    CryptoOperationError
        If *key* is not a valid AES-GCM key, or *plaintext* is too long.
    ValidationError
        If *plaintext* is not text.
    """
    aead = _require_key(key, "encrypt").aead
    if not isinstance(plaintext, str):
        raise ValidationError(f"Plaintext must be str, got {type(plaintext).__name__}")
    try:
        data = plaintext.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError("Plaintext is not encodable as UTF-8", cause=e) from e
    if len(data) > MAX_PLAINTEXT_SIZE:
        raise CryptoOperationError(
            f"Plaintext exceeds AES-GCM limit of {MAX_PLAINTEXT_SIZE} bytes"
        )

    nonce = os.urandom(NONCE_SIZE)
    try:
        ct = aead.encrypt(nonce, data, None)
    except (OverflowError, ValueError) as e:
        raise CryptoOperationError(f"Encryption failed: {e}", cause=e) from e
    return pack(nonce, ct, alphabet)


async def decrypt(
    key: SymmetricKey,
    envelope: str,
    alphabet: Alphabet = Alphabet.URL_SAFE,
) -> str:
    """Decrypt an envelope produced by :func:`encrypt`.

    Parameters
    ----------
    key:
        A key derived from the same passphrase used for encryption.
    envelope:
        String returned by :func:`encrypt`.
    alphabet:
        The alphabet used when encrypting.  Defaults to base64url.

    Returns
    -------
    str
        The original plaintext.

    Raises
    ------
    FormatError
        If *envelope* is not valid base64 in *alphabet* or is too short.
    AuthenticationError
        If the key is wrong, the data has been tampered with, or the
        alphabet does not match.  These cases cannot be told apart.
    CryptoOperationError
        If *key* is not a valid AES-GCM key.
    """
    aead = _require_key(key, "decrypt").aead
    nonce, ct = unpack(envelope, alphabet)
    try:
        data = aead.decrypt(nonce, ct, None)
    except InvalidTag as e:
        raise AuthenticationError("Authentication tag verification failed", cause=e) from e
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError("Decrypted payload is not valid UTF-8", cause=e) from e
