"""Envelope codec.

An envelope is ``base64( nonce ‖ ciphertext ‖ tag )`` where *nonce* is
always the first 12 decoded bytes, so no length prefix is needed.  Two
alphabets are supported: standard base64 (``+``, ``/``, padded) and
base64url (``-``, ``_``, unpadded).  Producer and consumer must agree on
the alphabet.
"""

from __future__ import annotations

import base64
import binascii
import re
from enum import StrEnum

from .constants import NONCE_SIZE
from .exceptions import FormatError

_STANDARD_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")
_URL_SAFE_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")
_URL_SAFE_MARKERS = re.compile(r"[-_]")


class Alphabet(StrEnum):
    """base64 アルファベット。"""

    STANDARD = "base64"
    URL_SAFE = "base64url"


def _coerce(alphabet: Alphabet | str) -> Alphabet:
    try:
        return Alphabet(alphabet)
    except ValueError as e:
        raise FormatError(f"Unknown alphabet: {alphabet!r}", cause=e) from e


def pack(nonce: bytes, ciphertext: bytes, alphabet: Alphabet = Alphabet.URL_SAFE) -> str:
    """nonce と ciphertext‖tag を連結して base64 文字列にする。"""
    if len(nonce) != NONCE_SIZE:
        raise FormatError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
    raw = bytes(nonce) + bytes(ciphertext)
    if _coerce(alphabet) is Alphabet.URL_SAFE:
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
    return base64.b64encode(raw).decode("ascii")


def unpack(envelope: str, alphabet: Alphabet = Alphabet.URL_SAFE) -> tuple[bytes, bytes]:
    """エンベロープを (nonce, ciphertext‖tag) に分解する。

    Padding is optional in both alphabets.  Characters belonging only to
    the other alphabet are rejected.
    """
    if not isinstance(envelope, str):
        raise FormatError(f"Envelope must be str, got {type(envelope).__name__}")
    alphabet = _coerce(alphabet)
    pattern = _URL_SAFE_RE if alphabet is Alphabet.URL_SAFE else _STANDARD_RE
    if pattern.fullmatch(envelope) is None:
        raise FormatError(f"Envelope contains characters outside the {alphabet} alphabet")

    body = envelope.rstrip("=")
    padded = body + "=" * (-len(body) % 4)
    try:
        if alphabet is Alphabet.URL_SAFE:
            raw = base64.urlsafe_b64decode(padded)
        else:
            raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"Envelope is not valid {alphabet}", cause=e) from e

    if len(raw) < NONCE_SIZE:
        raise FormatError(
            f"Envelope too short: {len(raw)} bytes, need at least {NONCE_SIZE}"
        )
    return raw[:NONCE_SIZE], raw[NONCE_SIZE:]


def detect_alphabet(envelope: str) -> Alphabet:
    """``-`` か ``_`` を含めば URL_SAFE、それ以外は STANDARD と推定する。

    The guess is asymmetric: a base64url envelope without either marker is
    reported as STANDARD.  That only matters for unpadded input, which
    :func:`unpack` accepts in both alphabets.
    """
    if not isinstance(envelope, str):
        raise FormatError(f"Envelope must be str, got {type(envelope).__name__}")
    if _URL_SAFE_MARKERS.search(envelope):
        return Alphabet.URL_SAFE
    return Alphabet.STANDARD
