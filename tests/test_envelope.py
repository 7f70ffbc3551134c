"""envelope コーデックのユニットテスト"""

from __future__ import annotations

import base64

import pytest

from k1s0_textcrypt import Alphabet, FormatError, detect_alphabet, pack, unpack

NONCE = bytes(range(12))
# 0xfb 0xff 0xbf encodes to "+/+/" (standard) and "-_-_" (url-safe)
MARKER_BYTES = b"\xfb\xff\xbf" * 5


def test_pack_url_safe_is_unpadded() -> None:
    env = pack(NONCE, b"\x01\x02\x03\x04\x05")
    assert "=" not in env
    assert len(env) == 23


def test_pack_standard_keeps_padding() -> None:
    env = pack(NONCE, b"\x01\x02\x03\x04\x05", Alphabet.STANDARD)
    assert env.endswith("=")
    assert base64.b64decode(env) == NONCE + b"\x01\x02\x03\x04\x05"


def test_pack_uses_alphabet_specific_characters() -> None:
    assert "-" in pack(NONCE, MARKER_BYTES, Alphabet.URL_SAFE)
    assert "+" in pack(NONCE, MARKER_BYTES, Alphabet.STANDARD)


def test_pack_rejects_wrong_nonce_size() -> None:
    with pytest.raises(FormatError, match="Nonce must be 12 bytes"):
        pack(b"short", b"data")


def test_unpack_splits_nonce_and_ciphertext() -> None:
    for alphabet in Alphabet:
        nonce, ct = unpack(pack(NONCE, MARKER_BYTES, alphabet), alphabet)
        assert nonce == NONCE
        assert ct == MARKER_BYTES


def test_unpack_accepts_padded_url_safe() -> None:
    env = base64.urlsafe_b64encode(NONCE + b"\x01").decode("ascii")
    assert env.endswith("=")
    assert unpack(env, Alphabet.URL_SAFE) == (NONCE, b"\x01")


def test_unpack_accepts_unpadded_standard() -> None:
    env = base64.b64encode(NONCE + b"\x01").decode("ascii").rstrip("=")
    assert unpack(env, Alphabet.STANDARD) == (NONCE, b"\x01")


def test_unpack_nonce_only() -> None:
    assert unpack(pack(NONCE, b"")) == (NONCE, b"")


def test_unpack_rejects_standard_characters_in_url_safe() -> None:
    env = pack(NONCE, MARKER_BYTES, Alphabet.STANDARD)
    with pytest.raises(FormatError, match="outside the base64url alphabet"):
        unpack(env, Alphabet.URL_SAFE)


def test_unpack_rejects_url_safe_characters_in_standard() -> None:
    env = pack(NONCE, MARKER_BYTES, Alphabet.URL_SAFE)
    with pytest.raises(FormatError, match="outside the base64 alphabet"):
        unpack(env, Alphabet.STANDARD)


@pytest.mark.parametrize("env", ["!!!!", "AAAA AAAA", "AB==CD", "ÄÄÄÄ"])
def test_unpack_rejects_invalid_characters(env: str) -> None:
    with pytest.raises(FormatError):
        unpack(env)


def test_unpack_rejects_impossible_length() -> None:
    with pytest.raises(FormatError, match="not valid"):
        unpack("A" * 21)


def test_unpack_too_short() -> None:
    env = base64.urlsafe_b64encode(b"\x00" * 11).decode("ascii")
    with pytest.raises(FormatError, match="too short"):
        unpack(env)


def test_unpack_empty_string() -> None:
    with pytest.raises(FormatError, match="too short"):
        unpack("")


@pytest.mark.parametrize("env", [b"AAAA", None, 1234])
def test_unpack_rejects_non_text(env: object) -> None:
    with pytest.raises(FormatError, match="must be str"):
        unpack(env)  # type: ignore[arg-type]


def test_unknown_alphabet() -> None:
    with pytest.raises(FormatError, match="Unknown alphabet"):
        pack(NONCE, b"", "base32")  # type: ignore[arg-type]


def test_alphabet_accepts_string_values() -> None:
    assert pack(NONCE, MARKER_BYTES, "base64") == pack(  # type: ignore[arg-type]
        NONCE, MARKER_BYTES, Alphabet.STANDARD
    )


def test_detect_alphabet() -> None:
    assert detect_alphabet(pack(NONCE, MARKER_BYTES, Alphabet.URL_SAFE)) is Alphabet.URL_SAFE
    assert detect_alphabet(pack(NONCE, MARKER_BYTES, Alphabet.STANDARD)) is Alphabet.STANDARD


def test_detect_alphabet_without_markers_assumes_standard() -> None:
    env = pack(NONCE, b"", Alphabet.URL_SAFE)
    assert "-" not in env and "_" not in env
    assert detect_alphabet(env) is Alphabet.STANDARD
    # both alphabets decode marker-free input identically
    assert unpack(env, Alphabet.STANDARD) == unpack(env, Alphabet.URL_SAFE)
