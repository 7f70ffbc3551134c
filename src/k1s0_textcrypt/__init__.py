"""k1s0 textcrypt library."""

from .aes import decrypt, encrypt
from .cipher import CipherState, SingleCryptText
from .config import CipherConfig, load_config
from .envelope import Alphabet, detect_alphabet, pack, unpack
from .exceptions import (
    AuthenticationError,
    CryptoOperationError,
    FormatError,
    TextCryptError,
    TextCryptErrorCodes,
    ValidationError,
)
from .key import SymmetricKey, derive_key, validate_passphrase

__all__ = [
    "Alphabet",
    "AuthenticationError",
    "CipherConfig",
    "CipherState",
    "CryptoOperationError",
    "FormatError",
    "SingleCryptText",
    "SymmetricKey",
    "TextCryptError",
    "TextCryptErrorCodes",
    "ValidationError",
    "decrypt",
    "derive_key",
    "detect_alphabet",
    "encrypt",
    "load_config",
    "pack",
    "unpack",
    "validate_passphrase",
]
