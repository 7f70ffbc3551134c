"""暗号化パラメータ定数"""

from __future__ import annotations

from typing import Final

ALGORITHM: Final = "AES-GCM"
KEY_SIZE: Final = 32  # SHA-256 digest = AES-256 key
NONCE_SIZE: Final = 12  # 96-bit nonce recommended by NIST for AES-GCM
TAG_SIZE: Final = 16
KEY_USAGES: Final = frozenset({"encrypt", "decrypt"})

# AES-GCM plaintext limit: 2^39 - 256 bits
MAX_PLAINTEXT_SIZE: Final = (2**39 - 256) // 8
