"""暗号設定（pydantic BaseModel）"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .envelope import Alphabet
from .exceptions import TextCryptError, TextCryptErrorCodes


class CipherConfig(BaseModel):
    """SingleCryptText の設定。"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    extractable: bool = False
    alphabet: Alphabet = Alphabet.URL_SAFE


def load_config(data: dict[str, Any]) -> CipherConfig:
    """辞書から CipherConfig を生成する。"""
    try:
        return CipherConfig.model_validate(data)
    except PydanticValidationError as e:
        raise TextCryptError(
            code=TextCryptErrorCodes.CONFIG,
            message=f"Cipher config validation failed: {e}",
            cause=e,
        ) from e
