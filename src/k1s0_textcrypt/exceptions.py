"""textcrypt ライブラリの例外型定義"""

from __future__ import annotations


class TextCryptError(Exception):
    """textcrypt ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class TextCryptErrorCodes:
    """TextCryptError のエラーコード定数。"""

    VALIDATION: str = "VALIDATION_ERROR"
    FORMAT: str = "FORMAT_ERROR"
    AUTHENTICATION: str = "AUTHENTICATION_ERROR"
    CRYPTO_OPERATION: str = "CRYPTO_OPERATION_ERROR"
    CONFIG: str = "CONFIG_ERROR"


class ValidationError(TextCryptError):
    """パスフレーズや平文がテキストとして不正な場合。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(TextCryptErrorCodes.VALIDATION, message, cause)


class FormatError(TextCryptError):
    """エンベロープが base64 として不正、または短すぎる場合。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(TextCryptErrorCodes.FORMAT, message, cause)


class AuthenticationError(TextCryptError):
    """認証タグの検証に失敗した場合。

    鍵違い・改ざん・アルファベット不一致のいずれかだが区別はできない。
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(TextCryptErrorCodes.AUTHENTICATION, message, cause)


class CryptoOperationError(TextCryptError):
    """鍵が不正、または平文がアルゴリズムの上限を超える場合。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(TextCryptErrorCodes.CRYPTO_OPERATION, message, cause)
