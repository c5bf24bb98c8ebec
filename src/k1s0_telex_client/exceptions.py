"""telex_client ライブラリの例外型定義"""

from __future__ import annotations


class TelexClientError(Exception):
    """telex_client ライブラリのエラー基底クラス。"""

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


class UnexpectedStatusError(TelexClientError):
    """Telex が 201 以外のステータスを返した場合のエラー。"""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(code=TelexClientErrorCodes.UNEXPECTED_STATUS, message=message)
        self.status_code = status_code


class TelexClientErrorCodes:
    """TelexClientError のエラーコード定数。"""

    MISSING_TARGET_ID: str = "MISSING_TARGET_ID"
    INVALID_TARGET_ID: str = "INVALID_TARGET_ID"
    MISSING_TARGET_TYPE: str = "MISSING_TARGET_TYPE"
    UNKNOWN_TARGET_TYPE: str = "UNKNOWN_TARGET_TYPE"
    INVALID_URL: str = "INVALID_URL"
    INVALID_CONFIG: str = "INVALID_CONFIG"
    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    UNEXPECTED_STATUS: str = "UNEXPECTED_STATUS"
    DECODE_ERROR: str = "DECODE_ERROR"
    NO_MORE_EXPECTATIONS: str = "NO_MORE_EXPECTATIONS"
