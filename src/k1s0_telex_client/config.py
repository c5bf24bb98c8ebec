"""Telex クライアント設定（pydantic BaseModel）"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from .exceptions import TelexClientError, TelexClientErrorCodes

ENV_URL = "TELEX_URL"
ENV_TIMEOUT_SECONDS = "TELEX_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "TELEX_LOG_LEVEL"
ENV_LOG_FORMAT = "TELEX_LOG_FORMAT"


class TelexConfig(BaseModel):
    """Telex クライアント設定。

    base_url は認証情報（user:pass@）を含んでよい。クライアント生成時に
    取り出され、保持される URL からは除去される。
    """

    base_url: str
    timeout_seconds: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    def __repr__(self) -> str:
        # base_url に認証情報が含まれ得るため出力しない
        return (
            f"TelexConfig(timeout_seconds={self.timeout_seconds!r}, "
            f"log_level={self.log_level!r}, log_format={self.log_format!r})"
        )

    __str__ = __repr__

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        base_url: str | None = None,
    ) -> TelexConfig:
        """環境変数から設定を読み込む。

        base_url が渡された場合は TELEX_URL より優先する。
        """
        env = os.environ if environ is None else environ
        url = base_url or env.get(ENV_URL, "")
        if not url:
            raise TelexClientError(
                code=TelexClientErrorCodes.INVALID_CONFIG,
                message=f"Telex URL is not set ({ENV_URL})",
            )
        data: dict[str, str] = {"base_url": url}
        if value := env.get(ENV_TIMEOUT_SECONDS):
            data["timeout_seconds"] = value
        if value := env.get(ENV_LOG_LEVEL):
            data["log_level"] = value
        if value := env.get(ENV_LOG_FORMAT):
            data["log_format"] = value
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            # 入力値（URL）をメッセージに含めないようフィールド名のみ列挙する
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise TelexClientError(
                code=TelexClientErrorCodes.INVALID_CONFIG,
                message=f"Config validation failed: {fields}",
            ) from None
