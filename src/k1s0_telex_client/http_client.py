"""Telex HTTP クライアント実装"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from .client import TelexClient
from .config import TelexConfig
from .exceptions import TelexClientError, TelexClientErrorCodes, UnexpectedStatusError
from .models import Notification, Result

logger = structlog.stdlib.get_logger(__name__)

MESSAGES_PATH = "/producer/messages"


def _followups_path(id: str) -> str:
    return f"{MESSAGES_PATH}/{id}/followups"


def _split_credentials(raw_url: str) -> tuple[str, str, str]:
    """URL から user-info を取り出し、除去済みの URL と共に返す。"""
    try:
        url = httpx.URL(raw_url)
    except (httpx.InvalidURL, TypeError):
        # 例外メッセージに URL の一部が含まれ得るため連鎖させない
        raise TelexClientError(
            code=TelexClientErrorCodes.INVALID_URL,
            message="Telex URL could not be parsed",
        ) from None
    if url.scheme not in ("http", "https") or not url.host:
        raise TelexClientError(
            code=TelexClientErrorCodes.INVALID_URL,
            message="Telex URL must be an absolute http(s) URL",
        )
    user, password = url.username, url.password
    scrubbed = url.copy_with(username=None, password=None)
    return str(scrubbed).rstrip("/"), user, password


class HttpTelexClient(TelexClient):
    """httpx を使った Telex HTTP クライアント。

    httpx.Client を一つ保持して全呼び出しで再利用する。呼び出し間で
    変化する状態は持たないため、複数スレッドから同時に使用できる。
    """

    def __init__(
        self,
        config: TelexConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._base_url, self._user, self._password = _split_credentials(config.base_url)
        auth: tuple[str, str] | None = None
        if self._user or self._password:
            auth = (self._user, self._password)
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"Content-Type": "application/json"},
            auth=auth,
            timeout=config.timeout_seconds,
            transport=transport,
        )
        logger.debug("telex client created", base_url=self._base_url)

    @property
    def base_url(self) -> str:
        """認証情報を除去したベース URL。"""
        return self._base_url

    @property
    def user(self) -> str:
        return self._user

    @property
    def password(self) -> str:
        return self._password

    def __repr__(self) -> str:
        return f"HttpTelexClient(base_url={self._base_url!r})"

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTelexClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _post(self, path: str, payload: dict[str, Any], context: str) -> Result:
        logger.debug("telex request", path=path)
        try:
            resp = self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise TelexClientError(
                code=TelexClientErrorCodes.TRANSPORT_ERROR,
                message=f"{context}: request to {self._base_url} failed: {e}",
                cause=e,
            ) from e

        if resp.status_code != httpx.codes.CREATED:
            logger.warning("telex unexpected status", path=path, status_code=resp.status_code)
            message = f"{context}: expected 201, got HTTP {resp.status_code}"
            if resp.text:
                message = f"{message}: {resp.text}"
            raise UnexpectedStatusError(status_code=resp.status_code, message=message)

        try:
            data = resp.json()
        except ValueError as e:
            raise TelexClientError(
                code=TelexClientErrorCodes.DECODE_ERROR,
                message=f"{context}: response body is not valid JSON",
                cause=e,
            ) from e
        return Result.from_dict(data)

    def notify(self, notification: Notification) -> Result:
        """通知を検証してから Telex に送信する。検証エラー時は通信しない。"""
        notification.validate()
        return self._post(MESSAGES_PATH, notification.to_dict(), "notify")

    def followup(self, id: str, body: str) -> Result:
        """通知 id にフォローアップを送信する。id と body はローカルで検証しない。"""
        return self._post(_followups_path(id), {"body": body}, f"followup({id})")


def new(
    url: str,
    *,
    timeout_seconds: float = 10.0,
    transport: httpx.BaseTransport | None = None,
) -> HttpTelexClient:
    """url の Telex サービスを対象とするクライアントを生成する。"""
    return HttpTelexClient(
        TelexConfig(base_url=url, timeout_seconds=timeout_seconds),
        transport=transport,
    )
