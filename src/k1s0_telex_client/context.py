"""リクエストスコープで TelexClient を受け渡すためのコンテキスト

スレッドローカルや contextvars は使わず、呼び出し連鎖に明示的に渡す。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .client import TelexClient

_CLIENT_KEY = "k1s0_telex_client.client"


@dataclass(frozen=True)
class TelexContext:
    """不変のキー・値コンテキスト。with_value は新しいコンテキストを返す。"""

    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def with_value(self, key: str, value: Any) -> TelexContext:
        merged = dict(self.values)
        merged[key] = value
        return TelexContext(values=MappingProxyType(merged))

    def value(self, key: str) -> Any:
        return self.values.get(key)


def new_context(parent: TelexContext | None, client: TelexClient) -> TelexContext:
    """client を保持する新しいコンテキストを返す。parent は変更しない。"""
    return (parent or TelexContext()).with_value(_CLIENT_KEY, client)


def from_context(ctx: TelexContext | None) -> TelexClient | None:
    """ctx に保持された TelexClient を返す。無ければ None。"""
    if ctx is None:
        return None
    client = ctx.value(_CLIENT_KEY)
    if isinstance(client, TelexClient):
        return client
    return None
