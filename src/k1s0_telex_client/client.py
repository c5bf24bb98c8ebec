"""TelexClient 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import Notification, Result


class TelexClient(ABC):
    """Telex クライアント抽象基底クラス。

    呼び出し側はこのクラスにのみ依存し、テストでは MockTelexClient に
    差し替える。
    """

    @abstractmethod
    def notify(self, notification: Notification) -> Result:
        """通知を作成する。"""
        ...

    @abstractmethod
    def followup(self, id: str, body: str) -> Result:
        """作成済み通知 id にフォローアップを追加する。"""
        ...
