"""Telex クライアントデータモデル"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .exceptions import TelexClientError, TelexClientErrorCodes


class TargetType(StrEnum):
    """通知ターゲットの種別。"""

    APP = "app"
    USER = "user"
    EMAIL = "email"
    DASHBOARD = "dashboard"


def _parse_type(raw: str) -> TargetType | str:
    try:
        return TargetType(raw)
    except ValueError:
        return raw


@dataclass(frozen=True)
class Target:
    """通知の宛先。id は UUID 文字列。"""

    type: TargetType | str = ""
    id: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"type": str(self.type), "id": self.id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Target:
        return cls(type=_parse_type(data.get("type", "")), id=data.get("id", ""))


@dataclass(frozen=True)
class Action:
    """通知に添えるリンク。"""

    label: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "url": self.url}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        return cls(label=data.get("label", ""), url=data.get("url", ""))


@dataclass(frozen=True)
class Notification:
    """Telex が受け付ける通知メッセージ。"""

    title: str = ""
    body: str = ""
    target: Target = field(default_factory=Target)
    action: Action | None = None

    def validate(self) -> None:
        """送信可能な通知か検証する。

        ID の有無 → ID の形式 → 種別の有無 → 種別の値 の順に検査し、
        最初に見つかった問題を TelexClientError として送出する。
        """
        if not self.target.id:
            raise TelexClientError(
                code=TelexClientErrorCodes.MISSING_TARGET_ID,
                message="Missing Target.ID in Notification",
            )
        try:
            uuid.UUID(self.target.id)
        except ValueError as e:
            raise TelexClientError(
                code=TelexClientErrorCodes.INVALID_TARGET_ID,
                message="Target.ID not a UUID",
                cause=e,
            ) from e
        if not self.target.type:
            raise TelexClientError(
                code=TelexClientErrorCodes.MISSING_TARGET_TYPE,
                message="Missing Target.Type in Notification",
            )
        if not isinstance(_parse_type(str(self.target.type)), TargetType):
            raise TelexClientError(
                code=TelexClientErrorCodes.UNKNOWN_TARGET_TYPE,
                message=f"Specified Target.Type is unknown: {self.target.type}",
            )

    def to_dict(self) -> dict[str, Any]:
        """ワイヤ形式の辞書に変換する。action 未指定時は空文字列で送る。"""
        return {
            "title": self.title,
            "body": self.body,
            "target": self.target.to_dict(),
            "action": (self.action or Action()).to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Notification:
        action_data = data.get("action")
        action = Action.from_dict(action_data) if action_data else None
        if action is not None and not action.label and not action.url:
            action = None
        return cls(
            title=data.get("title", ""),
            body=data.get("body", ""),
            target=Target.from_dict(data.get("target") or {}),
            action=action,
        )


@dataclass(frozen=True)
class Result:
    """Telex が払い出した通知またはフォローアップの ID。"""

    id: str

    @classmethod
    def from_dict(cls, data: Any) -> Result:
        """API レスポンスから Result を生成する。"""
        if not isinstance(data, dict) or not isinstance(data.get("id"), str):
            raise TelexClientError(
                code=TelexClientErrorCodes.DECODE_ERROR,
                message="Response body is not a JSON object with a string id",
            )
        return cls(id=data["id"])
