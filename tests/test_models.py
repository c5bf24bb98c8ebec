"""Notification / Result モデルのユニットテスト"""

import pytest
from k1s0_telex_client.exceptions import TelexClientError, TelexClientErrorCodes
from k1s0_telex_client.models import Action, Notification, Result, Target, TargetType

VALID_ID = "84838298-989d-4409-b148-6abef06df43f"


def make_notification(target_id: str = VALID_ID, target_type: TargetType | str = TargetType.APP):
    return Notification(
        title="Your DB is on fire!",
        body="...",
        target=Target(type=target_type, id=target_id),
        action=Action(label="View Invoice", url="https://view.your.invoice/yolo"),
    )


@pytest.mark.parametrize(
    ("target_id", "target_type", "code"),
    [
        ("", TargetType.APP, TelexClientErrorCodes.MISSING_TARGET_ID),
        ("", "", TelexClientErrorCodes.MISSING_TARGET_ID),
        ("abc", TargetType.APP, TelexClientErrorCodes.INVALID_TARGET_ID),
        ("abc", "", TelexClientErrorCodes.INVALID_TARGET_ID),
        (VALID_ID, "", TelexClientErrorCodes.MISSING_TARGET_TYPE),
        (VALID_ID, "team", TelexClientErrorCodes.UNKNOWN_TARGET_TYPE),
    ],
)
def test_validate_errors(target_id: str, target_type: str, code: str) -> None:
    """検証エラーが ID 有無 → ID 形式 → 種別有無 → 種別値 の順で選ばれること。"""
    with pytest.raises(TelexClientError) as exc_info:
        make_notification(target_id, target_type).validate()
    assert exc_info.value.code == code


@pytest.mark.parametrize("target_type", list(TargetType))
def test_validate_known_types(target_type: TargetType) -> None:
    """既知の種別と正しい UUID なら検証を通ること。"""
    make_notification(target_type=target_type).validate()


def test_validate_accepts_plain_string_type() -> None:
    """種別を文字列で指定しても既知の値なら検証を通ること。"""
    make_notification(target_type="dashboard").validate()


def test_unknown_type_message_contains_type() -> None:
    with pytest.raises(TelexClientError, match="team"):
        make_notification(target_type="team").validate()


def test_to_dict_wire_format() -> None:
    """ワイヤ形式の JSON オブジェクトになること。"""
    data = make_notification(target_type=TargetType.EMAIL).to_dict()
    assert data == {
        "title": "Your DB is on fire!",
        "body": "...",
        "target": {"type": "email", "id": VALID_ID},
        "action": {"label": "View Invoice", "url": "https://view.your.invoice/yolo"},
    }


def test_to_dict_without_action() -> None:
    """action 未指定時は空文字列の action を送ること。"""
    n = Notification(title="t", body="b", target=Target(type=TargetType.USER, id=VALID_ID))
    assert n.to_dict()["action"] == {"label": "", "url": ""}


@pytest.mark.parametrize("target_type", list(TargetType))
def test_round_trip(target_type: TargetType) -> None:
    """受信側で復元した通知が全フィールド一致すること。"""
    original = make_notification(target_type=target_type)
    restored = Notification.from_dict(original.to_dict())
    assert restored == original
    assert isinstance(restored.target.type, TargetType)


def test_from_dict_empty_action_is_none() -> None:
    n = Notification.from_dict(
        {"title": "t", "body": "b", "target": {"type": "app", "id": VALID_ID},
         "action": {"label": "", "url": ""}}
    )
    assert n.action is None


def test_notification_is_immutable() -> None:
    n = make_notification()
    with pytest.raises(AttributeError):
        n.title = "changed"  # type: ignore[misc]


class TestResult:
    def test_from_dict(self) -> None:
        assert Result.from_dict({"id": "abc"}) == Result(id="abc")

    @pytest.mark.parametrize("data", [None, [], "abc", {}, {"id": 1}])
    def test_from_dict_invalid_shape(self, data: object) -> None:
        """想定外の形のレスポンスは DECODE_ERROR になること。"""
        with pytest.raises(TelexClientError) as exc_info:
            Result.from_dict(data)
        assert exc_info.value.code == TelexClientErrorCodes.DECODE_ERROR
