"""テスト用 TelexClient モック実装"""

from __future__ import annotations

import threading
import uuid
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from .client import TelexClient
from .exceptions import TelexClientError, TelexClientErrorCodes
from .models import Notification, Result

# エラー報告先。pytest.fail や list.append などを渡す。
ErrorReporter = Callable[[str], object]


@dataclass(frozen=True)
class _Expectation:
    result: Result = Result(id="")
    error: BaseException | None = None


class MockTelexClient(TelexClient):
    """HTTP を使わずに TelexClient を満たすモック。

    notify_and_expect_... / followup_and_expect_... で期待する呼び出しと
    その結果を FIFO で登録する。登録が尽きた状態で呼ばれた場合は reporter に
    報告し NO_MORE_EXPECTATIONS を送出する。
    """

    def __init__(self, reporter: ErrorReporter) -> None:
        self._reporter = reporter
        self._notify_expectations: deque[_Expectation] = deque()
        self._followup_expectations: deque[_Expectation] = deque()
        self._lock = threading.Lock()

    def _next(self, queue: deque[_Expectation], name: str) -> Result:
        with self._lock:
            if not queue:
                expectation = None
            else:
                expectation = queue.popleft()
        if expectation is None:
            self._reporter(f"no more {name} expectations")
            raise TelexClientError(
                code=TelexClientErrorCodes.NO_MORE_EXPECTATIONS,
                message="no more expectations",
            )
        if expectation.error is not None:
            raise expectation.error
        return expectation.result

    def notify(self, notification: Notification) -> Result:
        """登録済みの notify 期待値を一つ消費して返す。"""
        return self._next(self._notify_expectations, "notify")

    def followup(self, id: str, body: str) -> Result:
        """登録済みの followup 期待値を一つ消費して返す。"""
        return self._next(self._followup_expectations, "followup")

    def _expect_success(self, queue: deque[_Expectation]) -> str:
        result = Result(id=str(uuid.uuid4()))
        with self._lock:
            queue.append(_Expectation(result=result))
        return result.id

    def _expect_failure(self, queue: deque[_Expectation], error: BaseException) -> None:
        with self._lock:
            queue.append(_Expectation(error=error))

    def notify_and_expect_success(self) -> str:
        """notify が成功する期待値を登録し、返される ID を返す。"""
        return self._expect_success(self._notify_expectations)

    def notify_and_expect_failure(self, error: BaseException) -> None:
        """notify が error を送出する期待値を登録する。"""
        self._expect_failure(self._notify_expectations, error)

    def followup_and_expect_success(self) -> str:
        """followup が成功する期待値を登録し、返される ID を返す。"""
        return self._expect_success(self._followup_expectations)

    def followup_and_expect_failure(self, error: BaseException) -> None:
        """followup が error を送出する期待値を登録する。"""
        self._expect_failure(self._followup_expectations, error)

    def expect_done(self) -> None:
        """未消費の期待値が残っていれば reporter に報告する。"""
        with self._lock:
            notify_left = len(self._notify_expectations)
            followup_left = len(self._followup_expectations)
        if notify_left:
            self._reporter(f"{notify_left} Notify expectations left")
        if followup_left:
            self._reporter(f"{followup_left} Followup expectations left")
