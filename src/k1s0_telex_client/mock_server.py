"""テスト用 Telex モックサーバー

実際の HTTP サーバー（ThreadingHTTPServer）をデーモンスレッドで起動し、
/producer/messages と /producer/messages/<id>/followups に対して
expect_notify / expect_followup で登録したレスポンスを順に返す。

    with MockTelexServer() as server:
        server.expect_notify(None)
        client = new(server.url)
        client.notify(notification)
        assert server.wait(1.0)
"""

from __future__ import annotations

import json
import threading
import time
import uuid
from collections import deque
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import structlog

from .http_client import MESSAGES_PATH
from .mock_client import ErrorReporter

logger = structlog.stdlib.get_logger(__name__)

# 転送せずに送り直すヘッダー
_SKIPPED_HEADERS = {"content-length", "transfer-encoding", "connection"}


def generate_response(id: uuid.UUID | str, status_code: int = 0) -> httpx.Response:
    """{"id": id} を返す定型レスポンスを生成する。status_code 0 は 201 とみなす。"""
    if status_code == 0:
        status_code = httpx.codes.CREATED
    return httpx.Response(status_code, json={"id": str(id)})


class MockTelexServer:
    """Telex の notify / followup を模倣するモックサーバー。

    レスポンスキューはハンドラースレッドとテストスレッドの双方から
    操作されるため、すべての読み書きをロックで保護する。
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 0) -> None:
        self._lock = threading.Lock()
        self._notify_responses: deque[httpx.Response | None] = deque()
        self._followup_responses: deque[httpx.Response | None] = deque()
        self._server = ThreadingHTTPServer((host, port), self._make_handler())
        self._server.daemon_threads = True
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    def close(self) -> None:
        self._server.shutdown()
        self._server.server_close()
        self._thread.join()

    def __enter__(self) -> MockTelexServer:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def expect_notify(self, *responses: httpx.Response | None) -> None:
        """notify に返すレスポンスを登録する。

        引数なし、または None を渡すとランダムな ID と 201 を返す。
        """
        with self._lock:
            self._notify_responses.extend(responses or (None,))

    def expect_followup(self, *responses: httpx.Response | None) -> None:
        """followup に返すレスポンスを登録する。

        引数なし、または None を渡すとランダムな ID と 201 を返す。
        """
        with self._lock:
            self._followup_responses.extend(responses or (None,))

    def pending(self) -> tuple[int, int]:
        """未消費の (notify, followup) レスポンス数を返す。"""
        with self._lock:
            return len(self._notify_responses), len(self._followup_responses)

    def wait(self, timeout: float) -> bool:
        """最大 timeout 秒、全レスポンスが消費されるのを待つ。

        timeout / 20 間隔でキュー長を確認し、両方が空になれば True、
        先にタイムアウトした場合は False を返す。負の timeout は 0 とみなす。
        """
        timeout = max(timeout, 0.0)
        deadline = time.monotonic() + timeout
        interval = timeout / 20
        while True:
            if self.pending() == (0, 0):
                return True
            time.sleep(interval)
            if time.monotonic() >= deadline:
                return False

    def expect_done(self, reporter: ErrorReporter, timeout: float = 0.0) -> None:
        """timeout 秒待っても残っている期待値を reporter に報告する。"""
        if self.wait(timeout):
            return
        notify_left, followup_left = self.pending()
        if notify_left:
            reporter(f"{notify_left} Notify expectations left")
        if followup_left:
            reporter(f"{followup_left} Followup expectations left")

    def _dequeue(self, queue: deque[httpx.Response | None]) -> tuple[bool, httpx.Response | None]:
        with self._lock:
            if not queue:
                return False, None
            return True, queue.popleft()

    def _make_handler(self) -> type[BaseHTTPRequestHandler]:
        server = self

        class _Handler(BaseHTTPRequestHandler):
            def _write(
                self,
                status: int,
                body: bytes = b"",
                headers: list[tuple[str, str]] | None = None,
            ) -> None:
                self.send_response(int(status))
                for key, value in headers or []:
                    if key.lower() not in _SKIPPED_HEADERS:
                        self.send_header(key, value)
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                if body:
                    self.wfile.write(body)

            def _error(self, status: int, message: str) -> None:
                self._write(
                    status,
                    f"{message}\n".encode(),
                    [("Content-Type", "text/plain; charset=utf-8")],
                )

            def _respond(self, resp: httpx.Response | None) -> None:
                if resp is None:
                    body = json.dumps({"id": str(uuid.uuid4())}).encode()
                    self._write(
                        httpx.codes.CREATED,
                        body,
                        [("Content-Type", "application/json")],
                    )
                    return
                if isinstance(resp.stream, httpx.ByteStream):
                    # content は Content-Encoding 復号後のため、元のバイト列を送る
                    raw = b"".join(resp.stream)
                    self._write(resp.status_code, raw, resp.headers.multi_items())
                    return
                headers = [
                    (k, v) for k, v in resp.headers.multi_items() if k.lower() != "content-encoding"
                ]
                self._write(resp.status_code, resp.content, headers)

            def _read_json(self) -> object:
                length = int(self.headers.get("Content-Length") or 0)
                return json.loads(self.rfile.read(length) or b"null")

            def _handle_notify(self) -> None:
                try:
                    self._read_json()
                except ValueError as e:
                    self._error(500, str(e))
                    return
                found, resp = server._dequeue(server._notify_responses)
                if not found:
                    self._error(500, "No Notify Response Expectations")
                    return
                self._respond(resp)

            def _handle_followup(self) -> None:
                try:
                    payload = self._read_json()
                except ValueError as e:
                    self._error(500, str(e))
                    return
                if not isinstance(payload, dict) or not payload.get("body"):
                    self._write(400)
                    return
                found, resp = server._dequeue(server._followup_responses)
                if not found:
                    self._error(500, "No Followup Response Expectations")
                    return
                self._respond(resp)

            def do_POST(self) -> None:
                path = self.path.split("?", 1)[0]
                if path == MESSAGES_PATH:
                    self._handle_notify()
                elif path.startswith(MESSAGES_PATH + "/") and path.endswith("/followups"):
                    self._handle_followup()
                else:
                    self._error(500, f"Unexpected path: {path}")

            def _unexpected_method(self) -> None:
                self._error(500, f"Unexpected Method: {self.command}")

            do_GET = do_PUT = do_PATCH = do_DELETE = _unexpected_method

            def log_message(self, format: str, *args: object) -> None:
                logger.debug("mock telex request", message=format % args)

        return _Handler
