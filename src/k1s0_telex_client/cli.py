"""telex コマンドラインツール

標準入力を本文として通知を作成する、または --followup でフォローアップを追加する。
"""

from __future__ import annotations

import argparse
import sys

from .config import TelexConfig
from .exceptions import TelexClientError
from .http_client import HttpTelexClient
from .logger import new_logger
from .models import Notification, Target, TargetType


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="telex",
        usage="%(prog)s [flags] <telex URL>",
        description="Post a notification or followup to Telex. The body is read from stdin.",
    )
    parser.add_argument("url", nargs="?", default=None, help="Telex URL (default: $TELEX_URL)")
    # 単一ダッシュ (-target) と二重ダッシュ (--target) の両方を受け付ける
    parser.add_argument("-target", "--target", dest="target", default="", help="Target UUID")
    parser.add_argument(
        "-followup",
        "--followup",
        dest="followup",
        default="",
        help="ID of the notification to follow up",
    )
    parser.add_argument(
        "-type",
        "--type",
        dest="type",
        default="",
        choices=["", *(t.value for t in TargetType)],
        help="Target Type (app, user, email, dashboard)",
    )
    parser.add_argument(
        "-title", "--title", dest="title", default="Default Title", help="Title"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.followup and (not args.target or not args.type):
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = TelexConfig.from_env(base_url=args.url)
    except TelexClientError as e:
        print(f"invalid telex configuration: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    log = new_logger(level=config.log_level, format=config.log_format)
    body = sys.stdin.read()

    try:
        with HttpTelexClient(config) as client:
            if args.followup:
                res = client.followup(args.followup, body)
                print(f"Posted followup message to {args.followup!r}. ID={res.id!r}")
            else:
                notification = Notification(
                    title=args.title,
                    body=body,
                    target=Target(type=TargetType(args.type), id=args.target),
                )
                res = client.notify(notification)
                print(f"Posted message. ID={res.id!r}")
    except TelexClientError as e:
        log.error("telex request failed", code=e.code)
        print(f"received the following error: {e}", file=sys.stderr)
        return 1
    return 0
