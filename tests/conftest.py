"""共通フィクスチャ"""

import logging
from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """new_logger がテスト毎のキャプチャストリームを掴んだまま残らないようにする。"""
    yield
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)
    structlog.reset_defaults()
