"""Logging bootstrap."""

from __future__ import annotations

import logging

from habitflow.core.config import get_log_level


def configure_logging(level: str | None = None) -> None:
    # 日本語: ルートロガーを一度だけ構成 / English: Configure the root logger once per process
    logging.basicConfig(
        level=getattr(logging, (level or get_log_level()).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
