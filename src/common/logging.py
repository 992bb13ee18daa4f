"""構造化ログの設定.

structlogを標準loggingの上に構成し、アプリケーション全体で
``get_logger`` を通じて同じ形式のログを出力する。
"""

import logging
import sys

from typing import Any

import structlog


_configured = False


def _configure_structlog(json_format: bool) -> None:
    global _configured

    renderer: Any = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """structlogと標準loggingを初期化する.

    CLIなどのエントリーポイントから一度だけ呼び出す。

    Args:
        level: ログレベル名（DEBUG, INFO, WARNING, ...）
        json_format: TrueのときJSON形式、Falseのときコンソール形式で出力
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )
    _configure_structlog(json_format)


def get_logger(name: str | None = None) -> Any:
    """構造化ロガーを取得する."""
    if not _configured:
        _configure_structlog(json_format=False)
    return structlog.get_logger(name)
