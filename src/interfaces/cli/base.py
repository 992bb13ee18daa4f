"""CLIコマンドの共通基盤."""

import functools
import sys

from collections.abc import Callable
from typing import Any, NoReturn

import click

from src.common.logging import get_logger
from src.domain.exceptions import DomainException
from src.infrastructure.exceptions import InfrastructureError


logger = get_logger(__name__)


class BaseCommand:
    """CLIコマンドの出力ヘルパー."""

    @staticmethod
    def echo_success(message: str) -> None:
        click.echo(f"✓ {message}")

    @staticmethod
    def show_progress(message: str) -> None:
        click.echo(f"... {message}", err=True)

    @staticmethod
    def error(message: str, exit_code: int = 1) -> NoReturn:
        """エラーメッセージを出力して終了する."""
        click.echo(f"✗ {message}", err=True)
        sys.exit(exit_code)


def with_error_handling(func: Callable[..., Any]) -> Callable[..., Any]:
    """コマンド実行中の例外をエラーメッセージと終了コードに変換する.

    clickの例外（--help、Abort等）はそのまま通す。
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except (DomainException, InfrastructureError) as e:
            logger.error("コマンドの実行に失敗しました", error=str(e))
            BaseCommand.error(str(e))
        except Exception as e:
            logger.error("予期しないエラーが発生しました", error=str(e), exc_info=True)
            BaseCommand.error(f"予期しないエラー: {e}")

    return wrapper
