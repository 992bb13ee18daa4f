"""ドメイン層の例外定義.

候補者が見つからない、区分に得票がない等の業務上想定内の結果は
例外にしない。ここで定義するのはデータを用意できない場合の例外のみ。
"""

from typing import Any


class DomainException(Exception):
    """ドメイン層の例外の基底クラス."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class DataSourceException(DomainException):
    """データソースからの読み込みに失敗した."""

    def __init__(
        self, source_name: str, message: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, {"source": source_name, **(details or {})})
        self.source_name = source_name


class DataUnavailableException(DomainException):
    """どのデータソースからもスナップショットを用意できなかった."""
