"""Session adapter port for repositories.

リポジトリ実装がSQLAlchemyのセッションに直接依存しないための
ドメイン側インターフェース。
"""

from abc import ABC, abstractmethod
from typing import Any


class ISessionAdapter(ABC):
    """データベースセッションのインターフェース."""

    @abstractmethod
    async def execute(
        self,
        statement: Any,
        params: dict[str, Any] | list[dict[str, Any]] | None = None,
    ) -> Any:
        """Execute a statement."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the session."""
        pass
