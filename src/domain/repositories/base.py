"""Base repository interface for domain layer."""

from abc import ABC, abstractmethod

from src.domain.entities.base import BaseEntity


class BaseRepository[T: BaseEntity](ABC):
    """リポジトリの共通インターフェース."""

    @abstractmethod
    async def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[T]:
        """全件を取得する."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """件数を取得する."""
        pass
