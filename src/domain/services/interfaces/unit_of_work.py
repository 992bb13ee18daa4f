"""Unit of Work interface for transaction management.

候補者名簿と得票台帳の置き換えを1つのトランザクションで行うための
抽象。リポジトリの書き込みメソッドはコミットしないため、確定は
commit()、破棄はrollback()で呼び出し側が明示的に行う。
"""

from abc import ABC, abstractmethod

from src.domain.repositories.candidate_repository import CandidateRepository
from src.domain.repositories.vote_record_repository import VoteRecordRepository


class IUnitOfWork(ABC):
    """Unit of Work interface for transaction management.

    同じUnit of Workから取得したリポジトリは同一トランザクションを共有する。
    """

    @property
    @abstractmethod
    def candidate_repository(self) -> CandidateRepository:
        """Get the candidate repository for this unit of work."""
        pass

    @property
    @abstractmethod
    def vote_record_repository(self) -> VoteRecordRepository:
        """Get the vote record repository for this unit of work."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass
