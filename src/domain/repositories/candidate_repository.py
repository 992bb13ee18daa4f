"""候補者リポジトリのインターフェース."""

from abc import abstractmethod

from src.domain.entities.candidate import Candidate
from src.domain.repositories.base import BaseRepository


class CandidateRepository(BaseRepository[Candidate]):
    """候補者名簿のリポジトリインターフェース.

    書き込みメソッドはコミットしない。確定はIUnitOfWorkで行う。
    """

    @abstractmethod
    async def get_by_id(self, candidate_id: int) -> Candidate | None:
        """投票番号で候補者を取得.

        Args:
            candidate_id: 投票番号

        Returns:
            候補者エンティティ。存在しない場合はNone
        """
        pass

    @abstractmethod
    async def bulk_create(self, candidates: list[Candidate]) -> int:
        """候補者を一括登録.

        Args:
            candidates: 候補者エンティティのリスト

        Returns:
            登録件数
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """全候補者を削除.

        Returns:
            削除件数
        """
        pass
