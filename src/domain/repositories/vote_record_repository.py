"""得票レコードリポジトリのインターフェース."""

from abc import ABC, abstractmethod

from src.domain.value_objects.vote_record import VoteRecord


class VoteRecordRepository(ABC):
    """得票台帳のリポジトリインターフェース.

    得票レコードは値オブジェクトのため、BaseRepositoryは継承しない。
    書き込みメソッドはコミットしない。確定はIUnitOfWorkで行う。
    """

    @abstractmethod
    async def get_all(self) -> list[VoteRecord]:
        """全レコードを登録順で取得."""
        pass

    @abstractmethod
    async def get_by_normalized_name(self, normalized_name: str) -> list[VoteRecord]:
        """正規化済み候補者名に一致するレコードを取得.

        Args:
            normalized_name: NameNormalizerで正規化した候補者名

        Returns:
            得票レコードのリスト
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """レコード件数を取得."""
        pass

    @abstractmethod
    async def get_data_version(self) -> str:
        """台帳の内容が変わったことを検出するためのバージョン文字列を取得."""
        pass

    @abstractmethod
    async def bulk_create(self, records: list[VoteRecord]) -> int:
        """レコードを一括登録.

        Args:
            records: 得票レコードのリスト

        Returns:
            登録件数
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """全レコードを削除.

        Returns:
            削除件数
        """
        pass
