"""データベース選挙データソースの実装 (Infrastructure layer).

candidates / vote_recordsテーブルからスナップショットを作る。
"""

import logging

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.exceptions import DataSourceException
from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot
from src.infrastructure.exceptions import DatabaseError
from src.infrastructure.persistence.candidate_repository_impl import (
    CandidateRepositoryImpl,
)
from src.infrastructure.persistence.vote_record_repository_impl import (
    VoteRecordRepositoryImpl,
)


logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class DatabaseElectionDataSource:
    """データベースからの選挙データソース実装.

    呼び出しごとにセッションを開き、候補者と得票レコードの
    リポジトリを組み合わせて読み込む。
    """

    name = "database"

    def __init__(self, session_factory: SessionFactory):
        """初期化する.

        Args:
            session_factory: AsyncSessionを返す非同期コンテキストマネージャの生成関数
        """
        self._session_factory = session_factory

    async def get_version(self) -> str:
        """両テーブルの件数と最大IDからバージョン文字列を作る."""
        try:
            async with self._session_factory() as session:
                candidate_count = await CandidateRepositoryImpl(session).count()
                votes_version = await VoteRecordRepositoryImpl(
                    session
                ).get_data_version()
        except (DatabaseError, SQLAlchemyError) as e:
            raise DataSourceException(
                self.name, f"Failed to get data version: {e}"
            ) from e
        return f"db:cand:{candidate_count}|{votes_version}"

    async def load(self) -> ElectionDataSnapshot:
        """テーブルを読み込んでスナップショットを返す.

        Raises:
            DataSourceException: 読み込みに失敗した、または候補者が0件の場合
        """
        version = await self.get_version()
        try:
            async with self._session_factory() as session:
                candidates = await CandidateRepositoryImpl(session).get_all()
                records = await VoteRecordRepositoryImpl(session).get_all()
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Failed to load election data from database: {e}")
            raise DataSourceException(
                self.name, f"Failed to load election data: {e}"
            ) from e

        if not candidates:
            raise DataSourceException(self.name, "No candidates in database")

        logger.info(
            "Loaded %d candidates and %d vote records from database",
            len(candidates),
            len(records),
        )
        return ElectionDataSnapshot(
            version=version,
            directory=CandidateDirectory(candidates),
            vote_records=tuple(records),
            source_name=self.name,
        )
