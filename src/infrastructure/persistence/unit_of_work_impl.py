"""SQLAlchemy implementation of IUnitOfWork."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.candidate_repository import CandidateRepository
from src.domain.repositories.vote_record_repository import VoteRecordRepository
from src.domain.services.interfaces.unit_of_work import IUnitOfWork
from src.infrastructure.exceptions import DatabaseError
from src.infrastructure.persistence.candidate_repository_impl import (
    CandidateRepositoryImpl,
)
from src.infrastructure.persistence.sqlalchemy_session_adapter import (
    SQLAlchemySessionAdapter,
)
from src.infrastructure.persistence.vote_record_repository_impl import (
    VoteRecordRepositoryImpl,
)


logger = logging.getLogger(__name__)


class UnitOfWorkImpl(IUnitOfWork):
    """1つのAsyncSessionを2つのリポジトリで共有するUnit of Work."""

    def __init__(self, session: AsyncSession):
        self._session = SQLAlchemySessionAdapter(session)
        self._candidate_repository = CandidateRepositoryImpl(self._session)
        self._vote_record_repository = VoteRecordRepositoryImpl(self._session)

    @property
    def candidate_repository(self) -> CandidateRepository:
        return self._candidate_repository

    @property
    def vote_record_repository(self) -> VoteRecordRepository:
        return self._vote_record_repository

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error committing transaction: {e}")
            raise DatabaseError(
                "Failed to commit transaction", {"error": str(e)}
            ) from e

    async def rollback(self) -> None:
        await self._session.rollback()
