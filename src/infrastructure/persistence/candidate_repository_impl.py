"""Candidate repository implementation using SQLAlchemy."""

import logging

from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.candidate import Candidate
from src.domain.repositories.candidate_repository import CandidateRepository
from src.domain.repositories.session_adapter import ISessionAdapter
from src.infrastructure.exceptions import DatabaseError
from src.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class CandidateModel(PydanticBaseModel):
    """candidatesテーブルの行モデル."""

    __tablename__ = "candidates"

    id: int
    display_name: str
    ballot_name: str | None = None
    party_code: str | None = None
    outcome_label: str | None = None
    total_votes: int | None = 0


class CandidateRepositoryImpl(BaseRepositoryImpl[Candidate], CandidateRepository):
    """Implementation of CandidateRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession | ISessionAdapter):
        super().__init__(session, CandidateModel)

    def _dict_to_entity(self, data: dict[str, Any]) -> Candidate:
        model = CandidateModel.model_validate(data)
        return self._to_entity(model)

    def _to_entity(self, model: CandidateModel) -> Candidate:
        """Convert database model to domain entity."""
        return Candidate(
            id=model.id,
            display_name=model.display_name,
            ballot_name=model.ballot_name or "",
            party_code=model.party_code or "",
            outcome_label=model.outcome_label or "",
            total_votes=model.total_votes or 0,
        )

    def _to_row(self, entity: Candidate) -> dict[str, Any]:
        """Convert domain entity to insert parameters."""
        return {
            "id": entity.id,
            "display_name": entity.display_name,
            "ballot_name": entity.ballot_name,
            "party_code": entity.party_code,
            "outcome_label": entity.outcome_label,
            "total_votes": entity.total_votes,
        }

    async def get_by_id(self, candidate_id: int) -> Candidate | None:
        """投票番号で候補者を取得."""
        try:
            query = text("SELECT * FROM candidates WHERE id = :id")
            result = await self.session.execute(query, {"id": candidate_id})
            row = result.fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Database error getting candidate by id: {e}")
            raise DatabaseError(
                "Failed to get candidate by id",
                {"candidate_id": candidate_id, "error": str(e)},
            ) from e
        if row is None:
            return None
        return self._dict_to_entity(self._row_to_dict(row))

    async def bulk_create(self, candidates: list[Candidate]) -> int:
        """候補者を一括登録."""
        query = """
            INSERT INTO candidates (
                id, display_name, ballot_name, party_code, outcome_label, total_votes
            )
            VALUES (
                :id, :display_name, :ballot_name, :party_code, :outcome_label,
                :total_votes
            )
        """
        inserted = await self._bulk_insert(query, [self._to_row(c) for c in candidates])
        logger.info(f"Inserted {inserted} candidates")
        return inserted
