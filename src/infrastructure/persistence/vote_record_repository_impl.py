"""Vote record repository implementation using SQLAlchemy."""

import logging

from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.session_adapter import ISessionAdapter
from src.domain.repositories.vote_record_repository import VoteRecordRepository
from src.domain.services.name_normalizer import NameNormalizer
from src.domain.value_objects.vote_record import VoteRecord
from src.infrastructure.exceptions import DatabaseError
from src.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class VoteRecordModel(PydanticBaseModel):
    """vote_recordsテーブルの行モデル."""

    __tablename__ = "vote_records"

    id: int | None = None
    candidate_name: str
    normalized_name: str | None = None
    zone: str | None = None
    section: str | None = None
    neighborhood: str | None = None
    polling_place: str | None = None
    vote_count: int | None = 0


class VoteRecordRepositoryImpl(BaseRepositoryImpl[VoteRecord], VoteRecordRepository):
    """Implementation of VoteRecordRepository using SQLAlchemy.

    normalized_name列は登録時に計算して保存し、候補者ごとの絞り込みに使う。
    """

    def __init__(self, session: AsyncSession | ISessionAdapter):
        super().__init__(session, VoteRecordModel)

    def _dict_to_entity(self, data: dict[str, Any]) -> VoteRecord:
        model = VoteRecordModel.model_validate(data)
        return VoteRecord(
            candidate_name=model.candidate_name,
            zone=model.zone or "",
            section=model.section or "",
            neighborhood=model.neighborhood or "",
            polling_place=model.polling_place or "",
            vote_count=model.vote_count or 0,
        )

    def _to_row(self, record: VoteRecord) -> dict[str, Any]:
        return {
            "candidate_name": record.candidate_name,
            "normalized_name": NameNormalizer.normalize(record.candidate_name),
            "zone": record.zone,
            "section": record.section,
            "neighborhood": record.neighborhood,
            "polling_place": record.polling_place,
            "vote_count": record.vote_count,
        }

    async def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[VoteRecord]:
        """全レコードを登録順で取得."""
        return await super().get_all(limit, offset)

    async def get_by_normalized_name(self, normalized_name: str) -> list[VoteRecord]:
        """正規化済み候補者名に一致するレコードを取得."""
        try:
            return await self._fetch_entities(
                """
                SELECT * FROM vote_records
                WHERE normalized_name = :normalized_name
                ORDER BY id ASC
                """,
                {"normalized_name": normalized_name},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting vote records by name: {e}")
            raise DatabaseError(
                "Failed to get vote records by name",
                {"normalized_name": normalized_name, "error": str(e)},
            ) from e

    async def get_data_version(self) -> str:
        """件数と最大IDからバージョン文字列を作る.

        Returns:
            "votes:<件数>:<最大ID>" 形式の文字列
        """
        try:
            result = await self.session.execute(
                text("SELECT COUNT(*) AS total, MAX(id) AS last_id FROM vote_records")
            )
            row = result.fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Database error getting vote data version: {e}")
            raise DatabaseError(
                "Failed to get vote data version", {"error": str(e)}
            ) from e
        if row is None:
            return "votes:0:0"
        data = self._row_to_dict(row)
        return f"votes:{data.get('total') or 0}:{data.get('last_id') or 0}"

    async def bulk_create(self, records: list[VoteRecord]) -> int:
        """レコードを一括登録."""
        query = """
            INSERT INTO vote_records (
                candidate_name, normalized_name, zone, section, neighborhood,
                polling_place, vote_count
            )
            VALUES (
                :candidate_name, :normalized_name, :zone, :section, :neighborhood,
                :polling_place, :vote_count
            )
        """
        inserted = await self._bulk_insert(query, [self._to_row(r) for r in records])
        logger.info(f"Inserted {inserted} vote records")
        return inserted
