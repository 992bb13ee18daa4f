"""Base repository implementation for infrastructure layer."""

import logging

from abc import abstractmethod
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.session_adapter import ISessionAdapter
from src.infrastructure.exceptions import DatabaseError


logger = logging.getLogger(__name__)


class BaseRepositoryImpl[T]:
    """text() SQLベースのリポジトリ実装の基底クラス.

    行オブジェクトからdictへの変換、全件取得、件数取得、全件削除など
    テーブル単位の共通処理を提供する。

    Type Parameters:
        T: リポジトリが返すドメインオブジェクトの型

    Attributes:
        session: Database session (AsyncSession or ISessionAdapter)
        model_class: 行の検証に使うPydanticモデル

    Note:
        サブクラスは_dict_to_entity()を実装し、
        model_classに__tablename__がない場合は_table_nameをオーバーライドすること。
    """

    # 全件取得時の並び順（登録順を保つ）
    _order_by: str = "id ASC"

    def __init__(
        self,
        session: AsyncSession | ISessionAdapter,
        model_class: type[Any],
    ):
        self.session = session
        self.model_class = model_class

    @property
    def _table_name(self) -> str:
        """テーブル名を返す."""
        table_name = getattr(self.model_class, "__tablename__", None)
        if isinstance(table_name, str):
            return table_name
        raise NotImplementedError(
            f"{self.__class__.__name__}: model_classに__tablename__がないため、"
            f"_table_nameプロパティをオーバーライドしてください"
        )

    @staticmethod
    def _row_to_dict(row: Any) -> dict[str, Any]:
        """SQLAlchemyの結果行をdictに変換する."""
        if hasattr(row, "_asdict"):
            return row._asdict()  # type: ignore[attr-defined]
        if hasattr(row, "_mapping"):
            return dict(row._mapping)  # type: ignore[attr-defined]
        return dict(row)

    @abstractmethod
    def _dict_to_entity(self, data: dict[str, Any]) -> T:
        """行データをドメインオブジェクトに変換する."""
        ...

    async def _fetch_entities(
        self, query: str, params: dict[str, Any] | None = None
    ) -> list[T]:
        result = await self.session.execute(text(query), params or {})
        rows = result.fetchall()
        return [self._dict_to_entity(self._row_to_dict(row)) for row in rows]

    async def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[T]:
        """Get all rows with optional pagination."""
        sql = f"SELECT * FROM {self._table_name} ORDER BY {self._order_by}"
        params: dict[str, Any] = {}
        if limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params = {"limit": limit, "offset": offset or 0}
        try:
            return await self._fetch_entities(sql, params)
        except SQLAlchemyError as e:
            logger.error(f"Database error getting all rows of {self._table_name}: {e}")
            raise DatabaseError(
                f"Failed to get all rows of {self._table_name}", {"error": str(e)}
            ) from e

    async def count(self) -> int:
        """Count total number of rows."""
        try:
            result = await self.session.execute(
                text(f"SELECT COUNT(*) FROM {self._table_name}")
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error counting {self._table_name}: {e}")
            raise DatabaseError(
                f"Failed to count {self._table_name}", {"error": str(e)}
            ) from e
        count = result.scalar()
        return count if count is not None else 0

    async def _bulk_insert(self, query: str, rows: list[dict[str, Any]]) -> int:
        """複数行を一括登録する. コミットは呼び出し側で行う."""
        if not rows:
            return 0
        try:
            await self.session.execute(text(query), rows)
        except SQLAlchemyError as e:
            logger.error(f"Database error inserting into {self._table_name}: {e}")
            raise DatabaseError(
                f"Failed to insert into {self._table_name}",
                {"rows": len(rows), "error": str(e)},
            ) from e
        return len(rows)

    async def delete_all(self) -> int:
        """Delete every row of the table.

        コミットは呼び出し側（Unit of Work）で行う。
        """
        try:
            result = await self.session.execute(text(f"DELETE FROM {self._table_name}"))
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting {self._table_name}: {e}")
            raise DatabaseError(
                f"Failed to delete {self._table_name}", {"error": str(e)}
            ) from e
        return result.rowcount or 0  # type: ignore[attr-defined]
