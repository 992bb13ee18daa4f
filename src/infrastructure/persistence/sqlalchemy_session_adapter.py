"""AsyncSessionをISessionAdapterとして扱うためのアダプター.

取り込み処理のようにリポジトリ間で1つのセッションを共有する場合に、
リポジトリがSQLAlchemyに直接依存しないようこのアダプター経由で渡す。
"""

from typing import Any

from sqlalchemy.engine.result import Result
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.session_adapter import ISessionAdapter


class SQLAlchemySessionAdapter(ISessionAdapter):
    """AsyncSessionのラッパー."""

    def __init__(self, async_session: AsyncSession):
        self._session = async_session

    async def execute(
        self,
        statement: Any,
        params: dict[str, Any] | list[dict[str, Any]] | None = None,
    ) -> Result[Any]:
        """文を実行する.

        paramsにdictのリストを渡した場合はexecutemanyとして実行される。
        """
        if params:
            return await self._session.execute(statement, params)
        return await self._session.execute(statement)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def close(self) -> None:
        await self._session.close()
