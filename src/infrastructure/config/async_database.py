"""Async database configuration and session management."""

import asyncio

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import ClassVar

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.infrastructure.config.settings import get_settings


def to_async_url(database_url: str) -> str:
    """同期ドライバのURLを非同期ドライバのURLに変換する.

    postgresql:// → postgresql+asyncpg://
    sqlite:// → sqlite+aiosqlite://
    """
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


class AsyncDatabase:
    """Async database manager.

    イベントループごとにエンジンを管理することで、CLIやテストなど
    異なるイベントループで実行される環境でも安全に動作する。
    """

    # イベントループごとのエンジンをキャッシュ
    _engines: ClassVar[dict[tuple[str, int], AsyncEngine]] = {}
    _session_makers: ClassVar[
        dict[tuple[str, int], async_sessionmaker[AsyncSession]]
    ] = {}

    def __init__(self, database_url: str | None = None):
        """Initialize async database manager."""
        self._async_url = to_async_url(
            database_url or get_settings().get_database_url()
        )

    @property
    def url(self) -> str:
        return self._async_url

    def _get_engine_and_session_maker(
        self,
    ) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        """現在のイベントループに対応するエンジンとセッションメーカーを取得する."""
        try:
            loop = asyncio.get_running_loop()
            loop_id = id(loop)
        except RuntimeError:
            # イベントループが存在しない場合は0をIDとして使用
            loop_id = 0

        key = (self._async_url, loop_id)
        if key not in self._engines:
            engine = create_async_engine(self._async_url, echo=False)
            session_maker = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
            self._engines[key] = engine
            self._session_makers[key] = session_maker

        return self._engines[key], self._session_makers[key]

    @property
    def engine(self) -> AsyncEngine:
        """現在のイベントループに対応するエンジンを取得する."""
        engine, _ = self._get_engine_and_session_maker()
        return engine

    @property
    def async_session_maker(self) -> async_sessionmaker[AsyncSession]:
        """現在のイベントループに対応するセッションメーカーを取得する."""
        _, session_maker = self._get_engine_and_session_maker()
        return session_maker

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession]:
        """Get an async database session.

        Yields:
            AsyncSession: Database session
        """
        async with self.async_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dispose(self) -> None:
        """現在のイベントループのエンジンを破棄する."""
        try:
            loop_id = id(asyncio.get_running_loop())
        except RuntimeError:
            loop_id = 0
        key = (self._async_url, loop_id)
        engine = self._engines.pop(key, None)
        self._session_makers.pop(key, None)
        if engine is not None:
            await engine.dispose()


@asynccontextmanager
async def get_async_session(
    database_url: str | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Get an async database session.

    Yields:
        AsyncSession: Database session
    """
    async with AsyncDatabase(database_url).get_session() as session:
        yield session
