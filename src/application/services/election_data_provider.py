"""選挙データスナップショットの保持サービス.

現在のスナップショットとそのバージョンを保持し、データソースの
バージョンが変わったときだけ再読み込みする。差し替えはロック下で
スナップショット全体を一度に行うため、読み手が古い名簿と新しい
台帳を組み合わせて見ることはない。
"""

import asyncio

from src.application.services.election_data_loader import ElectionDataLoader
from src.common.logging import get_logger
from src.domain.exceptions import DataUnavailableException
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot


logger = get_logger(__name__)


class ElectionDataProvider:
    """スナップショットの所有者."""

    def __init__(self, loader: ElectionDataLoader) -> None:
        self._loader = loader
        self._snapshot: ElectionDataSnapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def current_snapshot(self) -> ElectionDataSnapshot | None:
        """保持中のスナップショット（未ロードならNone）."""
        return self._snapshot

    async def get_snapshot(self) -> ElectionDataSnapshot:
        """最新のスナップショットを返す.

        保持中のスナップショットを供給したソースにバージョンを問い合わせ、
        変わっていれば再読み込みする。

        Raises:
            DataUnavailableException: 一度もデータを読み込めていない場合
        """
        async with self._lock:
            if self._snapshot is not None and not await self._is_stale(
                self._snapshot
            ):
                return self._snapshot
            return await self._reload()

    async def refresh(self) -> ElectionDataSnapshot:
        """バージョンに関係なく再読み込みする."""
        async with self._lock:
            return await self._reload()

    async def _is_stale(self, snapshot: ElectionDataSnapshot) -> bool:
        source = self._loader.get_source(snapshot.source_name)
        if source is None:
            return True
        try:
            version = await source.get_version()
        except Exception as e:
            logger.warning(
                "データバージョンの取得に失敗しました",
                source=source.name,
                error=str(e),
            )
            return True
        return version != snapshot.version

    async def _reload(self) -> ElectionDataSnapshot:
        result = await self._loader.load()
        if result.snapshot is not None:
            previous = self._snapshot
            self._snapshot = result.snapshot
            if previous is not None and previous.version != result.snapshot.version:
                logger.info(
                    "スナップショットを差し替えました",
                    previous_version=previous.version,
                    version=result.snapshot.version,
                )
            return result.snapshot

        if self._snapshot is not None:
            logger.warning(
                "再読み込みに失敗したため前回のスナップショットを使います",
                version=self._snapshot.version,
                errors=result.errors,
            )
            return self._snapshot

        raise DataUnavailableException(
            "選挙データを読み込めるデータソースがありません",
            {"errors": result.errors},
        )
