"""選挙データのロードサービス.

複数のデータソースを優先順に試し、最初に成功したソースの
スナップショットを返す（例: データベース → CSV）。
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from src.common.logging import get_logger
from src.domain.services.interfaces.election_data_source_service import (
    IElectionDataSourceService,
)
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot


logger = get_logger(__name__)


@dataclass
class LoadResult:
    """ロード結果.

    全ソースが失敗した場合はsnapshot=Noneで、errorsに各ソースの失敗理由が入る。
    """

    snapshot: ElectionDataSnapshot | None = None
    source_name: str | None = None
    errors: list[str] = field(default_factory=lambda: list[str]())

    @property
    def succeeded(self) -> bool:
        return self.snapshot is not None


class ElectionDataLoader:
    """フォールバック付きの選挙データローダー."""

    def __init__(self, sources: Sequence[IElectionDataSourceService]) -> None:
        if not sources:
            raise ValueError("データソースを1つ以上指定してください")
        self._sources = list(sources)

    @property
    def sources(self) -> list[IElectionDataSourceService]:
        return list(self._sources)

    def get_source(self, name: str) -> IElectionDataSourceService | None:
        """名前でデータソースを取得する."""
        for source in self._sources:
            if source.name == name:
                return source
        return None

    async def load(self) -> LoadResult:
        """優先順にデータソースを試してスナップショットを読み込む.

        ソースの失敗は例外にせず、LoadResult.errorsに記録する。
        """
        errors: list[str] = []
        for source in self._sources:
            try:
                snapshot = await source.load()
            except Exception as e:
                logger.warning(
                    "データソースの読み込みに失敗しました",
                    source=source.name,
                    error=str(e),
                )
                errors.append(f"{source.name}: {e}")
                continue

            self._report_data_quality(snapshot)
            logger.info(
                "選挙データを読み込みました",
                source=source.name,
                version=snapshot.version,
                candidates=snapshot.candidate_count,
                vote_records=snapshot.vote_record_count,
            )
            return LoadResult(snapshot=snapshot, source_name=source.name, errors=errors)

        logger.error("全てのデータソースの読み込みに失敗しました", errors=errors)
        return LoadResult(errors=errors)

    @staticmethod
    def _report_data_quality(snapshot: ElectionDataSnapshot) -> None:
        directory = snapshot.directory
        if directory.duplicate_ids:
            logger.warning(
                "候補者IDが重複しています（先勝ち）",
                duplicate_ids=list(directory.duplicate_ids),
            )
        for collision in directory.name_collisions:
            logger.warning(
                "正規化名が複数の候補者で衝突しています（後勝ち）",
                normalized_name=collision.normalized_name,
                overridden_candidate_id=collision.overridden_candidate_id,
                winning_candidate_id=collision.winning_candidate_id,
            )
