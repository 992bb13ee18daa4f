"""選挙データ取り込みユースケース.

データソース（通常はCSV）から読み込んだ候補者名簿と得票台帳で
データベースの内容を置き換える。

処理フロー:
    1. データソースからスナップショットを読み込む
    2. ドライランなら件数だけ返す
    3. 既存の得票レコードと候補者を削除
    4. 候補者と得票レコードを一括登録
    5. 3と4を1つのトランザクションとしてコミット

3から5のどこかで失敗した場合はロールバックし、既存の内容を残す。
"""

from src.application.dtos.election_data_import_dto import (
    ImportElectionDataInputDto,
    ImportElectionDataOutputDto,
)
from src.common.logging import get_logger
from src.domain.services.interfaces.election_data_source_service import (
    IElectionDataSourceService,
)
from src.domain.services.interfaces.unit_of_work import IUnitOfWork
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot


logger = get_logger(__name__)


class ImportElectionDataUseCase:
    """選挙データ取り込みのユースケース."""

    def __init__(
        self,
        data_source: IElectionDataSourceService,
        unit_of_work: IUnitOfWork,
    ) -> None:
        self._data_source = data_source
        self._uow = unit_of_work

    async def execute(
        self, input_dto: ImportElectionDataInputDto
    ) -> ImportElectionDataOutputDto:
        """取り込みを実行する."""
        output = ImportElectionDataOutputDto()

        try:
            snapshot = await self._data_source.load()
        except Exception as e:
            logger.error(f"データソースの読み込みに失敗しました: {e}")
            output.success = False
            output.error_details.append(str(e))
            return output

        output.source_version = snapshot.version
        output.candidates_read = snapshot.candidate_count
        output.vote_records_read = snapshot.vote_record_count
        logger.info(
            "取り込み対象を読み込みました",
            source=self._data_source.name,
            candidates=output.candidates_read,
            vote_records=output.vote_records_read,
        )

        if input_dto.dry_run:
            logger.info("ドライラン: DB書き込みをスキップ")
            return output

        try:
            counts = await self._replace_all(snapshot)
            await self._uow.commit()
        except Exception as e:
            logger.error(f"データベースへの書き込みに失敗しました: {e}", exc_info=True)
            await self._uow.rollback()
            output.success = False
            output.error_details.append(str(e))
            return output

        (
            output.vote_records_deleted,
            output.candidates_deleted,
            output.candidates_imported,
            output.vote_records_imported,
        ) = counts
        logger.info(
            "取り込みが完了しました",
            candidates=output.candidates_imported,
            vote_records=output.vote_records_imported,
        )
        return output

    async def _replace_all(
        self, snapshot: ElectionDataSnapshot
    ) -> tuple[int, int, int, int]:
        """コミットせずに両テーブルの内容を入れ替える.

        Returns:
            (得票削除件数, 候補者削除件数, 候補者登録件数, 得票登録件数)
        """
        candidate_repo = self._uow.candidate_repository
        vote_record_repo = self._uow.vote_record_repository

        votes_deleted = await vote_record_repo.delete_all()
        candidates_deleted = await candidate_repo.delete_all()
        candidates_imported = await candidate_repo.bulk_create(
            list(snapshot.directory.candidates)
        )
        votes_imported = await vote_record_repo.bulk_create(
            list(snapshot.vote_records)
        )
        return votes_deleted, candidates_deleted, candidates_imported, votes_imported
