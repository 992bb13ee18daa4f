"""候補者検索（オートコンプリート）ユースケース."""

from src.application.dtos.candidate_search_dto import (
    SearchCandidatesInputDto,
    SearchCandidatesOutputDto,
)
from src.application.services.election_data_provider import ElectionDataProvider
from src.common.logging import get_logger
from src.domain.services.candidate_search_service import CandidateSearchService


logger = get_logger(__name__)


class SearchCandidatesUseCase:
    """候補者検索のユースケース.

    検索索引はスナップショットのバージョンが変わったときだけ再構築する。
    """

    def __init__(self, data_provider: ElectionDataProvider) -> None:
        self._data_provider = data_provider
        self._search_service: CandidateSearchService | None = None
        self._indexed_version: str | None = None

    async def execute(
        self, input_dto: SearchCandidatesInputDto
    ) -> SearchCandidatesOutputDto:
        """前方一致で候補者を検索する."""
        try:
            snapshot = await self._data_provider.get_snapshot()
            if (
                self._search_service is None
                or self._indexed_version != snapshot.version
            ):
                logger.debug("検索索引を構築します", version=snapshot.version)
                self._search_service = CandidateSearchService(snapshot.directory)
                self._indexed_version = snapshot.version

            options = self._search_service.search(input_dto.query, input_dto.limit)
            return SearchCandidatesOutputDto(options=options)
        except Exception as e:
            logger.error(f"候補者の検索に失敗しました: {e}", exc_info=True)
            return SearchCandidatesOutputDto(success=False, error_message=str(e))
