"""候補者分析ユースケース.

クエリ（投票番号または氏名）から候補者を特定し、総合順位、ゾーン別
得票、区分ごとの最高記録を集計する。
"""

from src.application.dtos.candidate_analysis_dto import (
    AnalyzeCandidateInputDto,
    AnalyzeCandidateOutputDto,
)
from src.application.services.election_data_provider import ElectionDataProvider
from src.common.logging import get_logger
from src.domain.services.candidate_analysis_service import CandidateAnalysisService
from src.domain.services.candidate_resolver import CandidateResolver


logger = get_logger(__name__)


class AnalyzeCandidateUseCase:
    """候補者分析のユースケース."""

    def __init__(
        self,
        data_provider: ElectionDataProvider,
        resolver: CandidateResolver | None = None,
        analysis_service: CandidateAnalysisService | None = None,
    ) -> None:
        self._data_provider = data_provider
        self._resolver = resolver or CandidateResolver()
        self._analysis_service = analysis_service or CandidateAnalysisService()

    async def execute(
        self, input_dto: AnalyzeCandidateInputDto
    ) -> AnalyzeCandidateOutputDto:
        """候補者を分析する.

        Args:
            input_dto: 分析対象のクエリ

        Returns:
            分析結果。候補者が見つからない場合はfound=False
        """
        try:
            snapshot = await self._data_provider.get_snapshot()
            candidate = self._resolver.resolve(input_dto.query, snapshot.directory)
            if candidate is None:
                logger.info("候補者が見つかりません", query=input_dto.query)
                return AnalyzeCandidateOutputDto(
                    success=True, found=False, data_version=snapshot.version
                )

            analysis = self._analysis_service.analyze(
                candidate, snapshot.directory, snapshot.vote_records
            )
            return AnalyzeCandidateOutputDto(
                success=True,
                found=True,
                analysis=analysis,
                data_version=snapshot.version,
            )
        except Exception as e:
            logger.error(f"候補者の分析に失敗しました: {e}", exc_info=True)
            return AnalyzeCandidateOutputDto(success=False, error_message=str(e))
