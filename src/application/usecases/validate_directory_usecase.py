"""候補者名簿の検証ユースケース.

名簿と得票台帳は別々に作成されるため、名前の不一致がそのまま
集計漏れになる。IDの重複、名前の衝突、どの候補者にも一致しない
台帳の名前を洗い出す。
"""

from src.application.dtos.directory_validation_dto import ValidateDirectoryOutputDto
from src.application.services.election_data_provider import ElectionDataProvider
from src.common.logging import get_logger
from src.domain.services.name_normalizer import NameNormalizer


logger = get_logger(__name__)


class ValidateDirectoryUseCase:
    """候補者名簿検証のユースケース."""

    def __init__(self, data_provider: ElectionDataProvider) -> None:
        self._data_provider = data_provider

    async def execute(self) -> ValidateDirectoryOutputDto:
        """名簿と台帳の整合性を検証する."""
        try:
            snapshot = await self._data_provider.get_snapshot()
        except Exception as e:
            logger.error(f"候補者名簿の検証に失敗しました: {e}", exc_info=True)
            return ValidateDirectoryOutputDto(success=False, error_message=str(e))

        directory = snapshot.directory
        unmatched: dict[str, int] = {}
        for record in snapshot.vote_records:
            normalized = NameNormalizer.normalize(record.candidate_name)
            if not directory.knows_name(normalized):
                unmatched[normalized] = unmatched.get(normalized, 0) + 1

        output = ValidateDirectoryOutputDto(
            data_version=snapshot.version,
            source_name=snapshot.source_name,
            candidate_count=snapshot.candidate_count,
            vote_record_count=snapshot.vote_record_count,
            duplicate_ids=list(directory.duplicate_ids),
            name_collisions=list(directory.name_collisions),
            unmatched_names=unmatched,
        )
        logger.info(
            "候補者名簿を検証しました",
            duplicate_ids=len(output.duplicate_ids),
            collisions=len(output.name_collisions),
            unmatched_names=len(output.unmatched_names),
        )
        return output
