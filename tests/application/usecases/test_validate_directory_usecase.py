"""ValidateDirectoryUseCaseのテスト."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.services.election_data_provider import ElectionDataProvider
from src.application.usecases.validate_directory_usecase import (
    ValidateDirectoryUseCase,
)
from src.domain.entities.candidate import Candidate
from src.domain.exceptions import DataUnavailableException
from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot
from src.domain.value_objects.vote_record import VoteRecord


def _make_provider(snapshot: ElectionDataSnapshot) -> MagicMock:
    provider = MagicMock(spec=ElectionDataProvider)
    provider.get_snapshot = AsyncMock(return_value=snapshot)
    return provider


class TestValidateDirectoryUseCase:
    @pytest.mark.asyncio
    async def test_reports_collisions_and_unmatched_names(self) -> None:
        snapshot = ElectionDataSnapshot(
            version="v1",
            directory=CandidateDirectory(
                [
                    Candidate(id=1, display_name="JOSE SANTOS"),
                    Candidate(id=2, display_name="José Santos"),
                    Candidate(id=3, display_name="ANA SILVA"),
                ]
            ),
            vote_records=(
                VoteRecord(candidate_name="Ana Silva", vote_count=1),
                VoteRecord(candidate_name="FULANO", vote_count=1),
                VoteRecord(candidate_name="fulano", vote_count=1),
                VoteRecord(candidate_name="BELTRANO", vote_count=1),
            ),
            source_name="csv",
        )
        use_case = ValidateDirectoryUseCase(_make_provider(snapshot))

        output = await use_case.execute()

        assert output.success is True
        assert output.candidate_count == 3
        assert output.vote_record_count == 4
        assert output.source_name == "csv"
        assert [c.normalized_name for c in output.name_collisions] == ["JOSE SANTOS"]
        assert output.unmatched_names == {"FULANO": 2, "BELTRANO": 1}
        assert output.is_clean is False

    @pytest.mark.asyncio
    async def test_clean_data(self) -> None:
        snapshot = ElectionDataSnapshot(
            version="v1",
            directory=CandidateDirectory([Candidate(id=3, display_name="ANA")]),
            vote_records=(VoteRecord(candidate_name="ana", vote_count=1),),
        )

        output = await ValidateDirectoryUseCase(_make_provider(snapshot)).execute()

        assert output.is_clean is True
        assert output.duplicate_ids == []

    @pytest.mark.asyncio
    async def test_reports_duplicate_ids(self) -> None:
        snapshot = ElectionDataSnapshot(
            version="v1",
            directory=CandidateDirectory(
                [
                    Candidate(id=3, display_name="ANA"),
                    Candidate(id=3, display_name="ANA COPIA"),
                ]
            ),
            vote_records=(VoteRecord(candidate_name="ana", vote_count=1),),
        )

        output = await ValidateDirectoryUseCase(_make_provider(snapshot)).execute()

        assert output.duplicate_ids == [3]
        assert output.candidate_count == 1
        assert output.is_clean is False

    @pytest.mark.asyncio
    async def test_data_unavailable(self) -> None:
        provider = MagicMock(spec=ElectionDataProvider)
        provider.get_snapshot = AsyncMock(
            side_effect=DataUnavailableException("no data")
        )

        output = await ValidateDirectoryUseCase(provider).execute()

        assert output.success is False
        assert output.error_message == "no data"
