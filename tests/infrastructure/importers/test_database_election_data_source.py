"""DatabaseElectionDataSourceのテスト."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.domain.entities.candidate import Candidate
from src.domain.exceptions import DataSourceException
from src.domain.value_objects.vote_record import VoteRecord
from src.infrastructure.exceptions import DatabaseError
from src.infrastructure.importers.database_election_data_source import (
    DatabaseElectionDataSource,
)


_MODULE = "src.infrastructure.importers.database_election_data_source"


@pytest.fixture
def source() -> DatabaseElectionDataSource:
    @asynccontextmanager
    async def session_factory():
        yield MagicMock()

    return DatabaseElectionDataSource(session_factory)


def _patch_repositories(
    candidates: list[Candidate], records: list[VoteRecord]
) -> tuple[MagicMock, MagicMock]:
    candidate_repo = MagicMock()
    candidate_repo.count = AsyncMock(return_value=len(candidates))
    candidate_repo.get_all = AsyncMock(return_value=candidates)
    vote_repo = MagicMock()
    vote_repo.get_data_version = AsyncMock(return_value="votes:1:1")
    vote_repo.get_all = AsyncMock(return_value=records)
    return candidate_repo, vote_repo


class TestDatabaseElectionDataSource:
    @pytest.mark.asyncio
    async def test_load(self, source: DatabaseElectionDataSource) -> None:
        candidate_repo, vote_repo = _patch_repositories(
            [Candidate(id=10, display_name="ANA")],
            [VoteRecord(candidate_name="ANA", zone="1", vote_count=3)],
        )
        with (
            patch(f"{_MODULE}.CandidateRepositoryImpl", return_value=candidate_repo),
            patch(f"{_MODULE}.VoteRecordRepositoryImpl", return_value=vote_repo),
        ):
            snapshot = await source.load()

        assert snapshot.source_name == "database"
        assert snapshot.version == "db:cand:1|votes:1:1"
        assert snapshot.candidate_count == 1
        assert snapshot.vote_record_count == 1

    @pytest.mark.asyncio
    async def test_load_empty_database_raises(
        self, source: DatabaseElectionDataSource
    ) -> None:
        """候補者が0件ならフォールバックできるよう失敗扱いにする."""
        candidate_repo, vote_repo = _patch_repositories([], [])
        with (
            patch(f"{_MODULE}.CandidateRepositoryImpl", return_value=candidate_repo),
            patch(f"{_MODULE}.VoteRecordRepositoryImpl", return_value=vote_repo),
        ):
            with pytest.raises(DataSourceException, match="No candidates"):
                await source.load()

    @pytest.mark.asyncio
    async def test_database_error_is_wrapped(
        self, source: DatabaseElectionDataSource
    ) -> None:
        candidate_repo, vote_repo = _patch_repositories([], [])
        candidate_repo.count = AsyncMock(side_effect=DatabaseError("no such table"))
        with (
            patch(f"{_MODULE}.CandidateRepositoryImpl", return_value=candidate_repo),
            patch(f"{_MODULE}.VoteRecordRepositoryImpl", return_value=vote_repo),
        ):
            with pytest.raises(DataSourceException) as exc_info:
                await source.get_version()

        assert exc_info.value.source_name == "database"
