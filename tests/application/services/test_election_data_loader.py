"""ElectionDataLoaderのテスト."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.application.services.election_data_loader import ElectionDataLoader
from src.domain.entities.candidate import Candidate
from src.domain.exceptions import DataSourceException
from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot


def _make_snapshot(source_name: str, version: str = "v1") -> ElectionDataSnapshot:
    return ElectionDataSnapshot(
        version=version,
        directory=CandidateDirectory([Candidate(id=10, display_name="ANA")]),
        source_name=source_name,
    )


def _make_source(
    name: str, snapshot: ElectionDataSnapshot | None = None, error: str = ""
) -> MagicMock:
    source = MagicMock()
    source.name = name
    if snapshot is not None:
        source.load = AsyncMock(return_value=snapshot)
    else:
        source.load = AsyncMock(side_effect=DataSourceException(name, error))
    source.get_version = AsyncMock(return_value="v1")
    return source


class TestElectionDataLoader:
    def test_requires_sources(self) -> None:
        with pytest.raises(ValueError):
            ElectionDataLoader([])

    @pytest.mark.asyncio
    async def test_first_source_wins(self) -> None:
        database = _make_source("database", _make_snapshot("database"))
        csv = _make_source("csv", _make_snapshot("csv"))
        loader = ElectionDataLoader([database, csv])

        result = await loader.load()

        assert result.succeeded
        assert result.source_name == "database"
        assert result.errors == []
        csv.load.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_falls_back_to_next_source(self) -> None:
        database = _make_source("database", error="no such table: candidates")
        csv = _make_source("csv", _make_snapshot("csv"))
        loader = ElectionDataLoader([database, csv])

        result = await loader.load()

        assert result.source_name == "csv"
        assert result.snapshot is not None
        assert len(result.errors) == 1
        assert result.errors[0].startswith("database:")

    @pytest.mark.asyncio
    async def test_all_sources_fail(self) -> None:
        loader = ElectionDataLoader(
            [_make_source("database", error="down"), _make_source("csv", error="gone")]
        )

        result = await loader.load()

        assert not result.succeeded
        assert result.snapshot is None
        assert result.source_name is None
        assert len(result.errors) == 2

    @pytest.mark.asyncio
    async def test_unexpected_error_is_recorded(self) -> None:
        broken = MagicMock()
        broken.name = "database"
        broken.load = AsyncMock(side_effect=RuntimeError("driver missing"))
        csv_source = _make_source("csv", _make_snapshot("csv"))
        loader = ElectionDataLoader([broken, csv_source])

        result = await loader.load()

        assert result.source_name == "csv"
        assert "driver missing" in result.errors[0]

    @pytest.mark.asyncio
    async def test_loads_snapshot_with_name_collisions(self) -> None:
        snapshot = ElectionDataSnapshot(
            version="v1",
            directory=CandidateDirectory(
                [
                    Candidate(id=1, display_name="JOSE SANTOS"),
                    Candidate(id=2, display_name="José Santos"),
                ]
            ),
            source_name="csv",
        )
        loader = ElectionDataLoader([_make_source("csv", snapshot)])

        result = await loader.load()

        assert result.snapshot is snapshot
        assert len(result.snapshot.directory.name_collisions) == 1

    @pytest.mark.asyncio
    async def test_warns_about_duplicate_ids(self) -> None:
        snapshot = ElectionDataSnapshot(
            version="v1",
            directory=CandidateDirectory(
                [
                    Candidate(id=1, display_name="ANA"),
                    Candidate(id=1, display_name="ANA DUPLICADA"),
                ]
            ),
            source_name="csv",
        )
        loader = ElectionDataLoader([_make_source("csv", snapshot)])

        with patch("src.application.services.election_data_loader.logger") as logger:
            result = await loader.load()

        assert result.succeeded
        logger.warning.assert_any_call(
            "候補者IDが重複しています（先勝ち）", duplicate_ids=[1]
        )

    def test_get_source(self) -> None:
        csv = _make_source("csv", _make_snapshot("csv"))
        loader = ElectionDataLoader([csv])

        assert loader.get_source("csv") is csv
        assert loader.get_source("database") is None
