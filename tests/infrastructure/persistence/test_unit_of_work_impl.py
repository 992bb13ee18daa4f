"""UnitOfWorkImplのテスト.

実際のSQLiteデータベース（aiosqlite）に対して取り込みを実行し、
途中で失敗した場合に既存の内容が残ることを確認する。
"""

import importlib.util

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.dtos.election_data_import_dto import ImportElectionDataInputDto
from src.application.usecases.import_election_data_usecase import (
    ImportElectionDataUseCase,
)
from src.domain.entities.candidate import Candidate
from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot
from src.domain.value_objects.vote_record import VoteRecord
from src.infrastructure.exceptions import DatabaseError
from src.infrastructure.importers.csv_election_data_source import (
    CANDIDATES_FILE_NAME,
    VOTES_FILE_NAME,
    CsvElectionDataSource,
)
from src.infrastructure.persistence.unit_of_work_impl import UnitOfWorkImpl


MIGRATION_PATH = (
    Path(__file__).parent.parent.parent.parent
    / "alembic"
    / "versions"
    / "001_create_candidates_and_vote_records.py"
)


def _schema_statements() -> list[str]:
    """マイグレーション001が実行するSQLを取得する."""
    spec = importlib.util.spec_from_file_location("migration_001", MIGRATION_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    with patch.object(module, "op") as mock_op:
        mock_op.get_bind.return_value.dialect.name = "sqlite"
        module.upgrade()
        return [call.args[0] for call in mock_op.execute.call_args_list]


@pytest_asyncio.fixture
async def engine(tmp_path: Path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'votus.db'}")
    async with engine.begin() as conn:
        for statement in _schema_statements():
            await conn.execute(text(statement))
        await conn.execute(
            text("INSERT INTO candidates (id, display_name) VALUES (1, 'OLD')")
        )
        await conn.execute(
            text(
                "INSERT INTO vote_records (candidate_name, normalized_name, "
                "zone, vote_count) VALUES ('OLD', 'OLD', '1', 5)"
            )
        )
    yield engine
    await engine.dispose()


async def _table_counts(engine: AsyncEngine) -> tuple[int, int]:
    async with engine.connect() as conn:
        candidates = await conn.execute(text("SELECT COUNT(*) FROM candidates"))
        votes = await conn.execute(text("SELECT COUNT(*) FROM vote_records"))
        return candidates.scalar_one(), votes.scalar_one()


def _make_source(snapshot: ElectionDataSnapshot) -> MagicMock:
    source = MagicMock()
    source.name = "csv"
    source.load = AsyncMock(return_value=snapshot)
    return source


class TestImportTransaction:
    @pytest.mark.asyncio
    async def test_candidate_insert_failure_keeps_existing_rows(
        self, engine: AsyncEngine
    ) -> None:
        # display_nameのNOT NULL制約違反で候補者の登録が失敗する
        snapshot = ElectionDataSnapshot(
            version="v2",
            directory=CandidateDirectory(
                [
                    Candidate(id=10, display_name="ANA"),
                    Candidate(id=20, display_name=None),  # type: ignore[arg-type]
                ]
            ),
            vote_records=(VoteRecord(candidate_name="ANA", vote_count=3),),
        )
        session_maker = async_sessionmaker(engine, class_=AsyncSession)

        async with session_maker() as session:
            use_case = ImportElectionDataUseCase(
                _make_source(snapshot), UnitOfWorkImpl(session)
            )
            output = await use_case.execute(ImportElectionDataInputDto())

        assert output.success is False
        assert await _table_counts(engine) == (1, 1)

    @pytest.mark.asyncio
    async def test_vote_insert_failure_keeps_existing_rows(
        self, engine: AsyncEngine
    ) -> None:
        snapshot = ElectionDataSnapshot(
            version="v2",
            directory=CandidateDirectory([Candidate(id=10, display_name="ANA")]),
            vote_records=(VoteRecord(candidate_name="ANA", vote_count=3),),
        )
        session_maker = async_sessionmaker(engine, class_=AsyncSession)

        async with session_maker() as session:
            uow = UnitOfWorkImpl(session)
            use_case = ImportElectionDataUseCase(_make_source(snapshot), uow)
            with patch.object(
                uow.vote_record_repository,
                "bulk_create",
                AsyncMock(side_effect=DatabaseError("disk full")),
            ):
                output = await use_case.execute(ImportElectionDataInputDto())

        assert output.success is False
        assert output.error_details == ["disk full"]
        assert await _table_counts(engine) == (1, 1)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT display_name FROM candidates"))
            assert result.scalar_one() == "OLD"

    @pytest.mark.asyncio
    async def test_csv_with_duplicate_id_replaces_contents(
        self, engine: AsyncEngine, tmp_path: Path
    ) -> None:
        (tmp_path / CANDIDATES_FILE_NAME).write_text(
            "NR_VOTAVEL;NM_VOTAVEL;NM_URNA;SG_PARTIDO;RESULTADO;TOTAL_VOTOS\n"
            "10;ANA SILVA;ANA;ABC;ELEITO;500\n"
            "10;ANA SILVA;ANA;ABC;ELEITO;500\n",
            encoding="utf-8",
        )
        (tmp_path / VOTES_FILE_NAME).write_text(
            "NM_VOTAVEL;Zona;BAIRRO;LOCAL_VOTACAO;SECAO;VOTOS\n"
            "ANA;1;CENTRO;ESCOLA A;10;30\n"
            "ANA;2;CENTRO;ESCOLA B;11;20\n",
            encoding="utf-8",
        )
        session_maker = async_sessionmaker(engine, class_=AsyncSession)

        async with session_maker() as session:
            use_case = ImportElectionDataUseCase(
                CsvElectionDataSource(tmp_path), UnitOfWorkImpl(session)
            )
            output = await use_case.execute(ImportElectionDataInputDto())

        assert output.success is True
        assert output.candidates_imported == 1
        assert output.vote_records_imported == 2
        assert output.candidates_deleted == 1
        assert output.vote_records_deleted == 1
        assert await _table_counts(engine) == (1, 2)


class TestUnitOfWorkImpl:
    def test_repositories_share_one_session(self) -> None:
        uow = UnitOfWorkImpl(MagicMock(spec=AsyncSession))

        assert (
            uow.candidate_repository.session is uow.vote_record_repository.session
        )

    @pytest.mark.asyncio
    async def test_commit_error_is_wrapped(self) -> None:
        session = MagicMock(spec=AsyncSession)
        session.commit = AsyncMock(side_effect=SQLAlchemyError("database is locked"))
        uow = UnitOfWorkImpl(session)

        with pytest.raises(DatabaseError):
            await uow.commit()
