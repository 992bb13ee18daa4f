"""CsvElectionDataSourceのテスト."""

import os

from pathlib import Path

import pytest

from src.domain.exceptions import DataSourceException
from src.domain.value_objects.vote_record import VoteRecord
from src.infrastructure.importers.csv_election_data_source import (
    CANDIDATES_FILE_NAME,
    VOTES_FILE_NAME,
    CsvElectionDataSource,
    read_candidates,
    read_vote_records,
)


CANDIDATES_CSV = """NR_VOTAVEL;NM_VOTAVEL;NM_URNA;SG_PARTIDO;RESULTADO;TOTAL_VOTOS
10;ANA MARIA SILVA;ANA SILVA;ABC;ELEITO POR QP;1.500
20; BRUNO LIMA ;BRUNO;XYZ;SUPLENTE;800
XX;LINHA INVALIDA;;;;0
"""

VOTES_CSV = """NM_VOTAVEL;Zona;BAIRRO;LOCAL_VOTACAO ;SECAO;VOTOS
ANA SILVA;ZE 001;CENTRO;ESCOLA A;10;30
ANA MARIA SILVA;Zona Rural;CENTRO;ESCOLA A;11;abc
BRUNO;2;BAIRRO NOVO;ESCOLA B;12;7
"""


def _write_files(
    directory: Path,
    candidates: str = CANDIDATES_CSV,
    votes: str = VOTES_CSV,
    encoding: str = "utf-8",
) -> None:
    (directory / CANDIDATES_FILE_NAME).write_text(candidates, encoding=encoding)
    (directory / VOTES_FILE_NAME).write_text(votes, encoding=encoding)


class TestReadCandidates:
    def test_reads_and_maps_columns(self, tmp_path: Path) -> None:
        _write_files(tmp_path)

        candidates = read_candidates(tmp_path / CANDIDATES_FILE_NAME)

        assert [c.id for c in candidates] == [10, 20]
        ana = candidates[0]
        assert ana.display_name == "ANA MARIA SILVA"
        assert ana.ballot_name == "ANA SILVA"
        assert ana.party_code == "ABC"
        assert ana.outcome_label == "ELEITO POR QP"
        assert ana.total_votes == 1500
        assert candidates[1].display_name == "BRUNO LIMA"

    def test_skips_non_numeric_ids(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _write_files(tmp_path)

        with caplog.at_level("WARNING"):
            candidates = read_candidates(tmp_path / CANDIDATES_FILE_NAME)

        assert all(c.display_name != "LINHA INVALIDA" for c in candidates)
        assert "1行をスキップ" in caplog.text

    def test_missing_required_column(self, tmp_path: Path) -> None:
        _write_files(tmp_path, candidates="NM_VOTAVEL;NM_URNA\nANA;ANA\n")

        with pytest.raises(ValueError, match="NR_VOTAVEL"):
            read_candidates(tmp_path / CANDIDATES_FILE_NAME)


class TestReadVoteRecords:
    def test_reads_and_maps_columns(self, tmp_path: Path) -> None:
        _write_files(tmp_path)

        records = read_vote_records(tmp_path / VOTES_FILE_NAME)

        assert records[0] == VoteRecord(
            candidate_name="ANA SILVA",
            zone="001",
            neighborhood="CENTRO",
            polling_place="ESCOLA A",
            section="10",
            vote_count=30,
        )

    def test_zone_without_digits_keeps_text(self, tmp_path: Path) -> None:
        _write_files(tmp_path)

        records = read_vote_records(tmp_path / VOTES_FILE_NAME)

        assert records[1].zone == "Zona Rural"

    def test_malformed_vote_count_is_zero(self, tmp_path: Path) -> None:
        _write_files(tmp_path)

        records = read_vote_records(tmp_path / VOTES_FILE_NAME)

        assert records[1].vote_count == 0

    def test_alternative_headers(self, tmp_path: Path) -> None:
        votes = "NM_VOTAVEL;NR_ZONA;BAIRRO;NM_LOCAL;NR_SECAO;VOTOS\nANA;5;C;L;9;1\n"
        _write_files(tmp_path, votes=votes)

        records = read_vote_records(tmp_path / VOTES_FILE_NAME)

        assert records == [
            VoteRecord(
                candidate_name="ANA",
                zone="5",
                neighborhood="C",
                polling_place="L",
                section="9",
                vote_count=1,
            )
        ]

    def test_missing_optional_columns_are_empty(self, tmp_path: Path) -> None:
        _write_files(tmp_path, votes="NM_VOTAVEL;VOTOS\nANA;3\n")

        records = read_vote_records(tmp_path / VOTES_FILE_NAME)

        assert records == [VoteRecord(candidate_name="ANA", vote_count=3)]


class TestCsvElectionDataSource:
    @pytest.mark.asyncio
    async def test_load(self, tmp_path: Path) -> None:
        _write_files(tmp_path)
        source = CsvElectionDataSource(tmp_path)

        snapshot = await source.load()

        assert snapshot.source_name == "csv"
        assert snapshot.candidate_count == 2
        assert snapshot.vote_record_count == 3
        assert snapshot.version.startswith("cand:")
        assert snapshot.directory.find_by_name("Ana Silva") is not None

    @pytest.mark.asyncio
    async def test_load_with_cp1252_encoding(self, tmp_path: Path) -> None:
        candidates = "NR_VOTAVEL;NM_VOTAVEL;NM_URNA\n30;JOSÉ CONCEIÇÃO;ZÉ\n"
        _write_files(tmp_path, candidates=candidates, encoding="cp1252")
        source = CsvElectionDataSource(tmp_path, encoding="cp1252")

        snapshot = await source.load()

        assert snapshot.directory.get_by_id(30).display_name == "JOSÉ CONCEIÇÃO"

    @pytest.mark.asyncio
    async def test_load_missing_files_raises(self, tmp_path: Path) -> None:
        source = CsvElectionDataSource(tmp_path)

        with pytest.raises(DataSourceException) as exc_info:
            await source.load()

        assert exc_info.value.source_name == "csv"

    @pytest.mark.asyncio
    async def test_version_unknown_when_file_missing(self, tmp_path: Path) -> None:
        (tmp_path / CANDIDATES_FILE_NAME).write_text(CANDIDATES_CSV)
        source = CsvElectionDataSource(tmp_path)

        assert await source.get_version() == "unknown"

    @pytest.mark.asyncio
    async def test_version_changes_with_mtime(self, tmp_path: Path) -> None:
        _write_files(tmp_path)
        source = CsvElectionDataSource(tmp_path)
        before = await source.get_version()

        votes_path = tmp_path / VOTES_FILE_NAME
        stat = votes_path.stat()
        os.utime(votes_path, (stat.st_atime, stat.st_mtime + 10))

        assert await source.get_version() != before
