"""CSV選挙データソースの実装 (Infrastructure layer).

IElectionDataSourceServiceのCSVファイル実装。候補者名簿
（dados_candidatos.csv）と得票台帳（dados_votacao.csv）を読み込む。
列名の揺れはここで一度だけ吸収し、以降の処理には持ち込まない。
"""

import asyncio
import logging

from pathlib import Path

import pandas as pd

from src.domain.entities.candidate import Candidate
from src.domain.exceptions import DataSourceException
from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot
from src.domain.value_objects.vote_record import VoteRecord


logger = logging.getLogger(__name__)

CANDIDATES_FILE_NAME = "dados_candidatos.csv"
VOTES_FILE_NAME = "dados_votacao.csv"
CSV_DELIMITER = ";"
UNKNOWN_VERSION = "unknown"

# 列名の候補（先に見つかったものを使う）
_ZONE_COLUMNS = ("Zona", "ZONA", "NR_ZONA")
_POLLING_PLACE_COLUMNS = ("LOCAL_VOTACAO", "LOCAL", "NM_LOCAL")
_SECTION_COLUMNS = ("SECAO", "NR_SECAO")


def _read_frame(path: Path, encoding: str) -> pd.DataFrame:
    """CSVを全列文字列として読み込み、列名の前後の空白を除去する."""
    frame = pd.read_csv(
        path,
        sep=CSV_DELIMITER,
        dtype=str,
        encoding=encoding,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    frame.columns = [str(col).strip() for col in frame.columns]
    return frame


def _column(frame: pd.DataFrame, *names: str) -> pd.Series:
    """最初に存在する列を前後の空白を除去して返す.

    どの列も存在しない場合は空文字列の列を返す。
    """
    for name in names:
        if name in frame.columns:
            return frame[name].fillna("").astype(str).str.strip()
    return pd.Series([""] * len(frame), index=frame.index, dtype=str)


def _require_columns(frame: pd.DataFrame, path: Path, *names: str) -> None:
    missing = [name for name in names if name not in frame.columns]
    if missing:
        raise ValueError(f"{path.name}: 必須列がありません: {', '.join(missing)}")


def read_candidates(path: Path, encoding: str = "utf-8") -> list[Candidate]:
    """候補者名簿CSVを読み込む.

    投票番号（NR_VOTAVEL）が数字でない行は警告を出してスキップする。

    Args:
        path: dados_candidatos.csvのパス
        encoding: ファイルの文字コード

    Returns:
        ファイル順の候補者リスト
    """
    frame = _read_frame(path, encoding)
    _require_columns(frame, path, "NR_VOTAVEL", "NM_VOTAVEL")

    ids = _column(frame, "NR_VOTAVEL")
    valid = ids.str.fullmatch(r"\d+")
    skipped = int((~valid).sum())
    if skipped:
        logger.warning(
            "%s: 投票番号が不正な%d行をスキップしました", path.name, skipped
        )

    rows = zip(
        ids[valid],
        _column(frame, "NM_VOTAVEL")[valid],
        _column(frame, "NM_URNA")[valid],
        _column(frame, "SG_PARTIDO")[valid],
        _column(frame, "RESULTADO")[valid],
        _column(frame, "TOTAL_VOTOS")[valid].str.replace(r"\D", "", regex=True),
        strict=True,
    )
    return [
        Candidate(
            id=int(candidate_id),
            display_name=display_name,
            ballot_name=ballot_name,
            party_code=party_code,
            outcome_label=outcome_label,
            total_votes=int(total_votes) if total_votes else 0,
        )
        for (
            candidate_id,
            display_name,
            ballot_name,
            party_code,
            outcome_label,
            total_votes,
        ) in rows
    ]


def read_vote_records(path: Path, encoding: str = "utf-8") -> list[VoteRecord]:
    """得票台帳CSVを読み込む.

    ゾーンは数字部分のみを優先し、数字を含まない場合は元の文字列を使う。

    Args:
        path: dados_votacao.csvのパス
        encoding: ファイルの文字コード

    Returns:
        ファイル順の得票レコードリスト
    """
    frame = _read_frame(path, encoding)
    _require_columns(frame, path, "NM_VOTAVEL")

    zone_raw = _column(frame, *_ZONE_COLUMNS)
    zone_digits = zone_raw.str.replace(r"\D", "", regex=True)
    zones = zone_digits.where(zone_digits != "", zone_raw)

    rows = zip(
        _column(frame, "NM_VOTAVEL"),
        zones,
        _column(frame, "BAIRRO"),
        _column(frame, *_POLLING_PLACE_COLUMNS),
        _column(frame, *_SECTION_COLUMNS),
        _column(frame, "VOTOS"),
        strict=True,
    )
    return [
        VoteRecord(
            candidate_name=name,
            zone=zone,
            neighborhood=neighborhood,
            polling_place=polling_place,
            section=section,
            vote_count=votes,
        )
        for name, zone, neighborhood, polling_place, section, votes in rows
    ]


class CsvElectionDataSource:
    """CSVファイルからの選挙データソース実装."""

    name = "csv"

    def __init__(self, data_dir: Path | str, encoding: str = "utf-8"):
        self.data_dir = Path(data_dir)
        self.encoding = encoding

    @property
    def candidates_path(self) -> Path:
        return self.data_dir / CANDIDATES_FILE_NAME

    @property
    def votes_path(self) -> Path:
        return self.data_dir / VOTES_FILE_NAME

    async def get_version(self) -> str:
        """両ファイルの更新時刻からバージョン文字列を作る.

        Returns:
            "cand:<mtime>|votos:<mtime>"。ファイルがない場合は"unknown"
        """
        try:
            candidates_mtime = self.candidates_path.stat().st_mtime
            votes_mtime = self.votes_path.stat().st_mtime
        except OSError:
            return UNKNOWN_VERSION
        return f"cand:{candidates_mtime}|votos:{votes_mtime}"

    async def load(self) -> ElectionDataSnapshot:
        """CSVファイルを読み込んでスナップショットを返す.

        Raises:
            DataSourceException: ファイルが存在しない、または読み込めない場合
        """
        version = await self.get_version()
        try:
            # ファイルI/Oとパースはスレッドプールで実行
            candidates = await asyncio.to_thread(
                read_candidates, self.candidates_path, self.encoding
            )
            records = await asyncio.to_thread(
                read_vote_records, self.votes_path, self.encoding
            )
        except (OSError, ValueError) as e:
            logger.error("CSVの読み込みに失敗しました: %s", e)
            raise DataSourceException(
                self.name,
                f"Failed to read CSV files: {e}",
                {"data_dir": str(self.data_dir)},
            ) from e

        logger.info(
            "CSVから候補者%d件、得票レコード%d件を読み込みました",
            len(candidates),
            len(records),
        )
        return ElectionDataSnapshot(
            version=version,
            directory=CandidateDirectory(candidates),
            vote_records=tuple(records),
            source_name=self.name,
        )
