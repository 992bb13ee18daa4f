"""CSVからデータベースへの取り込みに関するDTO."""

from dataclasses import dataclass, field


@dataclass
class ImportElectionDataInputDto:
    """選挙データ取り込みの入力DTO."""

    dry_run: bool = False


@dataclass
class ImportElectionDataOutputDto:
    """選挙データ取り込みの出力DTO."""

    success: bool = True
    source_version: str | None = None
    candidates_read: int = 0
    vote_records_read: int = 0
    candidates_imported: int = 0
    vote_records_imported: int = 0
    candidates_deleted: int = 0
    vote_records_deleted: int = 0
    error_details: list[str] = field(default_factory=lambda: list[str]())
