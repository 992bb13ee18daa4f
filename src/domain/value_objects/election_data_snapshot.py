"""選挙データのスナップショット (Domain layer)."""

from dataclasses import dataclass, field

from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.vote_record import VoteRecord


@dataclass(frozen=True)
class ElectionDataSnapshot:
    """候補者名簿と得票台帳の不変な組.

    versionはデータソースが発行する不透明なトークンで、
    集計処理は解釈しない。更新時はスナップショット全体を差し替える。
    """

    version: str
    directory: CandidateDirectory
    vote_records: tuple[VoteRecord, ...] = field(default_factory=tuple)
    source_name: str = ""

    @property
    def candidate_count(self) -> int:
        return len(self.directory)

    @property
    def vote_record_count(self) -> int:
        return len(self.vote_records)
