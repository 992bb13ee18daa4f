"""候補者分析結果の値オブジェクト (Domain layer)."""

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities.candidate import Candidate
from src.domain.value_objects.vote_record import ScopeKind


@dataclass(frozen=True)
class ZoneVotes:
    """ゾーン別得票（ドーナツチャート用）."""

    zone: str
    votes: int


@dataclass(frozen=True)
class ScopeRecord:
    """ある区分で候補者が最も得票した値と、その中での順位."""

    scope_value: str
    candidate_votes: int
    rank_in_scope: int
    total_participants: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "scope_value": self.scope_value,
            "votes": self.candidate_votes,
            "rank": self.rank_in_scope,
            "total": self.total_participants,
        }


@dataclass(frozen=True)
class BestRecords:
    """区分ごとの最高記録。得票のない区分はNone."""

    zone: ScopeRecord | None = None
    section: ScopeRecord | None = None
    neighborhood: ScopeRecord | None = None
    polling_place: ScopeRecord | None = None

    def get(self, scope_kind: ScopeKind) -> ScopeRecord | None:
        return getattr(self, scope_kind.field_name)

    def to_dict(self) -> dict[str, dict[str, Any] | None]:
        result: dict[str, dict[str, Any] | None] = {}
        for kind in ScopeKind:
            record = self.get(kind)
            result[kind.value] = record.to_dict() if record else None
        return result


@dataclass(frozen=True)
class CandidateAnalysis:
    """候補者の集計ビュー.

    クエリごとに毎回計算され、コアでは永続化しない。
    """

    candidate: Candidate
    overall_rank: int
    overall_total: int
    zone_distribution: list[ZoneVotes] = field(default_factory=list)
    best_records: BestRecords = field(default_factory=BestRecords)
    votes_by_neighborhood: dict[str, int] = field(default_factory=dict)
    votes_by_polling_place: dict[str, int] = field(default_factory=dict)

    @property
    def total_ledger_votes(self) -> int:
        """台帳上で候補者に紐づいた得票の合計."""
        return sum(z.votes for z in self.zone_distribution)

    def to_dict(self) -> dict[str, Any]:
        """JSONシリアライズ可能な辞書に変換する."""
        return {
            "candidate": {
                "id": self.candidate.id,
                "display_name": self.candidate.display_name,
                "ballot_name": self.candidate.ballot_name,
                "party_code": self.candidate.party_code,
                "outcome_label": self.candidate.outcome_label,
                "total_votes": self.candidate.total_votes,
            },
            "overall_rank": self.overall_rank,
            "overall_total": self.overall_total,
            "zone_distribution": [
                {"zone": z.zone, "votes": z.votes} for z in self.zone_distribution
            ],
            "best_records": self.best_records.to_dict(),
            "votes_by_neighborhood": dict(self.votes_by_neighborhood),
            "votes_by_polling_place": dict(self.votes_by_polling_place),
        }
