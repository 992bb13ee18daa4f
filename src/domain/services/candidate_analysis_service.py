"""候補者得票の集計ドメインサービス.

得票台帳と候補者名簿から、総合順位・区分別集計・区分別最高記録を
計算する。入力を変更しない純粋な計算のみで、同じスナップショットに
対して並行に呼び出してよい。
"""

from collections.abc import Sequence
from functools import lru_cache

from src.domain.entities.candidate import Candidate
from src.domain.services.name_normalizer import NameNormalizer
from src.domain.value_objects.candidate_analysis import (
    BestRecords,
    CandidateAnalysis,
    ScopeRecord,
    ZoneVotes,
)
from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.vote_record import ScopeKind, VoteRecord


# 台帳上の候補者名は数百種類程度しかないため正規化結果をキャッシュする
_normalize = lru_cache(maxsize=65536)(NameNormalizer.normalize)

# 区分内ランキングの参加者キー: ("id", 投票番号) または ("name", 正規化名)
ParticipantKey = tuple[str, int | str]


class ScopeIndex:
    """得票台帳を区分値ごとに引けるようにした索引.

    区分の種類ごとに初回アクセス時に構築する。1回の分析で4種類の
    最高記録を求める際に台帳の全走査を繰り返さないために使う。
    """

    def __init__(self, vote_records: Sequence[VoteRecord]) -> None:
        self._vote_records = vote_records
        self._indexes: dict[ScopeKind, dict[str, list[VoteRecord]]] = {}

    def records_for(self, scope_kind: ScopeKind, scope_value: str) -> list[VoteRecord]:
        """指定区分値に属する全レコードを台帳順で返す."""
        index = self._indexes.get(scope_kind)
        if index is None:
            index = {}
            for record in self._vote_records:
                index.setdefault(record.scope_value(scope_kind), []).append(record)
            self._indexes[scope_kind] = index
        return index.get(scope_value, [])


class CandidateAnalysisService:
    """候補者の集計ビューを計算するドメインサービス."""

    def analyze(
        self,
        candidate: Candidate,
        directory: CandidateDirectory,
        vote_records: Sequence[VoteRecord],
    ) -> CandidateAnalysis:
        """候補者の集計ビューを計算する.

        Args:
            candidate: 解決済みの候補者
            directory: 候補者名簿
            vote_records: 得票台帳

        Returns:
            候補者分析結果

        Raises:
            ValueError: いずれかの引数がNoneの場合
        """
        if candidate is None:
            raise ValueError("candidate is required")
        if directory is None:
            raise ValueError("directory is required")
        if vote_records is None:
            raise ValueError("vote_records is required")

        overall_rank, overall_total = self.overall_ranking(candidate, directory)

        own_records = self.filter_votes(candidate, vote_records)
        sums = {kind: self.sum_by(own_records, kind) for kind in ScopeKind}

        scope_index = ScopeIndex(vote_records)
        best = {
            kind.field_name: self.best_record(
                sums[kind],
                kind,
                candidate,
                directory,
                vote_records,
                scope_index=scope_index,
            )
            for kind in ScopeKind
        }

        return CandidateAnalysis(
            candidate=candidate,
            overall_rank=overall_rank,
            overall_total=overall_total,
            zone_distribution=[
                ZoneVotes(zone=zone, votes=votes)
                for zone, votes in sums[ScopeKind.ZONE].items()
            ],
            best_records=BestRecords(**best),
            votes_by_neighborhood=sums[ScopeKind.NEIGHBORHOOD],
            votes_by_polling_place=sums[ScopeKind.POLLING_PLACE],
        )

    def overall_ranking(
        self, candidate: Candidate, directory: CandidateDirectory
    ) -> tuple[int, int]:
        """総得票数の降順で並べたときの順位と候補者総数を返す.

        同票の場合は投票番号の昇順。候補者が名簿にない場合の順位は0。
        """
        ordered = sorted(directory.candidates, key=lambda c: (-c.total_votes, c.id))
        position = 0
        for i, other in enumerate(ordered, start=1):
            if other.id == candidate.id:
                position = i
                break
        return position, len(ordered)

    def filter_votes(
        self, candidate: Candidate, vote_records: Sequence[VoteRecord]
    ) -> list[VoteRecord]:
        """候補者の氏名または表示名に一致するレコードを抽出する."""
        names = self._candidate_keys(candidate)
        return [r for r in vote_records if _normalize(r.candidate_name) in names]

    def sum_by(
        self, vote_records: Sequence[VoteRecord], scope_kind: ScopeKind
    ) -> dict[str, int]:
        """区分の生の値ごとに得票を合計する（初出順）."""
        totals: dict[str, int] = {}
        for record in vote_records:
            key = record.scope_value(scope_kind)
            totals[key] = totals.get(key, 0) + record.vote_count
        return totals

    def best_record(
        self,
        scope_map: dict[str, int],
        scope_kind: ScopeKind,
        candidate: Candidate,
        directory: CandidateDirectory,
        vote_records: Sequence[VoteRecord],
        scope_index: ScopeIndex | None = None,
    ) -> ScopeRecord | None:
        """候補者が最も得票した区分値と、その区分値内での順位を求める.

        同票の区分値は初出のものを採用する。区分値内の順位は、その区分値の
        全レコードを参加者ごとに合計して降順に並べたときの位置
        （同票は台帳での初出順）。

        Returns:
            区分の最高記録。scope_mapが空の場合はNone。
        """
        if not scope_map:
            return None

        scope_value, candidate_votes = max(scope_map.items(), key=lambda kv: kv[1])

        index = scope_index if scope_index is not None else ScopeIndex(vote_records)
        own_names = self._candidate_keys(candidate)
        totals: dict[ParticipantKey, int] = {}
        for record in index.records_for(scope_kind, scope_value):
            key = self._participant_key(
                record.candidate_name, candidate, own_names, directory
            )
            totals[key] = totals.get(key, 0) + record.vote_count

        ranking = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
        keys = [key for key, _ in ranking]
        rank_in_scope = keys.index(("id", candidate.id)) + 1

        return ScopeRecord(
            scope_value=scope_value,
            candidate_votes=candidate_votes,
            rank_in_scope=rank_in_scope,
            total_participants=len(ranking),
        )

    @staticmethod
    def _candidate_keys(candidate: Candidate) -> frozenset[str]:
        normalized = (_normalize(name) for name in candidate.names)
        return frozenset(name for name in normalized if name)

    @staticmethod
    def _participant_key(
        raw_name: str,
        candidate: Candidate,
        own_names: frozenset[str],
        directory: CandidateDirectory,
    ) -> ParticipantKey:
        """レコードの候補者名をランキング上の参加者に対応付ける.

        同一候補者の氏名と表示名は1人の参加者にまとめる。
        名簿にない名前は正規化名のまま参加者とする。
        """
        normalized = _normalize(raw_name)
        if normalized in own_names:
            return ("id", candidate.id)
        match = directory.get_by_normalized_name(normalized)
        if match is not None:
            return ("id", match.id)
        return ("name", normalized)
