"""候補者名簿の値オブジェクト (Domain layer)."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from src.domain.entities.candidate import Candidate
from src.domain.services.name_normalizer import NameNormalizer


@dataclass(frozen=True)
class NameCollision:
    """正規化名が複数の候補者で衝突したことを示す."""

    normalized_name: str
    overridden_candidate_id: int
    winning_candidate_id: int


class CandidateDirectory:
    """候補者名簿.

    ロード順の候補者タプルと、ID・正規化名の索引を保持する。
    索引は構築時に一度だけ作成し、以後は変更しない。
    IDが重複する候補者は最初の1件だけを残し、重複IDとして記録する。
    正規化名の索引は後勝ち（同じ名前を持つ後続の候補者が上書き）。
    """

    def __init__(self, candidates: Iterable[Candidate]) -> None:
        self._by_id: dict[int, Candidate] = {}
        self._by_name: dict[str, Candidate] = {}
        self._collisions: list[NameCollision] = []
        self._duplicate_ids: list[int] = []

        for candidate in candidates:
            if candidate.id in self._by_id:
                if candidate.id not in self._duplicate_ids:
                    self._duplicate_ids.append(candidate.id)
                continue
            self._by_id[candidate.id] = candidate
            for name in candidate.names:
                key = NameNormalizer.normalize(name)
                if not key:
                    continue
                previous = self._by_name.get(key)
                if previous is not None and previous.id != candidate.id:
                    self._collisions.append(
                        NameCollision(
                            normalized_name=key,
                            overridden_candidate_id=previous.id,
                            winning_candidate_id=candidate.id,
                        )
                    )
                self._by_name[key] = candidate

        self._candidates: tuple[Candidate, ...] = tuple(self._by_id.values())

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        """ロード順の候補者一覧."""
        return self._candidates

    @property
    def name_collisions(self) -> tuple[NameCollision, ...]:
        """索引構築時に検出した名前の衝突."""
        return tuple(self._collisions)

    @property
    def duplicate_ids(self) -> tuple[int, ...]:
        """名簿内で重複していたID（2件目以降は取り込まれていない）."""
        return tuple(self._duplicate_ids)

    def get_by_id(self, candidate_id: int) -> Candidate | None:
        """IDで候補者を取得する."""
        return self._by_id.get(candidate_id)

    def get_by_normalized_name(self, normalized_name: str) -> Candidate | None:
        """正規化済みの名前で候補者を取得する."""
        return self._by_name.get(normalized_name)

    def find_by_name(self, name: str) -> Candidate | None:
        """名前を正規化してから候補者を取得する."""
        return self._by_name.get(NameNormalizer.normalize(name))

    def knows_name(self, normalized_name: str) -> bool:
        """正規化名が名簿に存在するか判定する."""
        return normalized_name in self._by_name
