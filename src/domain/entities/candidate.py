"""Candidate entity."""

from src.domain.entities.base import BaseEntity
from src.domain.services.name_normalizer import NameNormalizer
from src.domain.value_objects.vote_record import coerce_vote_count


class Candidate(BaseEntity):
    """候補者を表すエンティティ.

    候補者名簿（Candidate Directory）の1レコード。IDは投票番号で、
    名簿内で一意かつ不変。ロード後は変更せず、データ更新時は
    名簿全体を差し替える。
    """

    # 当選ラベルの接頭辞（ELEITO POR QP、ELEITO POR MÉDIAを含む）
    OUTCOME_ELECTED: str = "ELEITO"

    def __init__(
        self,
        id: int,
        display_name: str,
        ballot_name: str = "",
        party_code: str = "",
        outcome_label: str = "",
        total_votes: int = 0,
    ) -> None:
        """候補者エンティティを初期化する.

        Args:
            id: 投票番号（NR_VOTAVEL）
            display_name: 登録上の氏名（NM_VOTAVEL）
            ballot_name: 投票機上の表示名（NM_URNA）
            party_code: 政党略称（SG_PARTIDO）
            outcome_label: 当落ラベル（RESULTADO）
            total_votes: 総得票数（TOTAL_VOTOS）。数値でない値は0として扱う
        """
        super().__init__(id)
        self.display_name = display_name
        self.ballot_name = ballot_name
        self.party_code = party_code
        self.outcome_label = outcome_label
        self.total_votes = coerce_vote_count(total_votes)

    def __str__(self) -> str:
        """文字列表現を返す."""
        return f"{self.ballot_name or self.display_name} ({self.id})"

    def __repr__(self) -> str:
        return (
            f"Candidate(id={self.id}, display_name={self.display_name!r}, "
            f"ballot_name={self.ballot_name!r}, total_votes={self.total_votes})"
        )

    @property
    def names(self) -> tuple[str, str]:
        """照合に使う2つの名前（氏名, 表示名）を返す."""
        return (self.display_name, self.ballot_name)

    @property
    def is_elected(self) -> bool:
        """当選しているかどうかを判定する.

        「ELEITO」で始まるラベル（ELEITO POR QP等）を当選とみなす。
        """
        return NameNormalizer.normalize(self.outcome_label).startswith(
            self.OUTCOME_ELECTED
        )
