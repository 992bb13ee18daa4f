"""得票レコードの値オブジェクト (Domain layer)."""

import math
import re

from dataclasses import dataclass
from enum import Enum


_NON_DIGIT_RE = re.compile(r"\D")

_TEXT_FIELDS = ("candidate_name", "zone", "neighborhood", "polling_place", "section")


class ScopeKind(Enum):
    """得票を集計する地理的な区分."""

    ZONE = "zone"
    SECTION = "section"
    NEIGHBORHOOD = "neighborhood"
    POLLING_PLACE = "polling_place"

    @property
    def field_name(self) -> str:
        """VoteRecord上の対応する属性名."""
        return _SCOPE_FIELDS[self]


_SCOPE_FIELDS: dict[ScopeKind, str] = {
    ScopeKind.ZONE: "zone",
    ScopeKind.SECTION: "section",
    ScopeKind.NEIGHBORHOOD: "neighborhood",
    ScopeKind.POLLING_PLACE: "polling_place",
}


def coerce_vote_count(value: object) -> int:
    """得票数を非負整数に変換する.

    数字以外の文字を取り除いてから整数化する（"1.234" → 1234）。
    None、空文字、数字を含まない値は0とする。
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(int(value), 0)
    digits = _NON_DIGIT_RE.sub("", str(value))
    return int(digits) if digits else 0


@dataclass(frozen=True)
class VoteRecord:
    """1つの投票所区分における、ある候補者名への得票.

    candidate_nameは氏名・表示名のどちらの場合もあり、IDには未解決。
    同じ候補者名・同じ区分のレコードが複数存在しうる（事前集計はされない）。
    """

    candidate_name: str
    zone: str = ""
    neighborhood: str = ""
    polling_place: str = ""
    section: str = ""
    vote_count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "vote_count", coerce_vote_count(self.vote_count))
        for field_name in _TEXT_FIELDS:
            value = getattr(self, field_name)
            if value is None:
                object.__setattr__(self, field_name, "")
            elif not isinstance(value, str):
                object.__setattr__(self, field_name, str(value))

    def scope_value(self, scope_kind: ScopeKind) -> str:
        """指定区分の値（正規化しない生の値）を返す."""
        return getattr(self, scope_kind.field_name)
