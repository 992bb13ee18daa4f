"""候補者検索の選択肢 (Domain layer)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchOption:
    """検索ボックスの候補1件.

    labelは「表示名 (投票番号)」、valueは投票番号の文字列。
    """

    label: str
    value: str
