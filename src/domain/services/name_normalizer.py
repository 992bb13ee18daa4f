"""名前正規化サービス.

候補者名簿と得票台帳は別々に作成されるため、大文字小文字や
アクセント記号の有無が一致する保証がない。両者の結合キーとして
使う正規化名を生成する。
"""

import re
import unicodedata


# 空白の連続（全角スペース含む）
_WHITESPACE_RE = re.compile(r"[\s　]+")

# トークン区切り（英数字以外）
_TOKEN_SPLIT_RE = re.compile(r"[^A-Z0-9]+")


class NameNormalizer:
    """名前正規化サービス."""

    @staticmethod
    def normalize(name: str | None) -> str:
        """名前を正規化する.

        処理順序:
        1. Unicode NFD分解
        2. 結合文字（アクセント記号）の除去
        3. 空白の圧縮と前後の空白除去
        4. 大文字化

        例:
            "  José  da Conceição " → "JOSE DA CONCEICAO"
        """
        if not name:
            return ""
        decomposed = unicodedata.normalize("NFD", str(name))
        stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
        collapsed = _WHITESPACE_RE.sub(" ", stripped).strip()
        return collapsed.upper()

    @staticmethod
    def tokenize(name: str | None) -> list[str]:
        """正規化した名前を英数字トークンに分割する.

        例:
            "Zé do Pão-Doce" → ["ZE", "DO", "PAO", "DOCE"]
        """
        normalized = NameNormalizer.normalize(name)
        return [tok for tok in _TOKEN_SPLIT_RE.split(normalized) if tok]

    @staticmethod
    def is_numeric_query(query: str | None) -> bool:
        """クエリが数字のみで構成されているか判定する."""
        if query is None:
            return False
        stripped = query.strip()
        return bool(stripped) and stripped.isascii() and stripped.isdigit()
