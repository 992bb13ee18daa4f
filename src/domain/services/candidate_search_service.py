"""候補者検索（オートコンプリート）ドメインサービス."""

from src.domain.entities.candidate import Candidate
from src.domain.services.name_normalizer import NameNormalizer
from src.domain.value_objects.candidate_directory import CandidateDirectory
from src.domain.value_objects.search_option import SearchOption


# 索引に登録する接頭辞の最大長
MAX_PREFIX_LENGTH = 5


class CandidateSearchService:
    """接頭辞索引による候補者検索.

    表示名・氏名全体、名前の各トークン、投票番号について
    長さ1〜5の接頭辞を索引化する。索引は名簿ごとに一度だけ構築する。
    """

    def __init__(self, directory: CandidateDirectory) -> None:
        self._directory = directory
        self._prefix_index: dict[str, list[Candidate]] = {}
        self._labels: dict[int, str] = {}
        self._label_tokens: dict[int, list[str]] = {}
        self._full_names: dict[int, tuple[str, ...]] = {}
        self._build()

    @staticmethod
    def label_for(candidate: Candidate) -> str:
        """検索候補の表示ラベル「表示名 (投票番号)」を返す."""
        return f"{candidate.ballot_name or candidate.display_name} ({candidate.id})"

    def _build(self) -> None:
        for candidate in self._directory:
            label = self.label_for(candidate)
            self._labels[candidate.id] = label
            self._label_tokens[candidate.id] = NameNormalizer.tokenize(label)

            full_names = tuple(
                NameNormalizer.normalize(name)
                for name in (candidate.ballot_name, candidate.display_name)
            )
            self._full_names[candidate.id] = full_names

            prefixes: set[str] = set()
            for normalized in full_names:
                prefixes.update(self._prefixes(normalized))
                for token in NameNormalizer.tokenize(normalized):
                    prefixes.update(self._prefixes(token))
            prefixes.update(self._prefixes(str(candidate.id)))

            for prefix in prefixes:
                self._prefix_index.setdefault(prefix, []).append(candidate)

    @staticmethod
    def _prefixes(text: str) -> list[str]:
        upper = min(MAX_PREFIX_LENGTH, len(text))
        return [text[:length] for length in range(1, upper + 1)]

    def search(self, query: str | None, limit: int = 10) -> list[SearchOption]:
        """クエリに前方一致する候補者を名簿順で返す.

        ラベルのいずれかのトークンまたは名前全体が正規化クエリで始まるか、
        投票番号が生のクエリで始まる候補者を対象とする。

        Args:
            query: 入力途中の文字列
            limit: 返す件数の上限

        Returns:
            検索候補のリスト。クエリが空の場合は空リスト。
        """
        if query is None:
            return []
        raw = query.strip()
        normalized = NameNormalizer.normalize(raw)
        if not normalized or limit <= 0:
            return []

        # 接頭辞バケットが空のときだけ名簿全体を走査する
        pool = self._prefix_index.get(normalized[:MAX_PREFIX_LENGTH]) or list(
            self._directory
        )

        results: list[SearchOption] = []
        for candidate in pool:
            if self._matches(candidate, normalized, raw):
                results.append(
                    SearchOption(
                        label=self._labels[candidate.id], value=str(candidate.id)
                    )
                )
                if len(results) >= limit:
                    break
        return results

    def _matches(self, candidate: Candidate, normalized: str, raw: str) -> bool:
        if any(t.startswith(normalized) for t in self._label_tokens[candidate.id]):
            return True
        if any(n.startswith(normalized) for n in self._full_names[candidate.id]):
            return True
        return str(candidate.id).startswith(raw)

