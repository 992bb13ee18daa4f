"""候補者解決ドメインサービス."""

from src.domain.entities.candidate import Candidate
from src.domain.services.name_normalizer import NameNormalizer
from src.domain.value_objects.candidate_directory import CandidateDirectory


class CandidateResolver:
    """ユーザーのクエリ（投票番号または名前）を候補者1名に解決する.

    見つからない場合はNoneを返す。これは想定内の結果であり、
    呼び出し側で分岐して扱う。
    """

    def resolve(
        self, query: str | None, directory: CandidateDirectory
    ) -> Candidate | None:
        """クエリを候補者に解決する.

        1. 数字のみのクエリは投票番号として完全一致を試す
        2. 一致しなければ正規化名の索引を完全一致で引く（あいまい検索はしない）

        Args:
            query: 生のユーザー入力（前後の空白は許容）
            directory: 候補者名簿

        Returns:
            候補者エンティティ。該当なしの場合はNone。

        Raises:
            ValueError: directoryがNoneの場合
        """
        if directory is None:
            raise ValueError("directory is required")
        if query is None:
            return None

        stripped = query.strip()
        if not stripped:
            return None

        if NameNormalizer.is_numeric_query(stripped):
            by_id = directory.get_by_id(int(stripped))
            if by_id is not None:
                return by_id

        return directory.get_by_normalized_name(NameNormalizer.normalize(stripped))
