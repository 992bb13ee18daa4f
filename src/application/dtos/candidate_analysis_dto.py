"""候補者分析に関するDTO."""

from dataclasses import dataclass
from typing import Any

from src.domain.value_objects.candidate_analysis import CandidateAnalysis


@dataclass
class AnalyzeCandidateInputDto:
    """候補者分析の入力DTO.

    queryは投票番号または氏名（表示名）。
    """

    query: str


@dataclass
class AnalyzeCandidateOutputDto:
    """候補者分析の出力DTO.

    候補者が見つからない場合はsuccess=True, found=Falseとなる。
    """

    success: bool = True
    found: bool = False
    analysis: CandidateAnalysis | None = None
    data_version: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON出力用のdictに変換する."""
        return {
            "success": self.success,
            "found": self.found,
            "data_version": self.data_version,
            "error_message": self.error_message,
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }
