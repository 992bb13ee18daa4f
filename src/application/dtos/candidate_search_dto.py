"""候補者検索（オートコンプリート）に関するDTO."""

from dataclasses import dataclass, field

from src.domain.value_objects.search_option import SearchOption


@dataclass
class SearchCandidatesInputDto:
    """候補者検索の入力DTO."""

    query: str
    limit: int = 10


@dataclass
class SearchCandidatesOutputDto:
    """候補者検索の出力DTO."""

    options: list[SearchOption] = field(default_factory=lambda: list[SearchOption]())
    success: bool = True
    error_message: str | None = None
