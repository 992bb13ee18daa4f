"""候補者名簿の検証に関するDTO."""

from dataclasses import dataclass, field

from src.domain.value_objects.candidate_directory import NameCollision


@dataclass
class ValidateDirectoryOutputDto:
    """候補者名簿検証の出力DTO.

    Attributes:
        duplicate_ids: 名簿内で重複していた候補者ID
        name_collisions: 複数の候補者に共有された正規化名
        unmatched_names: どの候補者にも一致しない得票台帳の正規化名と
            そのレコード件数（台帳の出現順）
    """

    success: bool = True
    data_version: str | None = None
    source_name: str | None = None
    candidate_count: int = 0
    vote_record_count: int = 0
    duplicate_ids: list[int] = field(default_factory=lambda: list[int]())
    name_collisions: list[NameCollision] = field(
        default_factory=lambda: list[NameCollision]()
    )
    unmatched_names: dict[str, int] = field(default_factory=lambda: dict[str, int]())
    error_message: str | None = None

    @property
    def is_clean(self) -> bool:
        """重複ID・衝突・未一致がない場合にTrue."""
        return not (
            self.duplicate_ids or self.name_collisions or self.unmatched_names
        )
