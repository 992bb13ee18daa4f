"""アプリケーション設定.

環境変数（および見つかった場合は.envファイル）から設定を読み込む。
設定の参照はget_settings()経由で行う。
"""

import logging
import os

from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from src.infrastructure.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///data/votacao.db"
DEFAULT_DATA_DIR = "data"

# 利用可能なデータソース名
DATA_SOURCE_DATABASE = "database"
DATA_SOURCE_CSV = "csv"
VALID_DATA_SOURCES = (DATA_SOURCE_DATABASE, DATA_SOURCE_CSV)


def find_env_file(start: Path | None = None) -> Path | None:
    """カレントディレクトリから親方向に.envファイルを探す."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


ENV_FILE_PATH = find_env_file()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_sources(value: str | None) -> list[str]:
    if not value:
        return [DATA_SOURCE_DATABASE, DATA_SOURCE_CSV]
    sources = [s.strip().lower() for s in value.split(",") if s.strip()]
    invalid = [s for s in sources if s not in VALID_DATA_SOURCES]
    if invalid:
        raise ConfigurationError(
            "Unknown data source in VOTUS_DATA_SOURCES",
            {"invalid": invalid, "valid": list(VALID_DATA_SOURCES)},
        )
    return sources


@dataclass
class Settings:
    """アプリケーション設定."""

    database_url: str = DEFAULT_DATABASE_URL
    data_dir: Path = field(default_factory=lambda: Path(DEFAULT_DATA_DIR))
    csv_encoding: str = "utf-8"
    data_sources: list[str] = field(
        default_factory=lambda: [DATA_SOURCE_DATABASE, DATA_SOURCE_CSV]
    )
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """環境変数から設定を生成する."""
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            data_dir=Path(os.getenv("VOTUS_DATA_DIR", DEFAULT_DATA_DIR)),
            csv_encoding=os.getenv("VOTUS_CSV_ENCODING", "utf-8"),
            data_sources=_parse_sources(os.getenv("VOTUS_DATA_SOURCES")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_parse_bool(os.getenv("LOG_JSON")),
        )

    def get_database_url(self) -> str:
        """同期ドライバ形式のデータベースURLを返す."""
        return self.database_url


def _load() -> Settings:
    if ENV_FILE_PATH is not None:
        load_dotenv(ENV_FILE_PATH, override=False)
        logger.debug("Loaded environment from %s", ENV_FILE_PATH)
    return Settings.from_env()


settings = _load()


def get_settings() -> Settings:
    """現在の設定を返す."""
    return settings


def reload_settings() -> Settings:
    """環境変数を読み直して設定を更新する."""
    global settings
    settings = _load()
    return settings
