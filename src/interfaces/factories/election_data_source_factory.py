"""選挙データソースファクトリー

設定（VOTUS_DATA_SOURCES）に基づいてデータソースを優先順に組み立て、
ユースケースが使うElectionDataProviderを提供します。
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services.election_data_loader import ElectionDataLoader
from src.application.services.election_data_provider import ElectionDataProvider
from src.application.usecases.import_election_data_usecase import (
    ImportElectionDataUseCase,
)
from src.domain.services.interfaces.election_data_source_service import (
    IElectionDataSourceService,
)
from src.infrastructure.config.async_database import AsyncDatabase
from src.infrastructure.config.settings import (
    DATA_SOURCE_CSV,
    DATA_SOURCE_DATABASE,
    Settings,
    get_settings,
)
from src.infrastructure.exceptions import ConfigurationError
from src.infrastructure.importers.csv_election_data_source import (
    CsvElectionDataSource,
)
from src.infrastructure.importers.database_election_data_source import (
    DatabaseElectionDataSource,
)
from src.infrastructure.persistence.unit_of_work_impl import UnitOfWorkImpl


logger = logging.getLogger(__name__)


class ElectionDataSourceFactory:
    """選挙データソースファクトリー."""

    @staticmethod
    def create_csv_source(settings: Settings | None = None) -> CsvElectionDataSource:
        """CSVデータソースを作成."""
        settings = settings or get_settings()
        return CsvElectionDataSource(settings.data_dir, encoding=settings.csv_encoding)

    @staticmethod
    def create_database_source(
        settings: Settings | None = None,
    ) -> DatabaseElectionDataSource:
        """データベースデータソースを作成."""
        settings = settings or get_settings()
        database = AsyncDatabase(settings.get_database_url())
        return DatabaseElectionDataSource(database.get_session)

    @staticmethod
    def create_source(
        name: str, settings: Settings | None = None
    ) -> IElectionDataSourceService:
        """名前からデータソースを作成

        Args:
            name: "database" または "csv"
            settings: 設定（省略時はget_settings()）

        Raises:
            ConfigurationError: 未知のデータソース名の場合
        """
        if name == DATA_SOURCE_DATABASE:
            return ElectionDataSourceFactory.create_database_source(settings)
        if name == DATA_SOURCE_CSV:
            return ElectionDataSourceFactory.create_csv_source(settings)
        raise ConfigurationError(f"Unknown data source: {name}", {"source": name})

    @staticmethod
    def create_sources(
        settings: Settings | None = None,
    ) -> list[IElectionDataSourceService]:
        """設定された優先順でデータソースを作成."""
        settings = settings or get_settings()
        sources = [
            ElectionDataSourceFactory.create_source(name, settings)
            for name in settings.data_sources
        ]
        logger.info(
            "Creating data sources in order: %s",
            ", ".join(source.name for source in sources),
        )
        return sources

    @staticmethod
    def create_provider(settings: Settings | None = None) -> ElectionDataProvider:
        """フォールバック付きのElectionDataProviderを作成."""
        loader = ElectionDataLoader(ElectionDataSourceFactory.create_sources(settings))
        return ElectionDataProvider(loader)

    @staticmethod
    def create_import_usecase(
        session: AsyncSession, settings: Settings | None = None
    ) -> ImportElectionDataUseCase:
        """CSVをデータベースに取り込むユースケースを作成.

        削除と登録は同じセッション上の1トランザクションで行う。
        """
        return ImportElectionDataUseCase(
            data_source=ElectionDataSourceFactory.create_csv_source(settings),
            unit_of_work=UnitOfWorkImpl(session),
        )
