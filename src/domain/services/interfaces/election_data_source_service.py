"""選挙データソースサービスのインターフェース (Domain layer)."""

from typing import Protocol

from src.domain.value_objects.election_data_snapshot import ElectionDataSnapshot


class IElectionDataSourceService(Protocol):
    """選挙データソースのインターフェース.

    外部データソース（CSVファイル、データベース等）から候補者名簿と
    得票台帳を読み込み、不変のスナップショットとして返す。
    """

    name: str

    async def get_version(self) -> str:
        """データのバージョン文字列を返す.

        内容が変わったときに値が変わること以外は規定しない。
        """
        ...

    async def load(self) -> ElectionDataSnapshot:
        """データを読み込んでスナップショットを返す.

        Raises:
            DataSourceException: 読み込みに失敗した場合
        """
        ...
