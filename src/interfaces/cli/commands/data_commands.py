"""データの取り込み・バージョン確認コマンド."""

import asyncio

import click

from src.interfaces.cli.base import BaseCommand, with_error_handling


@click.command()
@with_error_handling
def version():
    """現在のデータバージョンと件数を表示する."""
    asyncio.run(_run_version())


async def _run_version() -> None:
    from src.interfaces.factories.election_data_source_factory import (
        ElectionDataSourceFactory,
    )

    snapshot = await ElectionDataSourceFactory.create_provider().get_snapshot()
    click.echo(f"データソース:   {snapshot.source_name}")
    click.echo(f"バージョン:     {snapshot.version}")
    click.echo(f"候補者数:       {snapshot.candidate_count:,}")
    click.echo(f"得票レコード数: {snapshot.vote_record_count:,}")


@click.command("import-csv")
@click.option(
    "--dry-run", is_flag=True, default=False, help="DBに書き込まず件数だけ確認する"
)
@with_error_handling
def import_csv(dry_run: bool):
    """CSVファイルの内容でデータベースを置き換える."""
    asyncio.run(_run_import_csv(dry_run))


async def _run_import_csv(dry_run: bool) -> None:
    from src.application.dtos.election_data_import_dto import (
        ImportElectionDataInputDto,
    )
    from src.infrastructure.config.async_database import AsyncDatabase
    from src.infrastructure.config.settings import get_settings
    from src.interfaces.factories.election_data_source_factory import (
        ElectionDataSourceFactory,
    )

    settings = get_settings()
    BaseCommand.show_progress(f"{settings.data_dir} からCSVを読み込み中...")

    async with AsyncDatabase(settings.get_database_url()).get_session() as session:
        usecase = ElectionDataSourceFactory.create_import_usecase(session, settings)
        output = await usecase.execute(ImportElectionDataInputDto(dry_run=dry_run))

    click.echo("=== 取り込み結果 ===")
    click.echo(f"  バージョン:         {output.source_version}")
    click.echo(f"  候補者（読込）:     {output.candidates_read:,}")
    click.echo(f"  得票レコード（読込）: {output.vote_records_read:,}")
    if dry_run:
        click.echo("  ドライランのため書き込みは行っていません。")
    else:
        click.echo(f"  候補者（登録）:     {output.candidates_imported:,}")
        click.echo(f"  得票レコード（登録）: {output.vote_records_imported:,}")

    if not output.success:
        BaseCommand.error("; ".join(output.error_details) or "取り込みに失敗しました")
