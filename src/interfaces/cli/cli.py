"""votus CLI エントリーポイント."""

import click

from src.common.logging import setup_logging
from src.interfaces.cli.commands.candidate_commands import analyze, search, validate
from src.interfaces.cli.commands.data_commands import import_csv, version


@click.group()
@click.option("--log-level", default=None, help="ログレベル（既定はLOG_LEVEL）")
def cli(log_level: str | None):
    """Votus - 候補者得票分析ツール."""
    from src.infrastructure.config.settings import get_settings

    settings = get_settings()
    setup_logging(log_level or settings.log_level, json_format=settings.log_json)


cli.add_command(analyze)
cli.add_command(search)
cli.add_command(validate)
cli.add_command(version)
cli.add_command(import_csv, "import-csv")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
