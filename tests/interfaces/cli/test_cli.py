"""CLIエントリーポイントのテスト."""

from click.testing import CliRunner

from src.interfaces.cli.cli import cli


class TestCli:
    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("analyze", "search", "validate", "version", "import-csv"):
            assert command in result.output

    def test_analyze_help(self) -> None:
        result = CliRunner().invoke(cli, ["analyze", "--help"])

        assert result.exit_code == 0
        assert "--json" in result.output
        assert "--top" in result.output
