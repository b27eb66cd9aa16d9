"""CLI smoke tests."""

from click.testing import CliRunner
from dictionary_schema_registry.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in (
        "generate-config",
        "generate-template",
        "import",
        "show-schema",
        "history",
        "validate-document",
    ):
        assert command in result.output


def test_import_help_lists_mode_flags() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["import", "-h"])

    assert result.exit_code == 0
    assert "--validate-only" in result.output
    assert "--overwrite-existing" in result.output
    assert "--registry" in result.output
