"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from dictionary_schema_registry.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from dictionary_schema_registry.dictionary_ingestion import EntryKey, EntryValidationError
from dictionary_schema_registry.document_validation import validate_document
from dictionary_schema_registry.import_execution import (
    DictionaryImportError,
    EntryImportResult,
    ImportOutcome,
    ImportRequest,
    execute_dictionary_import,
)
from dictionary_schema_registry.schema_registry import (
    JsonFileRegistryRepository,
    RegistryEntry,
    RegistryStoreError,
)
from dictionary_schema_registry.template_generation import generate_dictionary_template

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="dictionary-schema-registry")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Data dictionary to JSON Schema registry utility."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _config_option(func):
    return click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to YAML/JSON configuration file",
    )(func)


def _registry_option(func):
    return click.option(
        "--registry",
        "registry_path",
        required=False,
        type=click.Path(path_type=str),
        help="Registry file overriding registry.path from the configuration",
    )(func)


def _key_options(func):
    for name, help_text in reversed(
        (
            ("--model", "Rating/GRR model, for example PLACM"),
            ("--version", "Rating/GRR model version, for example 010"),
            ("--mechanism", "STANDALONE, INHERITANCE or PROPAGATION"),
        )
    ):
        func = click.option(name, required=True, type=str, help=help_text)(func)
    return func


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration scaffold to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration with defaults and guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate-template")
@_config_option
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the dictionary workbook to write",
)
@click.pass_context
def generate_template(ctx: click.Context, config_path: str | None, output_path: str) -> None:
    """Generate an empty data dictionary workbook."""
    configuration = _load_settings(ctx, config_path)
    try:
        resolved_output = generate_dictionary_template(
            output_path, configuration.workbook.to_layout()
        )
    except (OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="import")
@_config_option
@_registry_option
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the data dictionary workbook",
)
@click.option("--description", required=False, type=str, help="Description for new schemas")
@click.option("--imported-by", "imported_by", required=False, type=str, help="Importing user")
@click.option(
    "--validate-only",
    is_flag=True,
    default=False,
    help="Synthesize schemas without writing them to the registry.",
)
@click.option(
    "--overwrite-existing",
    is_flag=True,
    default=False,
    help="Register new generations for keys that already have an active schema.",
)
@click.pass_context
def import_dictionary(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    config_path: str | None,
    registry_path: str | None,
    input_path: str,
    description: str | None,
    imported_by: str | None,
    validate_only: bool,
    overwrite_existing: bool,
) -> None:
    """Import a data dictionary workbook into the schema registry."""
    configuration = _load_settings(ctx, config_path)
    repository = _open_registry(configuration, registry_path)
    try:
        outcome = execute_dictionary_import(
            ImportRequest(
                workbook_path=input_path,
                description=description,
                imported_by=imported_by,
                validate_only=validate_only,
                overwrite_existing=overwrite_existing,
            ),
            repository=repository,
            settings=configuration,
        )
    except (DictionaryImportError, RegistryStoreError) as exc:
        raise CliError(str(exc)) from exc

    for result in outcome.results:
        click.echo(_format_result(result))
    click.echo(_format_summary(outcome))
    if not outcome.success:
        raise CliError(f"Import failed for {outcome.failed_entries} entries.")


@cli.command(name="show-schema")
@_key_options
@_config_option
@_registry_option
@click.pass_context
def show_schema(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    model: str,
    version: str,
    mechanism: str,
    config_path: str | None,
    registry_path: str | None,
) -> None:
    """Print the active schema for a model, version and mechanism."""
    entry = _require_active(ctx, model, version, mechanism, config_path, registry_path)
    click.echo(json.dumps(entry.schema, indent=2, ensure_ascii=False))


@cli.command(name="history")
@_key_options
@_config_option
@_registry_option
@click.pass_context
def history(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    model: str,
    version: str,
    mechanism: str,
    config_path: str | None,
    registry_path: str | None,
) -> None:
    """List every schema generation for a model, version and mechanism."""
    configuration = _load_settings(ctx, config_path)
    key = _parse_key(model, version, mechanism)
    entries = _open_registry(configuration, registry_path).history(key)
    if not entries:
        raise CliError(f"No schemas registered for {key.label}.")
    for entry in entries:
        click.echo(_format_generation(entry))


@cli.command(name="validate-document")
@_key_options
@_config_option
@_registry_option
@click.option(
    "--document",
    "document_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON document to validate",
)
@click.pass_context
def validate_document_command(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    model: str,
    version: str,
    mechanism: str,
    config_path: str | None,
    registry_path: str | None,
    document_path: str,
) -> None:
    """Validate a JSON document against the active schema."""
    entry = _require_active(ctx, model, version, mechanism, config_path, registry_path)
    try:
        document = json.loads(Path(document_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CliError(f"Unable to read document {document_path}: {exc}") from exc
    result = validate_document(entry.schema, document)
    if not result.valid:
        click.echo(result.format_issues())
        raise CliError(f"Document is not valid against {result.schema_id}.")
    click.echo(f"Document is valid against {result.schema_id}")


def _load_settings(ctx: click.Context, config_path: str | None) -> Configuration:
    try:
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    verbose = bool((ctx.obj or {}).get("verbose"))
    _configure_logging("DEBUG" if verbose else configuration.logging.level)
    return configuration


def _configure_logging(level: str) -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def _open_registry(
    configuration: Configuration, registry_path: str | None
) -> JsonFileRegistryRepository:
    path = Path(registry_path) if registry_path else configuration.registry.path
    try:
        return JsonFileRegistryRepository(path)
    except RegistryStoreError as exc:
        raise CliError(str(exc)) from exc


def _parse_key(model: str, version: str, mechanism: str) -> EntryKey:
    try:
        return EntryKey.parse(model, version, mechanism)
    except EntryValidationError as exc:
        raise CliError(str(exc)) from exc


def _require_active(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    model: str,
    version: str,
    mechanism: str,
    config_path: str | None,
    registry_path: str | None,
) -> RegistryEntry:
    configuration = _load_settings(ctx, config_path)
    key = _parse_key(model, version, mechanism)
    entry = _open_registry(configuration, registry_path).find_active(key)
    if entry is None:
        raise CliError(f"No active schema found for {key.label}.")
    return entry


def _format_result(result: EntryImportResult) -> str:
    line = f"{result.status.value:<9} {result.label} fields={result.field_count}"
    if result.generation:
        line += f" generation={result.generation}"
    if result.transition is not None:
        line += f" ({result.transition.value})"
    if result.error_message:
        line += f": {result.error_message}"
    return line


def _format_summary(outcome: ImportOutcome) -> str:
    return (
        f"Processed {outcome.total_entries} entries: {outcome.successful_entries} successful, "
        f"{outcome.failed_entries} failed, {outcome.skipped_entries} skipped"
    )


def _format_generation(entry: RegistryEntry) -> str:
    state = "ACTIVE" if entry.active else "DEPRECATED"
    line = (
        f"generation={entry.generation} {state} "
        f"effective_from={entry.effective_from.isoformat()}"
    )
    if entry.effective_to is not None:
        line += f" effective_to={entry.effective_to.isoformat()}"
    if entry.change_notes:
        line += f" notes={entry.change_notes}"
    return line


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
