"""
Command line front end for kingmaker-save.

Usage: python -m kingmaker_save parse [SAVE]
"""

import logging
import tempfile
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .catalog import BlueprintCatalog, CatalogBuilder
from .catalog.models import DEFAULT_CATALOG_FILE
from .projection import StateProjector
from .reports import JsonReportWriter, TextReportWriter
from .save_data import SaveDataError, SaveDataService, SaveFileLoader
from .save_data.inspector import file_stats, outline
from .settings import AppSettings, ConfigError
from .settings.paths import DEFAULT_SAVE_DIR
from .utils.logging_config import setup_logging

app = typer.Typer(add_completion=False)


def _load_settings(config: Optional[Path]) -> AppSettings:
    try:
        return AppSettings(config)
    except ConfigError as e:
        typer.echo(f"configuration error: {e}", err=True)
        raise typer.Exit(code=2)


@app.command("parse")
def cmd_parse(
    save: Optional[Path] = typer.Argument(
        None, help="save directory, .zks archive, or folder of .zks archives"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="report output directory"),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="blueprint catalog JSON file"),
    config: Optional[Path] = typer.Option(None, "--config", help="INI configuration file"),
    no_text: bool = typer.Option(False, "--no-text", help="skip the .txt reports"),
    no_json: bool = typer.Option(False, "--no-json", help="skip the .json reports"),
) -> None:
    """Parse a save and write JSON and text reports."""
    settings = _load_settings(config)
    collector = setup_logging(settings)
    logger = logging.getLogger(f"{__name__}.parse")
    logger.info(f"kingmaker-save {__version__}")

    validation = settings.validate()
    for error in validation.errors:
        logger.error(f"Configuration: {error}")

    source = save or settings.paths.save_path or Path(DEFAULT_SAVE_DIR)
    output_dir = output or settings.paths.output_dir
    options = settings.to_options()

    with tempfile.TemporaryDirectory(prefix="kingmaker_save_") as work_dir:
        try:
            save_dir = SaveFileLoader().locate(source, Path(work_dir))
            save_data = SaveDataService(save_dir)
        except SaveDataError as e:
            logger.error(str(e))
            typer.echo(f"no parseable save found: {e}", err=True)
            raise typer.Exit(code=1)

        blueprint_catalog = BlueprintCatalog.from_file(catalog or settings.paths.catalog_path)
        state = StateProjector(save_data, blueprint_catalog, options).project()

    written = []
    if not no_json:
        written.extend(JsonReportWriter(output_dir).write_all(state))
    text_writer = TextReportWriter(output_dir, options)
    if not no_text:
        written.extend(text_writer.write_all(state))

    warnings_file = text_writer.write_warnings(collector.messages())
    if warnings_file is not None:
        typer.echo(f"{len(collector.get_buffer())} warnings written to {warnings_file}")
    typer.echo(f"wrote {len(written)} reports to {output_dir}")


@app.command("inspect")
def cmd_inspect(
    file: Path = typer.Argument(..., help="JSON document to inspect"),
    depth: int = typer.Option(3, "--depth", help="maximum outline depth"),
) -> None:
    """Print file statistics and a structure outline of a JSON document."""
    stats = file_stats(file)
    if not stats["exists"]:
        typer.echo(f"file not found: {file}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"File: {stats['file_path']}")
    typer.echo(f"Size: {stats['file_size']}")
    if stats.get("error"):
        typer.echo(f"Error: {stats['error']}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Root: {stats['token_type']}")
    if stats.get("property_count") is not None:
        typer.echo(f"Properties: {stats['property_count']} ({stats['properties']})")
    if stats.get("array_length") is not None:
        typer.echo(f"Items: {stats['array_length']}")

    document = SaveFileLoader().read_document(file)
    typer.echo("")
    for line in outline(document, max_depth=depth):
        typer.echo(line)


@app.command("build-catalog")
def cmd_build_catalog(
    blueprints_dir: Path = typer.Argument(..., help="blueprint dump directory with Blueprints.txt"),
    output: Path = typer.Option(Path(DEFAULT_CATALOG_FILE), "--output", "-o", help="catalog file to write"),
    workers: int = typer.Option(32, "--workers", help="threads used to read blueprint files"),
) -> None:
    """Build the blueprint catalog from a game blueprint dump."""
    setup_logging()
    if not blueprints_dir.is_dir():
        typer.echo(f"blueprints dir not found: {blueprints_dir}", err=True)
        raise typer.Exit(code=1)
    try:
        result = CatalogBuilder(blueprints_dir, max_workers=workers).write(output)
    except FileNotFoundError as e:
        typer.echo(f"missing blueprint index: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(
        f"wrote {len(result.names)} names, {len(result.subtypes)} equipment types, "
        f"{len(result.kinds)} blueprint types to {output}"
    )


def main() -> None:
    app()
