"""CLI entrypoint for cfinventory."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from cfinventory.aws.client import CloudFrontClient
from cfinventory.columns import COLUMN_NAMES, COLUMNS
from cfinventory.config import MAX_CONCURRENT_LIMIT, Settings
from cfinventory.errors import CloudFrontInventoryError
from cfinventory.formatter import format_json, format_markdown, format_table
from cfinventory.resolver import Query, Resolver

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _non_empty(ctx, param, value):
    if value is not None and not value.strip():
        raise click.BadParameter("must not be empty")
    return value


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.option(
    "--column",
    "-c",
    "columns",
    multiple=True,
    type=click.Choice(COLUMN_NAMES),
    help="Column(s) to output. Defaults to all columns.",
)
@click.option(
    "--id",
    "distribution_id",
    default=None,
    callback=_non_empty,
    help="Look up a single distribution.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "markdown"]),
    default="table",
    help="Output format.",
)
@click.option("--region", default=None, help="AWS region for the CloudFront endpoint.")
@click.option("--profile", default=None, help="AWS named profile.")
@click.option(
    "--max-concurrent",
    type=click.IntRange(1, MAX_CONCURRENT_LIMIT),
    default=None,
    help="Max distributions enriched concurrently.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for stderr output.",
)
@click.option("--list-columns", is_flag=True, help="List available columns and exit.")
def main(
    columns,
    distribution_id,
    output_format,
    region,
    profile,
    max_concurrent,
    log_level,
    list_columns,
):
    """List CloudFront distributions with the requested columns."""
    if list_columns:
        for column in COLUMNS:
            click.echo(f"{column.name:<34} {column.kind.value:<8} {column.description}")
        return

    try:
        settings = Settings.from_env().override(
            region=region,
            profile=profile,
            max_concurrent=max_concurrent,
            log_level=log_level,
        )
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    configure_logging(settings.log_level)

    selected = list(dict.fromkeys(columns)) if columns else list(COLUMN_NAMES)
    query = Query(columns=frozenset(selected), distribution_id=distribution_id)

    try:
        client = CloudFrontClient.from_settings(settings)
        resolver = Resolver(client, max_concurrent=settings.max_concurrent)
        records = list(resolver.execute(query))
    except CloudFrontInventoryError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    formatters = {
        "table": format_table,
        "json": format_json,
        "markdown": format_markdown,
    }
    click.echo(formatters[output_format](records, selected))
