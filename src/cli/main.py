"""Command line entry point for the country-series application."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

import click
import structlog

from country_series.commands import CommandRouter
from country_series.data import DEFAULT_DATA_FILE
from country_series.logging import configure_logging
from country_series.series import CountryData, TimeSeries

DATA_FILE_HELP = (
    "Comma-delimited file grouped by country. May also be set via the "
    "COUNTRY_SERIES_DATA_FILE env var."
)

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")

logger = structlog.get_logger(__name__)


def _country_from_context(ctx: click.Context) -> CountryData:
    """Build an empty container bound to the configured data file."""
    ctx.ensure_object(dict)
    return CountryData(data_file=ctx.obj["data_file"])


def _describe_series(series: TimeSeries) -> list[str]:
    """Return the report lines printed by ``inspect`` for one series."""
    lines = [f"{series.series_code} {series.series_name}"]
    lines.append("  " + (series.render() or "no valid data"))
    for description in (
        series.describe_mean(),
        series.describe_monotonic(),
        series.describe_fit(),
    ):
        if description is not None:
            lines.append(f"  {description}")
    lines.append(f"  {series.size_capacity()}")
    return lines


@click.group()
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="COUNTRY_SERIES_DATA_FILE",
    default=Path(DEFAULT_DATA_FILE),
    show_default=True,
    help=DATA_FILE_HELP,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="COUNTRY_SERIES_LOG_LEVEL",
    default="warning",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="COUNTRY_SERIES_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(ctx: click.Context, data_file: Path, log_level: str, log_format: str) -> None:
    """Query and edit per-country annual series."""
    configure_logging(
        level=log_level,
        json_output=log_format.lower() == "json",
        data_file=str(data_file),
    )
    ctx.ensure_object(dict)
    ctx.obj.update({"data_file": data_file})
    logger.bind(command_group="country-series").debug(
        "cli.initialized",
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("run")
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    default="-",
    show_default=True,
    help="Command script to interpret; defaults to standard input.",
)
@click.pass_context
def run(ctx: click.Context, input_file: TextIO) -> None:
    """Interpret LOAD_P2/ADD_P2/... commands and print one result per line."""
    router = CommandRouter(country=_country_from_context(ctx))
    cmd_log = logger.bind(command="run")
    cmd_log.debug("command.start")
    executed = 0
    for line in router.run(input_file):
        click.echo(line)
        executed += 1
    cmd_log.debug("command.completed", executed=executed)


@cli.command("inspect")
@click.argument("country_name")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit a JSON document.")
@click.pass_context
def inspect(ctx: click.Context, country_name: str, as_json: bool) -> None:
    """Load one country and report every series with its statistics."""
    country = _country_from_context(ctx)
    outcome = country.load(country_name)
    if not outcome:
        reason = outcome.reason.value if outcome.reason else "unknown"
        raise click.ClickException(f"Could not load {country_name!r}: {reason}.")
    if not len(country):
        click.echo(f"No series found for {country_name!r}.", err=True)
        ctx.exit(1)
    if as_json:
        click.echo(json.dumps(country.to_dict(), indent=2))
        return
    click.echo(country.list_series().render())
    for series in country:
        for line in _describe_series(series):
            click.echo(line)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
