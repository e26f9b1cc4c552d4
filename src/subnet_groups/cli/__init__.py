"""``subnet-groups`` command line: export a VPC's subnet groups, import them elsewhere."""

from __future__ import annotations

import logging
import sys

import typer
from pydantic import ValidationError

from subnet_groups import __version__
from subnet_groups.cli.commands import export, import_cmd
from subnet_groups.config.schema import LogSettings
from subnet_groups.core.store import ExportStore
from subnet_groups.types import SubnetType

app = typer.Typer(
    name="subnet-groups",
    no_args_is_help=True,
    add_completion=False,
)
app.command()(export)
app.command(name="import")(import_cmd)


def version_text() -> str:
    store_format = ExportStore.model_fields["version"].default
    subnet_types = ", ".join(t.value for t in SubnetType)
    return (
        f"subnet-groups {__version__} "
        f"(store format v{store_format}; subnet types: {subnet_types})"
    )


def log_level(verbose: int) -> int | None:
    """Level for the ``subnet_groups`` logger, or None to leave logging alone.

    ``SUBNET_GROUPS_LOG`` wins over ``-v`` flags; an unknown level warns and
    falls back to INFO.
    """
    try:
        env_level = LogSettings().log
    except ValidationError as exc:
        reason = exc.errors()[0]["msg"]
        typer.echo(f"WARNING: invalid SUBNET_GROUPS_LOG ({reason}); using INFO", err=True)
        return logging.INFO
    if env_level is not None:
        return logging.getLevelNamesMapping()[env_level]
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return None


def _configure_logging(verbose: int) -> None:
    level = log_level(verbose)
    if level is None:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger = logging.getLogger("subnet_groups")
    logger.handlers[:] = [handler]
    logger.propagate = False
    logger.setLevel(level)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(version_text())
        raise typer.Exit


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version, store format and subnet types, then exit.",
        callback=_show_version,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log verbosity (-v info, -vv debug).",
    ),
) -> None:
    """Export and import VPC subnet groups across availability zones."""
    _ = version
    _configure_logging(verbose)
