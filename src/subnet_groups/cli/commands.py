"""CLI command implementations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from subnet_groups.cli.errors import handle_error

ConfigPath = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to the network configuration file."),
]

NoColor = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output."),
]


def _use_color(no_color: bool) -> bool:
    return not (no_color or os.environ.get("NO_COLOR"))


def export(
    config: ConfigPath = Path("subnet-groups.yaml"),
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write the exported props to a JSON file."),
    ] = None,
    no_color: NoColor = False,
) -> None:
    """Publish the configured VPC's subnet groups to the export store."""
    from subnet_groups.cli.formatting import format_props
    from subnet_groups.config import export as export_fn
    from subnet_groups.config import load, save_props

    color = _use_color(no_color)
    try:
        cfg = load(config)
        props = export_fn(cfg)
        if out is not None:
            save_props(props, out)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(format_props(props, color=color))
    typer.echo(f"\nExports written to {cfg.store_path}")
    if out is not None:
        typer.echo(f"Props saved to {out}")


def import_cmd(
    props_file: Annotated[
        Path,
        typer.Argument(help="Props file written by `subnet-groups export --out`."),
    ],
    store: Annotated[
        Path | None,
        typer.Option(
            "--store",
            "-s",
            help="Export store used to resolve references.",
            envvar="SUBNET_GROUPS_STORE_PATH",
        ),
    ] = None,
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Name of the imported VPC."),
    ] = "ImportedVpc",
    no_color: NoColor = False,
) -> None:
    """Rebuild a VPC's subnets from exported props and print them."""
    from subnet_groups.cli.formatting import print_network
    from subnet_groups.config import import_network, load_props

    color = _use_color(no_color)
    try:
        props = load_props(props_file)
        network = import_network(props, store, name=name)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    print_network(network, color=color)
