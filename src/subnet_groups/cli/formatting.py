"""Output rendering for exported props and imported networks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Callable

    from subnet_groups.core.network import VpcNetwork, VpcNetworkRefProps

_TYPE_COLORS: dict[str, str] = {
    "public": "green",
    "private": "yellow",
    "isolated": "cyan",
}


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def _align_values(items: dict[str, str]) -> list[tuple[str, str]]:
    """Right-pad keys so ``=`` signs align."""
    if not items:
        return []
    max_key = max(len(k) for k in items)
    return [(k.ljust(max_key), v) for k, v in items.items()]


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "null"
    if isinstance(value, list):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


def format_props(props: VpcNetworkRefProps, *, color: bool = True) -> str:
    """Render exported props as an aligned ``key = value`` block."""
    s = styler(color)
    items = {k: _format_value(v) for k, v in props.model_dump().items()}
    lines = [s("Exported:", bold=True)]
    for key, value in _align_values(items):
        if value == "null":
            value = s(value, fg="bright_black")
        lines.append(f"  {key} = {value}")
    return "\n".join(lines)


def network_table(network: VpcNetwork) -> Table:
    """Build a table with one row per subnet, grouped by type."""
    from subnet_groups.resources.subnet import SubnetType

    table = Table(title=f"{network.name} ({network.vpc_id})")
    table.add_column("Type")
    table.add_column("Group")
    table.add_column("Path")
    table.add_column("Zone")
    table.add_column("Subnet ID")
    for subnet_type in SubnetType:
        style = _TYPE_COLORS[subnet_type.value]
        for subnet in network.subnets(subnet_type):
            table.add_row(
                f"[{style}]{subnet_type.value}[/{style}]",
                subnet.group,
                subnet.path,
                subnet.availability_zone,
                subnet.subnet_id,
            )
    return table


def print_network(network: VpcNetwork, *, color: bool = True) -> None:
    Console(no_color=not color, soft_wrap=True).print(network_table(network))
