"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer


def _err(msg: str, *, fg: str | None) -> None:
    typer.echo(typer.style(msg, fg=fg), err=True)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print a one-line error to stderr and return exit code 1."""
    from pydantic import ValidationError

    from subnet_groups.config.loader import ConfigError
    from subnet_groups.errors import (
        ExportNotFoundError,
        GroupCountMismatchError,
        GroupNamingMismatchError,
        GroupSizeMismatchError,
        InvalidGroupNameError,
        StoreLockError,
        SubnetGroupError,
    )

    fg = typer.colors.RED if color else None

    if isinstance(exc, ConfigError):
        _err(f"Configuration error: {exc}", fg=fg)
    elif isinstance(
        exc,
        GroupSizeMismatchError
        | GroupNamingMismatchError
        | GroupCountMismatchError
        | InvalidGroupNameError,
    ):
        _err(f"Invalid subnet layout: {exc}", fg=fg)
    elif isinstance(exc, ExportNotFoundError):
        _err(f"Unresolved import: {exc}", fg=fg)
    elif isinstance(exc, StoreLockError):
        _err(f"Store lock failed: {exc}", fg=fg)
    elif isinstance(exc, SubnetGroupError):
        _err(f"Error: {exc}", fg=fg)
    elif isinstance(exc, ValidationError):
        _err("Invalid input:", fg=fg)
        for e in exc.errors():
            loc = ".".join(str(p) for p in e["loc"])
            _err(f"  - {loc}: {e['msg']}" if loc else f"  - {e['msg']}", fg=fg)
    else:
        _err(f"Error: {exc}", fg=fg)

    return 1
