"""
tokensmith CLI package.

- generate.py: stylesheet generation command

The entry point is ``tokensmith`` -> :func:`main`.
"""

from __future__ import annotations

import typer

from tokensmith._version import get_version
from tokensmith.cli.generate import generate_command

app = typer.Typer(
    help="tokensmith – compile design tokens into CSS custom properties",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        typer.echo(f"tokensmith {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """tokensmith CLI main callback for global options."""
    pass


app.command(name="generate")(generate_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main", "version_callback"]
