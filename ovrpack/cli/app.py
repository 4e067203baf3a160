from __future__ import annotations

import typer

from ovrpack import __version__
from ovrpack.cli.commands.check import check
from ovrpack.cli.commands.package import package


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(package)
app.command()(check)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Package PWAs for the Meta Quest store."""


def main() -> None:
    app()
