from __future__ import annotations

import typer

from shipfw import __version__
from shipfw.cli.commands.doctor import doctor
from shipfw.cli.commands.init_cmd import init
from shipfw.cli.commands.release_cmd import release_app

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(doctor)
app.command()(init)
app.add_typer(release_app, name="release")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    del version


def main() -> None:
    app()
