# src/kubemetrics/cli/main.py
"""
Entry point of the kubemetrics CLI: `start` for the periodic scraper,
`scrape` for a single cycle and `version`.
"""

import logging

import typer

from .. import __version__
from ..core.config import config
from . import scrape, start

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logging.basicConfig(level=config.LOG_LEVEL.upper(), format=LOG_FORMAT)

app = typer.Typer(
    name="kubemetrics",
    help="Flatten kubelet Summary API statistics into tagged metric events.",
    add_completion=False,
)


def _echo_version() -> None:
    typer.echo(f"kubemetrics version: {__version__}")


def version_callback(value: bool):
    if value:
        _echo_version()
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of kubemetrics.
    """
    _echo_version()


@app.callback()
def main(
    show_version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    Scrape the kubelet Summary API and emit one event per statistic.
    """


app.add_typer(start.app, name="start")
app.add_typer(scrape.app, name="scrape")


if __name__ == "__main__":
    app()
