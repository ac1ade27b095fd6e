# src/kubemetrics/cli/scrape.py
"""
One-shot scrape: fetch, flatten and export the Summary API once, then exit.
Useful to check credentials and inspect the produced events.
"""

import asyncio
import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import Config, config
from ..core.exceptions import ConfigurationError
from ..core.factory import get_scraper
from .utils import apply_overrides

logger = logging.getLogger(__name__)

app = typer.Typer(name="scrape", help="Scrape the Summary API once and print the events.")


async def _async_scrape(settings: Config) -> int:
    scraper = await get_scraper(settings)
    try:
        return await scraper.scrape()
    finally:
        await scraper.close()


@app.callback(invoke_without_command=True)
def scrape(
    ctx: typer.Context,
    node_name: Annotated[
        Optional[str], typer.Option("--node-name", help="Node to scrape directly (overrides NODE_NAME).")
    ] = None,
    node_names: Annotated[
        Optional[str],
        typer.Option("--node-names", help="Comma-separated nodes to scrape through the API server proxy."),
    ] = None,
    tag: Annotated[
        Optional[str], typer.Option("--tag", help="Event tag template, e.g. 'kubernetes.metrics.*'.")
    ] = None,
    output: Annotated[Optional[str], typer.Option("--output", help="Append events to this JSON-lines file.")] = None,
) -> None:
    """
    Run a single scrape cycle.
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = apply_overrides(config, node_name, node_names, tag=tag, output=output)
    try:
        count = asyncio.run(_async_scrape(settings))
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        logger.error("Scrape failed: %s", e, exc_info=True)
        typer.echo(f"Scrape failed: {e}", err=True)
        raise typer.Exit(code=1)

    logger.info("Exported %d metric event(s).", count)
