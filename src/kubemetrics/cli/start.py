# src/kubemetrics/cli/start.py
"""
Start command for the kubemetrics CLI.

Runs the scrape cycle on the configured interval until SIGINT or SIGTERM,
then stops the scheduler and releases the HTTP clients.
"""

import asyncio
import logging
import signal
import traceback
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import Config, config
from ..core.exceptions import ConfigurationError
from ..core.factory import get_scraper
from ..core.scheduler import Scheduler
from .utils import apply_overrides

logger = logging.getLogger(__name__)

app = typer.Typer(name="start", help="Start the periodic Summary API scraper.")


async def _async_start(settings: Config) -> None:
    scraper = await get_scraper(settings)
    shutdown_requested = asyncio.Event()

    def signal_handler(signum):
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        sig_name = "SIGTERM" if signum == signal.SIGTERM else "SIGINT"
        logger.info(f"Received {sig_name}, initiating graceful shutdown...")
        shutdown_requested.set()

    loop = asyncio.get_running_loop()
    for signum in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(signum, signal_handler, signum)

    scheduler = Scheduler()
    try:
        scheduler.add_job_from_string(scraper.scrape, settings.SCRAPE_INTERVAL)
        logger.info("kubemetrics is running. Press CTRL+C to exit.")
        await shutdown_requested.wait()
    finally:
        for signum in (signal.SIGTERM, signal.SIGINT):
            loop.remove_signal_handler(signum)
        await scheduler.stop()
        await scraper.close()
        logger.info("Shutting down kubemetrics gracefully.")


@app.callback(invoke_without_command=True)
def start(
    ctx: typer.Context,
    node_name: Annotated[
        Optional[str], typer.Option("--node-name", help="Node to scrape directly (overrides NODE_NAME).")
    ] = None,
    node_names: Annotated[
        Optional[str],
        typer.Option("--node-names", help="Comma-separated nodes to scrape through the API server proxy."),
    ] = None,
    interval: Annotated[Optional[str], typer.Option("--interval", help="Scrape interval, e.g. '15s' or '1m'.")] = None,
    tag: Annotated[
        Optional[str], typer.Option("--tag", help="Event tag template, e.g. 'kubernetes.metrics.*'.")
    ] = None,
    output: Annotated[Optional[str], typer.Option("--output", help="Append events to this JSON-lines file.")] = None,
) -> None:
    """
    Validate the configuration and scrape the Summary API on a fixed interval.
    """
    if ctx.invoked_subcommand is not None:
        return

    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger.info("Initializing kubemetrics...")
    settings = apply_overrides(config, node_name, node_names, interval, tag, output)

    try:
        asyncio.run(_async_start(settings))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        logger.info("Shutting down kubemetrics.")
        raise typer.Exit()
    except Exception as e:
        logger.error(f"An unexpected error occurred during startup: {e}")
        logger.error("Startup failed: %s", traceback.format_exc())
        raise typer.Exit(code=1)
