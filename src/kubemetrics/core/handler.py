# src/kubemetrics/core/handler.py
"""
Turns one Summary API HTTP response into exported metric events.

Every failure is contained here: a bad response is logged and produces no
events, and never propagates into the scheduler.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

import httpx
from pydantic import ValidationError

from ..exporters.base_exporter import BaseExporter
from ..models.events import MetricEvent
from ..models.summary import SummaryDocument
from .dispatcher import collect_events
from .exceptions import ParseError, ProtocolError, ScrapeError
from .tagging import TagTemplate
from .walker import ScrapeContext

logger = logging.getLogger(__name__)


def parse_response(
    response: httpx.Response, template: TagTemplate, now: Optional[datetime] = None
) -> List[MetricEvent]:
    """
    Validates and flattens a response.

    Raises:
        ProtocolError: If the status code is outside [200, 300).
        ParseError: If the body is not a well-formed summary document.
    """
    if not 200 <= response.status_code < 300:
        raise ProtocolError(response.status_code, response.text)

    try:
        payload = response.json()
    except ValueError as e:
        raise ParseError(f"Response body is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ParseError(f"Expected a JSON object from summary API, got {type(payload).__name__}")

    try:
        document = SummaryDocument.model_validate(payload)
    except ValidationError as e:
        raise ParseError(f"Response body is not a summary document: {e}") from e

    scraped_at = now or datetime.now(timezone.utc)
    ctx = ScrapeContext(template=template, scraped_at=scraped_at)
    try:
        return collect_events(ctx, document)
    except (TypeError, ValueError) as e:
        # Malformed timestamps and similar inside an otherwise valid document.
        raise ParseError(f"Malformed summary document: {e}") from e


async def handle_response(
    response: httpx.Response,
    template: TagTemplate,
    exporter: BaseExporter,
    node: Optional[str] = None,
    now: Optional[datetime] = None,
) -> int:
    """
    Exports the events of one response and returns how many were exported.
    Returns 0 and logs the reason when the response cannot be used.
    """
    try:
        events = parse_response(response, template, now=now)
        if not events:
            logger.debug("Summary API response for node '%s' contained no metrics.", node)
            return 0
        return await exporter.emit(events)
    except ScrapeError as e:
        logger.error("Failed to scrape metrics from node '%s': %s", node, e)
    except Exception as e:
        logger.error("Failed to scrape metrics from node '%s', error=%s", node, e, exc_info=True)
    return 0
