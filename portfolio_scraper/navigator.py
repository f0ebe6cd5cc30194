"""
Page loading with fallback wait strategies, HTTP status checks and
soft-404 detection.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Tuple

from playwright.async_api import Page

from .dom import body_text, normalize_url, parse_html
from .exceptions import (
    ErrorPageDetectedError,
    HttpError,
    NavigationError,
    NoResponseError,
    NotFoundError,
)
from .models import NavigationResult

logger = logging.getLogger(__name__)

ERROR_PAGE_PHRASES = (
    "page not found",
    "site not found",
    "404",
    "broken link",
    "doesn't exist on netlify",
    "doesn't exist on vercel",
    "this page could not be found",
    "the page you are looking for",
    "error 404",
)
ERROR_PAGE_MAX_LENGTH = 1000


@dataclass(frozen=True)
class WaitStrategy:
    wait_until: str
    timeout_ms: int


DEFAULT_STRATEGIES: Tuple[WaitStrategy, ...] = (
    WaitStrategy("networkidle", 30_000),
    WaitStrategy("load", 20_000),
)


def is_error_page(html: str, max_length: int = ERROR_PAGE_MAX_LENGTH) -> bool:
    """Short page whose text carries a known error phrase."""
    text = " ".join(body_text(parse_html(html)).split()).lower()
    if len(text) >= max_length:
        return False
    return any(phrase in text for phrase in ERROR_PAGE_PHRASES)


async def _goto(page: Page, url: str, strategies: Tuple[WaitStrategy, ...]):
    last_error: Exception = NavigationError("No navigation strategy configured")
    for i, strategy in enumerate(strategies):
        try:
            return await page.goto(
                url, wait_until=strategy.wait_until, timeout=strategy.timeout_ms,
            )
        except Exception as e:
            last_error = e
            if i + 1 < len(strategies):
                logger.warning(
                    "Navigation '%s' failed, falling back to '%s': %s",
                    strategy.wait_until, strategies[i + 1].wait_until, e,
                )
    logger.error("All navigation strategies failed for %s: %s", url, last_error)
    raise NavigationError(
        f"Failed to connect to the portfolio: {last_error}"
    ) from last_error


async def navigate(
    page: Page,
    url: str,
    settle_delay: float = 3.0,
    strategies: Tuple[WaitStrategy, ...] = DEFAULT_STRATEGIES,
    error_page_max_length: int = ERROR_PAGE_MAX_LENGTH,
) -> NavigationResult:
    """
    Load ``url`` in ``page`` and capture the rendered HTML.

    Raises:
        NavigationError: every wait strategy failed, or the rendered
            content could not be captured.
        NoResponseError: navigation produced no response object.
        NotFoundError / HttpError: status 404 / any other status >= 400.
        ErrorPageDetectedError: the page is essentially an error message.
    """
    url = normalize_url(url)
    if not url:
        raise NavigationError("A portfolio URL is required.")

    logger.info("Navigating to %s", url)
    response = await _goto(page, url, strategies)
    if response is None:
        raise NoResponseError()

    status = response.status
    logger.info("Status %d for %s", status, url)
    if status == 404:
        raise NotFoundError()
    if status >= 400:
        raise HttpError(status)

    try:
        if settle_delay > 0:
            await asyncio.sleep(settle_delay)
        html = await page.content()
    except Exception as e:
        # e.g. a client-side redirect destroying the execution context
        logger.error("Capturing content of %s failed: %s", url, e)
        raise NavigationError(f"Failed to capture page content: {e}") from e
    logger.info("Captured %d characters of HTML", len(html))

    if is_error_page(html, error_page_max_length):
        raise ErrorPageDetectedError()

    return NavigationResult(url=url, status=status, html=html)
