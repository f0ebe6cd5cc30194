"""
Playwright browser lifecycle for portfolio scraping.

One Chromium process is started lazily on first use and shared by every
scrape; each scrape gets its own tab, bounded by ``max_pages`` and always
closed on the way out.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from .exceptions import BrowserError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)


class BrowserManager:
    """Shared headless browser with scoped, bounded tab acquisition.

    Example::

        browser = BrowserManager(max_pages=4)
        async with browser.page() as page:
            await page.goto("https://example.com")
        await browser.shutdown()
    """

    def __init__(
        self,
        headless: bool = True,
        max_pages: int = 4,
        viewport: Optional[Dict[str, int]] = None,
        user_agent: Optional[str] = None,
        **launch_options: Any,
    ):
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self.headless = headless
        self.max_pages = max_pages
        self.viewport = viewport or {"width": 1280, "height": 800}
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.launch_options = launch_options
        self.launch_options.setdefault(
            "args", ["--no-sandbox", "--disable-setuid-sandbox"]
        )

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._start_lock = asyncio.Lock()
        self._slots = asyncio.Semaphore(max_pages)
        self._open_pages: set[Page] = set()

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.shutdown()

    @property
    def is_running(self) -> bool:
        return self._context is not None

    @property
    def open_pages(self) -> int:
        return len(self._open_pages)

    async def start(self) -> None:
        """Launch Chromium unless it is already running."""
        async with self._start_lock:
            if self._context is not None:
                return
            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(
                    headless=self.headless,
                    **self.launch_options,
                )
                self._context = await self._browser.new_context(
                    viewport=self.viewport,
                    user_agent=self.user_agent,
                )
                logger.info("Browser launched (headless=%s)", self.headless)
            except Exception as e:
                await self._close_resources()
                raise BrowserError(f"Failed to start browser: {e}") from e

    async def acquire(self) -> Page:
        """Open a new tab, waiting for a free slot when the pool is full."""
        await self._slots.acquire()
        try:
            await self.start()
            page = await self._context.new_page()
        except BrowserError:
            self._slots.release()
            raise
        except Exception as e:
            self._slots.release()
            raise BrowserError(f"Failed to open a browser tab: {e}") from e
        self._open_pages.add(page)
        return page

    async def release(self, page: Page) -> None:
        """Close a tab obtained from ``acquire`` and free its slot."""
        if page not in self._open_pages:
            return
        self._open_pages.discard(page)
        try:
            await page.close()
        except Exception as e:
            logger.error("Error closing page: %s", e)
        finally:
            self._slots.release()

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Scoped tab: closed on success, timeout and error alike."""
        page = await self.acquire()
        try:
            yield page
        finally:
            await self.release(page)

    async def shutdown(self) -> None:
        """Close every open tab and stop the browser process."""
        for page in list(self._open_pages):
            await self.release(page)
        async with self._start_lock:
            await self._close_resources()
        logger.info("Browser closed")

    async def _close_resources(self) -> None:
        for resource in (self._context, self._browser):
            if resource:
                try:
                    await resource.close()
                except Exception as e:
                    logger.error("Error closing resource: %s", e)
        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.error("Error stopping playwright: %s", e)
        self._context = self._browser = self._playwright = None
