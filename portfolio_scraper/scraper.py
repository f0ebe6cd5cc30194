"""
Portfolio scraper: one navigation, then every extractor over the same
rendered snapshot, then a final sanity check.

PortfolioScraper        — drives the shared browser (async, Playwright)
extract_portfolio()     — pure extraction from an HTML string
validate_result()       — raises InsufficientDataError on empty results
"""

import asyncio
import logging
from typing import Callable, Optional, TypeVar

from bs4 import BeautifulSoup

from .browser import BrowserManager
from .career import extract_achievements, extract_education, extract_experience
from .design import analyze_design
from .dom import normalize_url, parse_html
from .exceptions import InsufficientDataError
from .models import DesignAnalysis, NavigationResult, ScrapeResult, SocialLinks
from .navigator import DEFAULT_STRATEGIES, ERROR_PAGE_MAX_LENGTH, WaitStrategy, navigate
from .photo import extract_profile_photo
from .profile import (
    FALLBACK_BIO,
    FALLBACK_EMAIL,
    FALLBACK_NAME,
    FALLBACK_TITLE,
    detect_sections,
    extract_bio,
    extract_email,
    extract_headings,
    extract_hero_intro,
    extract_name,
    extract_paragraphs,
    extract_social_links,
    extract_title,
)
from .projects import extract_projects
from .skills import extract_skills

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _safe(field: str, extractor: Callable[[], T], fallback: T) -> T:
    try:
        return extractor()
    except Exception as e:
        logger.warning("Extractor '%s' failed, using fallback: %s", field, e)
        return fallback


def extract_portfolio(
    html: str,
    url: str,
    design: Optional[DesignAnalysis] = None,
) -> ScrapeResult:
    """Build a ScrapeResult from a rendered snapshot. Never raises per field."""
    url = normalize_url(url)
    soup: BeautifulSoup = parse_html(html)

    name = _safe("name", lambda: extract_name(soup), FALLBACK_NAME)
    headings = _safe("headings", lambda: extract_headings(soup), [])
    paragraphs = _safe("paragraphs", lambda: extract_paragraphs(soup), [])

    return ScrapeResult(
        url=url,
        name=name,
        title=_safe("title", lambda: extract_title(soup), FALLBACK_TITLE),
        bio=_safe("bio", lambda: extract_bio(soup), FALLBACK_BIO),
        hero_intro=_safe("hero_intro", lambda: extract_hero_intro(soup), ""),
        profile_photo_url=_safe(
            "profile_photo", lambda: extract_profile_photo(soup, url, name), "",
        ),
        email=_safe("email", lambda: extract_email(soup), FALLBACK_EMAIL),
        social_links=_safe(
            "social_links", lambda: extract_social_links(soup, url), SocialLinks(),
        ),
        headings=headings,
        paragraphs=paragraphs,
        skills=_safe("skills", lambda: extract_skills(soup), []),
        projects=_safe("projects", lambda: extract_projects(soup, url), []),
        experience=_safe("experience", lambda: extract_experience(soup), []),
        education=_safe("education", lambda: extract_education(soup), []),
        achievements=_safe("achievements", lambda: extract_achievements(soup, url), []),
        design_analysis=design or DesignAnalysis(),
        sections=_safe("sections", lambda: detect_sections(headings, paragraphs), {}),
    )


def validate_result(result: ScrapeResult) -> ScrapeResult:
    """Reject results with the fallback name and no skills, projects or experience."""
    if result.name == FALLBACK_NAME and not (
        result.skills or result.projects or result.experience
    ):
        raise InsufficientDataError()
    return result


class PortfolioScraper:
    """
    Async scraper for arbitrary portfolio sites.

    Example::

        browser = BrowserManager()
        scraper = PortfolioScraper(browser)
        result = await scraper.scrape("janedoe.dev")
        await browser.shutdown()
    """

    def __init__(
        self,
        browser: Optional[BrowserManager] = None,
        settle_delay: float = 3.0,
        strategies: tuple[WaitStrategy, ...] = DEFAULT_STRATEGIES,
        error_page_max_length: int = ERROR_PAGE_MAX_LENGTH,
    ):
        self.browser = browser or BrowserManager()
        self.settle_delay = settle_delay
        self.strategies = strategies
        self.error_page_max_length = error_page_max_length

    # ── public API ───────────────────────────────────────────────

    async def scrape(self, url: str) -> ScrapeResult:
        """
        Scrape a portfolio page.

        Args:
            url: absolute or scheme-less URL, e.g. ``janedoe.dev``.

        Returns:
            ScrapeResult with every field populated (fallbacks included).

        Raises:
            PortfolioScraperError subclasses for navigation, HTTP,
            error-page and insufficient-data failures.
        """
        async with self.browser.page() as page:
            snapshot = await self._navigate(page, url)
            design = await analyze_design(page)

        # extraction is CPU-bound
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None, extract_portfolio, snapshot.html, snapshot.url, design,
        )
        result = validate_result(result)
        logger.info(
            "Scraped %s: name=%r skills=%d projects=%d experience=%d education=%d achievements=%d",
            snapshot.url, result.name, len(result.skills), len(result.projects),
            len(result.experience), len(result.education), len(result.achievements),
        )
        return result

    async def fetch(self, url: str) -> NavigationResult:
        """Load a page in its own tab and return the rendered snapshot."""
        async with self.browser.page() as page:
            return await self._navigate(page, url)

    async def close(self) -> None:
        await self.browser.shutdown()

    # ── internals ────────────────────────────────────────────────

    async def _navigate(self, page, url: str) -> NavigationResult:
        return await navigate(
            page,
            url,
            settle_delay=self.settle_delay,
            strategies=self.strategies,
            error_page_max_length=self.error_page_max_length,
        )
