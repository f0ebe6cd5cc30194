"""
portfolio_scraper — heuristic content extraction from portfolio websites.

Provides:
    BrowserManager     — shared Playwright browser with a bounded tab pool
    PortfolioScraper   — navigate + extract + validate in one call
    extract_portfolio  — pure extraction from an already rendered HTML string
    navigate           — page loading with fallback waits and soft-404 checks

Typical usage:

    from portfolio_scraper import BrowserManager, PortfolioScraper

    browser = BrowserManager(headless=True, max_pages=4)
    scraper = PortfolioScraper(browser)
    try:
        result = await scraper.scrape("https://janedoe.dev")
        print(result.name, result.skills, len(result.projects))
    finally:
        await browser.shutdown()

    # Offline, e.g. on a saved snapshot
    from portfolio_scraper import extract_portfolio
    result = extract_portfolio(html, "https://janedoe.dev")
"""

from .browser import BrowserManager
from .navigator import WaitStrategy, is_error_page, navigate
from .scraper import PortfolioScraper, extract_portfolio, validate_result
from .scoring import Rule, ScoringPolicy
from .models import (
    Achievement,
    DesignAnalysis,
    Education,
    Experience,
    NavigationResult,
    Project,
    ScrapeResult,
    SocialLinks,
)
from .exceptions import (
    BrowserError,
    ErrorPageDetectedError,
    HttpError,
    InsufficientDataError,
    NavigationError,
    NoResponseError,
    NotFoundError,
    PortfolioScraperError,
)

__all__ = [
    # Core
    "BrowserManager",
    "PortfolioScraper",
    "extract_portfolio",
    "validate_result",
    "navigate",
    "is_error_page",
    "WaitStrategy",
    "Rule",
    "ScoringPolicy",
    # Models
    "ScrapeResult",
    "Project",
    "Experience",
    "Education",
    "Achievement",
    "SocialLinks",
    "DesignAnalysis",
    "NavigationResult",
    # Exceptions
    "PortfolioScraperError",
    "BrowserError",
    "NavigationError",
    "NoResponseError",
    "HttpError",
    "NotFoundError",
    "ErrorPageDetectedError",
    "InsufficientDataError",
]
