"""
Exception hierarchy for portfolio scraping.

Page-level conditions fail hard with one of these; field-level heuristics
never raise them (they fall back to defaults instead).
"""


class PortfolioScraperError(Exception):
    """Base exception for all portfolio scraping operations."""


# ── transport ────────────────────────────────────────────────────

class BrowserError(PortfolioScraperError):
    """Browser could not be started or a tab could not be opened."""


class NavigationError(PortfolioScraperError):
    """Both navigation strategies failed (timeout, DNS, refused, ...)."""


# ── HTTP level ───────────────────────────────────────────────────

class NoResponseError(PortfolioScraperError):
    """Navigation finished without any HTTP response object."""

    def __init__(self, message: str = (
        "No response from the server. The site might be down or blocking us."
    )):
        super().__init__(message)


class HttpError(PortfolioScraperError):
    """Page returned a 4xx/5xx status other than 404."""

    def __init__(self, status: int, message: str = ""):
        self.status = status
        super().__init__(
            message or f"Page returned error {status}. Please check the URL."
        )


class NotFoundError(HttpError):
    """Page returned 404."""

    def __init__(self, message: str = (
        "Page not found (404). Please check the URL and try again."
    )):
        super().__init__(404, message)


# ── content validity ─────────────────────────────────────────────

class ErrorPageDetectedError(PortfolioScraperError):
    """Page loaded fine but is just an error message (soft 404)."""

    def __init__(self, message: str = (
        "This appears to be an error page (404). "
        "Please enter a valid portfolio URL."
    )):
        super().__init__(message)


class InsufficientDataError(PortfolioScraperError):
    """Nothing meaningful could be extracted from the page."""

    def __init__(self, message: str = (
        "Could not extract portfolio data from this URL. "
        "Please ensure it's a valid portfolio website."
    )):
        super().__init__(message)
