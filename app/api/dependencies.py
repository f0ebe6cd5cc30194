"""FastAPI dependencies shared by the portfolio routes."""

from fastapi import HTTPException, Request, status

from portfolio_scraper import PortfolioScraper


def get_scraper(request: Request) -> PortfolioScraper:
    """Return the process-wide scraper created in the app lifespan."""
    scraper = getattr(request.app.state, "scraper", None)
    if scraper is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Scraper is not running",
        )
    return scraper
