"""PortfolioLens — portfolio scraping and analysis API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import (
    LOG_LEVEL,
    SCRAPER_HEADLESS,
    SCRAPER_MAX_PAGES,
    SCRAPER_SETTLE_DELAY,
    SCRAPER_USER_AGENT,
)
from portfolio_scraper import BrowserManager, PortfolioScraper

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --------------- Lifespan ---------------


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Own the shared browser: started lazily on first scrape, closed on shutdown."""
    browser = BrowserManager(
        headless=SCRAPER_HEADLESS,
        max_pages=SCRAPER_MAX_PAGES,
        user_agent=SCRAPER_USER_AGENT or None,
    )
    application.state.scraper = PortfolioScraper(browser, settle_delay=SCRAPER_SETTLE_DELAY)
    try:
        yield
    finally:
        await browser.shutdown()


# --------------- App ---------------

app = FastAPI(title="PortfolioLens", lifespan=lifespan)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


# --------------- Include routers ---------------

from app.api.ai import router as ai_router  # noqa: E402
from app.api.portfolio import router as portfolio_router  # noqa: E402

app.include_router(portfolio_router)
app.include_router(ai_router)


# --------------- Run ---------------

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
