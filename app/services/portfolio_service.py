"""
Portfolio analysis service.

Runs the scraper, asks the LLM for a short design review and keeps a
record of every attempt (successful or not) in ``portfolio_analyses``.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.portfolio_analysis import PortfolioAnalysis
from app.services.llm_service import analyze_portfolio
from portfolio_scraper import PortfolioScraper, PortfolioScraperError, ScrapeResult

logger = logging.getLogger(__name__)


def current_style(result: ScrapeResult) -> str:
    return "Dark mode design" if result.design_analysis.is_dark_mode else "Light mode design"


def content_summary(result: ScrapeResult) -> str:
    return f"Found: {len(result.projects)} projects, {len(result.skills)} skills"


def analysis_to_ui(a: PortfolioAnalysis) -> dict:
    """Convert a PortfolioAnalysis row to the API format."""
    return {
        "id": str(a.id),
        "url": a.url,
        "status": a.status,
        "name": a.name,
        "title": a.title,
        "analysis": a.analysis,
        "error_message": a.error_message,
        "scraped_data": a.result,
        "created_at": a.created_at.isoformat() if a.created_at else None,
    }


async def run_analysis(
    db: AsyncSession,
    scraper: PortfolioScraper,
    url: str,
) -> tuple[PortfolioAnalysis, ScrapeResult]:
    """Scrape + analyze ``url`` and persist the outcome.

    Scraper and LLM errors are recorded with status ``failed`` and
    re-raised so the caller can map them to 400 / 502.
    """
    record = PortfolioAnalysis(url=url, status="pending")
    db.add(record)

    try:
        result = await scraper.scrape(url)
    except PortfolioScraperError as e:
        logger.warning("Scraping %s failed: %s", url, e)
        record.status = "failed"
        record.error_message = str(e)
        await db.commit()
        raise
    except Exception as e:
        logger.exception("Unexpected error scraping %s", url)
        record.status = "failed"
        record.error_message = f"Scraping failed: {e}"
        await db.commit()
        raise

    record.name = result.name
    record.title = result.title
    record.result = result.to_dict()
    try:
        analysis = await analyze_portfolio(result)
    except Exception as e:
        logger.exception("LLM analysis of %s failed", url)
        record.status = "failed"
        record.error_message = f"Analysis failed: {e}"
        await db.commit()
        raise

    record.status = "completed"
    record.url = result.url
    record.analysis = analysis
    await db.flush()
    return record, result
