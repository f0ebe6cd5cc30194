"""Portfolio routes: scrape a URL, analyze it with the LLM, browse past analyses."""

import logging
import uuid as _uuid

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_scraper
from app.core.config import SCRAPE_FAILURE_SUGGESTION
from app.core.database import get_db
from app.models.portfolio_analysis import PortfolioAnalysis
from app.services.portfolio_service import (
    analysis_to_ui,
    content_summary,
    current_style,
    run_analysis,
)
from portfolio_scraper import PortfolioScraper, PortfolioScraperError

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])
logger = logging.getLogger(__name__)


class UrlRequest(BaseModel):
    url: str


def _scrape_failed(error: PortfolioScraperError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "message": "Failed to scrape portfolio",
            "error": str(error),
            "suggestion": SCRAPE_FAILURE_SUGGESTION,
        },
    )


@router.post("/scrape")
async def scrape_portfolio(
    body: UrlRequest,
    scraper: PortfolioScraper = Depends(get_scraper),
):
    """Scrape a portfolio URL and return the extracted data."""
    try:
        result = await scraper.scrape(body.url)
    except PortfolioScraperError as e:
        logger.warning("Scrape of %s failed: %s", body.url, e)
        return _scrape_failed(e)
    except Exception as e:
        logger.exception("Unexpected error scraping %s", body.url)
        return JSONResponse(
            status_code=502,
            content={"message": "Failed to scrape portfolio", "error": str(e)},
        )
    return result.to_dict()


@router.post("/analyze")
async def analyze_portfolio(
    body: UrlRequest,
    scraper: PortfolioScraper = Depends(get_scraper),
    db: AsyncSession = Depends(get_db),
):
    """Scrape a portfolio, get an LLM design review, store both."""
    try:
        record, result = await run_analysis(db, scraper, body.url)
    except PortfolioScraperError as e:
        return _scrape_failed(e)
    except Exception as e:
        return JSONResponse(
            status_code=502,
            content={"message": "Failed to analyze portfolio", "error": str(e)},
        )
    return {
        "id": str(record.id),
        "current_style": current_style(result),
        "content_summary": content_summary(result),
        "analysis": record.analysis,
        "scraped_data": result.to_dict(),
    }


@router.get("/analyses")
async def list_analyses(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    """Return stored analyses (recent first)."""
    offset = (page - 1) * per_page
    result = await db.execute(
        select(PortfolioAnalysis)
        .order_by(PortfolioAnalysis.created_at.desc())
        .limit(per_page)
        .offset(offset)
    )
    analyses = result.scalars().all()
    count_row = await db.execute(select(func.count()).select_from(PortfolioAnalysis))
    total = count_row.scalar() or 0
    return {"items": [analysis_to_ui(a) for a in analyses], "total": total}


@router.get("/analyses/{analysis_id}")
async def get_analysis(
    analysis_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Return one stored analysis."""
    try:
        aid = _uuid.UUID(analysis_id)
    except ValueError:
        return JSONResponse(status_code=400, content={"error": "Invalid analysis id"})
    analysis = await db.get(PortfolioAnalysis, aid)
    if analysis is None:
        return JSONResponse(status_code=404, content={"error": "Analysis not found"})
    return analysis_to_ui(analysis)
