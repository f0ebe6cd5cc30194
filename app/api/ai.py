"""AI content helpers backed by the LLM service."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.services.llm_service import CONTENT_FIELDS, improve_content

router = APIRouter(prefix="/api/ai", tags=["ai"])
logger = logging.getLogger(__name__)


class ImproveContentRequest(BaseModel):
    field: str
    content: str


@router.post("/improve-content")
async def improve_content_route(body: ImproveContentRequest):
    """Rewrite a bio or project description."""
    if not body.content.strip():
        return JSONResponse(status_code=400, content={"message": "Content cannot be empty"})
    if body.field not in CONTENT_FIELDS:
        return JSONResponse(
            status_code=400,
            content={"message": f"Field must be one of: {', '.join(CONTENT_FIELDS)}"},
        )
    try:
        improved = await improve_content(body.field, body.content)
    except Exception as e:
        logger.exception("Content improvement failed")
        return JSONResponse(
            status_code=502,
            content={"message": "Failed to improve content", "error": str(e)},
        )
    return {"improved_content": improved}
