"""Text generation via an OpenAI-compatible API, plus the portfolio prompts."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI

from app.core.config import LLM_SYSTEM_PROMPT, OPENAI_API_BASE, OPENAI_API_KEY, OPENAI_MODEL
from portfolio_scraper import ScrapeResult

logger = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None

CONTENT_FIELDS = ("bio", "project")


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=OPENAI_API_KEY, base_url=OPENAI_API_BASE)
    return _client


async def generate_text(prompt: str, max_tokens: int = 1000) -> str:
    """Single-turn completion; returns "" when the model sends no content."""
    client = _get_client()
    resp = await client.chat.completions.create(
        model=OPENAI_MODEL,
        messages=[
            {"role": "system", "content": LLM_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=0.7,
        max_tokens=max_tokens,
    )
    if not resp.choices:
        return ""
    return (resp.choices[0].message.content or "").strip()


def build_analysis_prompt(result: ScrapeResult) -> str:
    skills = ", ".join(result.skills) or "Various"
    return (
        "Analyze this portfolio and provide design improvement suggestions:\n\n"
        f"URL: {result.url}\n"
        f"Name: {result.name}\n"
        f"Title: {result.title}\n"
        f"Skills: {skills}\n"
        f"Projects: {len(result.projects)}\n\n"
        "Provide brief analysis:\n"
        "1. Current design style\n"
        "2. Content summary\n"
        "3. Design improvement suggestions (colors, layout, style)\n\n"
        "Keep it concise (3-4 sentences total)."
    )


def build_improve_prompt(field: str, content: str) -> str:
    if field == "bio":
        task = (
            "Improve this portfolio bio. Make it compelling, professional, and "
            "engaging. Keep it 2-3 sentences. Focus on impact."
        )
        answer = "Return ONLY the improved bio, nothing else."
    elif field == "project":
        task = (
            "Improve this project description. Highlight impact, technical "
            "skills, and results. Make it compelling for recruiters."
        )
        answer = "Return ONLY the improved description, nothing else."
    else:
        raise ValueError(f"Unsupported field: {field}")
    return (
        f"{task}\n\n"
        "CRITICAL: NEVER change the user's core field of interest (e.g., if they "
        "mention App Development, do NOT change it to Web Development).\n\n"
        f'Original: "{content}"\n\n'
        f"{answer}"
    )


async def analyze_portfolio(result: ScrapeResult) -> str:
    return await generate_text(build_analysis_prompt(result), max_tokens=500)


async def improve_content(field: str, content: str) -> str:
    return await generate_text(build_improve_prompt(field, content), max_tokens=300)
