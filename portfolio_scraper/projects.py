"""Project cards: title, description, link and image per card."""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .dom import first_line, image_source, is_embedded, matches, resolve_url, select_text
from .models import Project

logger = logging.getLogger(__name__)

MAX_PROJECTS = 12
FALLBACK_DESCRIPTION = "Project details"

PROJECT_SELECTORS = ", ".join((
    ".project", ".work-item", ".portfolio-item", ".card",
    ".featured-project", ".project-card", ".project-item",
    '[class*="project-card"]', '[class*="portfolio-card"]',
    "article", ".grid-item",
))
PROJECT_CONTAINERS = "#projects, #portfolio, #work, .projects, .portfolio"
_CARD_TYPES = ".card, .project-card, .featured-project, article"
_TITLE_SELECTORS = "h3, h4, h5, .title, strong, b, .project-title"
_DESCRIPTION_SELECTORS = "p, .description, span, .project-description"


def _unique(elements: List[Tag]) -> List[Tag]:
    seen = set()
    out = []
    for el in elements:
        if id(el) not in seen:
            seen.add(id(el))
            out.append(el)
    return out


def project_candidates(soup: BeautifulSoup) -> List[Tag]:
    """Card-like elements, from the projects section when there is one."""
    containers = soup.select(PROJECT_CONTAINERS)
    if not containers:
        return soup.select(PROJECT_SELECTORS)

    candidates: List[Tag] = []
    for container in containers:
        candidates.extend(container.select(PROJECT_SELECTORS))
    if not candidates:
        for container in containers:
            candidates.extend(container.find_all(recursive=False))
    return _unique(candidates)


def _is_wrapper(el: Tag) -> bool:
    """Holds other project items and is not itself a card."""
    return el.select_one(PROJECT_SELECTORS) is not None and not matches(el, _CARD_TYPES)


def _project_link(el: Tag, base_url: str) -> Optional[str]:
    anchor = el.find("a", href=True)
    href = anchor["href"] if anchor is not None else None
    if href is None and el.name == "a":
        href = el.get("href")
    return resolve_url(href, base_url)


def _project_image(el: Tag, base_url: str) -> Optional[str]:
    img = el.find("img")
    if img is None:
        return None
    src = image_source(img)
    if not src or is_embedded(src):
        return None
    return resolve_url(src, base_url)


def extract_projects(soup: BeautifulSoup, base_url: str) -> List[Project]:
    projects: List[Project] = []
    seen_titles = set()

    for el in project_candidates(soup):
        if len(projects) >= MAX_PROJECTS:
            break
        if _is_wrapper(el):
            continue

        title = select_text(el, _TITLE_SELECTORS) or first_line(el)[:50]
        if len(title) < 2 or title in seen_titles:
            continue
        seen_titles.add(title)

        projects.append(Project(
            name=title,
            description=select_text(el, _DESCRIPTION_SELECTORS) or FALLBACK_DESCRIPTION,
            link=_project_link(el, base_url),
            image=_project_image(el, base_url),
        ))

    if not projects:
        logger.info("No projects found with card selectors")
    return projects
