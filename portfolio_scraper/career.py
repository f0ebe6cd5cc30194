"""Experience, education and achievement entries."""

import re
from typing import List, Optional, Set, Tuple

from bs4 import BeautifulSoup, Tag

from .dom import (
    collapsed_text,
    first_line,
    image_source,
    is_embedded,
    resolve_url,
    select_text,
    text_of,
)
from .models import Achievement, Education, Experience

MAX_EXPERIENCE = 5
MAX_EDUCATION = 5
MAX_ACHIEVEMENTS = 10
# below this many heading-based hits, selector-based search tops the list up
ACHIEVEMENT_SUPPLEMENT_BELOW = 5

_EXPERIENCE_SELECTORS = '[class*="experience"], [class*="work"], .job, .position'
_EDUCATION_SELECTORS = '[class*="education"], .degree, .school'

_ACHIEVEMENT_KEYWORDS = (
    "certificate", "certification", "award", "achievement",
    "honor", "winner", "scholarship",
)
_ACHIEVEMENT_ITEMS = 'li, .item, .card, [class*="item"]'
_ACHIEVEMENT_SELECTORS = ", ".join((
    '[class*="achievement"]', '[id*="achievement"]',
    '[class*="certificate"]', '[id*="certificate"]',
    '[class*="award"]', '[id*="award"]',
    ".certification", ".honor", ".award-item",
))

_MONTH = r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?"
_DATE = rf"(?:{_MONTH}\s+)?(?:19|20)\d{{2}}"
_END_DATE = rf"(?:{_DATE}|present|current|now)"
_DATE_RANGE_RE = re.compile(
    rf"(?P<start>{_DATE})\s*(?:-|–|—|to)\s*(?P<end>{_END_DATE})", re.IGNORECASE,
)
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


def parse_date_range(text: str) -> Tuple[Optional[str], Optional[str]]:
    """("Jan 2020", "Present") style pair, (None, None) when no range is found."""
    m = _DATE_RANGE_RE.search(text or "")
    if not m:
        return None, None
    return m.group("start").strip(), m.group("end").strip()


# ── experience ───────────────────────────────────────────────────

def extract_experience(soup: BeautifulSoup) -> List[Experience]:
    experience: List[Experience] = []
    seen: Set[Tuple[str, str]] = set()

    for el in soup.select(_EXPERIENCE_SELECTORS):
        if len(experience) >= MAX_EXPERIENCE:
            break
        position = select_text(el, "h3, h4, .title, .role")
        if not position:
            continue
        company = select_text(el, ".company, .org, .employer") or "Company"
        # a wrapper and its first entry share the same heading
        if (position, company) in seen:
            continue
        seen.add((position, company))

        start, end = parse_date_range(collapsed_text(el))
        experience.append(Experience(
            position=position,
            company=company,
            description=select_text(el, "p, .description") or "Professional experience",
            start_date=start,
            end_date=end,
        ))
    return experience


# ── education ────────────────────────────────────────────────────

def extract_education(soup: BeautifulSoup) -> List[Education]:
    education: List[Education] = []

    for el in soup.select(_EDUCATION_SELECTORS):
        if len(education) >= MAX_EDUCATION:
            break
        degree = select_text(el, "h3, h4, .degree, .title")
        institution = select_text(el, ".school, .university, .institution")
        if not degree and not institution:
            continue
        years = _YEAR_RE.findall(collapsed_text(el))
        education.append(Education(
            degree=degree or "Degree",
            institution=institution or "Institution",
            field=select_text(el, ".field, .major"),
            graduation_year=years[-1] if years else "",
        ))
    return education


# ── achievements ─────────────────────────────────────────────────

def _achievement_from(el: Tag, base_url: str, seen_titles: Set[str]) -> Optional[Achievement]:
    text = text_of(el)
    if len(text) < 5 or len(text) > 500:
        return None
    title = first_line(el)
    if not title or title in seen_titles:
        return None

    image = None
    img = el.find("img")
    if img is not None:
        src = image_source(img)
        if src and not is_embedded(src):
            image = resolve_url(src, base_url)

    anchor = el.find("a", href=True)
    link = resolve_url(anchor["href"], base_url) if anchor is not None else None

    description = collapsed_text(el).replace(title, "", 1).strip()

    seen_titles.add(title)
    return Achievement(title=title, description=description, image=image, link=link)


def extract_achievements(soup: BeautifulSoup, base_url: str) -> List[Achievement]:
    achievements: List[Achievement] = []
    seen_titles: Set[str] = set()

    def collect(elements) -> None:
        for el in elements:
            if len(achievements) >= MAX_ACHIEVEMENTS:
                return
            item = _achievement_from(el, base_url, seen_titles)
            if item:
                achievements.append(item)

    for heading in soup.find_all(["h1", "h2", "h3", "h4"]):
        heading_text = heading.get_text().lower()
        if any(k in heading_text for k in _ACHIEVEMENT_KEYWORDS) and heading.parent:
            collect(heading.parent.select(_ACHIEVEMENT_ITEMS))

    if len(achievements) < ACHIEVEMENT_SUPPLEMENT_BELOW:
        collect(soup.select(_ACHIEVEMENT_SELECTORS))

    return achievements
