"""
Single-value profile fields: name, title, bio, hero intro, email, social
links, plus the raw headings/paragraphs and section detection.

Each field is an ordered list of strategies tried until one produces an
acceptable value, ending in a literal fallback.
"""

import re
from typing import Dict, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .dom import (
    first_of,
    matches,
    meta_content,
    resolve_url,
    select_text,
    text_of,
)
from .models import SocialLinks

FALLBACK_NAME = "Portfolio Owner"
FALLBACK_TITLE = "Software Engineer"
FALLBACK_BIO = "Passionate professional with diverse skills and experience."
FALLBACK_EMAIL = "contact@example.com"

MAX_NAME_LENGTH = 50
MAX_PARAGRAPHS = 10

_TITLE_SEPARATOR_RE = re.compile(r"[-–—|]")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# (phrase found anywhere on the page, canonical title) in priority order
_ROLE_PHRASES = (
    ("front end engineer", "Front End Engineer"),
    ("frontend engineer", "Front End Engineer"),
    ("front-end engineer", "Front End Engineer"),
    ("software engineer", "Software Engineer"),
    ("full stack developer", "Full Stack Developer"),
)
_SECTION_NAMES = {
    "about", "about me", "contact", "projects", "skills",
    "experience", "education", "home",
}

_ABOUT_SECTIONS = '#about, .about, [class*="about"]'
_HERO_SECTIONS = "#home, #hero, .hero, .intro, header, .header"


# ── name ─────────────────────────────────────────────────────────

def _plausible_name(value: str) -> bool:
    return bool(value) and len(value) <= MAX_NAME_LENGTH


def extract_name(soup: BeautifulSoup) -> str:
    def from_title() -> str:
        title = text_of(soup.title)
        return _TITLE_SEPARATOR_RE.split(title, 1)[0].strip()

    def from_h1() -> str:
        return text_of(soup.find("h1"))

    def from_og_title() -> str:
        return meta_content(soup, 'meta[property="og:title"]')

    return first_of(
        [from_title, from_h1, from_og_title], FALLBACK_NAME, accept=_plausible_name,
    )


# ── title / role ─────────────────────────────────────────────────

def _not_section_name(value: str) -> bool:
    return bool(value) and value.lower() not in _SECTION_NAMES


def extract_title(soup: BeautifulSoup) -> str:
    page_text = soup.get_text(" ").lower()

    def from_role_phrases() -> Optional[str]:
        for phrase, canonical in _ROLE_PHRASES:
            if phrase in page_text:
                return canonical
        return None

    def from_role_hooks() -> str:
        return select_text(soup, ".subtitle, .role, .job-title, .tagline")

    def from_first_h2() -> Optional[str]:
        text = text_of(soup.find("h2"))
        return text if 5 < len(text) < 100 else None

    def from_h1_sibling() -> Optional[str]:
        h1 = soup.find("h1")
        if h1 is None:
            return None
        sibling = h1.find_next_sibling()
        if sibling is None or not matches(sibling, "p, h2, .subtitle"):
            return None
        text = text_of(sibling)
        return text if len(text) < 100 else None

    return first_of(
        [from_role_phrases, from_role_hooks, from_first_h2, from_h1_sibling],
        FALLBACK_TITLE,
        accept=_not_section_name,
    )


# ── bio & hero ───────────────────────────────────────────────────

def extract_bio(soup: BeautifulSoup) -> str:
    def from_about_section() -> Optional[str]:
        paragraphs = []
        seen = set()
        for section in soup.select(_ABOUT_SECTIONS):
            for p in section.find_all("p"):
                if id(p) in seen:
                    continue
                seen.add(id(p))
                text = text_of(p)
                if len(text) > 20:
                    paragraphs.append(text)
        bio = "\n\n".join(paragraphs)
        return bio if len(bio) > 30 else None

    def from_long_paragraphs() -> str:
        texts = [text_of(p) for p in soup.find_all("p")]
        texts = [t for t in texts if 50 <= len(t) < 1000]
        texts.sort(key=len, reverse=True)
        return "\n\n".join(texts[:3])

    return first_of([from_about_section, from_long_paragraphs], FALLBACK_BIO)


def extract_hero_intro(soup: BeautifulSoup) -> str:
    hero = soup.select_one(_HERO_SECTIONS)
    if hero is None:
        return ""
    for el in hero.select("p, h2, h3"):
        text = text_of(el)
        if 40 < len(text) < 400:
            return text
    return ""


# ── contact ──────────────────────────────────────────────────────

def extract_email(soup: BeautifulSoup) -> str:
    def from_mailto() -> Optional[str]:
        link = soup.select_one('a[href^="mailto:" i]')
        if link is None:
            return None
        address = link["href"].split(":", 1)[1]
        return address.split("?", 1)[0].strip()

    def from_text() -> Optional[str]:
        m = _EMAIL_RE.search(soup.get_text(" "))
        return m.group(0) if m else None

    return first_of([from_mailto, from_text], FALLBACK_EMAIL)


_SOCIAL_HOSTS = (
    ("linkedin", ("linkedin.com",)),
    ("github", ("github.com",)),
    ("twitter", ("twitter.com", "x.com")),
    ("instagram", ("instagram.com",)),
)
_SHARE_TERMS = ("share", "intent", "sharing", "post", "status", "plugins")


def _host_matches(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)


def classify_social_link(url: str) -> Optional[str]:
    """Platform name for a profile link, None for anything else."""
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    path = f"{parsed.path}?{parsed.query}".lower()
    if any(term in path for term in _SHARE_TERMS):
        return None
    for platform, domains in _SOCIAL_HOSTS:
        if any(_host_matches(host, d) for d in domains):
            if platform == "github" and path.startswith("/settings"):
                return None
            return platform
    return None


def extract_social_links(soup: BeautifulSoup, base_url: str) -> SocialLinks:
    found: Dict[str, str] = {}
    for a in soup.find_all("a", href=True):
        url = resolve_url(a["href"], base_url)
        if not url:
            continue
        platform = classify_social_link(url)
        if platform and platform not in found:
            found[platform] = url
    return SocialLinks(**found)


# ── raw text & sections ──────────────────────────────────────────

def extract_headings(soup: BeautifulSoup) -> List[str]:
    return [t for t in (text_of(h) for h in soup.find_all(["h1", "h2", "h3"])) if t]


def extract_paragraphs(soup: BeautifulSoup) -> List[str]:
    texts = [text_of(p) for p in soup.find_all("p")]
    return [t for t in texts if len(t) > 20][:MAX_PARAGRAPHS]


_SECTION_KEYWORDS = (
    ("about", ("about",)),
    ("projects", ("project", "portfolio")),
    ("experience", ("experience", "work")),
    ("contact", ("contact",)),
    ("skills", ("skill", "technology")),
)


def detect_sections(headings: List[str], paragraphs: List[str]) -> Dict[str, Optional[str]]:
    text = " ".join([*headings, *paragraphs]).lower()
    return {
        section: "detected" if any(k in text for k in keywords) else None
        for section, keywords in _SECTION_KEYWORDS
    }
