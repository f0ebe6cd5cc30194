"""
Helpers shared by the extractors: parsing the DOM snapshot, reading text
and image sources, resolving URLs and evaluating fallback chains.
"""

import logging
import re
from typing import Callable, Iterable, List, Optional, TypeVar
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")
_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")
_WEB_SCHEMES = ("http", "https")


def parse_html(html: str) -> BeautifulSoup:
    """Parse a rendered snapshot; script/style bodies are dropped."""
    soup = BeautifulSoup(html or "", "lxml")
    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()
    return soup


def text_of(el: Optional[Tag]) -> str:
    """Element text with surrounding whitespace trimmed."""
    if el is None:
        return ""
    return el.get_text().strip()


def collapsed_text(el: Optional[Tag]) -> str:
    """Element text with every whitespace run squashed to one space."""
    if el is None:
        return ""
    return _WHITESPACE_RE.sub(" ", el.get_text(" ")).strip()


def lines_of(el: Optional[Tag]) -> List[str]:
    """Non-empty text lines, one per text node or source line."""
    if el is None:
        return []
    lines = []
    for chunk in el.get_text("\n").split("\n"):
        chunk = " ".join(chunk.split())
        if chunk:
            lines.append(chunk)
    return lines


def first_line(el: Optional[Tag]) -> str:
    lines = lines_of(el)
    return lines[0] if lines else ""


def body_text(soup: BeautifulSoup) -> str:
    body = soup.body or soup
    return body.get_text(" ")


def select_text(el: Tag, selector: str) -> str:
    """Text of the first descendant matching ``selector`` (document order)."""
    return text_of(el.select_one(selector))


def matches(el: Tag, selector: str) -> bool:
    return bool(el.css.match(selector))


def closest(el: Tag, selector: str) -> Optional[Tag]:
    """Nearest ancestor-or-self matching ``selector``."""
    return el.css.closest(selector)


def meta_content(soup: BeautifulSoup, selector: str) -> str:
    tag = soup.select_one(selector)
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def int_attr(el: Tag, name: str) -> int:
    """Leading integer of an attribute ("200px" -> 200), 0 when absent."""
    m = _LEADING_INT_RE.match(el.get(name) or "")
    return int(m.group(1)) if m else 0


def image_source(img: Tag) -> str:
    """src, then data-src / data-original, then the first srcset entry."""
    for attr in ("src", "data-src", "data-original"):
        value = (img.get(attr) or "").strip()
        if value:
            return value
    srcset = (img.get("srcset") or "").strip()
    if srcset:
        return srcset.split()[0]
    return ""


def is_embedded(src: str) -> bool:
    """Inline image data that should never be returned as a URL."""
    return src.startswith("data:") or "base64" in src


def normalize_url(url: str) -> str:
    """Trim and coerce scheme-less input to https://."""
    url = (url or "").strip()
    if url and not re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", url):
        url = "https://" + url.lstrip("/")
    return url


def resolve_url(href: Optional[str], base_url: str) -> Optional[str]:
    """Absolute http(s) form of ``href`` against ``base_url``; None if unusable."""
    if not href:
        return None
    href = href.replace('"', "").replace("'", "").strip()
    if not href or is_embedded(href):
        return None
    try:
        absolute = urljoin(normalize_url(base_url), href)
    except ValueError:
        return None
    if urlparse(absolute).scheme not in _WEB_SCHEMES:
        return None
    return absolute


def first_of(
    strategies: Iterable[Callable[[], Optional[T]]],
    default: T,
    accept: Callable[[T], bool] = bool,
) -> T:
    """Run strategies in order and return the first accepted value."""
    for strategy in strategies:
        value = strategy()
        if value is not None and accept(value):
            return value
    return default
