"""Profile photo selection over every <img> on the page."""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .dom import closest, image_source, int_attr, is_embedded, matches, meta_content, resolve_url
from .profile import FALLBACK_NAME
from .scoring import Rule, ScoringPolicy

logger = logging.getLogger(__name__)

META_IMAGE_SCORE = 45

_PROJECT_TERMS = (
    "project", "screenshot", "demo", "preview", "cover", "banner", "mockup", "thumb",
)
_PROJECT_SECTIONS = "#projects, #portfolio, #work, .projects-section, .portfolio-section"
_PROJECT_CARDS = ".project-card, .portfolio-item, .work-item"
_HERO_SECTIONS = "#hero, #about, header, .hero, .about, .intro"
_CHROME_SECTIONS = "nav, footer"
_PROFILE_HOOKS = "#profile-pic, .profile-pic, .avatar, .hero-img"


@dataclass
class ImageCandidate:
    element: Tag
    src: str
    alt: str
    width: int
    height: int
    person_name: str = ""

    @property
    def src_lower(self) -> str:
        return self.src.lower()

    def mentions(self, *terms: str) -> bool:
        src = self.src_lower
        return any(t in src or t in self.alt for t in terms)

    def inside(self, selector: str) -> bool:
        return closest(self.element, selector) is not None


def _matches_name(c: ImageCandidate) -> bool:
    if not c.person_name:
        return False
    return c.person_name in c.alt or re.sub(r"\s", "", c.person_name) in c.src_lower


def _near_square(c: ImageCandidate) -> bool:
    if c.width > 50 and c.height > 50:
        return 0.8 < c.width / c.height < 1.2
    return False


PHOTO_RULES: List[Rule[ImageCandidate]] = [
    # disqualifiers
    Rule("icon-or-logo", -50, lambda c: c.mentions("icon", "logo", "tracker")),
    Rule("too-small", -50, lambda c: 0 < c.width < 40),
    Rule("project-terms", -100, lambda c: c.mentions(*_PROJECT_TERMS)),
    Rule("in-project-section", -100, lambda c: c.inside(_PROJECT_SECTIONS)),
    Rule("in-project-card", -100, lambda c: c.inside(_PROJECT_CARDS)),
    # positives
    Rule("name-match", 60, _matches_name),
    Rule("cloudinary", 50, lambda c: "cloudinary" in c.src_lower and ".pdf" not in c.src_lower),
    Rule("profile-terms", 40, lambda c: c.mentions("profile", "avatar", "me")),
    Rule("in-hero", 30, lambda c: c.inside(_HERO_SECTIONS)),
    Rule(
        "in-nav-or-footer", -20,
        lambda c: not c.inside(_HERO_SECTIONS) and c.inside(_CHROME_SECTIONS),
    ),
    Rule("profile-hook", 30, lambda c: matches(c.element, _PROFILE_HOOKS)),
    Rule("near-square", 20, _near_square),
    Rule("large", 10, lambda c: c.width > 150),
]

PHOTO_POLICY: ScoringPolicy[ImageCandidate] = ScoringPolicy(PHOTO_RULES)


def _is_svg(src: str) -> bool:
    return src.lower().split("?", 1)[0].split("#", 1)[0].endswith(".svg")


def image_candidates(soup: BeautifulSoup, name: Optional[str] = None) -> List[ImageCandidate]:
    """Every scorable <img>; inline data and SVGs never become candidates."""
    person = (name or "").strip().lower()
    if person == FALLBACK_NAME.lower():
        person = ""
    candidates = []
    for img in soup.find_all("img"):
        src = image_source(img)
        if not src or is_embedded(src) or _is_svg(src):
            continue
        candidates.append(ImageCandidate(
            element=img,
            src=src,
            alt=(img.get("alt") or "").lower(),
            width=int_attr(img, "width"),
            height=int_attr(img, "height"),
            person_name=person,
        ))
    return candidates


def extract_profile_photo(soup: BeautifulSoup, base_url: str, name: Optional[str] = None) -> str:
    """Best-scoring profile image as an absolute URL, or "" if none qualifies."""
    best_url, best_score = "", -1

    top = PHOTO_POLICY.top(image_candidates(soup, name))
    if top is not None:
        logger.debug(
            "Best image %s score=%d rules=%s",
            top.candidate.src[:60], top.score, ",".join(top.matched),
        )
        best_url, best_score = top.candidate.src, top.score

    meta_image = (
        meta_content(soup, 'meta[property="og:image"]')
        or meta_content(soup, 'meta[name="twitter:image"]')
    )
    meta_lower = meta_image.lower()
    if ("profile" in meta_lower or "avatar" in meta_lower) and META_IMAGE_SCORE > best_score:
        best_url, best_score = meta_image, META_IMAGE_SCORE

    if best_score <= 0:
        return ""
    return resolve_url(best_url, base_url) or ""
