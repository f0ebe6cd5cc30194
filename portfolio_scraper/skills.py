"""Technology skills from keyword matches in body text and tag-like elements."""

import re
from typing import Dict, List

from bs4 import BeautifulSoup

from .dom import body_text, text_of

MAX_SKILLS = 25

TECH_KEYWORDS = (
    "javascript", "python", "java", "react", "node.js", "node", "angular", "vue",
    "html", "html5", "css", "css3", "typescript", "mongodb", "sql", "mysql", "postgresql",
    "aws", "docker", "git", "github", "api", "rest", "graphql", "express", "django", "flask",
    "c++", "c#", ".net", "php", "ruby", "go", "rust", "swift", "kotlin", "flutter", "dart",
    "redis", "kubernetes", "jenkins", "figma", "adobe", "photoshop", "illustrator",
    "bootstrap", "tailwind", "sass", "scss", "jquery", "firebase", "azure", "gcp",
    "linux", "bash", "shell", "agile", "scrum", "jira", "trello",
)

# word boundaries do not work next to "+", "#" or a leading "."
_SYMBOL_KEYWORDS = {"c++", "c#", ".net"}

_TAG_SELECTORS = (
    '.skill, .tag, .badge, .chip, li, '
    '[class*="skill"], [class*="tech"], [class*="stack"]'
)


def _keyword_pattern(keyword: str) -> re.Pattern:
    escaped = re.escape(keyword)
    if keyword in _SYMBOL_KEYWORDS:
        return re.compile(rf"(?:^|\s){escaped}(?:$|\s)", re.IGNORECASE)
    return re.compile(rf"\b{escaped}\b", re.IGNORECASE)


_KEYWORD_PATTERNS = [(k, _keyword_pattern(k)) for k in TECH_KEYWORDS]


def display_name(keyword: str) -> str:
    if keyword == "node":
        return "Node.js"
    return keyword[:1].upper() + keyword[1:]


def extract_skills(soup: BeautifulSoup) -> List[str]:
    skills: Dict[str, None] = {}

    text = body_text(soup).lower()
    for keyword, pattern in _KEYWORD_PATTERNS:
        if pattern.search(text):
            skills.setdefault(display_name(keyword), None)

    for el in soup.select(_TAG_SELECTORS):
        label = text_of(el)
        if 1 < len(label) < 25:
            lowered = label.lower()
            if any(k in lowered for k in TECH_KEYWORDS):
                skills.setdefault(label, None)

    return list(skills)[:MAX_SKILLS]
