"""
Pydantic models for scraped portfolio data.

Used by PortfolioScraper to return structured results.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Project(BaseModel):
    name: str
    description: str = "Project details"
    link: Optional[str] = None
    image: Optional[str] = None


class Experience(BaseModel):
    """Work experience. Dates are display strings, None when unknown."""
    position: str
    company: str = "Company"
    description: str = "Professional experience"
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class Education(BaseModel):
    degree: str = "Degree"
    institution: str = "Institution"
    field: str = ""
    graduation_year: str = ""


class Achievement(BaseModel):
    title: str
    description: str = ""
    image: Optional[str] = None
    link: Optional[str] = None


class SocialLinks(BaseModel):
    """One URL per platform, empty string when absent."""
    linkedin: str = ""
    github: str = ""
    twitter: str = ""
    instagram: str = ""


class DesignAnalysis(BaseModel):
    """Computed-style signals. Only ``error`` is set when analysis failed."""
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    has_navbar: Optional[bool] = None
    has_footer: Optional[bool] = None
    is_dark_mode: Optional[bool] = None
    error: Optional[str] = None


class NavigationResult(BaseModel):
    """Rendered DOM snapshot returned by the navigator."""
    url: str
    status: int
    html: str


class ScrapeResult(BaseModel):
    """Everything extracted from one portfolio page."""

    url: str
    name: str
    title: str
    bio: str
    hero_intro: str = ""
    profile_photo_url: str = ""
    email: str
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    headings: List[str] = Field(default_factory=list)
    paragraphs: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    achievements: List[Achievement] = Field(default_factory=list)
    design_analysis: DesignAnalysis = Field(default_factory=DesignAnalysis)
    sections: Dict[str, Optional[str]] = Field(default_factory=dict)
    scraped_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")

    def to_json(self, **kwargs) -> str:
        return self.model_dump_json(**kwargs)

    def __repr__(self) -> str:
        return (
            f"<ScrapeResult {self.name} | {self.title}"
            f" | skills={len(self.skills)} projects={len(self.projects)}"
            f" exp={len(self.experience)} edu={len(self.education)}"
            f" ach={len(self.achievements)}>"
        )
