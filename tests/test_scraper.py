"""End-to-end extraction and the PortfolioScraper aggregate."""

import threading
from unittest.mock import AsyncMock, patch

import pytest

from portfolio_scraper import (
    InsufficientDataError,
    NotFoundError,
    PortfolioScraper,
    extract_portfolio,
    validate_result,
)
from portfolio_scraper.design import DESIGN_ERROR, analyze_design
from portfolio_scraper.models import DesignAnalysis

ABOUT = "I build accessible web applications and care deeply about performance and design."
BLANK_HTML = "<html><body><p>Hello there</p></body></html>"


class TestExtractPortfolio:
    def test_jane_doe(self, jane_doe_html):
        result = extract_portfolio(jane_doe_html, "https://janedoe.dev")
        assert result.name == "Jane Doe"
        assert result.bio == ABOUT
        assert result.email == "jane@x.com"
        assert [p.name for p in result.projects] == ["Weather App", "Budget Tracker", "Chat Server"]
        assert result.projects[0].description == "Forecasts built with React."
        assert "React" in result.skills
        assert result.title == "Software Engineer"
        assert result.profile_photo_url == ""
        assert result.sections["about"] == "detected"

    def test_idempotent_except_timestamp(self, jane_doe_html):
        first = extract_portfolio(jane_doe_html, "https://janedoe.dev").to_dict()
        second = extract_portfolio(jane_doe_html, "https://janedoe.dev").to_dict()
        first.pop("scraped_at")
        second.pop("scraped_at")
        assert first == second

    def test_urls_are_absolute(self):
        html = """
        <html><head><title>Sam Lee</title></head><body>
          <header><img class="avatar" src="/me.jpg" width="300" height="300"></header>
          <div class="project-card"><h3>Site</h3><a href="projects/site">x</a><img src="./shot.png"></div>
          <section><h2>Awards</h2><ul><li><a href="/award">Best Hack 2021</a></li></ul></section>
          <a href="//github.com/samlee">GitHub</a>
        </body></html>
        """
        result = extract_portfolio(html, "samlee.io/")
        assert result.url == "https://samlee.io/"
        assert result.profile_photo_url == "https://samlee.io/me.jpg"
        assert result.projects[0].link == "https://samlee.io/projects/site"
        assert result.projects[0].image == "https://samlee.io/shot.png"
        assert result.achievements[0].link == "https://samlee.io/award"
        assert result.social_links.github == "https://github.com/samlee"

    def test_caps_hold_on_large_pages(self):
        parts = ["<html><head><title>Big Page</title></head><body>"]
        parts += [f"<article><h3>Project {i}</h3></article>" for i in range(40)]
        parts += [f"<span class='skill'>Python {i}</span>" for i in range(40)]
        parts += [f"<div class='job'><h4>Job {i}</h4></div>" for i in range(20)]
        parts += [f"<div class='degree'><h4>Degree {i}</h4></div>" for i in range(20)]
        parts.append("<section><h2>Certifications</h2><ul>")
        parts += [f"<li>Certificate number {i}</li>" for i in range(30)]
        parts.append("</ul></section>")
        parts += [f"<p>Paragraph {i} long enough to be kept around.</p>" for i in range(30)]
        parts.append("</body></html>")

        result = extract_portfolio("".join(parts), "https://big.dev")
        assert len(result.projects) == 12
        assert len(result.skills) == 25
        assert len(result.experience) == 5
        assert len(result.education) == 5
        assert len(result.achievements) == 10
        assert len(result.paragraphs) == 10

    def test_failing_extractor_falls_back(self, jane_doe_html):
        with patch("portfolio_scraper.scraper.extract_skills", side_effect=RuntimeError("boom")):
            result = extract_portfolio(jane_doe_html, "https://janedoe.dev")
        assert result.skills == []
        assert result.name == "Jane Doe"
        assert len(result.projects) == 3

    def test_default_design(self, jane_doe_html):
        result = extract_portfolio(jane_doe_html, "https://janedoe.dev")
        assert result.design_analysis == DesignAnalysis()


class TestValidateResult:
    def test_blank_page_rejected(self):
        with pytest.raises(InsufficientDataError):
            validate_result(extract_portfolio(BLANK_HTML, "https://blank.dev"))

    def test_named_page_accepted(self):
        result = extract_portfolio(
            "<html><head><title>Jane Doe</title></head><body></body></html>",
            "https://janedoe.dev",
        )
        assert validate_result(result) is result

    def test_skills_alone_are_enough(self):
        result = extract_portfolio("<body><p>Python and Docker</p></body>", "https://x.dev")
        assert result.name == "Portfolio Owner"
        assert validate_result(result) is result


class TestAnalyzeDesign:
    @pytest.mark.asyncio
    async def test_reads_computed_styles(self, page_factory):
        page = page_factory(design={
            "background_color": "rgb(10, 10, 10)",
            "text_color": "rgb(240, 240, 240)",
            "has_navbar": True,
            "has_footer": True,
            "is_dark_mode": True,
        })
        design = await analyze_design(page)
        assert design.is_dark_mode is True
        assert design.background_color == "rgb(10, 10, 10)"
        assert design.error is None

    @pytest.mark.asyncio
    async def test_failure_is_reported_not_raised(self, page_factory):
        page = page_factory()
        page.evaluate = AsyncMock(side_effect=Exception("Execution context was destroyed"))
        design = await analyze_design(page)
        assert design.error == DESIGN_ERROR
        assert design.is_dark_mode is None


class TestPortfolioScraper:
    @pytest.mark.asyncio
    async def test_scrape(self, jane_doe_html, page_factory, browser_factory):
        page = page_factory(jane_doe_html)
        browser = browser_factory(page)
        scraper = PortfolioScraper(browser, settle_delay=0)

        result = await scraper.scrape("janedoe.dev")

        assert result.url == "https://janedoe.dev"
        assert result.name == "Jane Doe"
        assert result.design_analysis.has_navbar is True
        assert browser.acquired == browser.released == 1

    @pytest.mark.asyncio
    async def test_extraction_runs_in_worker_thread(self, jane_doe_html, page_factory, browser_factory):
        threads = []

        def recording(*args):
            threads.append(threading.get_ident())
            return extract_portfolio(*args)

        scraper = PortfolioScraper(browser_factory(page_factory(jane_doe_html)), settle_delay=0)
        with patch("portfolio_scraper.scraper.extract_portfolio", side_effect=recording):
            result = await scraper.scrape("janedoe.dev")

        assert result.name == "Jane Doe"
        assert len(threads) == 1
        assert threads[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_design_failure_does_not_fail_scrape(self, jane_doe_html, page_factory, browser_factory):
        page = page_factory(jane_doe_html)
        page.evaluate = AsyncMock(side_effect=Exception("boom"))
        scraper = PortfolioScraper(browser_factory(page), settle_delay=0)

        result = await scraper.scrape("https://janedoe.dev")

        assert result.design_analysis.error == DESIGN_ERROR
        assert len(result.projects) == 3

    @pytest.mark.asyncio
    async def test_http_error_releases_page(self, page_factory, response_factory, browser_factory):
        page = page_factory(goto=AsyncMock(return_value=response_factory(404)))
        browser = browser_factory(page)
        scraper = PortfolioScraper(browser, settle_delay=0)

        with pytest.raises(NotFoundError):
            await scraper.scrape("https://janedoe.dev/nope")

        page.evaluate.assert_not_awaited()
        assert browser.released == 1

    @pytest.mark.asyncio
    async def test_blank_page(self, page_factory, browser_factory):
        scraper = PortfolioScraper(browser_factory(page_factory(BLANK_HTML)), settle_delay=0)
        with pytest.raises(InsufficientDataError):
            await scraper.scrape("https://blank.dev")

    @pytest.mark.asyncio
    async def test_fetch(self, jane_doe_html, page_factory, browser_factory):
        browser = browser_factory(page_factory(jane_doe_html))
        snapshot = await PortfolioScraper(browser, settle_delay=0).fetch("janedoe.dev")
        assert snapshot.status == 200
        assert snapshot.html == jane_doe_html
        assert browser.released == 1
