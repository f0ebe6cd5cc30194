"""Best-effort design signals read from computed styles in the live page."""

import logging

from playwright.async_api import Page

from .models import DesignAnalysis

logger = logging.getLogger(__name__)

DESIGN_ERROR = "Could not analyze design"

# Dark mode is a coarse proxy: red channel of the body background below 50.
_DESIGN_SCRIPT = """() => {
    const body = document.body;
    const style = window.getComputedStyle(body);
    const bg = style.backgroundColor || '';
    const red = bg.startsWith('rgb(') ? parseInt(bg.slice(4).split(',')[0]) : NaN;
    return {
        background_color: bg,
        text_color: style.color,
        has_navbar: !!document.querySelector('nav, header'),
        has_footer: !!document.querySelector('footer'),
        is_dark_mode: !Number.isNaN(red) && red < 50,
    };
}"""


async def analyze_design(page: Page) -> DesignAnalysis:
    """Never raises: failures come back as ``DesignAnalysis(error=...)``."""
    try:
        raw = await page.evaluate(_DESIGN_SCRIPT)
        return DesignAnalysis(**raw)
    except Exception as e:
        logger.warning("Design analysis failed: %s", e)
        return DesignAnalysis(error=DESIGN_ERROR)
