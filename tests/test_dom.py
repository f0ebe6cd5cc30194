"""Tests for DOM helpers and URL handling."""

from portfolio_scraper.dom import (
    first_line,
    first_of,
    image_source,
    int_attr,
    normalize_url,
    parse_html,
    resolve_url,
)


class TestParseHtml:
    def test_drops_script_and_style(self):
        soup = parse_html("<body><script>var a = 1;</script><style>p{}</style><p>Hi</p></body>")
        assert soup.body.get_text().strip() == "Hi"

    def test_empty_input(self):
        assert parse_html("").get_text() == ""


class TestText:
    def test_first_line_skips_blank_lines(self):
        soup = parse_html("<div>\n\n   Gamma project  \n more text</div>")
        assert first_line(soup.div) == "Gamma project"

    def test_int_attr(self):
        img = parse_html('<img width="200px" height="abc">').img
        assert int_attr(img, "width") == 200
        assert int_attr(img, "height") == 0
        assert int_attr(img, "missing") == 0

    def test_image_source_fallbacks(self):
        lazy = parse_html('<img data-src="/lazy.jpg">').img
        srcset = parse_html('<img srcset="/a.jpg 1x, /b.jpg 2x">').img
        assert image_source(lazy) == "/lazy.jpg"
        assert image_source(srcset) == "/a.jpg"


class TestUrls:
    def test_normalize_adds_https(self):
        assert normalize_url("  janedoe.dev ") == "https://janedoe.dev"

    def test_normalize_keeps_scheme(self):
        assert normalize_url("http://janedoe.dev") == "http://janedoe.dev"

    def test_resolve_relative(self):
        assert resolve_url("img/a.png", "https://jane.dev/work/") == "https://jane.dev/work/img/a.png"

    def test_resolve_root_relative(self):
        assert resolve_url("/a", "https://jane.dev/work/") == "https://jane.dev/a"

    def test_resolve_strips_quotes(self):
        assert resolve_url('"/a"', "https://jane.dev") == "https://jane.dev/a"

    def test_resolve_rejects_inline_data(self):
        assert resolve_url("data:image/png;base64,AAAA", "https://jane.dev") is None

    def test_resolve_rejects_non_web_schemes(self):
        assert resolve_url("javascript:void(0)", "https://jane.dev") is None
        assert resolve_url("mailto:jane@x.com", "https://jane.dev") is None

    def test_resolve_empty(self):
        assert resolve_url(None, "https://jane.dev") is None
        assert resolve_url("", "https://jane.dev") is None


class TestFirstOf:
    def test_first_accepted_value_wins(self):
        calls = []

        def a():
            calls.append("a")
            return ""

        def b():
            calls.append("b")
            return "B"

        def c():
            calls.append("c")
            return "C"

        assert first_of([a, b, c], "default") == "B"
        assert calls == ["a", "b"]

    def test_default_when_nothing_accepted(self):
        assert first_of([lambda: None, lambda: "toolong"], "d", accept=lambda v: len(v) < 3) == "d"
