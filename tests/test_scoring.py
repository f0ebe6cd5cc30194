"""Tests for the additive rule table."""

from portfolio_scraper.scoring import Rule, ScoringPolicy

POLICY = ScoringPolicy([
    Rule("long", 10, lambda s: len(s) > 5),
    Rule("has-a", 5, lambda s: "a" in s),
    Rule("bad", -100, lambda s: s.startswith("x")),
])


class TestEvaluate:
    def test_weights_add_up(self):
        scored = POLICY.evaluate("banana!")
        assert scored.score == 15
        assert scored.matched == ("long", "has-a")

    def test_no_rule_matches(self):
        assert POLICY.score("hi") == 0

    def test_negative_rule(self):
        assert POLICY.score("xylophone") == -90


class TestSelection:
    def test_rank_orders_best_first(self):
        ranked = POLICY.rank(["hi", "banana!", "xa"])
        assert [s.candidate for s in ranked] == ["banana!", "hi", "xa"]
        assert [s.score for s in ranked] == [15, 0, -95]

    def test_ties_keep_first_seen(self):
        assert POLICY.top(["cat", "bat"]).candidate == "cat"

    def test_top_returns_negative_winner(self):
        top = POLICY.top(["xylophone"])
        assert top.candidate == "xylophone"
        assert top.score == -90

    def test_empty_candidates(self):
        assert POLICY.top([]) is None
