"""
Additive candidate scoring.

A policy is an ordered table of (predicate, weight) rules. Every rule whose
predicate holds adds its signed weight; the highest total wins. Ties go to
the candidate seen first.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")


@dataclass(frozen=True)
class Rule(Generic[C]):
    name: str
    weight: int
    predicate: Callable[[C], bool]

    def applies(self, candidate: C) -> bool:
        return bool(self.predicate(candidate))


@dataclass(frozen=True)
class Scored(Generic[C]):
    candidate: C
    score: int
    matched: tuple[str, ...] = ()


class ScoringPolicy(Generic[C]):
    """Evaluate candidates against a rule table."""

    def __init__(self, rules: Sequence[Rule[C]]):
        self.rules = list(rules)

    def evaluate(self, candidate: C) -> Scored[C]:
        matched = [rule for rule in self.rules if rule.applies(candidate)]
        return Scored(
            candidate=candidate,
            score=sum(rule.weight for rule in matched),
            matched=tuple(rule.name for rule in matched),
        )

    def score(self, candidate: C) -> int:
        return self.evaluate(candidate).score

    def rank(self, candidates: Iterable[C]) -> List[Scored[C]]:
        """All candidates, best first; equal scores keep input order."""
        scored = [self.evaluate(c) for c in candidates]
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def top(self, candidates: Iterable[C]) -> Optional[Scored[C]]:
        """Highest-scoring candidate regardless of sign."""
        ranked = self.rank(candidates)
        return ranked[0] if ranked else None

