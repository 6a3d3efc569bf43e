"""Base types for criterion scoring."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

MIN_SCORE = 0
MAX_SCORE = 100


def clamp_score(score: float) -> int:
    """Clamp a score into the 0-100 range."""
    return int(min(max(score, MIN_SCORE), MAX_SCORE))


@dataclass(frozen=True)
class CriterionScore:
    """Result of a single criterion scorer.

    Attributes:
        score: Integer score in [0, 100]
        example: Short excerpt from the page that illustrates the score
    """
    score: int
    example: str = ""


# Called as scorer(content, **context); context may carry a reference "now"
Scorer = Callable[..., CriterionScore]


@dataclass(frozen=True)
class Criterion:
    """A named scoring dimension.

    Attributes:
        factor: Human-readable factor name, also the lookup key
        weight: Percentage weight in the overall score
        description: What the criterion measures
        scorer: Pure function producing a CriterionScore
        details: Detail messages for the >=80, >=60 and lower tiers
    """
    factor: str
    weight: int
    description: str
    scorer: Scorer
    details: tuple[str, str, str]

    def describe(self, score: int) -> str:
        """Pick the detail message for a score tier."""
        strong, fair, weak = self.details
        if score >= 80:
            return strong
        if score >= 60:
            return fair
        return weak
