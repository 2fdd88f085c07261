# src/markup_auditor/scoring.py
import logging
import math
from typing import Dict, Iterable, Mapping, Optional, Sequence, Union

from .model import Issue, Category, Severity

logger = logging.getLogger(__name__)

MAX_SCORE = 100

# Points added to a category's score per issue of each severity.
DEFAULT_WEIGHTS: Dict[Severity, int] = {
    Severity.CRITICAL: -15,
    Severity.WARNING: -5,
    Severity.INFO: 0,
}


class Scorer:
    """
    Turns issue lists into 0-100 scores using a severity weight table.

    The category score is 100 plus the summed weights, clamped at 0. It is
    never normalized by issue count.
    """

    def __init__(self, weights: Optional[Mapping[Union[str, Severity], int]] = None):
        table = dict(DEFAULT_WEIGHTS)
        for key, value in (weights or {}).items():
            table[Severity(key)] = int(value)

        for severity, value in table.items():
            if value > 0:
                raise ValueError(f"Weight for {severity.value} must not be positive, got {value}")
        self.weights = table

    def score(self, issues: Iterable[Issue]) -> int:
        total = MAX_SCORE + sum(self.weights[issue.severity] for issue in issues)
        return max(0, total)

    def categorize(self, name: str, issues: Sequence[Issue]) -> Category:
        return Category(name=name, issues=list(issues), score=self.score(issues))

    @staticmethod
    def overall(categories: Sequence[Category]) -> int:
        """Unweighted mean of the category scores, rounded half up."""
        if not categories:
            return 0
        mean = sum(c.score for c in categories) / len(categories)
        return int(math.floor(mean + 0.5))
