"""Score helpers for analysis results.

Axes that no rule scored get a placeholder drawn uniformly from a fixed
range. The generator is injectable so callers (and tests) can seed it.
"""

from __future__ import annotations

import logging
import random

logger = logging.getLogger(__name__)


MIN_SCORE = 0
MAX_SCORE = 100

# Range for axes no rule scored
PLACEHOLDER_MIN = 70
PLACEHOLDER_MAX = 90


def clamp_score(value: int | float) -> int:
    """Clamp a score or percentage into [0, 100]."""
    return int(max(MIN_SCORE, min(MAX_SCORE, round(value))))


class ScoreSampler:
    """Source of placeholder scores.

    Args:
        seed: Optional seed; the same seed yields the same sequence.
        rng: Optional random generator to draw from instead.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def placeholder(self) -> int:
        """Draw a placeholder score in [PLACEHOLDER_MIN, PLACEHOLDER_MAX]."""
        score = self._rng.randint(PLACEHOLDER_MIN, PLACEHOLDER_MAX)
        logger.debug("Placeholder score %d", score)
        return score
