"""
Random puzzle generation.

Every cell of the solution is sampled independently with a fixed fill
probability. The resulting puzzle is always solvable (its own solution
satisfies the clues) but not necessarily uniquely so.
"""
import logging
from typing import List, Optional, Tuple

import numpy as np

from config.engine_config import EngineConfig
from core.clues import Clue, derive_clues

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """Produces random solution bitmaps together with their clues."""

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 fill_probability: Optional[float] = None):
        """
        Initialize the generator.

        Args:
            rng: Random source; a fresh entropy-seeded generator if omitted
            fill_probability: Chance of a cell being filled
                              (defaults to EngineConfig.FILL_PROBABILITY)
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.fill_probability = (EngineConfig.FILL_PROBABILITY
                                 if fill_probability is None else fill_probability)
        if not (0.0 <= self.fill_probability <= 1.0):
            raise ValueError(f"Fill probability must be in [0, 1]: {self.fill_probability}")

    def generate(self, width: int, height: int) -> np.ndarray:
        """
        Sample a ``height x width`` boolean solution.

        If EngineConfig.MIN_FILL_RATIO / MAX_FILL_RATIO are set, samples
        outside those bounds are redrawn up to MAX_GENERATION_ATTEMPTS times;
        the last sample is kept when attempts run out.
        """
        if not (EngineConfig.valid_size(width) and EngineConfig.valid_size(height)):
            raise ValueError(
                f"Grid size must be in range {EngineConfig.MIN_SIZE} to {EngineConfig.MAX_SIZE}: "
                f"{width}x{height}"
            )

        low = EngineConfig.MIN_FILL_RATIO
        high = EngineConfig.MAX_FILL_RATIO
        attempts = max(1, EngineConfig.MAX_GENERATION_ATTEMPTS)

        solution = None
        for attempt in range(1, attempts + 1):
            solution = self.rng.random((height, width)) < self.fill_probability
            ratio = float(solution.mean())
            if (low is None or ratio >= low) and (high is None or ratio <= high):
                break
            logger.debug("Rejected sample %d with fill ratio %.2f", attempt, ratio)

        logger.debug("Generated %dx%d solution with %d filled cells",
                     width, height, int(solution.sum()))
        return solution

    def generate_with_clues(self, width: int, height: int) -> Tuple[np.ndarray, List[Clue], List[Clue]]:
        """Generate a solution and derive its (row_clues, col_clues)."""
        solution = self.generate(width, height)
        row_clues, col_clues = derive_clues(solution, width, height)
        return solution, row_clues, col_clues
