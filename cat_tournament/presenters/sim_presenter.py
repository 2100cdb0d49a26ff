"""
Simulated presenter implementation.

Picks the cuter photo according to latent scores with noise, and sometimes
lets the clock run out. Used for demos and integration tests.
"""

import random

from typing_extensions import override

from ..interfaces import Presenter
from ..logging_config import get_logger
from ..models import Matchup

logger = get_logger("sim_presenter")


class SimulatedPresenter(Presenter):
    """
    Simulated player.

    Samples a decision from ground truth scores with added Gaussian noise.
    """

    def __init__(
        self,
        ground_truth: dict[str, float],
        noise: float = 0.1,
        timeout_rate: float = 0.0,
        rng: random.Random | None = None,
    ):
        """
        Initialize simulated presenter.

        Args:
            ground_truth: Dict mapping photo_id to true cuteness score
            noise: Amount of noise to add (0-1, where 1 = full noise)
            timeout_rate: Probability of giving no decision (0-1)
            rng: Random source
        """
        self.ground_truth = ground_truth
        self.noise = max(0.0, min(1.0, noise))
        self.timeout_rate = max(0.0, min(1.0, timeout_rate))
        self.rng = rng or random.Random()

    def _noisy_score(self, photo_id: str) -> float:
        score = self.ground_truth.get(photo_id, 0.0)
        if self.noise == 0:
            return score
        return score + self.rng.gauss(0, abs(score) * self.noise)

    @override
    def present(self, matchup: Matchup, label: str, timeout: float) -> str | None:
        if self.timeout_rate and self.rng.random() < self.timeout_rate:
            logger.debug(f"{label}: simulated timeout")
            return None

        left_score = self._noisy_score(matchup.left.photo_id)
        right_score = self._noisy_score(matchup.right.photo_id)
        # Ties go left
        choice = matchup.left if left_score >= right_score else matchup.right
        logger.debug(
            f"{label}: {matchup.left.photo_id}={left_score:.3f} "
            f"{matchup.right.photo_id}={right_score:.3f} -> {choice.photo_id}"
        )
        return choice.photo_id
