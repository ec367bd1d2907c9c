"""Reward computation for resolved riddles."""

from riddler.models.metadata import Difficulty


class ScoreModel:
    """
    Computes points awarded for a solved riddle.

    Penalties are additive percentages of the base value: each attempt
    beyond the first costs ATTEMPT_PENALTY_PCT, a used hint costs
    HINT_PENALTY_PCT once. The result is floored at MIN_REWARD so a
    correct solve always earns something.
    """

    BASE_POINTS: dict[Difficulty, int] = {
        Difficulty.EASY: 10,
        Difficulty.MEDIUM: 25,
        Difficulty.HARD: 50,
    }

    ATTEMPT_PENALTY_PCT = 10
    HINT_PENALTY_PCT = 30
    MIN_REWARD = 1

    @staticmethod
    def base_points(difficulty: Difficulty) -> int:
        """Base points for a difficulty (unknown values score as medium)."""
        try:
            return ScoreModel.BASE_POINTS[Difficulty(difficulty)]
        except ValueError:
            return ScoreModel.BASE_POINTS[Difficulty.MEDIUM]

    @staticmethod
    def penalty_pct(attempts: int, hint_used: bool) -> int:
        """Total penalty as a percentage of base points."""
        extra_attempts = max(attempts - 1, 0)
        penalty = extra_attempts * ScoreModel.ATTEMPT_PENALTY_PCT
        if hint_used:
            penalty += ScoreModel.HINT_PENALTY_PCT
        return penalty

    @staticmethod
    def compute_reward(difficulty: Difficulty, attempts: int, hint_used: bool) -> int:
        """
        Compute points for a correct solve.

        Args:
            difficulty: Difficulty the riddle was issued at
            attempts: Number of graded answers, including the correct one
            hint_used: Whether the hint was revealed

        Returns:
            Non-negative integer reward, at least MIN_REWARD
        """
        base = ScoreModel.base_points(difficulty)
        remaining_pct = max(100 - ScoreModel.penalty_pct(attempts, hint_used), 0)
        return max(ScoreModel.MIN_REWARD, base * remaining_pct // 100)

    @staticmethod
    def abandon_reward() -> int:
        """Abandoned riddles earn nothing."""
        return 0
