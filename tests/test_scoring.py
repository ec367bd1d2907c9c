"""Tests for ScoreModel."""

import pytest

from riddler.engine.scoring import ScoreModel
from riddler.models.metadata import Difficulty


class TestScoreModel:
    """Test suite for ScoreModel."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_first_attempt_without_hint_earns_base(self, difficulty):
        """A first-try solve without a hint earns exactly the base points."""
        assert ScoreModel.compute_reward(difficulty, 1, False) == ScoreModel.BASE_POINTS[difficulty]

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_second_attempt_earns_less(self, difficulty):
        """Each extra attempt lowers the reward."""
        assert ScoreModel.compute_reward(difficulty, 1, False) > ScoreModel.compute_reward(difficulty, 2, False)

    def test_base_values(self):
        """Base points per difficulty."""
        assert ScoreModel.base_points(Difficulty.EASY) == 10
        assert ScoreModel.base_points(Difficulty.MEDIUM) == 25
        assert ScoreModel.base_points(Difficulty.HARD) == 50

    def test_hint_penalty(self):
        """A hint costs 30% of base once."""
        assert ScoreModel.compute_reward(Difficulty.HARD, 1, True) == 35
        assert ScoreModel.compute_reward(Difficulty.MEDIUM, 1, True) == 17

    def test_penalties_are_additive(self):
        """Hint and attempt penalties add up as percentages of base."""
        assert ScoreModel.penalty_pct(3, True) == 50
        # Medium riddle, hint used, solved on the third attempt
        reward = ScoreModel.compute_reward(Difficulty.MEDIUM, 3, True)
        assert reward == 12
        assert ScoreModel.MIN_REWARD <= reward < ScoreModel.base_points(Difficulty.MEDIUM)

    def test_reward_floor(self):
        """A correct solve always earns at least the minimum reward."""
        assert ScoreModel.compute_reward(Difficulty.EASY, 50, True) == ScoreModel.MIN_REWARD
        assert ScoreModel.compute_reward(Difficulty.HARD, 8, True) == ScoreModel.MIN_REWARD

    def test_zero_attempts_treated_as_first(self):
        """Attempts below one are not rewarded beyond base."""
        assert ScoreModel.compute_reward(Difficulty.EASY, 0, False) == 10
        assert ScoreModel.compute_reward(Difficulty.EASY, -3, False) == 10

    def test_unknown_difficulty_falls_back_to_medium(self):
        """Unknown difficulty values never raise."""
        assert ScoreModel.compute_reward("legendary", 1, False) == 25  # type: ignore[arg-type]

    def test_accepts_difficulty_values(self):
        """Plain string values of the enum work too."""
        assert ScoreModel.compute_reward("hard", 1, False) == 50  # type: ignore[arg-type]

    def test_rewards_are_non_negative_integers(self):
        """Rewards are non-negative integers for every combination."""
        for difficulty in Difficulty:
            for attempts in range(0, 15):
                for hint_used in (False, True):
                    reward = ScoreModel.compute_reward(difficulty, attempts, hint_used)
                    assert isinstance(reward, int)
                    assert reward >= ScoreModel.MIN_REWARD

    def test_abandon_reward(self):
        """Abandoned riddles earn nothing."""
        assert ScoreModel.abandon_reward() == 0
