"""
Tests for survival scoring and the round summary.
"""

import pytest

from handbounce.bounce_core.config_loader import load_config
from handbounce.bounce_core.scoring import ScoreTracker, summarize_outcome


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def scorer(config):
    return ScoreTracker(config)


class TestScoreTracker:
    """Elapsed whole seconds since start."""

    def test_floor_of_elapsed_seconds(self, scorer):
        scorer.start(1000.0)

        assert scorer.update(1002.999) == 2
        assert scorer.update(1003.0) == 3

    def test_zero_before_start(self, scorer):
        assert scorer.update(50.0) == 0
        assert scorer.start_time is None

    def test_frozen_score_does_not_change(self, scorer):
        scorer.start(0.0)
        scorer.update(12.5)
        assert scorer.freeze() == 12

        assert scorer.update(99.0) == 12
        assert scorer.is_frozen

    def test_never_decreases(self, scorer):
        scorer.start(10.0)
        scorer.update(15.0)
        assert scorer.update(14.0) == 5

    def test_reset(self, scorer):
        scorer.start(0.0)
        scorer.update(8.0)
        scorer.freeze()
        scorer.reset()

        assert scorer.score == 0
        assert scorer.start_time is None
        assert not scorer.is_frozen


class TestOutcome:
    """End-of-round summary headlines."""

    @pytest.mark.parametrize("score,headline", [
        (0, "Game Over!"),
        (15, "Game Over!"),
        (16, "Great Job!"),
        (30, "Great Job!"),
        (31, "Amazing!"),
    ])
    def test_headline_tiers(self, config, score, headline):
        outcome = summarize_outcome(score, config=config)
        assert outcome.headline == headline

    @pytest.mark.parametrize("score,badge", [
        (5, "💪"),
        (20, "👏"),
        (45, "🎉"),
    ])
    def test_badge_follows_tier(self, config, score, badge):
        assert summarize_outcome(score, config=config).badge == badge

    def test_detail_and_reason(self, config):
        outcome = summarize_outcome(42, "ball_dropped", config)

        assert outcome.score == 42
        assert outcome.detail == "You survived 42 seconds"
        assert outcome.reason == "ball_dropped"
