"""
Scoring System
==============

Survival-time score and the end-of-round summary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from handbounce.bounce_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class RoundOutcome:
    """Terminal result of a round, for the summary display."""
    score: int
    headline: str
    detail: str
    reason: str
    badge: str = ""

    def __repr__(self) -> str:
        return f"RoundOutcome(score={self.score}, reason={self.reason!r})"


def summarize_outcome(
    score: int,
    reason: str = "ball_dropped",
    config: Optional[GameConfig] = None
) -> RoundOutcome:
    """
    Build the summary for a finished round.

    The headline and badge are taken from the first tier whose threshold
    the score exceeds, falling back to the defaults.
    """
    if config is None:
        config = get_config()

    headline = config.outcome.default_headline
    badge = config.outcome.default_badge
    for threshold, text, tier_badge in config.outcome.tiers:
        if score > threshold:
            headline = text
            badge = tier_badge
            break

    return RoundOutcome(
        score=score,
        headline=headline,
        detail=f"You survived {score} seconds",
        reason=reason,
        badge=badge
    )


class ScoreTracker:
    """
    Tracks survival time in whole seconds.

    The score is floor(now - start) while running and stays put once
    frozen. It never decreases within a round.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._score: int = 0
        self._start_time: Optional[float] = None
        self._frozen: bool = False

    @property
    def score(self) -> int:
        """Current score in whole seconds."""
        return self._score

    @property
    def start_time(self) -> Optional[float]:
        """Timestamp play started at, or None before play."""
        return self._start_time

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def start(self, now: float) -> None:
        """Record the start timestamp and begin counting."""
        self._start_time = now
        self._score = 0
        self._frozen = False

    def update(self, now: float) -> int:
        """
        Recompute the score from the start timestamp.

        Returns:
            The current score.
        """
        if self._start_time is None or self._frozen:
            return self._score

        elapsed = math.floor(now - self._start_time)
        if elapsed > self._score:
            self._score = int(elapsed)
        return self._score

    def freeze(self) -> int:
        """Stop recomputing; returns the final score."""
        self._frozen = True
        return self._score

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._start_time = None
        self._frozen = False
