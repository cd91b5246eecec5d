"""
Game Rules
==========

Handles spawn placement and the termination predicate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from handbounce.bounce_core.config_loader import GameConfig, get_config
from handbounce.bounce_core.entities import Ball, PlayField, hue_color


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class SpawnRules:
    """
    Builds new balls.

    New balls start at the horizontal center of the field, a fixed offset
    below the top edge, at rest, colored by their spawn index.
    """

    def __init__(self, field: PlayField, config: Optional[GameConfig] = None):
        """
        Initialize spawn rules.

        Args:
            field: Playing field shared with the round.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._field = field

    @property
    def spawn_y(self) -> float:
        """Y coordinate for spawning."""
        return self._config.balls.spawn_y

    def spawn_x(self) -> float:
        """X coordinate for spawning at the current field width."""
        return self._field.center_x

    def create_ball(self, index: int) -> Ball:
        """
        Create the ball for a given spawn index.

        Args:
            index: Position the ball will take in the collection.
        """
        balls = self._config.balls
        return Ball(
            x=self.spawn_x(),
            y=self.spawn_y,
            radius=balls.radius,
            color=hue_color(index, balls.hue_step, balls.saturation, balls.lightness),
            index=index
        )

    def initial_balls(self) -> List[Ball]:
        """Starting composition of a round."""
        return [self.create_ball(i) for i in range(self._config.balls.initial_count)]


class TerminationRules:
    """
    Handles the round-ending condition.

    The round ends as soon as any ball's top edge is below the bottom of
    the field.
    """

    def __init__(self, field: PlayField, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._field = field

    def dropped_balls(self, balls: Iterable[Ball]) -> List[Ball]:
        """Balls that have fallen out of the field."""
        return [ball for ball in balls if ball.top_y > self._field.height]

    def check_termination(self, balls: Iterable[Ball]) -> TerminationResult:
        """
        Check the termination predicate.

        Args:
            balls: Current balls.

        Returns:
            TerminationResult indicating game state.
        """
        if self.dropped_balls(balls):
            return TerminationResult.game_over("ball_dropped")
        return TerminationResult.none()


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, field: PlayField, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self.spawn = SpawnRules(field, config)
        self.termination = TerminationRules(field, config)
