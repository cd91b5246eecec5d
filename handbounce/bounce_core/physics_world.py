"""
Physics World
=============

Euler integration of ball motion with wall and ceiling bounces.
"""

from __future__ import annotations

from typing import Iterable, Optional

from handbounce.bounce_core.config_loader import GameConfig, get_config
from handbounce.bounce_core.entities import Ball, PlayField


def advance_ball(ball: Ball, gravity: float, field: PlayField) -> None:
    """
    Advance a single ball by one tick.

    There is no floor: a ball falling past the bottom edge is left there
    for the termination rules to see.
    """
    ball.vy += gravity

    ball.x += ball.vx
    ball.y += ball.vy

    # Left/right walls
    if ball.x - ball.radius < 0 or ball.x + ball.radius > field.width:
        ball.vx = -ball.vx
        if ball.x < field.center_x:
            ball.x = ball.radius
        else:
            ball.x = field.width - ball.radius

    # Ceiling
    if ball.y - ball.radius < 0:
        ball.vy = -ball.vy
        ball.y = ball.radius


class BallDynamics:
    """
    Advances every ball in a collection by one tick.

    Handles:
    - Gravity
    - Velocity integration
    - Side wall bounce with clamping
    - Ceiling bounce with clamping
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize dynamics.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._gravity = config.physics.gravity

    @property
    def gravity(self) -> float:
        """Velocity added to vy per tick."""
        return self._gravity

    def step(self, balls: Iterable[Ball], field: PlayField) -> None:
        """
        Advance every ball by one tick.

        Args:
            balls: Balls to integrate (mutated in place).
            field: Current playing-field bounds.
        """
        for ball in balls:
            advance_ball(ball, self._gravity, field)
