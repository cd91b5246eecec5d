"""
State Snapshot
==============

Packs the round's visible state into numpy arrays for renderers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np

from handbounce.bounce_core.entities import Ball, Hand
from handbounce.bounce_core.scoring import RoundOutcome


@dataclass
class RoundSnapshot:
    """
    Point-in-time view of a round.

    Ball arrays share one length (the ball count); hand_xy has one row
    per hand in the current snapshot.
    """
    phase: str
    score: int
    countdown_remaining: float
    is_counting_down: bool
    field_width: float
    field_height: float
    hand_radius: float

    ball_x: np.ndarray        # (N,) float32
    ball_y: np.ndarray        # (N,) float32
    ball_vx: np.ndarray       # (N,) float32
    ball_vy: np.ndarray       # (N,) float32
    ball_radius: np.ndarray   # (N,) float32
    ball_color: np.ndarray    # (N, 3) uint8
    hand_xy: np.ndarray       # (M, 2) float32

    outcome: Optional[RoundOutcome] = None

    @property
    def ball_count(self) -> int:
        return int(self.ball_x.shape[0])

    @property
    def hand_count(self) -> int:
        return int(self.hand_xy.shape[0])

    @property
    def countdown_display(self) -> int:
        """Whole seconds shown on the countdown overlay."""
        return max(0, math.ceil(self.countdown_remaining))

    def to_dict(self) -> Dict[str, Any]:
        """Plain python view for renderers and logging."""
        balls = [
            {
                "x": float(self.ball_x[i]),
                "y": float(self.ball_y[i]),
                "radius": float(self.ball_radius[i]),
                "color": tuple(int(c) for c in self.ball_color[i]),
            }
            for i in range(self.ball_count)
        ]
        hands = [
            {"x": float(x), "y": float(y)}
            for x, y in self.hand_xy
        ]
        return {
            "phase": self.phase,
            "score": self.score,
            "countdown": self.countdown_remaining,
            "countdown_display": self.countdown_display,
            "is_counting_down": self.is_counting_down,
            "field_width": self.field_width,
            "field_height": self.field_height,
            "hand_radius": self.hand_radius,
            "balls": balls,
            "hands": hands,
            "outcome": None if self.outcome is None else {
                "score": self.outcome.score,
                "headline": self.outcome.headline,
                "detail": self.outcome.detail,
                "reason": self.outcome.reason,
                "badge": self.outcome.badge,
            },
        }


def build_snapshot(
    balls: Sequence[Ball],
    hands: Sequence[Hand],
    phase: str,
    score: int,
    countdown_remaining: float,
    is_counting_down: bool,
    field_width: float,
    field_height: float,
    hand_radius: float,
    outcome: Optional[RoundOutcome] = None
) -> RoundSnapshot:
    """Pack balls and hands into a RoundSnapshot."""
    n = len(balls)
    ball_x = np.zeros(n, dtype=np.float32)
    ball_y = np.zeros(n, dtype=np.float32)
    ball_vx = np.zeros(n, dtype=np.float32)
    ball_vy = np.zeros(n, dtype=np.float32)
    ball_radius = np.zeros(n, dtype=np.float32)
    ball_color = np.zeros((n, 3), dtype=np.uint8)

    for i, ball in enumerate(balls):
        ball_x[i] = ball.x
        ball_y[i] = ball.y
        ball_vx[i] = ball.vx
        ball_vy[i] = ball.vy
        ball_radius[i] = ball.radius
        ball_color[i] = ball.color

    hand_xy = np.array(
        [(hand.x, hand.y) for hand in hands],
        dtype=np.float32
    ).reshape(-1, 2)

    return RoundSnapshot(
        phase=phase,
        score=score,
        countdown_remaining=countdown_remaining,
        is_counting_down=is_counting_down,
        field_width=field_width,
        field_height=field_height,
        hand_radius=hand_radius,
        ball_x=ball_x,
        ball_y=ball_y,
        ball_vx=ball_vx,
        ball_vy=ball_vy,
        ball_radius=ball_radius,
        ball_color=ball_color,
        hand_xy=hand_xy,
        outcome=outcome
    )
