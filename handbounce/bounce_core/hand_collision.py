"""
Hand Collision
==============

Detects ball / hand-zone overlap and bounces the ball off the zone.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from handbounce.bounce_core.config_loader import GameConfig, get_config
from handbounce.bounce_core.entities import Ball, Hand

# Direction used when a ball sits exactly on a hand center: straight up
# (screen y grows downward).
COINCIDENT_ANGLE = -math.pi / 2


class HandCollisionResolver:
    """
    Resolves contacts between balls and circular hand zones.

    A contact sets vy to the bounce velocity, adds a steering impulse to vx
    proportional to the horizontal offset from the hand, and pushes the ball
    out to the edge of the zone so it cannot stick.

    Arbitration when a ball touches several hands in one tick:
    - sequential: every hand is resolved in snapshot order. The last one
      wins for vy and position; vx impulses add up.
    - nearest: only the nearest touching hand is resolved.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize resolver.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._hand_radius = config.hands.radius
        self._bounce_velocity = config.hands.bounce_velocity
        self._steering = config.hands.steering_coefficient
        self._arbitration = config.hands.arbitration

    @property
    def hand_radius(self) -> float:
        return self._hand_radius

    @property
    def arbitration(self) -> str:
        return self._arbitration

    def is_touching(self, ball: Ball, hand: Hand) -> bool:
        """True if the ball overlaps the hand zone (touching edges do not count)."""
        distance = math.hypot(ball.x - hand.x, ball.y - hand.y)
        return distance < ball.radius + self._hand_radius

    def collide(self, ball: Ball, hand: Hand) -> bool:
        """
        Resolve a single ball/hand pair.

        Returns:
            True if the pair was in contact and the ball was bounced.
        """
        dx = ball.x - hand.x
        dy = ball.y - hand.y
        distance = math.hypot(dx, dy)
        reach = ball.radius + self._hand_radius

        if distance >= reach:
            return False

        ball.vy = self._bounce_velocity
        ball.vx += dx * self._steering

        if distance == 0.0:
            angle = COINCIDENT_ANGLE
        else:
            angle = math.atan2(dy, dx)
        ball.x = hand.x + math.cos(angle) * reach
        ball.y = hand.y + math.sin(angle) * reach
        return True

    def _nearest_touching(self, ball: Ball, hands: Sequence[Hand]) -> Optional[Hand]:
        """Nearest hand in contact with the ball; earlier hands win ties."""
        best: Optional[Hand] = None
        best_distance = math.inf
        for hand in hands:
            distance = math.hypot(ball.x - hand.x, ball.y - hand.y)
            if distance < ball.radius + self._hand_radius and distance < best_distance:
                best = hand
                best_distance = distance
        return best

    def resolve(self, balls: Iterable[Ball], hands: Sequence[Hand]) -> int:
        """
        Resolve every ball against the hand snapshot.

        Args:
            balls: Balls to test (mutated in place).
            hands: Current hand snapshot.

        Returns:
            Number of contacts resolved.
        """
        if not hands:
            return 0

        contacts = 0
        for ball in balls:
            if self._arbitration == "nearest":
                hand = self._nearest_touching(ball, hands)
                if hand is not None and self.collide(ball, hand):
                    contacts += 1
            else:
                for hand in hands:
                    if self.collide(ball, hand):
                        contacts += 1
        return contacts
