"""
Tests for ball / hand-zone collisions.
"""

import math
from dataclasses import replace

import pytest

from handbounce.bounce_core.config_loader import load_config
from handbounce.bounce_core.entities import Ball, Hand
from handbounce.bounce_core.hand_collision import HandCollisionResolver


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def resolver(config):
    return HandCollisionResolver(config)


@pytest.fixture
def nearest_resolver(config):
    return HandCollisionResolver(replace(config, hands=replace(config.hands, arbitration="nearest")))


class TestSingleHand:
    """One ball against one hand."""

    def test_bounce_from_below(self, resolver):
        """Hand 20px below the ball pushes it to the zone edge, moving up."""
        ball = Ball(x=300, y=300, radius=20, vx=0, vy=5)
        contacts = resolver.resolve([ball], [Hand(300, 320)])

        assert contacts == 1
        assert ball.vy == -8
        assert ball.vx == pytest.approx(0)
        assert ball.x == pytest.approx(300)
        assert ball.y == pytest.approx(250)

    def test_vy_is_assigned_not_reflected(self, resolver):
        ball = Ball(x=300, y=300, radius=20, vy=-30)
        resolver.resolve([ball], [Hand(300, 320)])
        assert ball.vy == -8

    def test_steering_impulse(self, resolver):
        """vx gains 0.1 per pixel of horizontal offset from the hand."""
        ball = Ball(x=330, y=300, radius=20, vx=1)
        resolver.resolve([ball], [Hand(300, 320)])

        assert ball.vx == pytest.approx(1 + 30 * 0.1)

    def test_pushed_to_zone_edge(self, resolver):
        ball = Ball(x=330, y=280, radius=20)
        hand = Hand(300, 320)
        resolver.resolve([ball], [hand])

        distance = math.hypot(ball.x - hand.x, ball.y - hand.y)
        assert distance == pytest.approx(70)
        # Direction from hand to ball is preserved
        assert math.atan2(ball.y - hand.y, ball.x - hand.x) == pytest.approx(math.atan2(-40, 30))

    def test_touching_edges_do_not_collide(self, resolver):
        """Distance exactly equal to the radii sum is not a contact."""
        ball = Ball(x=300, y=250, radius=20, vy=5)
        contacts = resolver.resolve([ball], [Hand(300, 320)])

        assert contacts == 0
        assert ball.vy == 5
        assert ball.y == 250

    def test_far_hand_ignored(self, resolver):
        ball = Ball(x=100, y=100, radius=20, vx=2, vy=3)
        resolver.resolve([ball], [Hand(500, 500)])
        assert (ball.x, ball.y, ball.vx, ball.vy) == (100, 100, 2, 3)

    def test_coincident_centers_push_straight_up(self, resolver):
        """A ball exactly on the hand center leaves upward."""
        ball = Ball(x=300, y=300, radius=20, vx=0, vy=4)
        resolver.resolve([ball], [Hand(300, 300)])

        assert ball.x == pytest.approx(300)
        assert ball.y == pytest.approx(230)
        assert ball.vy == -8
        assert ball.vx == 0

    def test_no_hands(self, resolver):
        ball = Ball(x=300, y=300, radius=20, vy=5)
        assert resolver.resolve([ball], []) == 0
        assert ball.vy == 5


class TestMultipleHands:
    """Arbitration when a ball touches several hands in one tick."""

    def test_sequential_last_hand_wins_position(self, resolver):
        ball = Ball(x=300, y=300, radius=20, vx=0)
        first = Hand(290, 320)
        second = Hand(310, 320)
        resolver.resolve([ball], [first, second])

        # Second hand placed the ball last: it sits on the second zone's edge
        assert math.hypot(ball.x - second.x, ball.y - second.y) == pytest.approx(70)
        assert ball.vy == -8

    def test_sequential_vx_impulses_accumulate(self, resolver):
        ball = Ball(x=300, y=300, radius=20, vx=0)
        first = Hand(290, 320)
        second = Hand(310, 320)
        resolver.resolve([ball], [first, second])

        first_impulse = (300 - 290) * 0.1
        # The second dx is measured from the position the first hand left the ball at
        angle = math.atan2(300 - 320, 300 - 290)
        x_after_first = 290 + math.cos(angle) * 70
        second_impulse = (x_after_first - 310) * 0.1
        assert ball.vx == pytest.approx(first_impulse + second_impulse)

    def test_sequential_counts_every_contact(self, resolver):
        ball = Ball(x=300, y=300, radius=20)
        contacts = resolver.resolve([ball], [Hand(300, 320), Hand(300, 320)])
        assert contacts == 2

    def test_nearest_resolves_once(self, nearest_resolver):
        ball = Ball(x=300, y=300, radius=20, vx=0)
        near = Hand(305, 310)
        far = Hand(340, 330)
        contacts = nearest_resolver.resolve([ball], [far, near])

        assert contacts == 1
        assert math.hypot(ball.x - near.x, ball.y - near.y) == pytest.approx(70)
        assert ball.vx == pytest.approx((300 - 305) * 0.1)

    def test_is_touching(self, resolver):
        ball = Ball(x=0, y=0, radius=20)
        assert resolver.is_touching(ball, Hand(69.9, 0))
        assert not resolver.is_touching(ball, Hand(70, 0))
