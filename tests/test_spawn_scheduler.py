"""
Tests for the wall-clock spawn scheduler.
"""

import time
from dataclasses import replace

import pytest

from handbounce.bounce_core.config_loader import load_config
from handbounce.bounce_core.entities import BallCollection, PlayField, hue_color
from handbounce.bounce_core.rules import SpawnRules
from handbounce.bounce_core.spawn_scheduler import SpawnScheduler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def field(config):
    return PlayField(config.board.width, config.board.height)


@pytest.fixture
def balls():
    return BallCollection()


@pytest.fixture
def scheduler(config, field, balls, clock):
    return SpawnScheduler(balls, SpawnRules(field, config), config, clock=clock, use_thread=False)


class TestCadence:
    """Spawn timing."""

    def test_two_spawns_in_45_seconds(self, scheduler, balls, clock):
        """20s interval active for 45s spawns at 20s and 40s only."""
        scheduler.start()
        clock.advance(45)
        spawned = scheduler.poll()

        assert len(spawned) == 2
        assert len(balls) == 2

    def test_nothing_after_stop(self, scheduler, balls, clock):
        scheduler.start()
        clock.advance(45)
        scheduler.poll()
        scheduler.stop()

        clock.advance(1000)
        assert scheduler.poll() == []
        assert len(balls) == 2

    def test_spawn_exactly_at_boundary(self, scheduler, balls, clock):
        scheduler.start()
        clock.advance(19.999)
        assert scheduler.poll() == []
        clock.advance(0.001)
        assert len(scheduler.poll()) == 1

    def test_incremental_polls_match_single_poll(self, scheduler, balls, clock):
        scheduler.start()
        for _ in range(450):
            clock.advance(0.1)
            scheduler.poll()
        assert len(balls) == 2
        assert scheduler.spawned_count == 2

    def test_inactive_scheduler_never_spawns(self, scheduler, balls, clock):
        clock.advance(100)
        assert scheduler.poll() == []
        assert len(balls) == 0

    def test_restart_rearms_from_start_time(self, scheduler, balls, clock):
        scheduler.start()
        clock.advance(15)
        scheduler.stop()
        scheduler.start()
        clock.advance(15)
        assert scheduler.poll() == []
        clock.advance(5)
        assert len(scheduler.poll()) == 1


class TestIdempotence:
    """start() and stop() repeated."""

    def test_double_start(self, scheduler, clock):
        assert scheduler.start() is True
        due = scheduler.next_due
        clock.advance(5)
        assert scheduler.start() is False
        assert scheduler.next_due == due

        clock.advance(40)
        assert len(scheduler.poll()) == 2

    def test_stop_when_stopped(self, scheduler):
        assert scheduler.stop() is False
        assert not scheduler.is_active

    def test_double_stop(self, scheduler):
        scheduler.start()
        assert scheduler.stop() is True
        assert scheduler.stop() is False


class TestSpawnedBalls:
    """Placement and coloring of new balls."""

    def test_position_and_velocity(self, scheduler, balls, clock, field):
        scheduler.start()
        clock.advance(20)
        (ball,) = scheduler.poll()

        assert ball.x == field.width / 2
        assert ball.y == 100
        assert ball.vx == 0
        assert ball.vy == 0
        assert ball.radius == 20

    def test_color_follows_collection_index(self, scheduler, balls, clock, config, field):
        balls.extend(SpawnRules(field, config).initial_balls())
        scheduler.start()
        clock.advance(40)
        spawned = scheduler.poll()

        assert [b.index for b in spawned] == [1, 2]
        assert spawned[0].color == hue_color(1, 120, 0.7, 0.6)
        assert spawned[1].color == hue_color(2, 120, 0.7, 0.6)

    def test_hue_color_values(self):
        assert hue_color(0, 120, 0.7, 0.6) == (224, 82, 82)
        assert hue_color(1, 120, 0.7, 0.6) == (82, 224, 82)
        assert hue_color(3, 120, 0.7, 0.6) == hue_color(0, 120, 0.7, 0.6)

    def test_spawn_uses_current_field_width(self, scheduler, clock, field):
        field.resize(1000, 650)
        scheduler.start()
        clock.advance(20)
        (ball,) = scheduler.poll()
        assert ball.x == 500


class TestThreaded:
    """Background timer thread."""

    @pytest.fixture
    def fast_config(self, config):
        return replace(config, spawn=replace(config.spawn, interval=0.02))

    def test_thread_spawns_and_stops(self, fast_config, field, balls):
        scheduler = SpawnScheduler(balls, SpawnRules(field, fast_config), fast_config)
        scheduler.start()
        try:
            deadline = time.monotonic() + 2.0
            while len(balls) == 0 and time.monotonic() < deadline:
                time.sleep(0.01)
        finally:
            scheduler.stop()

        assert len(balls) >= 1
        count = len(balls)
        time.sleep(0.1)
        assert len(balls) == count

    def test_stop_joins_thread(self, fast_config, field, balls):
        scheduler = SpawnScheduler(balls, SpawnRules(field, fast_config), fast_config)
        scheduler.start()
        thread = scheduler._thread
        scheduler.stop()

        assert thread is not None
        assert not thread.is_alive()
        assert not scheduler.is_active
