"""
Spawn Scheduler
===============

Adds one ball to the round every fixed interval of wall-clock time,
independent of the frame rate.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional

from handbounce.bounce_core.config_loader import GameConfig, get_config
from handbounce.bounce_core.entities import Ball, BallCollection
from handbounce.bounce_core.rules import SpawnRules

logger = logging.getLogger(__name__)


class SpawnScheduler:
    """
    Wall-clock interval spawner.

    The schedule is a deadline: once started, a ball is due every
    `interval` seconds after the start time. Two drivers can service it:

    - a background thread that sleeps until the next deadline (use_thread=True)
    - `poll(now)`, called by the tick loop or directly in tests

    Both check and advance the deadline under the ball collection lock, so
    every deadline produces exactly one ball whichever driver reaches it
    first. A late poll catches up on every missed deadline.

    start() and stop() are idempotent.
    """

    def __init__(
        self,
        balls: BallCollection,
        spawn_rules: SpawnRules,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        use_thread: bool = True
    ):
        """
        Initialize scheduler.

        Args:
            balls: Collection new balls are appended to.
            spawn_rules: Builds each new ball.
            config: Game configuration. Uses default if None.
            clock: Monotonic time source in seconds.
            use_thread: Run a background timer thread while active.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._balls = balls
        self._spawn_rules = spawn_rules
        self._clock = clock
        self._use_thread = use_thread
        self._interval = config.spawn.interval

        self._next_due: Optional[float] = None
        self._spawned: int = 0
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def interval(self) -> float:
        """Seconds between spawns."""
        return self._interval

    @property
    def is_active(self) -> bool:
        """True between start() and stop()."""
        return self._next_due is not None

    @property
    def next_due(self) -> Optional[float]:
        """Clock time of the next spawn, or None when inactive."""
        return self._next_due

    @property
    def spawned_count(self) -> int:
        """Balls spawned since the last start()."""
        return self._spawned

    def start(self, now: Optional[float] = None) -> bool:
        """
        Activate spawning. No-op if already active.

        Args:
            now: Activation time. Reads the clock if None.

        Returns:
            True if the scheduler was started by this call.
        """
        with self._balls.lock:
            if self._next_due is not None:
                return False
            if now is None:
                now = self._clock()
            self._next_due = now + self._interval
            self._spawned = 0

        if self._use_thread:
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="spawn-scheduler",
                daemon=True
            )
            self._thread.start()

        logger.info("Ball spawning started every %g seconds.", self._interval)
        return True

    def stop(self) -> bool:
        """
        Deactivate spawning and wait for the timer thread. No-op if inactive.

        Returns:
            True if the scheduler was stopped by this call.
        """
        with self._balls.lock:
            if self._next_due is None:
                return False
            self._next_due = None

        thread = self._thread
        if thread is not None:
            self._stop_event.set()
            if thread is not threading.current_thread():
                thread.join(timeout=2.0)
            self._thread = None

        logger.info("Ball spawning stopped.")
        return True

    def poll(self, now: Optional[float] = None) -> List[Ball]:
        """
        Spawn every ball whose deadline has passed.

        Args:
            now: Current time. Reads the clock if None.

        Returns:
            Balls spawned by this call.
        """
        spawned: List[Ball] = []
        with self._balls.lock:
            if self._next_due is None:
                return spawned
            if now is None:
                now = self._clock()
            while now >= self._next_due:
                ball = self._spawn_rules.create_ball(len(self._balls))
                self._balls.append(ball)
                spawned.append(ball)
                self._spawned += 1
                self._next_due += self._interval
            total = len(self._balls)

        if spawned:
            logger.info("New ball spawned! Total balls: %d", total)
        return spawned

    def _run(self, stop_event: threading.Event) -> None:
        """Timer loop (runs in background thread)."""
        while True:
            due = self._next_due
            if due is None:
                return
            delay = max(0.0, due - self._clock())
            if stop_event.wait(delay):
                return
            self.poll()
