"""
Core Game
=========

Round orchestrator combining dynamics, hand collisions, spawning, scoring
and rules behind a countdown -> playing -> game over state machine.
"""

from __future__ import annotations

import logging
import math
import time
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from handbounce.bounce_core.config_loader import GameConfig, get_config
from handbounce.bounce_core.entities import (
    Ball,
    BallCollection,
    Hand,
    HandLike,
    PlayField,
    to_hand,
)
from handbounce.bounce_core.errors import AcquisitionError, RoundStateError
from handbounce.bounce_core.hand_collision import HandCollisionResolver
from handbounce.bounce_core.hand_tracking import HandTracker
from handbounce.bounce_core.physics_world import BallDynamics
from handbounce.bounce_core.rules import GameRules
from handbounce.bounce_core.scoring import RoundOutcome, ScoreTracker, summarize_outcome
from handbounce.bounce_core.spawn_scheduler import SpawnScheduler
from handbounce.bounce_core.state_snapshot import RoundSnapshot, build_snapshot

logger = logging.getLogger(__name__)


class RoundPhase(str, Enum):
    """Round states. Exactly one is active at a time."""
    IDLE = "idle"
    COUNTING_DOWN = "counting_down"
    PLAYING = "playing"
    GAME_OVER = "game_over"


ACTIVE_PHASES = (RoundPhase.COUNTING_DOWN, RoundPhase.PLAYING)


class Round:
    """
    Main round simulation class.

    Orchestrates:
    - Ball dynamics
    - Hand collision resolution
    - Periodic spawning (active only while PLAYING)
    - Survival scoring
    - Termination rules
    - State snapshots

    The caller drives one tick per display frame and keeps ticking while
    tick() returns True. Hand snapshots arrive independently through
    update_hands().
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        tracker: Optional[HandTracker] = None,
        clock: Callable[[], float] = time.monotonic,
        use_spawn_thread: bool = True
    ):
        """
        Initialize round.

        Args:
            config: Game configuration. Uses default if None.
            tracker: Hand detector, set up on the first start().
            clock: Monotonic time source in seconds.
            use_spawn_thread: Let the spawn scheduler run its own timer thread.
                When False, spawns happen only as tick() polls the schedule.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._tracker = tracker
        self._clock = clock

        # Shared state
        self._field = PlayField(config.board.width, config.board.height)
        self._balls = BallCollection()
        self._hands: Tuple[Hand, ...] = ()

        # Initialize subsystems
        self._dynamics = BallDynamics(config)
        self._collisions = HandCollisionResolver(config)
        self._rules = GameRules(self._field, config)
        self._scorer = ScoreTracker(config)
        self._spawner = SpawnScheduler(
            balls=self._balls,
            spawn_rules=self._rules.spawn,
            config=config,
            clock=clock,
            use_thread=use_spawn_thread
        )

        # Round state
        self._phase = RoundPhase.IDLE
        self._countdown_remaining: float = 0.0
        self._last_tick_time: Optional[float] = None
        self._outcome: Optional[RoundOutcome] = None

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def field(self) -> PlayField:
        """Playing field bounds."""
        return self._field

    @property
    def balls(self) -> List[Ball]:
        """Point-in-time list of the balls."""
        return self._balls.copy()

    @property
    def ball_count(self) -> int:
        return len(self._balls)

    @property
    def hands(self) -> Tuple[Hand, ...]:
        """Current hand snapshot."""
        return self._hands

    @property
    def score(self) -> int:
        """Survival time in whole seconds."""
        return self._scorer.score

    @property
    def start_time(self) -> Optional[float]:
        """Clock time play began, or None."""
        return self._scorer.start_time

    @property
    def countdown_remaining(self) -> float:
        return self._countdown_remaining

    @property
    def countdown_display(self) -> int:
        """Whole seconds shown on the countdown overlay."""
        return max(0, math.ceil(self._countdown_remaining))

    @property
    def is_counting_down(self) -> bool:
        return self._phase is RoundPhase.COUNTING_DOWN

    @property
    def is_running(self) -> bool:
        """True while the tick loop should keep going."""
        return self._phase in ACTIVE_PHASES

    @property
    def is_over(self) -> bool:
        return self._phase is RoundPhase.GAME_OVER

    @property
    def spawn_active(self) -> bool:
        """True while the spawn timer is armed."""
        return self._spawner.is_active

    @property
    def spawner(self) -> SpawnScheduler:
        return self._spawner

    @property
    def outcome(self) -> Optional[RoundOutcome]:
        """Summary of the finished round, or None."""
        return self._outcome

    def _set_phase(self, phase: RoundPhase) -> None:
        if phase is not self._phase:
            logger.debug("Round phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self, now: Optional[float] = None) -> bool:
        """
        Start a new round: reset state and begin the countdown.

        Allowed from IDLE and GAME_OVER.

        Args:
            now: Countdown reference time. Reads the clock once hand
                tracking is acquired if None, so detector setup does not
                eat into the countdown.

        Returns:
            True if the countdown began, False if hand tracking could not
            be acquired (the round is then GAME_OVER with a failure outcome).

        Raises:
            RoundStateError: If a round is already counting down or playing.
        """
        if self._phase in ACTIVE_PHASES:
            raise RoundStateError(f"Cannot start a round while {self._phase.value}")

        # A stale timer must never touch the reset collection
        self._spawner.stop()

        self._scorer.reset()
        self._hands = ()
        self._outcome = None
        self._countdown_remaining = self._config.countdown.duration
        with self._balls.lock:
            self._balls.clear()
            self._balls.extend(self._rules.spawn.initial_balls())
        self._set_phase(RoundPhase.COUNTING_DOWN)

        if not self._acquire_hands():
            message = self._config.outcome.acquisition_failure_message
            self._end_round(
                reason="acquisition_failed",
                outcome=RoundOutcome(
                    score=0,
                    headline=message,
                    detail="",
                    reason="acquisition_failed"
                )
            )
            return False

        self._last_tick_time = self._clock() if now is None else now
        logger.info(
            "Round started: %d ball(s), countdown %gs",
            len(self._balls), self._countdown_remaining
        )
        return True

    def stop(self) -> None:
        """End an active round. No-op when no round is running."""
        if self._phase in ACTIVE_PHASES:
            self._end_round(reason="stopped")

    def update_hands(self, hands: Iterable[HandLike]) -> None:
        """
        Replace the hand snapshot wholesale.

        Args:
            hands: Hand objects, (x, y) pairs or mappings with x/y keys.
        """
        self._hands = tuple(to_hand(h) for h in hands)

    def resize(self, width: float, height: float) -> None:
        """Update the playing-field bounds."""
        self._field.resize(width, height)

    def close(self) -> None:
        """End any active round and stop hand detection."""
        self.stop()
        self._spawner.stop()
        if self._tracker is not None:
            self._tracker.stop_detection()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Advance the round by one frame.

        Args:
            now: Frame time. Reads the clock if None.

        Returns:
            True if another tick should be scheduled.
        """
        if self._phase not in ACTIVE_PHASES:
            return False

        if now is None:
            now = self._clock()

        if self._phase is RoundPhase.COUNTING_DOWN:
            self._advance_countdown(now)
            return True

        self._spawner.poll(now)

        hands = self._hands
        with self._balls.lock:
            balls = self._balls.copy()
            self._dynamics.step(balls, self._field)
            self._collisions.resolve(balls, hands)

        self._scorer.update(now)

        result = self._rules.termination.check_termination(balls)
        if result.terminated:
            self._end_round(reason=result.reason)
            return False
        return True

    def _advance_countdown(self, now: float) -> None:
        """Decrement the countdown and begin play when it runs out."""
        step = self._config.countdown.step_per_tick
        if step is None:
            last = self._last_tick_time if self._last_tick_time is not None else now
            step = max(0.0, now - last)
        self._last_tick_time = now

        self._countdown_remaining -= step
        if self._countdown_remaining <= 0:
            self._begin_play(now)

    def _begin_play(self, now: float) -> None:
        """COUNTING_DOWN -> PLAYING."""
        self._countdown_remaining = 0.0
        self._set_phase(RoundPhase.PLAYING)
        self._scorer.start(now)
        self._spawner.start(now)

    def _end_round(
        self,
        reason: str,
        outcome: Optional[RoundOutcome] = None
    ) -> None:
        """Enter GAME_OVER: stop spawning, freeze score and balls."""
        self._spawner.stop()
        final_score = self._scorer.freeze()
        if outcome is None:
            outcome = summarize_outcome(final_score, reason, self._config)
        self._outcome = outcome
        self._set_phase(RoundPhase.GAME_OVER)
        logger.info("Round over (%s): survived %d seconds", reason, final_score)

    def _acquire_hands(self) -> bool:
        """Set up the hand tracker once. Returns False on acquisition failure."""
        tracker = self._tracker
        if tracker is None:
            return True

        if not tracker.is_ready:
            try:
                ok = tracker.setup(self.update_hands)
            except AcquisitionError as e:
                logger.error("Hand tracking unavailable: %s", e)
                return False
            if not ok:
                logger.error("Hand tracking unavailable: setup failed")
                return False

        if not tracker.is_detecting:
            tracker.start_detection()
        return True

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def snapshot(self) -> RoundSnapshot:
        """Build the current render snapshot."""
        return build_snapshot(
            balls=self._balls.copy(),
            hands=self._hands,
            phase=self._phase.value,
            score=self._scorer.score,
            countdown_remaining=self._countdown_remaining,
            is_counting_down=self.is_counting_down,
            field_width=self._field.width,
            field_height=self._field.height,
            hand_radius=self._collisions.hand_radius,
            outcome=self._outcome
        )

    def get_info(self) -> Dict[str, Any]:
        """Summary dict for logging and tools."""
        return {
            "phase": self._phase.value,
            "score": self._scorer.score,
            "balls": len(self._balls),
            "hands": len(self._hands),
            "spawn_active": self._spawner.is_active,
            "countdown": self._countdown_remaining,
        }
