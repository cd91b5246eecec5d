"""
Bounce Core - The heart of the game.

This module provides the round simulation and all supporting systems
(dynamics, hand collisions, spawning, scoring, rules).

Main exports:
- Round: Countdown / play / game-over state machine driving one round
- RoundPhase: The round's states
- GameConfig: Configuration loaded from game_config.yaml
- HandTracker: Base class for hand detectors feeding the round
"""

from handbounce.bounce_core.config_loader import GameConfig, load_config, get_config
from handbounce.bounce_core.entities import Ball, BallCollection, Hand, PlayField
from handbounce.bounce_core.errors import AcquisitionError, HandBounceError, RoundStateError
from handbounce.bounce_core.game import Round, RoundPhase
from handbounce.bounce_core.hand_collision import HandCollisionResolver
from handbounce.bounce_core.hand_tracking import HandTracker, StaticHandTracker
from handbounce.bounce_core.physics_world import BallDynamics
from handbounce.bounce_core.scoring import RoundOutcome, ScoreTracker, summarize_outcome
from handbounce.bounce_core.spawn_scheduler import SpawnScheduler
from handbounce.bounce_core.state_snapshot import RoundSnapshot

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "Ball",
    "BallCollection",
    "Hand",
    "PlayField",
    "AcquisitionError",
    "HandBounceError",
    "RoundStateError",
    "Round",
    "RoundPhase",
    "HandCollisionResolver",
    "HandTracker",
    "StaticHandTracker",
    "BallDynamics",
    "RoundOutcome",
    "ScoreTracker",
    "summarize_outcome",
    "SpawnScheduler",
    "RoundSnapshot",
]
