"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml


ARBITRATION_MODES = ("sequential", "nearest")


@dataclass(frozen=True)
class BoardConfig:
    """Default playing-field bounds."""
    width: int
    height: int


@dataclass(frozen=True)
class BallConfig:
    """Ball geometry, spawn placement and coloring."""
    initial_count: int   # Balls placed at round start
    radius: float        # Shared by every ball in a run
    spawn_y: float       # Vertical offset from the top edge
    hue_step: float      # Degrees of hue per spawn index
    saturation: float
    lightness: float


@dataclass(frozen=True)
class PhysicsConfig:
    """Integration parameters."""
    gravity: float


@dataclass(frozen=True)
class HandConfig:
    """Hand zone collision parameters."""
    radius: float
    bounce_velocity: float
    steering_coefficient: float
    arbitration: str


@dataclass(frozen=True)
class CountdownConfig:
    """Pre-round countdown."""
    duration: float
    step_per_tick: Optional[float]  # None = measure elapsed time per tick


@dataclass(frozen=True)
class SpawnConfig:
    """Periodic spawning."""
    interval: float  # Seconds


@dataclass(frozen=True)
class OutcomeConfig:
    """Texts for the end-of-round summary."""
    tiers: Tuple[Tuple[int, str, str], ...]  # (threshold, headline, badge)
    default_headline: str
    default_badge: str
    acquisition_failure_message: str


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    balls: BallConfig
    physics: PhysicsConfig
    hands: HandConfig
    countdown: CountdownConfig
    spawn: SpawnConfig
    outcome: OutcomeConfig

    @property
    def contact_distance(self) -> float:
        """Center distance below which a ball touches a hand zone."""
        return self.balls.radius + self.hands.radius


def _parse_tiers(tiers_data: list) -> Tuple[Tuple[int, str, str], ...]:
    """Parse outcome tiers from YAML, sorted highest threshold first.

    The badge is optional and defaults to an empty string.
    """
    tiers = []
    for tier in tiers_data:
        if len(tier) not in (2, 3):
            raise ValueError(
                f"Outcome tier must be [threshold, headline] or [threshold, headline, badge], got {tier}"
            )
        badge = str(tier[2]) if len(tier) == 3 else ""
        tiers.append((int(tier[0]), str(tier[1]), badge))
    return tuple(sorted(tiers, key=lambda t: t[0], reverse=True))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.board.width <= 0 or config.board.height <= 0:
        raise ValueError(
            f"Board size must be positive, got {config.board.width}x{config.board.height}"
        )

    # The collection must be non-empty right after round start
    if config.balls.initial_count < 1:
        raise ValueError(f"balls.initial_count must be >= 1, got {config.balls.initial_count}")

    if config.balls.radius <= 0:
        raise ValueError(f"balls.radius must be positive, got {config.balls.radius}")

    for name in ("saturation", "lightness"):
        value = getattr(config.balls, name)
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"balls.{name} must be in [0, 1], got {value}")

    if config.physics.gravity <= 0:
        raise ValueError(f"physics.gravity must be positive, got {config.physics.gravity}")

    if config.hands.radius <= 0:
        raise ValueError(f"hands.radius must be positive, got {config.hands.radius}")

    if config.hands.bounce_velocity >= 0:
        raise ValueError(
            f"hands.bounce_velocity must be negative (upward), got {config.hands.bounce_velocity}"
        )

    if config.hands.arbitration not in ARBITRATION_MODES:
        raise ValueError(
            f"hands.arbitration must be one of {ARBITRATION_MODES}, got '{config.hands.arbitration}'"
        )

    if config.countdown.duration < 0:
        raise ValueError(f"countdown.duration must be >= 0, got {config.countdown.duration}")

    step = config.countdown.step_per_tick
    if step is not None and step <= 0:
        raise ValueError(f"countdown.step_per_tick must be positive or null, got {step}")

    if config.spawn.interval <= 0:
        raise ValueError(f"spawn.interval must be positive, got {config.spawn.interval}")


def default_config_path() -> str:
    """Location of the bundled game_config.yaml."""
    return os.path.join(
        os.path.dirname(os.path.dirname(__file__)),
        "game_config.yaml"
    )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = default_config_path()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"])
    )

    balls_data = raw["balls"]
    balls = BallConfig(
        initial_count=int(balls_data.get("initial_count", 1)),
        radius=float(balls_data["radius"]),
        spawn_y=float(balls_data.get("spawn_y", 100.0)),
        hue_step=float(balls_data.get("hue_step", 120.0)),
        saturation=float(balls_data.get("saturation", 0.7)),
        lightness=float(balls_data.get("lightness", 0.6))
    )

    physics = PhysicsConfig(
        gravity=float(raw["physics"]["gravity"])
    )

    hands_data = raw["hands"]
    hands = HandConfig(
        radius=float(hands_data["radius"]),
        bounce_velocity=float(hands_data["bounce_velocity"]),
        steering_coefficient=float(hands_data.get("steering_coefficient", 0.1)),
        arbitration=str(hands_data.get("arbitration", "sequential"))
    )

    countdown_data = raw.get("countdown", {})
    step = countdown_data.get("step_per_tick")
    countdown = CountdownConfig(
        duration=float(countdown_data.get("duration", 3.0)),
        step_per_tick=float(step) if step is not None else None
    )

    spawn = SpawnConfig(
        interval=float(raw.get("spawn", {}).get("interval", 20.0))
    )

    # Outcome texts are optional
    outcome_data = raw.get("outcome", {})
    outcome = OutcomeConfig(
        tiers=_parse_tiers(outcome_data.get("tiers", [])),
        default_headline=str(outcome_data.get("default_headline", "Game Over!")),
        default_badge=str(outcome_data.get("default_badge", "")),
        acquisition_failure_message=str(
            outcome_data.get("acquisition_failure_message", "Camera access required to play!")
        )
    )

    config = GameConfig(
        board=board,
        balls=balls,
        physics=physics,
        hands=hands,
        countdown=countdown,
        spawn=spawn,
        outcome=outcome
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
