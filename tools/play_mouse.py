"""
Mouse Play Mode
===============

Play Hand Bounce interactively with the mouse standing in for a tracked hand.

Controls:
    - Mouse: Move the hand zone
    - Click/Space: Start (or restart) a round
    - ESC: Quit

Usage:
    python -m tools.play_mouse [--fps FPS] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from handbounce.bounce_core.config_loader import GameConfig, load_config
from handbounce.bounce_core.game import Round
from handbounce.bounce_core.hand_tracking import HandTracker
from handbounce.bounce_core.render_pygame import PygameRenderer


class MouseHandTracker(HandTracker):
    """Reports the mouse pointer as the only hand, once per frame."""

    def _setup(self) -> bool:
        return pygame.get_init()

    def poll(self) -> None:
        if pygame.mouse.get_focused():
            self.publish([pygame.mouse.get_pos()])
        else:
            self.publish([])


class MousePlayer:
    """
    Interactive round runner.

    The frame loop ticks the round while it is running; the spawn timer
    runs on its own thread.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        target_fps: int = 60,
        width: Optional[int] = None,
        height: Optional[int] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        pygame.init()
        self._config = config
        self._target_fps = target_fps
        self._clock = pygame.time.Clock()
        self._renderer = PygameRenderer()
        self._tracker = MouseHandTracker()
        self._round = Round(config=config, tracker=self._tracker)
        if width is not None and height is not None:
            self._round.resize(width, height)
        self._running = True

    def run(self) -> int:
        """Run the frame loop. Returns the last score."""
        print("=== Hand Bounce ===")
        print("Click or Space to start, move the mouse to bounce the balls")
        print("ESC to quit")
        print()

        while self._running:
            self._handle_events()
            self._tracker.poll()

            if self._round.is_running:
                still_running = self._round.tick()
                if not still_running and self._round.outcome is not None:
                    outcome = self._round.outcome
                    info = self._round.get_info()
                    print(f"\n{outcome.headline} {outcome.badge} {outcome.detail}")
                    print(f"  Balls: {info['balls']}  Hands: {info['hands']}  ({outcome.reason})")

            self._renderer.render_to_screen(self._round.snapshot())
            self._clock.tick(self._target_fps)

        self._round.close()
        pygame.quit()
        return self._round.score

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_SPACE:
                    self._start()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._start()

    def _start(self) -> None:
        if self._round.is_running:
            return
        if not self._round.start():
            print(self._round.outcome.headline)


def main():
    parser = argparse.ArgumentParser(description="Play Hand Bounce with the mouse")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--width", type=int, default=None, help="Field width (default: from config)")
    parser.add_argument("--height", type=int, default=None, help="Field height (default: from config)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--verbose", action="store_true", help="Also log phase changes")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = load_config(args.config)
        player = MousePlayer(
            config=config,
            target_fps=args.fps,
            width=args.width,
            height=args.height
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
