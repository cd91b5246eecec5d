"""
Pygame Renderer
===============

Draws a RoundSnapshot: balls, hand zones, score, countdown overlay and the
end-of-round summary. Supports both display mode and headless RGB output.
"""

from __future__ import annotations

from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from handbounce.bounce_core.state_snapshot import RoundSnapshot


class PygameRenderer:
    """
    Renderer using pygame.

    The surface maps 1:1 to field coordinates (screen y grows downward).
    """

    def __init__(self):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if not pygame.get_init():
            pygame.init()

        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, 28)
        self._font_label = pygame.font.Font(None, 22)
        self._font_large = pygame.font.Font(None, 48)
        self._font_huge = pygame.font.Font(None, 96)

        self._bg_color = (0, 0, 0)
        self._outline_color = (255, 255, 255)
        self._hand_outline = (255, 255, 255)
        self._hand_fill = (100, 200, 255, 76)
        self._text_color = (255, 255, 255)
        self._box_fill = (255, 252, 245)
        self._box_text = (60, 60, 60)
        self._box_subtext = (102, 102, 102)

    def render(self, snapshot: RoundSnapshot) -> np.ndarray:
        """
        Render to RGB array.

        Returns:
            (height, width, 3) uint8 array.
        """
        size = (int(snapshot.field_width), int(snapshot.field_height))
        surface = pygame.Surface(size)
        self._render_to_surface(surface, snapshot)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(self, snapshot: RoundSnapshot) -> None:
        """Render to the pygame window, resizing it to the field."""
        size = (int(snapshot.field_width), int(snapshot.field_height))
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size)
            self._screen_size = size
            pygame.display.set_caption("Hand Bounce")

        self._render_to_surface(self._screen, snapshot)
        pygame.display.flip()

    def _render_to_surface(self, surface: pygame.Surface, snapshot: RoundSnapshot) -> None:
        surface.fill(self._bg_color)

        for i in range(snapshot.ball_count):
            self._draw_ball(
                surface,
                int(snapshot.ball_x[i]),
                int(snapshot.ball_y[i]),
                int(snapshot.ball_radius[i]),
                tuple(int(c) for c in snapshot.ball_color[i])
            )

        for i in range(snapshot.hand_count):
            x, y = snapshot.hand_xy[i]
            self._draw_hand(surface, int(x), int(y), int(snapshot.hand_radius), i)

        self._draw_score(surface, snapshot.score)

        if snapshot.is_counting_down:
            self._draw_countdown(surface, snapshot.countdown_display)

        if snapshot.outcome is not None:
            self._draw_outcome(surface, snapshot)

    def _draw_ball(
        self,
        surface: pygame.Surface,
        cx: int,
        cy: int,
        radius: int,
        color: Tuple[int, int, int]
    ) -> None:
        pygame.draw.circle(surface, color, (cx, cy), radius)
        pygame.draw.circle(surface, self._outline_color, (cx, cy), radius, 2)

    def _draw_hand(self, surface: pygame.Surface, cx: int, cy: int, radius: int, index: int) -> None:
        """Hand zone as a paddle: translucent fill, outline, center dot, label."""
        zone = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(zone, self._hand_fill, (radius, radius), radius)
        surface.blit(zone, (cx - radius, cy - radius))

        pygame.draw.circle(surface, self._hand_outline, (cx, cy), radius, 4)
        pygame.draw.circle(surface, self._hand_outline, (cx, cy), 5)

        label = self._font_label.render(f"Hand {index + 1}", True, self._text_color)
        surface.blit(label, label.get_rect(center=(cx, cy - radius - 10)))

    def _draw_score(self, surface: pygame.Surface, score: int) -> None:
        text = self._font.render(f"Time: {score}s", True, self._text_color)
        surface.blit(text, (16, 12))

    def _draw_countdown(self, surface: pygame.Surface, value: int) -> None:
        width, height = surface.get_size()

        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 128))
        surface.blit(overlay, (0, 0))

        number = self._font_huge.render(str(value), True, self._text_color)
        surface.blit(number, number.get_rect(center=(width // 2, height // 2)))

        ready = self._font.render("Get Ready!", True, self._text_color)
        surface.blit(ready, ready.get_rect(center=(width // 2, height // 2 + 60)))

    def _draw_outcome(self, surface: pygame.Surface, snapshot: RoundSnapshot) -> None:
        """Summary box over a dimmed field."""
        width, height = surface.get_size()
        outcome = snapshot.outcome

        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))

        box_w, box_h = 360, 150
        box = pygame.Rect((width - box_w) // 2, (height - box_h) // 2, box_w, box_h)
        pygame.draw.rect(surface, self._box_fill, box, border_radius=16)

        title = self._font_large.render(outcome.headline, True, self._box_text)
        surface.blit(title, title.get_rect(center=(box.centerx, box.y + 40)))

        if outcome.detail:
            detail = self._font.render(outcome.detail, True, self._box_subtext)
            surface.blit(detail, detail.get_rect(center=(box.centerx, box.y + 85)))

        hint = self._font_label.render("Click or SPACE to play again", True, self._box_subtext)
        surface.blit(hint, hint.get_rect(center=(box.centerx, box.y + 122)))
