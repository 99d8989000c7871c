"""
Space Invaders Game Renderer - Pygame-based visualization implementing RendererInterface.
Blocky pixel art drawn from filled rectangles; reads only the state snapshot.
"""

import pygame
from typing import Dict, Any, Tuple, List, Optional

from ...core.renderer_interface import RendererInterface
from .entities import INVADER_COLORS


# Colors
BACKGROUND = (10, 10, 26)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
GOLD = (255, 215, 0)
PINK = (255, 107, 157)
GREEN = (102, 255, 102)

CANNON_COLOR = WHITE
PLAYER_PROJECTILE_COLOR = WHITE
ENEMY_PROJECTILE_COLOR = PINK
SHIELD_COLOR = GREEN
BONUS_COLOR = GOLD
BONUS_WINDOW_COLOR = RED
TEXT_COLOR = WHITE
TITLE_COLOR = GREEN
GAME_OVER_COLOR = RED

STAR_COUNT = 50


class SpaceInvadersRenderer(RendererInterface):
    """
    Renders Space Invaders using Pygame, implementing RendererInterface.

    Draws the start screen, the playfield with HUD, or the game over screen
    depending on the snapshot's "state".
    """

    def __init__(self, width: int = 800, height: int = 600):
        """
        Initialize the renderer.

        Args:
            width: Arena width in game units
            height: Arena height in game units
        """
        self._base_width = width
        self._base_height = height
        self._scale = 1.0
        self._offset_x = 0
        self._offset_y = 0
        self._render_width = width
        self._render_height = height
        self._fonts: Dict[int, pygame.font.Font] = {}

    def get_preferred_size(self) -> Tuple[int, int]:
        """Get the preferred render size."""
        return (self._base_width, self._base_height)

    def set_render_area(self, x: int, y: int, width: int, height: int) -> None:
        """Set the area where this renderer should draw."""
        self._offset_x = x
        self._offset_y = y
        # Calculate scale to fit
        scale_x = width / self._base_width
        scale_y = height / self._base_height
        self._scale = min(scale_x, scale_y)
        self._render_width = int(self._base_width * self._scale)
        self._render_height = int(self._base_height * self._scale)

    def _scale_x(self, x: float) -> int:
        """Scale X coordinate."""
        return int(self._offset_x + x * self._scale)

    def _scale_y(self, y: float) -> int:
        """Scale Y coordinate."""
        return int(self._offset_y + y * self._scale)

    def _scale_size(self, size: float) -> int:
        """Scale a size value."""
        return max(1, int(size * self._scale))

    def _fill(
        self, surface: pygame.Surface, color: Tuple[int, int, int],
        x: float, y: float, width: float, height: float
    ) -> None:
        rect = pygame.Rect(
            self._scale_x(x),
            self._scale_y(y),
            self._scale_size(width),
            self._scale_size(height),
        )
        pygame.draw.rect(surface, color, rect)

    def _font(self, size: int) -> Optional[pygame.font.Font]:
        """Cached monospace font at a scaled size, None if fonts are unavailable."""
        scaled = self._scale_size(size)
        if scaled not in self._fonts:
            try:
                self._fonts[scaled] = pygame.font.SysFont("couriernew,monospace", scaled)
            except Exception:
                return None
        return self._fonts[scaled]

    def _draw_text(
        self, surface: pygame.Surface, text: str, size: int,
        color: Tuple[int, int, int], x: float, y: float, align: str = "left"
    ) -> None:
        font = self._font(size)
        if font is None:
            return
        rendered = font.render(text, True, color)
        text_rect = rendered.get_rect()
        if align == "center":
            text_rect.centerx = self._scale_x(x)
        elif align == "right":
            text_rect.right = self._scale_x(x)
        else:
            text_rect.left = self._scale_x(x)
        text_rect.bottom = self._scale_y(y)
        surface.blit(rendered, text_rect)

    def render(self, game_state: Dict[str, Any], surface: pygame.Surface) -> None:
        """
        Render the game state to a surface.

        Args:
            game_state: Dictionary containing game state
            surface: Pygame surface to draw on
        """
        bg_rect = pygame.Rect(
            self._offset_x,
            self._offset_y,
            self._render_width,
            self._render_height,
        )
        pygame.draw.rect(surface, BACKGROUND, bg_rect)
        self._draw_starfield(surface)

        state = game_state.get("state", "start")
        if state == "start":
            self._draw_start_screen(surface)
        elif state == "gameOver":
            self._draw_game_over(surface, game_state.get("score", 0))
        else:
            self._draw_playfield(surface, game_state)

    def _draw_playfield(self, surface: pygame.Surface, game_state: Dict[str, Any]) -> None:
        self._draw_shields(surface, game_state.get("shields", []))
        for inv in game_state.get("invaders", []):
            if inv.get("alive", False):
                self._draw_invader(surface, inv)
        for proj in game_state.get("projectiles", []):
            self._draw_projectile(surface, proj)
        self._draw_cannon(surface, game_state.get("cannon", {}))

        bonus = game_state.get("bonus", {})
        if bonus.get("active", False):
            self._draw_bonus(surface, bonus)

        self._draw_hud(
            surface,
            game_state.get("score", 0),
            game_state.get("lives", 0),
            game_state.get("wave", 1),
        )

    def _draw_starfield(self, surface: pygame.Surface) -> None:
        """Fixed pseudo-random star pattern."""
        for i in range(STAR_COUNT):
            x = (i * 97) % self._base_width
            y = (i * 131) % self._base_height
            size = (i % 3) * 0.5 + 0.5
            self._fill(surface, WHITE, x, y, size, size)

    def _draw_cannon(self, surface: pygame.Surface, cannon: Dict[str, Any]) -> None:
        """Draw the cannon: a wide base with a barrel on top."""
        if not cannon:
            return
        x = cannon.get("x", 0)
        y = cannon.get("y", 0)
        self._fill(surface, CANNON_COLOR, x, y + 16, 32, 8)
        self._fill(surface, CANNON_COLOR, x + 12, y, 8, 16)

    def _invader_shape(self, variant: int, anim_frame: int) -> List[Tuple[float, float, float, float]]:
        """Rectangles (dx, dy, w, h) making up one invader sprite frame."""
        offset = anim_frame * 4
        if variant == 0:
            return [
                (8, 4, 16, 4),
                (offset % 8, 8, 8, 8),
                (24 - offset % 8, 8, 8, 8),
                (8, 16, 4, 4),
                (20, 16, 4, 4),
            ]
        if variant == 1:
            return [
                (12, 0, 8, 4),
                (8, 4, 16, 8),
                (4, 12, 24, 4),
                (offset % 12, 16, 8, 4),
                (24 - offset % 12, 16, 8, 4),
            ]
        return [
            (4, 0, 4, 4),
            (24, 0, 4, 4),
            (8, 4, 16, 4),
            (4, 8, 24, 8),
            (8 - offset / 2, 16, 4, 4),
            (20 + offset / 2, 16, 4, 4),
        ]

    def _draw_invader(self, surface: pygame.Surface, inv: Dict[str, Any]) -> None:
        """Draw a single invader in its variant color and animation frame."""
        x = inv.get("x", 0)
        y = inv.get("y", 0)
        variant = inv.get("variant", 2)
        color = INVADER_COLORS.get(variant, WHITE)

        for dx, dy, w, h in self._invader_shape(variant, inv.get("anim_frame", 0)):
            self._fill(surface, color, x + dx, y + dy, w, h)

    def _draw_shields(self, surface: pygame.Surface, shields: List[Dict[str, Any]]) -> None:
        """Draw the remaining blocks of every shield."""
        for shield in shields:
            for block in shield.get("blocks", []):
                size = block.get("size", 8)
                self._fill(surface, SHIELD_COLOR, block.get("x", 0), block.get("y", 0), size, size)

    def _draw_projectile(self, surface: pygame.Surface, proj: Dict[str, Any]) -> None:
        """Draw a projectile; player shots are white, enemy shots pink."""
        color = PLAYER_PROJECTILE_COLOR if proj.get("owner", 0) == 0 else ENEMY_PROJECTILE_COLOR
        self._fill(
            surface, color,
            proj.get("x", 0), proj.get("y", 0),
            proj.get("width", 3), proj.get("height", 12),
        )

    def _draw_bonus(self, surface: pygame.Surface, bonus: Dict[str, Any]) -> None:
        """Draw the bonus saucer with its row of windows."""
        x = bonus.get("x", 0)
        y = bonus.get("y", 0)
        self._fill(surface, BONUS_COLOR, x + 8, y + 8, 32, 4)
        self._fill(surface, BONUS_COLOR, x + 4, y + 12, 40, 4)
        self._fill(surface, BONUS_COLOR, x + 16, y + 4, 16, 4)
        for window_x in (12, 20, 28):
            self._fill(surface, BONUS_WINDOW_COLOR, x + window_x, y + 12, 4, 4)

    def _draw_hud(self, surface: pygame.Surface, score: int, lives: int, wave: int) -> None:
        """Draw the heads-up display (score, wave, lives)."""
        self._draw_text(surface, f"SCORE: {score:06d}", 20, TEXT_COLOR, 20, 30)
        self._draw_text(surface, f"WAVE: {wave}", 20, TEXT_COLOR, self._base_width / 2 - 50, 30)
        self._draw_text(surface, f"LIVES: {lives}", 20, TEXT_COLOR, self._base_width - 20, 30, align="right")

    def _draw_start_screen(self, surface: pygame.Surface) -> None:
        cx = self._base_width / 2
        cy = self._base_height / 2
        self._draw_text(surface, "SPACE INVADERS", 48, TITLE_COLOR, cx, cy - 40, align="center")
        self._draw_text(surface, "PRESS ENTER TO START", 24, TEXT_COLOR, cx, cy + 20, align="center")
        self._draw_text(surface, "ARROW KEYS OR A/D TO MOVE", 16, TEXT_COLOR, cx, cy + 60, align="center")
        self._draw_text(surface, "SPACEBAR TO SHOOT", 16, TEXT_COLOR, cx, cy + 85, align="center")

    def _draw_game_over(self, surface: pygame.Surface, score: int) -> None:
        cx = self._base_width / 2
        cy = self._base_height / 2
        self._draw_text(surface, "GAME OVER", 48, GAME_OVER_COLOR, cx, cy - 40, align="center")
        self._draw_text(surface, f"FINAL SCORE: {score}", 24, TEXT_COLOR, cx, cy + 20, align="center")
        self._draw_text(surface, "PRESS ENTER TO PLAY AGAIN", 24, TEXT_COLOR, cx, cy + 60, align="center")
