"""
Invader formation: grid layout, synchronized march, edge reversal and descent.
"""

from typing import List

from .config import SpaceInvadersConfig
from .entities import Invader, InvaderVariant


class Formation:
    """
    The grid of invaders moving as one body.

    All alive invaders share a horizontal direction and a wave-dependent
    speed. When any of them touches an edge the whole formation reverses and
    drops by a fixed step in the same tick.
    """

    def __init__(self, config: SpaceInvadersConfig, wave: int = 1):
        self.config = config
        self.wave = wave
        self.arena_width = config.width
        self.margin = config.edge_margin
        self.drop_distance = config.invader_drop_distance
        self.speed = config.invader_speed_for_wave(wave)
        self.direction = 1
        self.invaders: List[Invader] = self._create_invaders()

    def _row_variant(self, row: int) -> InvaderVariant:
        if row < self.config.small_rows:
            return InvaderVariant.SMALL
        if row < self.config.small_rows + self.config.medium_rows:
            return InvaderVariant.MEDIUM
        return InvaderVariant.LARGE

    def _create_invaders(self) -> List[Invader]:
        """Lay out the grid row by row, top row first."""
        cfg = self.config
        invaders: List[Invader] = []
        for row in range(cfg.invader_rows):
            variant = self._row_variant(row)
            for col in range(cfg.invader_cols):
                invaders.append(Invader(
                    x=cfg.formation_start_x + col * cfg.invader_spacing_x,
                    y=cfg.formation_start_y + row * cfg.invader_spacing_y,
                    variant=variant,
                    width=cfg.invader_width,
                    height=cfg.invader_height,
                ))
        return invaders

    @property
    def alive_invaders(self) -> List[Invader]:
        return [inv for inv in self.invaders if inv.alive]

    @property
    def alive_count(self) -> int:
        return sum(1 for inv in self.invaders if inv.alive)

    def is_cleared(self) -> bool:
        return self.alive_count == 0

    def _at_edge(self, invader: Invader) -> bool:
        return (
            invader.x <= self.margin
            or invader.x >= self.arena_width - invader.width - self.margin
        )

    def advance(self) -> bool:
        """
        March every alive invader one step.

        Returns:
            True if the formation reversed (and descended) this tick
        """
        alive = self.alive_invaders
        hit_edge = False
        for inv in alive:
            inv.x += self.speed * self.direction
            if self._at_edge(inv):
                hit_edge = True

        if hit_edge:
            self.direction *= -1
            for inv in alive:
                inv.y += self.drop_distance

        return hit_edge

    def reached_row(self, y: float) -> bool:
        """True if any alive invader's bottom edge is at or below y."""
        return any(inv.y + inv.height >= y for inv in self.invaders if inv.alive)

    def toggle_animation(self) -> None:
        """Advance the walk cycle of all alive invaders in lockstep."""
        for inv in self.alive_invaders:
            inv.toggle_animation()

    def step_pitch(self) -> float:
        """Pitch hint for the march sound; busier formations sound higher."""
        return 1 + self.alive_count / 50
