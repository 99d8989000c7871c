"""
Spawn and timing policy: enemy fire, bonus target appearance, march sound pacing.

Every timer is an explicit field read against the injected clock, so tests
can drive elapsed time deterministically.
"""

import random
from typing import Optional

from .config import SpaceInvadersConfig
from .entities import BonusTarget, Projectile, ProjectileOwner
from .formation import Formation


class SpawnPolicy:
    """Probability and elapsed-time gates for everything the game spawns."""

    def __init__(self, config: SpaceInvadersConfig, rng: random.Random):
        self.config = config
        self.rng = rng
        self.last_enemy_shot_ms: Optional[float] = None
        self.last_bonus_spawn_ms: Optional[float] = None
        self.last_step_sound_ms: Optional[float] = None

    def reset(self) -> None:
        """Forget all timers (as if nothing was ever fired or spawned)."""
        self.last_enemy_shot_ms = None
        self.last_bonus_spawn_ms = None
        self.last_step_sound_ms = None

    @staticmethod
    def _elapsed(now_ms: float, since_ms: Optional[float]) -> float:
        if since_ms is None:
            return float("inf")
        return now_ms - since_ms

    def try_enemy_fire(self, now_ms: float, formation: Formation) -> Optional[Projectile]:
        """
        Maybe fire from a random alive invader.

        A per-tick chance gates the attempt, then a cooldown limits the rate.

        Returns:
            The new downward projectile, or None if nothing fired
        """
        cfg = self.config
        if self.rng.random() >= cfg.enemy_fire_chance:
            return None
        if self._elapsed(now_ms, self.last_enemy_shot_ms) < cfg.enemy_fire_cooldown_ms:
            return None

        alive = formation.alive_invaders
        if not alive:
            return None

        shooter = self.rng.choice(alive)
        self.last_enemy_shot_ms = now_ms
        return Projectile(
            x=shooter.x + shooter.width / 2,
            y=shooter.y + shooter.height,
            owner=ProjectileOwner.ENEMY,
            speed=cfg.enemy_projectile_speed,
            width=cfg.projectile_width,
            height=cfg.projectile_height,
        )

    def try_spawn_bonus(self, now_ms: float, bonus: BonusTarget) -> bool:
        """
        Maybe launch the bonus target.

        Returns:
            True if the target was activated this tick
        """
        cfg = self.config
        if bonus.active:
            return False
        if self._elapsed(now_ms, self.last_bonus_spawn_ms) <= cfg.bonus_spawn_interval_ms:
            return False
        if self.rng.random() >= cfg.bonus_spawn_chance:
            return False

        bonus.activate(cfg.width, self.rng)
        self.last_bonus_spawn_ms = now_ms
        return True

    def step_sound_due(self, now_ms: float, wave: int) -> bool:
        """Rate-limit march sounds; later waves allow them closer together."""
        interval = self.config.step_sound_interval_ms / (1 + wave * 0.1)
        if self._elapsed(now_ms, self.last_step_sound_ms) > interval:
            self.last_step_sound_ms = now_ms
            return True
        return False

    def roll_bonus_points(self) -> int:
        return BonusTarget.roll_points(
            self.rng, self.config.bonus_min_points, self.config.bonus_max_points
        )
