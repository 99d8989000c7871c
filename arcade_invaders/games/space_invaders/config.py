"""
Space Invaders game configuration.
"""

from dataclasses import dataclass, asdict, fields
from typing import Dict, Any, Optional


@dataclass
class SpaceInvadersConfig:
    """Configuration for Space Invaders game."""

    # Arena dimensions
    width: int = 800
    height: int = 600
    edge_margin: float = 20.0  # Cannon and formation keep this far from the sides

    # Cannon
    cannon_width: int = 32
    cannon_height: int = 24
    cannon_speed: float = 4.0
    cannon_bottom_offset: float = 60.0  # Cannon y = height - offset
    start_lives: int = 3

    # Projectiles
    projectile_width: int = 3
    projectile_height: int = 12
    player_projectile_speed: float = 6.0  # Upward
    enemy_projectile_speed: float = 3.0   # Downward

    # Formation layout (11 columns x 1 small + 2 medium + 2 large rows)
    invader_width: int = 32
    invader_height: int = 24
    invader_cols: int = 11
    small_rows: int = 1
    medium_rows: int = 2
    large_rows: int = 2
    formation_start_x: float = 60.0
    formation_start_y: float = 80.0
    invader_spacing_x: float = 48.0
    invader_spacing_y: float = 40.0

    # Formation movement
    base_invader_speed: float = 0.5
    invader_speed_per_wave: float = 0.2
    invader_drop_distance: float = 20.0
    animation_interval_ticks: int = 30
    step_sound_interval_ms: float = 500.0

    # Shields
    shield_count: int = 4
    shield_block_size: int = 8
    shield_bottom_offset: float = 150.0  # Shield y = height - offset

    # Enemy fire
    enemy_fire_chance: float = 0.02
    enemy_fire_cooldown_ms: float = 1000.0

    # Bonus target
    bonus_width: int = 48
    bonus_height: int = 20
    bonus_speed: float = 2.0
    bonus_y: float = 40.0
    bonus_spawn_chance: float = 0.001
    bonus_spawn_interval_ms: float = 15000.0
    bonus_min_points: int = 100
    bonus_max_points: int = 300

    # Seed for the game's random source (None = nondeterministic)
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Arena dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.width - self.cannon_width - 2 * self.edge_margin < 0:
            raise ValueError(
                f"Arena width {self.width} cannot fit a {self.cannon_width}px cannon "
                f"inside {self.edge_margin}px margins"
            )
        if self.bonus_min_points > self.bonus_max_points:
            raise ValueError("bonus_min_points must not exceed bonus_max_points")

    @property
    def invader_rows(self) -> int:
        return self.small_rows + self.medium_rows + self.large_rows

    @property
    def total_invaders(self) -> int:
        return self.invader_rows * self.invader_cols

    def invader_speed_for_wave(self, wave: int) -> float:
        """Formation speed for a 1-based wave number."""
        return self.base_invader_speed + (wave - 1) * self.invader_speed_per_wave

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpaceInvadersConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})
