"""
Space Invaders entities: cannon, projectiles, invaders, shields, bonus target.

All entities are top-left anchored rectangles in arena coordinates and expose
their axis-aligned bounding box through bounds().
"""

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple, Dict, Any

import numpy as np

from .collision import Bounds, overlaps


class InvaderVariant(IntEnum):
    """Invader variants with different point values."""
    SMALL = 0   # 30 points - top row
    MEDIUM = 1  # 20 points - middle rows
    LARGE = 2   # 10 points - bottom rows


class ProjectileOwner(IntEnum):
    """Identifies who fired a projectile."""
    PLAYER = 0
    ENEMY = 1


INVADER_POINTS = {
    InvaderVariant.SMALL: 30,
    InvaderVariant.MEDIUM: 20,
    InvaderVariant.LARGE: 10,
}

INVADER_COLORS = {
    InvaderVariant.SMALL: (102, 255, 102),   # Green
    InvaderVariant.MEDIUM: (0, 255, 255),    # Cyan
    InvaderVariant.LARGE: (255, 107, 213),   # Magenta
}

# Shield layout: pyramid with a gap at the bottom centre
SHIELD_PATTERN = np.array(
    [
        [0, 1, 1, 1, 1, 1, 1, 0],
        [1, 1, 1, 1, 1, 1, 1, 1],
        [1, 1, 1, 1, 1, 1, 1, 1],
        [1, 1, 1, 0, 0, 1, 1, 1],
        [1, 1, 0, 0, 0, 0, 1, 1],
    ],
    dtype=bool,
)


@dataclass
class Cannon:
    """The player's laser cannon."""
    x: float
    y: float
    arena_width: int
    width: int = 32
    height: int = 24
    speed: float = 4.0
    lives: int = 3
    can_fire: bool = True
    margin: float = 20.0

    @property
    def min_x(self) -> float:
        return self.margin

    @property
    def max_x(self) -> float:
        return self.arena_width - self.width - self.margin

    def move_left(self) -> None:
        self.x = max(self.min_x, self.x - self.speed)

    def move_right(self) -> None:
        self.x = min(self.max_x, self.x + self.speed)

    def muzzle(self) -> Tuple[float, float]:
        """Spawn point of player projectiles (top centre)."""
        return self.x + self.width / 2, self.y

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "lives": self.lives,
        }


@dataclass
class Projectile:
    """A shot fired by the cannon (upward) or an invader (downward)."""
    x: float
    y: float
    owner: ProjectileOwner
    speed: float  # Signed: negative moves up
    width: int = 3
    height: int = 12

    @property
    def is_player(self) -> bool:
        return self.owner == ProjectileOwner.PLAYER

    def advance(self) -> None:
        self.y += self.speed

    def is_off_arena(self, arena_height: float) -> bool:
        return self.y < 0 or self.y > arena_height

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "owner": int(self.owner),
            "width": self.width,
            "height": self.height,
        }


@dataclass
class Invader:
    """An individual invader alien."""
    x: float
    y: float
    variant: InvaderVariant
    alive: bool = True
    anim_frame: int = 0
    width: int = 32
    height: int = 24

    @property
    def points(self) -> int:
        return INVADER_POINTS[self.variant]

    def toggle_animation(self) -> None:
        self.anim_frame = (self.anim_frame + 1) % 2

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "variant": int(self.variant),
            "alive": self.alive,
            "anim_frame": self.anim_frame,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class ShieldBlock:
    """A single destructible block of a shield."""
    x: float
    y: float
    size: int = 8
    alive: bool = True

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.size, self.size)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "size": self.size}


@dataclass
class Shield:
    """A defensive shield built once from SHIELD_PATTERN."""
    x: float
    y: float
    block_size: int = 8
    blocks: List[ShieldBlock] = field(init=False, default_factory=list)

    def __post_init__(self):
        # argwhere yields cells in row-major order, which is the scan order
        self.blocks = [
            ShieldBlock(
                x=self.x + int(col) * self.block_size,
                y=self.y + int(row) * self.block_size,
                size=self.block_size,
            )
            for row, col in np.argwhere(SHIELD_PATTERN)
        ]

    @property
    def alive_blocks(self) -> List[ShieldBlock]:
        return [block for block in self.blocks if block.alive]

    def resolve_hit(self, projectile: Projectile) -> bool:
        """
        Destroy the first alive block overlapping the projectile.

        Blocks are scanned in creation order; at most one block dies per call.

        Returns:
            True if a block was destroyed
        """
        proj_bounds = projectile.bounds()
        for block in self.blocks:
            if block.alive and overlaps(proj_bounds, block.bounds()):
                block.alive = False
                return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "blocks": [block.to_dict() for block in self.alive_blocks],
        }


@dataclass
class BonusTarget:
    """Bonus UFO that occasionally crosses the top of the arena."""
    x: float
    y: float
    width: int = 48
    height: int = 20
    speed: float = 2.0
    active: bool = False
    direction: int = 1  # 1 = right, -1 = left

    def activate(self, arena_width: float, rng: random.Random) -> None:
        """Start a crossing from a random side."""
        self.active = True
        self.direction = 1 if rng.random() > 0.5 else -1
        self.x = -self.width if self.direction > 0 else arena_width

    def deactivate(self) -> None:
        self.active = False

    def advance(self, arena_width: float) -> None:
        if not self.active:
            return
        self.x += self.speed * self.direction
        if self.x > arena_width + self.width or self.x < -self.width:
            self.active = False

    @staticmethod
    def roll_points(rng: random.Random, low: int = 100, high: int = 300) -> int:
        """Random reward for destroying the target."""
        return rng.randint(low, high)

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "active": self.active,
            "direction": self.direction,
            "width": self.width,
            "height": self.height,
        }
