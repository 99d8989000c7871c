"""
Axis-aligned bounding box collision detection (top-left anchored).
"""

from typing import NamedTuple


class Bounds(NamedTuple):
    """Axis-aligned bounding box in arena coordinates."""
    x: float
    y: float
    width: float
    height: float


def overlaps(a: Bounds, b: Bounds) -> bool:
    """Strict AABB intersection. Touching edges do not overlap."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )
