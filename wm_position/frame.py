"""Frame geometry primitives shared by the directional helpers."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @classmethod
    def parse(cls, value: str) -> "Direction":
        token = (value or "").strip().lower()
        for member in cls:
            if member.value == token:
                return member
        raise ValueError(f"{value} is not a valid direction")

    @property
    def unit_vector(self) -> "Vector2D":
        # Screen coordinates: y grows downward.
        return _UNIT_VECTORS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.EAST, Direction.WEST)


@dataclass(frozen=True)
class Vector2D:
    x: float
    y: float

    @classmethod
    def from_frame_center(cls, frame: "Frame") -> "Vector2D":
        return cls(frame.x + frame.width / 2.0, frame.y + frame.height / 2.0)

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)


_UNIT_VECTORS = {
    Direction.NORTH: Vector2D(0.0, -1.0),
    Direction.EAST: Vector2D(1.0, 0.0),
    Direction.SOUTH: Vector2D(0.0, 1.0),
    Direction.WEST: Vector2D(-1.0, 0.0),
}


def _ranges_overlap(start_a: float, end_a: float, start_b: float, end_b: float) -> bool:
    if start_a <= start_b:
        return end_a >= start_b
    return end_b >= start_a


@dataclass(frozen=True)
class Frame:
    """Axis-aligned rectangle in screen coordinates."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"frame size must not be negative (got {self.width}x{self.height})")

    @classmethod
    def from_tuple(cls, rect: Tuple[float, float, float, float]) -> "Frame":
        x, y, width, height = rect
        return cls(float(x), float(y), float(width), float(height))

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Vector2D:
        return Vector2D.from_frame_center(self)

    def is_north_of(self, other: "Frame") -> bool:
        return self.bottom <= other.top

    def is_south_of(self, other: "Frame") -> bool:
        return self.top >= other.bottom

    def is_west_of(self, other: "Frame") -> bool:
        return self.right <= other.left

    def is_east_of(self, other: "Frame") -> bool:
        return self.left >= other.right

    def overlaps_vertically(self, other: "Frame") -> bool:
        """True when the projections on the y axis intersect (edges included)."""
        return _ranges_overlap(self.top, self.bottom, other.top, other.bottom)

    def overlaps_horizontally(self, other: "Frame") -> bool:
        """True when the projections on the x axis intersect (edges included)."""
        return _ranges_overlap(self.left, self.right, other.left, other.right)

    def is_in_direction(self, other: "Frame", direction: Direction) -> bool:
        """Return True if this frame lies unambiguously in ``direction`` from ``other``.

        The frame must be fully past ``other`` along the direction's axis and
        overlap it along the orthogonal axis.
        """
        if direction is Direction.NORTH:
            positioned = self.is_north_of(other)
        elif direction is Direction.SOUTH:
            positioned = self.is_south_of(other)
        elif direction is Direction.EAST:
            positioned = self.is_east_of(other)
        else:
            positioned = self.is_west_of(other)
        if not positioned:
            return False
        if direction.is_horizontal:
            return self.overlaps_vertically(other)
        return self.overlaps_horizontally(other)
