"""Core geometric value types.

This module defines the coordinate vocabulary shared by every kernel module:
- Point: A 2D coordinate
- Anchor: A cubic bezier control vertex with absolute handle positions
- BBox: An axis-aligned bounding rectangle
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in document units
        y: Y coordinate in document units (grows downwards)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Anchor:
    """A cubic bezier control vertex.

    Handles are stored as absolute coordinates, not offsets from the point.
    An uncurved corner has both handles equal to its point.

    Attributes:
        point: The on-curve vertex
        handle_in: Control point of the segment entering this anchor
        handle_out: Control point of the segment leaving this anchor
    """

    point: Point
    handle_in: Point
    handle_out: Point

    @classmethod
    def corner(cls, point: Point) -> "Anchor":
        """Create an anchor with zero-length handles."""
        return cls(point=point, handle_in=point, handle_out=point)

    def map(self, fn: Callable[[Point], Point]) -> "Anchor":
        """Apply a point transform to the vertex and both handles."""
        return Anchor(
            point=fn(self.point),
            handle_in=fn(self.handle_in),
            handle_out=fn(self.handle_out),
        )

    def is_corner(self) -> bool:
        """Check whether both handles coincide with the point."""
        return self.handle_in == self.point and self.handle_out == self.point

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with point, handleIn and handleOut fields
        """
        return {
            "point": self.point.to_dict(),
            "handleIn": self.handle_in.to_dict(),
            "handleOut": self.handle_out.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Anchor":
        """Deserialize from dictionary.

        Missing handles default to the anchor's own point.

        Args:
            data: Dictionary with point and optional handle fields

        Returns:
            Anchor instance
        """
        point = Point.from_dict(data["point"])
        handle_in = data.get("handleIn")
        handle_out = data.get("handleOut")
        return cls(
            point=point,
            handle_in=Point.from_dict(handle_in) if handle_in is not None else point,
            handle_out=Point.from_dict(handle_out) if handle_out is not None else point,
        )


@dataclass(frozen=True, slots=True)
class BBox:
    """An axis-aligned bounding rectangle.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent
        height: Vertical extent
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge."""
        return self.y + self.height

    @property
    def center(self) -> Point:
        """Center point."""
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @classmethod
    def from_points(cls, points: list[Point], margin: float = 0.0) -> "BBox":
        """Build the tight box around points, grown by margin on every side.

        Returns a zero box at the origin for an empty list.
        """
        if not points:
            return cls(0.0, 0.0, 0.0, 0.0)

        xs = [p.x for p in points]
        ys = [p.y for p in points]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)
        return cls(
            x=min_x - margin,
            y=min_y - margin,
            width=(max_x - min_x) + margin * 2,
            height=(max_y - min_y) + margin * 2,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BBox":
        """Deserialize from dictionary."""
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )
