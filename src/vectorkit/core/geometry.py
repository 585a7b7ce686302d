"""Geometric primitives shared by the kernel modules.

This module provides core mathematical utilities for:
- Point rotation and distance
- Signed area calculation (shoelace formula)
- Regular polygon vertex generation
- Sampling and flattening of anchored bezier paths

All functions are pure and stateless.
"""

import math

from vectorkit.core._bezier import flatten_cubic as _flatten_cubic
from vectorkit.core._bezier import sample_cubic
from vectorkit.domain import Anchor, Point


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def rotate_point(point: Point, center: Point, angle: float) -> Point:
    """Rotate a point about a center.

    Positive angles turn clockwise on screen (Y grows downwards).

    Args:
        point: Point to rotate
        center: Rotation center
        angle: Rotation angle in radians

    Returns:
        Rotated point

    Examples:
        >>> p = rotate_point(Point(1.0, 0.0), Point(0.0, 0.0), math.pi / 2)
        >>> round(p.x, 9), round(p.y, 9)
        (0.0, 1.0)
    """
    cos = math.cos(angle)
    sin = math.sin(angle)
    dx = point.x - center.x
    dy = point.y - center.y
    return Point(
        cos * dx - sin * dy + center.x,
        sin * dx + cos * dy + center.y,
    )


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    In a Y-down frame a positive area means clockwise on screen.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        >>> signed_area(square)
        1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def polygon_vertices(x: float, y: float, width: float, height: float, sides: int) -> list[Point]:
    """Generate the vertices of a regular polygon inscribed in a box.

    The first vertex sits at the top-middle of the box and the rest follow
    clockwise on screen.

    Args:
        x: Box left edge
        y: Box top edge
        width: Box width
        height: Box height
        sides: Number of vertices

    Returns:
        List of polygon vertices
    """
    cx = x + width / 2
    cy = y + height / 2
    rx = width / 2
    ry = height / 2

    vertices = []
    for i in range(sides):
        angle = (i / sides) * 2 * math.pi - math.pi / 2
        vertices.append(Point(cx + rx * math.cos(angle), cy + ry * math.sin(angle)))
    return vertices


def _segments(anchors: list[Anchor], is_closed: bool) -> list[tuple[Point, Point, Point, Point]]:
    segments = [
        (start.point, start.handle_out, end.handle_in, end.point)
        for start, end in zip(anchors, anchors[1:])
    ]
    if is_closed and len(anchors) > 1:
        last, first = anchors[-1], anchors[0]
        segments.append((last.point, last.handle_out, first.handle_in, first.point))
    return segments


def sample_path(anchors: list[Anchor], steps_per_segment: int, is_closed: bool = False) -> list[Point]:
    """Sample points along an anchored bezier path.

    Args:
        anchors: Path anchors
        steps_per_segment: Parameter steps per cubic segment
        is_closed: Whether to include the closing segment

    Returns:
        Sampled points; the anchor points themselves for fewer than 2 anchors
    """
    if len(anchors) < 2:
        return [a.point for a in anchors]

    points = [anchors[0].point]
    for segment in _segments(anchors, is_closed):
        points.extend(sample_cubic(*segment, steps_per_segment)[1:])
    return points


def flatten_path(anchors: list[Anchor], tolerance: float, is_closed: bool = True) -> list[Point]:
    """Flatten an anchored bezier path into a polyline.

    Straight segments (handles on their endpoints) contribute only their
    endpoints; curved segments are subdivided until within tolerance.

    Args:
        anchors: Path anchors
        tolerance: Maximum deviation from the true curve
        is_closed: Whether to include the closing segment

    Returns:
        Polyline points without a repeated closing point
    """
    if len(anchors) < 2:
        return [a.point for a in anchors]

    points = [anchors[0].point]
    for p0, p1, p2, p3 in _segments(anchors, is_closed):
        if p1 == p0 and p2 == p3:
            points.append(p3)
        else:
            points.extend(_flatten_cubic([p0, p1, p2, p3], tolerance)[1:])

    if is_closed and len(points) > 1 and points[-1] == points[0]:
        points.pop()
    return points


def format_number(value: float) -> str:
    """Format a coordinate for SVG path data.

    Examples:
        >>> format_number(2.0), format_number(0.5)
        ('2', '0.5')
    """
    return format(value, ".10g")
