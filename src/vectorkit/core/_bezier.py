"""Internal cubic Bezier evaluation and flattening algorithms.

This is an internal module containing helper functions for path sampling,
bounds and clipping. Not intended for public use.
"""

import math

from vectorkit.domain import Point

# Recursion guard for pathological control polygons
_MAX_DEPTH = 16


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bezier curve at parameter t."""
    u = 1.0 - t
    uu = u * u
    tt = t * t
    a = uu * u
    b = 3 * uu * t
    c = 3 * u * tt
    d = tt * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def sample_cubic(p0: Point, p1: Point, p2: Point, p3: Point, steps: int) -> list[Point]:
    """Sample a cubic Bezier curve at evenly spaced parameters.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        steps: Number of parameter steps (at least 1)

    Returns:
        steps + 1 points including both endpoints
    """
    num_steps = max(1, round(steps))
    return [cubic_point(p0, p1, p2, p3, i / num_steps) for i in range(num_steps + 1)]


def _distance_to_chord(p: Point, a: Point, b: Point) -> float:
    dx = b.x - a.x
    dy = b.y - a.y
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return math.hypot(p.x - a.x, p.y - a.y)
    return abs((p.x - a.x) * dy - (p.y - a.y) * dx) / length


def flatten_cubic(points: list[Point], tolerance: float, _depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision. A piece is flat once both
    control points lie within tolerance of its chord.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, starting at p0 and ending at p3
    """
    p0, p1, p2, p3 = points

    flatness = max(_distance_to_chord(p1, p0, p3), _distance_to_chord(p2, p0, p3))
    if flatness <= tolerance or _depth >= _MAX_DEPTH:
        return [p0, p3]

    # First level
    q1 = Point((p0.x + p1.x) / 2, (p0.y + p1.y) / 2)
    q2 = Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)
    q3 = Point((p2.x + p3.x) / 2, (p2.y + p3.y) / 2)

    # Second level
    r1 = Point((q1.x + q2.x) / 2, (q1.y + q2.y) / 2)
    r2 = Point((q2.x + q3.x) / 2, (q2.y + q3.y) / 2)

    # Third level (midpoint)
    mid = Point((r1.x + r2.x) / 2, (r1.y + r2.y) / 2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, _depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, _depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right
