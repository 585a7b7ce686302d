"""Three-point arc geometry.

An arc shape stores three points: start, end and a "via" point the arc
passes through. This module fits the circle through them and derives the
representations the rest of the system needs:

- circumcircle: center and radius, or None for degenerate input
- arc_flags / arc_path_d: SVG elliptical-arc parameters and path data
- sample_arc: a polyline along the arc for rough rendering
- arc_to_anchors: a cubic bezier approximation for path conversion

Collinear points, or points so close to collinear that the radius explodes,
are not errors: every function falls back to the straight segment from
start to end.
"""

import math
from dataclasses import dataclass

from vectorkit.config import GeometryConfig
from vectorkit.core.geometry import format_number
from vectorkit.domain import Anchor, Point

_DEFAULT_CONFIG = GeometryConfig()


@dataclass(frozen=True, slots=True)
class Circle:
    """A circle fitted through three points."""

    center: Point
    radius: float


@dataclass(frozen=True, slots=True)
class ArcFlags:
    """SVG arc flags selecting one of the four candidate arcs.

    Attributes:
        large_arc: 1 when the arc spans more than pi radians
        sweep: 1 for the positive-angle direction, 0 otherwise
    """

    large_arc: int
    sweep: int


def circumcircle(
    p1: Point, p2: Point, p3: Point, config: GeometryConfig | None = None
) -> Circle | None:
    """Find the circle passing through three points.

    Args:
        p1: First point
        p2: Second point
        p3: Third point
        config: Geometry tolerances (defaults apply when None)

    Returns:
        The circle, or None when the points are collinear within tolerance or
        the radius exceeds the configured ceiling

    Examples:
        >>> circumcircle(Point(0, 0), Point(1, 0), Point(2, 0)) is None
        True
    """
    config = config or _DEFAULT_CONFIG
    d = 2 * (p1.x * (p2.y - p3.y) + p2.x * (p3.y - p1.y) + p3.x * (p1.y - p2.y))

    if abs(d) < config.collinear_epsilon:
        return None

    p1_sq = p1.x * p1.x + p1.y * p1.y
    p2_sq = p2.x * p2.x + p2.y * p2.y
    p3_sq = p3.x * p3.x + p3.y * p3.y

    ux = (p1_sq * (p2.y - p3.y) + p2_sq * (p3.y - p1.y) + p3_sq * (p1.y - p2.y)) / d
    uy = (p1_sq * (p3.x - p2.x) + p2_sq * (p1.x - p3.x) + p3_sq * (p2.x - p1.x)) / d

    radius = math.hypot(p1.x - ux, p1.y - uy)
    if radius > config.max_arc_radius:
        return None

    return Circle(center=Point(ux, uy), radius=radius)


def _cross(p1: Point, p2: Point, p3: Point) -> float:
    return (p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)


def _wrap(angle: float) -> float:
    if angle > math.pi:
        angle -= 2 * math.pi
    if angle < -math.pi:
        angle += 2 * math.pi
    return angle


def arc_flags(
    p1: Point, p2: Point, p3: Point, config: GeometryConfig | None = None
) -> ArcFlags | None:
    """Compute the SVG large-arc and sweep flags for an arc.

    The sweep flag follows the orientation of start -> via -> end: a positive
    cross product ``(p2 - p1) x (p3 - p1)`` gives sweep 0. The large-arc flag
    sums the signed angular steps start -> via and via -> end about the
    center, each normalized to the sweep direction, and is set when the
    total exceeds pi.

    Args:
        p1: Arc start
        p2: Arc end
        p3: Via point
        config: Geometry tolerances

    Returns:
        ArcFlags, or None when the arc is degenerate
    """
    circle = circumcircle(p1, p2, p3, config)
    if circle is None:
        return None

    sweep = 0 if _cross(p1, p2, p3) > 0 else 1
    c = circle.center

    def angle_between(a: Point, b: Point) -> float:
        return math.atan2(b.y - c.y, b.x - c.x) - math.atan2(a.y - c.y, a.x - c.x)

    angle13 = angle_between(p1, p3)
    angle32 = angle_between(p3, p2)

    if sweep == 1:
        if angle13 < 0:
            angle13 += 2 * math.pi
        if angle32 < 0:
            angle32 += 2 * math.pi
    else:
        if angle13 > 0:
            angle13 -= 2 * math.pi
        if angle32 > 0:
            angle32 -= 2 * math.pi

    large_arc = 1 if abs(angle13 + angle32) > math.pi else 0
    return ArcFlags(large_arc=large_arc, sweep=sweep)


def arc_path_d(p1: Point, p2: Point, p3: Point, config: GeometryConfig | None = None) -> str:
    """Build SVG path data for the arc from p1 to p2 through p3.

    Args:
        p1: Arc start
        p2: Arc end
        p3: Via point
        config: Geometry tolerances

    Returns:
        ``M ... A ...`` path data, or ``M ... L ...`` for a degenerate arc
    """
    circle = circumcircle(p1, p2, p3, config)
    flags = arc_flags(p1, p2, p3, config)
    x1, y1 = format_number(p1.x), format_number(p1.y)
    x2, y2 = format_number(p2.x), format_number(p2.y)
    if circle is None or flags is None:
        return f"M {x1} {y1} L {x2} {y2}"

    r = format_number(circle.radius)
    return f"M {x1} {y1} A {r} {r} 0 {flags.large_arc} {flags.sweep} {x2} {y2}"


def arc_sweep_angle(
    p1: Point, p2: Point, p3: Point, config: GeometryConfig | None = None
) -> tuple[Circle, float, float] | None:
    """Resolve the angular span of the arc that actually passes through p3.

    The end and via angles are taken relative to the start angle and wrapped
    into [-pi, pi]. If the via angle lies on the short arc to the end, the
    short arc is the answer; otherwise the complementary long arc is.

    Returns:
        Tuple of (circle, start_angle, signed_total_angle), or None when the
        arc is degenerate
    """
    circle = circumcircle(p1, p2, p3, config)
    if circle is None:
        return None

    c = circle.center
    start_angle = math.atan2(p1.y - c.y, p1.x - c.x)
    mid_angle = math.atan2(p3.y - c.y, p3.x - c.x)
    end_angle = math.atan2(p2.y - c.y, p2.x - c.x)

    normalized_mid = _wrap(mid_angle - start_angle)
    normalized_end = _wrap(end_angle - start_angle)

    mid_on_short_arc = min(0.0, normalized_end) <= normalized_mid <= max(0.0, normalized_end)
    if not mid_on_short_arc:
        if normalized_end > 0:
            normalized_end -= 2 * math.pi
        else:
            normalized_end += 2 * math.pi

    return circle, start_angle, normalized_end


def sample_arc(
    p1: Point,
    p2: Point,
    p3: Point,
    steps: int | None = None,
    config: GeometryConfig | None = None,
) -> list[Point]:
    """Sample points along the arc from p1 to p2 through p3.

    Args:
        p1: Arc start
        p2: Arc end
        p3: Via point
        steps: Number of steps (defaults to ``config.arc_sample_steps``);
            clamped to at least 1
        config: Geometry tolerances

    Returns:
        steps + 1 points, or [p1, p2] for a degenerate arc
    """
    config = config or _DEFAULT_CONFIG
    steps = max(1, steps if steps is not None else config.arc_sample_steps)

    span = arc_sweep_angle(p1, p2, p3, config)
    if span is None:
        return [p1, p2]

    circle, start_angle, total_angle = span
    c, r = circle.center, circle.radius
    points = []
    for i in range(steps + 1):
        angle = start_angle + (i / steps) * total_angle
        points.append(Point(c.x + r * math.cos(angle), c.y + r * math.sin(angle)))
    return points


def arc_to_anchors(
    p1: Point, p2: Point, p3: Point, config: GeometryConfig | None = None
) -> list[Anchor]:
    """Approximate the arc with cubic bezier anchors.

    The arc is split into equal pieces of at most a quarter turn; each piece
    gets tangent handles of length ``4/3 * tan(delta / 4) * r``.

    Args:
        p1: Arc start
        p2: Arc end
        p3: Via point
        config: Geometry tolerances

    Returns:
        Anchors of an open path; two corner anchors for a degenerate arc
    """
    span = arc_sweep_angle(p1, p2, p3, config)
    if span is None:
        return [Anchor.corner(p1), Anchor.corner(p2)]

    circle, start_angle, total_angle = span
    c, r = circle.center, circle.radius
    pieces = max(1, math.ceil(abs(total_angle) / (math.pi / 2) - 1e-9))
    delta = total_angle / pieces
    k = 4.0 / 3.0 * math.tan(delta / 4) * r

    anchors = []
    for i in range(pieces + 1):
        angle = start_angle + i * delta
        if i == 0:
            point = p1
        elif i == pieces:
            point = p2
        else:
            point = Point(c.x + r * math.cos(angle), c.y + r * math.sin(angle))
        tx = -math.sin(angle) * k
        ty = math.cos(angle) * k
        handle_in = point if i == 0 else Point(point.x - tx, point.y - ty)
        handle_out = point if i == pieces else Point(point.x + tx, point.y + ty)
        anchors.append(Anchor(point=point, handle_in=handle_in, handle_out=handle_out))
    return anchors
