"""Stroke simplification and curve fitting.

This module turns point streams into bezier anchors:
- simplify_anchors / simplify_path: Douglas-Peucker reduction of an anchor
  sequence, keeping surviving anchors untouched
- fit_freehand: Simplify a raw freehand stroke and derive smooth handles
- smooth_handles: Cardinal-spline handles through a polyline
- natural_spline_anchors: C2-continuous natural cubic spline anchors
- anchors_to_path_d: SVG path data for an anchor sequence
"""

from dataclasses import replace

from shapely.geometry import LineString

from vectorkit.config import FittingConfig
from vectorkit.core.geometry import format_number
from vectorkit.domain import Anchor, Point, VectorPathShape

_DEFAULT_CONFIG = FittingConfig()


def _surviving_indices(points: list[Point], tolerance: float) -> list[int]:
    """Run Douglas-Peucker and map the kept coordinates back to indices.

    Simplification only ever drops vertices, so the kept coordinates are
    matched against the input in order.
    """
    last = len(points) - 1
    simplified = LineString([(p.x, p.y) for p in points]).simplify(
        tolerance, preserve_topology=False
    )
    coords = list(simplified.coords)
    if len(coords) < 2:
        return [0, last]

    indices: list[int] = []
    cursor = 0
    for x, y in coords[:-1]:
        while cursor < last and (points[cursor].x, points[cursor].y) != (x, y):
            cursor += 1
        indices.append(cursor)
        cursor += 1
    # the closing coordinate always belongs to the last input point
    indices.append(last)
    return sorted(set(indices))


def simplify_points(points: list[Point], tolerance: float) -> list[Point]:
    """Reduce a polyline with the Douglas-Peucker algorithm.

    A point survives when its distance to the chord of its current span is
    strictly greater than the tolerance. Endpoints always survive.

    Args:
        points: Polyline points
        tolerance: Maximum allowed deviation

    Returns:
        Surviving points in their original order
    """
    if tolerance <= 0 or len(points) < 3:
        return list(points)

    return [points[i] for i in _surviving_indices(points, tolerance)]


def simplify_anchors(anchors: list[Anchor], tolerance: float) -> list[Anchor]:
    """Drop anchors that lie within tolerance of the simplified outline.

    Only anchor points take part in the distance test; surviving anchors
    keep their handles, so simplifying twice with the same tolerance gives
    the same result as simplifying once.

    Args:
        anchors: Anchor sequence
        tolerance: Maximum allowed deviation; <= 0 disables simplification

    Returns:
        Surviving anchors in their original order
    """
    if tolerance <= 0 or len(anchors) < 3:
        return list(anchors)

    indices = _surviving_indices([a.point for a in anchors], tolerance)
    return [anchors[i] for i in indices]


def simplify_path(path: VectorPathShape, tolerance: float) -> VectorPathShape:
    """Simplify the anchors of a pen or line path.

    Returns:
        A new path, or the same object when no anchor was dropped
    """
    anchors = simplify_anchors(list(path.anchors), tolerance)
    if len(anchors) == len(path.anchors):
        return path
    return replace(path, anchors=tuple(anchors))


def smooth_handles(
    points: list[Point],
    closed: bool = False,
    config: FittingConfig | None = None,
) -> list[Anchor]:
    """Derive smooth handles through a polyline.

    Each point gets a tangent of ``(next - previous) / handle_divisor``; the
    outgoing handle sits one tangent ahead of the point and the incoming one
    a tangent behind. Open polylines clamp the missing neighbour of an
    endpoint to the endpoint itself; closed ones wrap around.

    Args:
        points: Polyline points
        closed: Whether the polyline is a closed loop
        config: Fitting settings

    Returns:
        One anchor per point
    """
    config = config or _DEFAULT_CONFIG
    n = len(points)
    if n < 2:
        return [Anchor.corner(p) for p in points]

    anchors = []
    for i, point in enumerate(points):
        if closed:
            prev_point = points[i - 1]
            next_point = points[(i + 1) % n]
        else:
            prev_point = points[max(i - 1, 0)]
            next_point = points[min(i + 1, n - 1)]

        tx = (next_point.x - prev_point.x) / config.handle_divisor
        ty = (next_point.y - prev_point.y) / config.handle_divisor
        anchors.append(
            Anchor(
                point=point,
                handle_in=Point(point.x - tx, point.y - ty),
                handle_out=Point(point.x + tx, point.y + ty),
            )
        )
    return anchors


def _solve_tridiagonal(lower: list[float], diag: list[float], upper: list[float], rhs: list[float]) -> list[float]:
    # Thomas algorithm
    n = len(diag)
    c = [0.0] * n
    d = [0.0] * n
    c[0] = upper[0] / diag[0]
    d[0] = rhs[0] / diag[0]
    for i in range(1, n):
        m = diag[i] - lower[i] * c[i - 1]
        c[i] = upper[i] / m if i < n - 1 else 0.0
        d[i] = (rhs[i] - lower[i] * d[i - 1]) / m

    x = [0.0] * n
    x[-1] = d[-1]
    for i in range(n - 2, -1, -1):
        x[i] = d[i] - c[i] * x[i + 1]
    return x


def natural_spline_anchors(points: list[Point]) -> list[Anchor]:
    """Fit a natural cubic spline through points.

    The curve passes through every point with continuous first and second
    derivatives, and zero curvature at both ends.

    Args:
        points: Points to interpolate

    Returns:
        One anchor per point; corners for fewer than 2 points
    """
    n = len(points)
    if n < 2:
        return [Anchor.corner(p) for p in points]

    lower = [1.0] * n
    diag = [4.0] * n
    upper = [1.0] * n
    diag[0] = diag[-1] = 2.0
    lower[0] = upper[-1] = 0.0

    def rhs(coord: str) -> list[float]:
        values = [getattr(p, coord) for p in points]
        return [3 * (values[min(i + 1, n - 1)] - values[max(i - 1, 0)]) for i in range(n)]

    dx = _solve_tridiagonal(lower, diag, upper, rhs("x"))
    dy = _solve_tridiagonal(lower, diag, upper, rhs("y"))

    return [
        Anchor(
            point=p,
            handle_in=Point(p.x - dx[i] / 3, p.y - dy[i] / 3),
            handle_out=Point(p.x + dx[i] / 3, p.y + dy[i] / 3),
        )
        for i, p in enumerate(points)
    ]


def fit_freehand(
    points: list[Point], stroke_width: float, config: FittingConfig | None = None
) -> list[Anchor]:
    """Fit a raw freehand stroke with a small set of smooth anchors.

    The stroke is simplified with a tolerance proportional to its width
    (``stroke_width * freehand_tolerance_factor``) and the survivors get
    smooth handles.

    Args:
        points: Pointer samples of the stroke
        stroke_width: Stroke width in document units
        config: Fitting settings

    Returns:
        Fitted anchors; plain corners when there are fewer than 2 points
    """
    config = config or _DEFAULT_CONFIG
    if len(points) < 2:
        return [Anchor.corner(p) for p in points]

    tolerance = stroke_width * config.freehand_tolerance_factor
    return smooth_handles(simplify_points(points, tolerance), closed=False, config=config)


def anchors_to_path_d(anchors: list[Anchor], is_closed: bool = False) -> str:
    """Build SVG path data for an anchor sequence.

    Every segment is emitted as a cubic; a closed path adds the closing
    segment and ``Z``.

    Args:
        anchors: Anchor sequence
        is_closed: Whether to close the path

    Returns:
        Path data, or an empty string when there are no anchors
    """
    if not anchors:
        return ""

    first = anchors[0].point
    parts = [f"M {format_number(first.x)} {format_number(first.y)}"]

    def segment(start: Anchor, end: Anchor) -> str:
        c1, c2, p = start.handle_out, end.handle_in, end.point
        return (
            f"C {format_number(c1.x)},{format_number(c1.y)} "
            f"{format_number(c2.x)},{format_number(c2.y)} "
            f"{format_number(p.x)},{format_number(p.y)}"
        )

    for start, end in zip(anchors, anchors[1:]):
        parts.append(segment(start, end))

    if is_closed and len(anchors) > 1:
        parts.append(segment(anchors[-1], anchors[0]))
        parts.append("Z")

    return " ".join(parts)
