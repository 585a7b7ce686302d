"""Conversion of any shape into an anchored bezier path.

Every converter returns a new ``pen`` path with a fresh identity and the
source's style fields. Box geometry (mirror scale and rotation) is baked
into the anchors, so the result renders where the source did.

Key functions:
- to_vector_path: Dispatch over the shape union
- rectangle_to_path, ellipse_to_path, polygon_to_path: Box outlines
- arc_to_path: Bezier approximation of a three-point arc
- brush_to_path: Fitted freehand stroke
- line_to_path: Smoothed polyline
"""

from collections.abc import Callable
from dataclasses import replace
from typing import assert_never

from vectorkit.config import FittingConfig, GeometryConfig
from vectorkit.core.arc import arc_to_anchors
from vectorkit.core.fitting import fit_freehand, natural_spline_anchors, smooth_handles
from vectorkit.core.geometry import polygon_vertices, rotate_point
from vectorkit.domain import (
    Anchor,
    ArcShape,
    BoxShapeBase,
    BrushShape,
    EllipseShape,
    FrameShape,
    GroupShape,
    ImageShape,
    Point,
    PolygonShape,
    RectangleShape,
    Shape,
    TextShape,
    VectorPathShape,
    new_shape_id,
    style_fields,
)

_DEFAULT_GEOMETRY = GeometryConfig()


def box_point_transform(shape: BoxShapeBase) -> Callable[[Point], Point]:
    """Build the local-to-document transform of a box shape.

    Mirror factors apply about the box center first, then rotation.
    """
    center = shape.center
    sx, sy, rotation = shape.scale_x, shape.scale_y, shape.rotation

    def transform(p: Point) -> Point:
        scaled = Point(center.x + (p.x - center.x) * sx, center.y + (p.y - center.y) * sy)
        if rotation:
            return rotate_point(scaled, center, rotation)
        return scaled

    return transform


def _derived_path(source: Shape, anchors: list[Anchor], is_closed: bool) -> VectorPathShape:
    return VectorPathShape(
        id=new_shape_id("v"),
        tool="pen",
        anchors=tuple(anchors),
        is_closed=is_closed,
        **style_fields(source),
    )


def rectangle_to_path(shape: BoxShapeBase) -> VectorPathShape:
    """Convert a box to its four corners, clockwise from the top-left.

    Used for rectangles and frames, and by proxy for images and text.
    """
    x, y, w, h = shape.x, shape.y, shape.width, shape.height
    corners = [Point(x, y), Point(x + w, y), Point(x + w, y + h), Point(x, y + h)]
    transform = box_point_transform(shape)
    return _derived_path(shape, [Anchor.corner(transform(p)) for p in corners], True)


def ellipse_to_path(shape: EllipseShape, config: GeometryConfig | None = None) -> VectorPathShape:
    """Convert an ellipse to four cubic arcs.

    Anchors sit at the top, right, bottom and left of the box with handles
    ``radius * kappa`` along the tangent.
    """
    config = config or _DEFAULT_GEOMETRY
    rx = shape.width / 2
    ry = shape.height / 2
    cx = shape.x + rx
    cy = shape.y + ry
    ox = rx * config.ellipse_kappa
    oy = ry * config.ellipse_kappa

    anchors = [
        Anchor(Point(cx, cy - ry), Point(cx - ox, cy - ry), Point(cx + ox, cy - ry)),
        Anchor(Point(cx + rx, cy), Point(cx + rx, cy - oy), Point(cx + rx, cy + oy)),
        Anchor(Point(cx, cy + ry), Point(cx + ox, cy + ry), Point(cx - ox, cy + ry)),
        Anchor(Point(cx - rx, cy), Point(cx - rx, cy + oy), Point(cx - rx, cy - oy)),
    ]
    transform = box_point_transform(shape)
    return _derived_path(shape, [a.map(transform) for a in anchors], True)


def polygon_to_path(shape: PolygonShape) -> VectorPathShape:
    """Convert a regular polygon to its vertices as corner anchors."""
    vertices = polygon_vertices(shape.x, shape.y, shape.width, shape.height, shape.sides)
    transform = box_point_transform(shape)
    return _derived_path(shape, [Anchor.corner(transform(p)) for p in vertices], True)


def arc_to_path(shape: ArcShape, config: GeometryConfig | None = None) -> VectorPathShape:
    """Convert a three-point arc to an open bezier path.

    Degenerate arcs become a two-anchor straight path.
    """
    start, end, via = shape.points
    return _derived_path(shape, arc_to_anchors(start, end, via, config), False)


def brush_to_path(shape: BrushShape, config: FittingConfig | None = None) -> VectorPathShape:
    """Convert a freehand stroke to a fitted open path."""
    anchors = fit_freehand(list(shape.points), shape.stroke_width, config)
    return _derived_path(shape, anchors, False)


def line_to_path(shape: VectorPathShape, config: FittingConfig | None = None) -> VectorPathShape:
    """Re-smooth a line path through its anchor points.

    Open lines get a natural cubic spline; closed ones get wrapped
    cardinal-spline handles. Lines with fewer than two anchors only change
    their tool.
    """
    if len(shape.anchors) < 2:
        return replace(shape, id=new_shape_id("v"), tool="pen")

    points = [a.point for a in shape.anchors]
    if shape.is_closed:
        anchors = smooth_handles(points, closed=True, config=config)
    else:
        anchors = natural_spline_anchors(points)
    return _derived_path(shape, anchors, shape.is_closed)


def to_vector_path(
    shape: Shape,
    geometry: GeometryConfig | None = None,
    fitting: FittingConfig | None = None,
) -> VectorPathShape | None:
    """Convert any shape into a pen path.

    Args:
        shape: Shape to convert
        geometry: Geometry tolerances
        fitting: Freehand fitting settings

    Returns:
        The converted path; pen paths are returned unchanged; None for groups
    """
    if isinstance(shape, (RectangleShape, FrameShape, ImageShape, TextShape)):
        return rectangle_to_path(shape)
    if isinstance(shape, EllipseShape):
        return ellipse_to_path(shape, geometry)
    if isinstance(shape, PolygonShape):
        return polygon_to_path(shape)
    if isinstance(shape, ArcShape):
        return arc_to_path(shape, geometry)
    if isinstance(shape, BrushShape):
        return brush_to_path(shape, fitting)
    if isinstance(shape, VectorPathShape):
        if shape.tool == "line":
            return line_to_path(shape, fitting)
        return shape
    if isinstance(shape, GroupShape):
        return None
    assert_never(shape)
