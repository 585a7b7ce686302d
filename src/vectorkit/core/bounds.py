"""Axis-aligned bounding boxes of shapes.

Bounds include a visual margin by default: half the stroke width for
smooth shapes, and for hand-drawn ("rough") shapes the extra wobble the
rough renderer adds through roughness, bowing and hachure fill weight.
"""

import math
from typing import assert_never

from vectorkit.config import GeometryConfig
from vectorkit.core.arc import sample_arc
from vectorkit.core.convert import box_point_transform
from vectorkit.core.geometry import polygon_vertices, sample_path
from vectorkit.domain import (
    ArcShape,
    BBox,
    BoxShapeBase,
    BrushShape,
    EllipseShape,
    GroupShape,
    Point,
    PolygonShape,
    Shape,
    VectorPathShape,
)

_DEFAULT_CONFIG = GeometryConfig()


def stroke_margin(shape: Shape) -> float:
    """Distance the rendered shape can reach beyond its geometry.

    Examples:
        >>> from vectorkit.domain import RectangleShape
        >>> rect = RectangleShape(id="r", x=0, y=0, width=1, height=1,
        ...                       stroke_width=4, is_rough=False)
        >>> stroke_margin(rect)
        2.0
    """
    half_stroke = (shape.stroke_width or 0.0) / 2
    if not shape.is_rough:
        return half_stroke

    if shape.fill_weight is not None and shape.fill_weight >= 0:
        fill_weight = shape.fill_weight
    else:
        fill_weight = shape.stroke_width / 2
    half_fill_weight = fill_weight / 2 if shape.fill and shape.fill != "transparent" else 0.0

    stroke_outset = half_stroke + shape.roughness + shape.bowing
    fill_outset = half_fill_weight + shape.roughness
    return max(stroke_outset, fill_outset)


def _ellipse_bounds(shape: EllipseShape) -> BBox:
    if not shape.rotation:
        return BBox(shape.x, shape.y, shape.width, shape.height)

    rx = shape.width / 2
    ry = shape.height / 2
    cos = math.cos(shape.rotation)
    sin = math.sin(shape.rotation)
    width = 2 * math.hypot(rx * cos, ry * sin)
    height = 2 * math.hypot(rx * sin, ry * cos)
    center = shape.center
    return BBox(center.x - width / 2, center.y - height / 2, width, height)


def _grow(box: BBox, margin: float) -> BBox:
    return BBox(box.x - margin, box.y - margin, box.width + margin * 2, box.height + margin * 2)


def bounding_box(
    shape: Shape, include_stroke: bool = True, config: GeometryConfig | None = None
) -> BBox:
    """Compute the axis-aligned bounds of a shape in document space.

    Args:
        shape: Shape to measure
        include_stroke: Grow the box by the stroke and roughness margin
        config: Geometry settings (bezier sampling density)

    Returns:
        Bounding box; a zero box at the origin for shapes without points
    """
    config = config or _DEFAULT_CONFIG
    margin = stroke_margin(shape) if include_stroke else 0.0

    if isinstance(shape, GroupShape):
        return union_bounding_box(list(shape.children), include_stroke, config) or BBox(0, 0, 0, 0)
    if isinstance(shape, EllipseShape):
        return _grow(_ellipse_bounds(shape), margin)
    if isinstance(shape, PolygonShape):
        transform = box_point_transform(shape)
        vertices = polygon_vertices(shape.x, shape.y, shape.width, shape.height, shape.sides)
        return BBox.from_points([transform(p) for p in vertices], margin)
    if isinstance(shape, BoxShapeBase):
        transform = box_point_transform(shape)
        x, y, w, h = shape.x, shape.y, shape.width, shape.height
        corners = [Point(x, y), Point(x + w, y), Point(x + w, y + h), Point(x, y + h)]
        return BBox.from_points([transform(p) for p in corners], margin)
    if isinstance(shape, BrushShape):
        if not shape.points:
            return BBox(0, 0, 0, 0)
        return BBox.from_points(list(shape.points), margin)
    if isinstance(shape, ArcShape):
        start, end, via = shape.points
        return BBox.from_points(sample_arc(start, end, via, config=config), margin)
    if isinstance(shape, VectorPathShape):
        if not shape.anchors:
            return BBox(0, 0, 0, 0)
        points = sample_path(list(shape.anchors), config.bbox_samples_per_segment, shape.is_closed)
        return BBox.from_points(points, margin)
    assert_never(shape)


def union_bounding_box(
    shapes: list[Shape], include_stroke: bool = False, config: GeometryConfig | None = None
) -> BBox | None:
    """Compute the box enclosing every shape.

    Returns:
        Union box, or None for an empty list
    """
    if not shapes:
        return None

    boxes = [bounding_box(s, include_stroke, config) for s in shapes]
    min_x = min(b.x for b in boxes)
    min_y = min(b.y for b in boxes)
    max_x = max(b.right for b in boxes)
    max_y = max(b.bottom for b in boxes)
    return BBox(min_x, min_y, max_x - min_x, max_y - min_y)
