"""Affine transforms over the shape union.

Every function here is pure: it returns a new shape (or tree) built with
``dataclasses.replace`` and never touches its input. Groups are rebuilt
recursively from the transformed children.

Key functions:
- move_shape: Translate by (dx, dy)
- rotate_shape: Rotate about a center
- scale_shape: Scale about a pivot, mirroring through negative factors
- scale_shape_uniform: Uniform scale that also scales stroke styling
- rotate_resize_handle: Map a compass handle through a rotation
"""

import math
from collections.abc import Callable
from dataclasses import replace
from typing import assert_never

from vectorkit.config import ResizeHandle
from vectorkit.core.geometry import rotate_point
from vectorkit.domain import (
    ArcShape,
    BoxShapeBase,
    BrushShape,
    GroupShape,
    Point,
    Shape,
    VectorPathShape,
)

_HANDLE_VECTORS: dict[ResizeHandle, tuple[int, int]] = {
    ResizeHandle.TOP_LEFT: (-1, -1),
    ResizeHandle.TOP: (0, -1),
    ResizeHandle.TOP_RIGHT: (1, -1),
    ResizeHandle.RIGHT: (1, 0),
    ResizeHandle.BOTTOM_RIGHT: (1, 1),
    ResizeHandle.BOTTOM: (0, 1),
    ResizeHandle.BOTTOM_LEFT: (-1, 1),
    ResizeHandle.LEFT: (-1, 0),
}

_VECTOR_HANDLES = {vector: handle for handle, vector in _HANDLE_VECTORS.items()}


def map_points(shape: Shape, fn: Callable[[Point], Point]) -> Shape:
    """Apply a point transform to every point of a point-based shape.

    Anchored paths map the vertex and both handles; brush and arc shapes map
    each stored point; groups recurse. Box shapes are returned unchanged
    because their geometry is not a list of points.

    Args:
        shape: Shape to transform
        fn: Point transform

    Returns:
        Transformed shape
    """
    if isinstance(shape, VectorPathShape):
        return replace(shape, anchors=tuple(a.map(fn) for a in shape.anchors))
    if isinstance(shape, BrushShape):
        return replace(shape, points=tuple(fn(p) for p in shape.points))
    if isinstance(shape, ArcShape):
        start, end, via = shape.points
        return replace(shape, points=(fn(start), fn(end), fn(via)))
    if isinstance(shape, GroupShape):
        return replace(shape, children=tuple(map_points(c, fn) for c in shape.children))
    return shape


def move_shape(shape: Shape, dx: float, dy: float) -> Shape:
    """Translate a shape.

    Args:
        shape: Shape to move
        dx: Horizontal offset
        dy: Vertical offset

    Returns:
        Moved shape
    """
    if isinstance(shape, BoxShapeBase):
        return replace(shape, x=shape.x + dx, y=shape.y + dy)
    if isinstance(shape, (VectorPathShape, BrushShape, ArcShape)):
        return map_points(shape, lambda p: Point(p.x + dx, p.y + dy))
    if isinstance(shape, GroupShape):
        return replace(shape, children=tuple(move_shape(c, dx, dy) for c in shape.children))
    assert_never(shape)


def rotate_shape(shape: Shape, center: Point, angle: float) -> Shape:
    """Rotate a shape about a center.

    Box shapes move their box center around ``center`` and accumulate the
    angle into ``rotation``; the box itself stays axis-aligned in its local
    frame.

    Args:
        shape: Shape to rotate
        center: Rotation center
        angle: Angle in radians (clockwise on screen)

    Returns:
        Rotated shape
    """
    if isinstance(shape, BoxShapeBase):
        new_center = rotate_point(shape.center, center, angle)
        return replace(
            shape,
            x=new_center.x - shape.width / 2,
            y=new_center.y - shape.height / 2,
            rotation=shape.rotation + angle,
        )
    if isinstance(shape, (VectorPathShape, BrushShape, ArcShape)):
        return map_points(shape, lambda p: rotate_point(p, center, angle))
    if isinstance(shape, GroupShape):
        return replace(
            shape, children=tuple(rotate_shape(c, center, angle) for c in shape.children)
        )
    assert_never(shape)


def _sign(value: float) -> float:
    return -1.0 if value < 0 else 1.0


def scale_shape(shape: Shape, pivot: Point, scale_x: float, scale_y: float) -> Shape:
    """Scale a shape about a pivot.

    Box shapes scale their top-left corner about the pivot. A negative factor
    would produce a negative size, so the origin shifts by the scaled extent,
    the size keeps its magnitude and the mirror is recorded by flipping the
    sign of ``scale_x``/``scale_y``.

    Args:
        shape: Shape to scale
        pivot: Fixed point of the scale
        scale_x: Horizontal factor
        scale_y: Vertical factor

    Returns:
        Scaled shape
    """
    if isinstance(shape, BoxShapeBase):
        scaled_x = pivot.x + (shape.x - pivot.x) * scale_x
        scaled_y = pivot.y + (shape.y - pivot.y) * scale_y
        scaled_width = shape.width * scale_x
        scaled_height = shape.height * scale_y
        return replace(
            shape,
            x=scaled_x + scaled_width if scaled_width < 0 else scaled_x,
            y=scaled_y + scaled_height if scaled_height < 0 else scaled_y,
            width=abs(scaled_width),
            height=abs(scaled_height),
            scale_x=shape.scale_x * _sign(scale_x),
            scale_y=shape.scale_y * _sign(scale_y),
        )
    if isinstance(shape, (VectorPathShape, BrushShape, ArcShape)):
        return map_points(
            shape,
            lambda p: Point(
                pivot.x + (p.x - pivot.x) * scale_x,
                pivot.y + (p.y - pivot.y) * scale_y,
            ),
        )
    if isinstance(shape, GroupShape):
        return replace(
            shape,
            children=tuple(scale_shape(c, pivot, scale_x, scale_y) for c in shape.children),
        )
    assert_never(shape)


def _scale_styles(original: Shape, scaled: Shape, magnitude: float) -> Shape:
    updates: dict = {"stroke_width": original.stroke_width * magnitude}

    if original.stroke_line_dash is not None:
        dash, gap = original.stroke_line_dash
        updates["stroke_line_dash"] = (dash * magnitude, gap * magnitude)
    if original.endpoint_size is not None:
        updates["endpoint_size"] = original.endpoint_size * magnitude
    if original.fill_weight is not None and original.fill_weight >= 0:
        updates["fill_weight"] = original.fill_weight * magnitude
    if original.hachure_gap > 0:
        updates["hachure_gap"] = original.hachure_gap * magnitude
    for name in ("blur", "shadow_offset_x", "shadow_offset_y", "shadow_blur"):
        value = getattr(original, name)
        if value is not None:
            updates[name] = value * magnitude

    if isinstance(original, GroupShape) and isinstance(scaled, GroupShape):
        updates["children"] = tuple(
            _scale_styles(source, child, magnitude)
            for source, child in zip(original.children, scaled.children)
        )

    return replace(scaled, **updates)


def scale_shape_uniform(shape: Shape, pivot: Point, factor: float) -> Shape:
    """Scale a shape uniformly together with its stroke styling.

    Stroke width, dash pattern, endpoint size, fill weight, hachure gap,
    blur and shadow metrics are multiplied by ``|factor|`` so the shape
    looks the same at its new size. Groups scale the styling of every
    descendant.

    Args:
        shape: Shape to scale
        pivot: Fixed point of the scale
        factor: Uniform scale factor; negative mirrors

    Returns:
        Scaled shape
    """
    scaled = scale_shape(shape, pivot, factor, factor)
    return _scale_styles(shape, scaled, abs(factor))


def rotate_resize_handle(handle: ResizeHandle | str, angle: float) -> ResizeHandle:
    """Find the handle that visually occupies a handle's spot after rotation.

    The handle's unit compass vector is rotated and snapped back to the
    nearest compass direction by the signs of its components. Components
    within 1e-8 of zero count as zero.

    Args:
        handle: Handle of the unrotated box
        angle: Rotation in radians (clockwise on screen)

    Returns:
        Handle at the rotated position

    Examples:
        >>> rotate_resize_handle("top", math.pi / 2)
        <ResizeHandle.RIGHT: 'right'>
    """
    vx, vy = _HANDLE_VECTORS[ResizeHandle(handle)]
    cos = math.cos(angle)
    sin = math.sin(angle)
    rx = vx * cos - vy * sin
    ry = vx * sin + vy * cos

    sx = 0 if abs(rx) < 1e-8 else int(math.copysign(1, rx))
    sy = 0 if abs(ry) < 1e-8 else int(math.copysign(1, ry))
    return _VECTOR_HANDLES.get((sx, sy), ResizeHandle.TOP_LEFT)
