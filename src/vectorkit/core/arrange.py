"""Alignment and distribution of shape selections.

Both operations measure shapes by their stroke-inclusive bounding box and
move them with ``move_shape``; nothing else about a shape changes.
"""

from vectorkit.config import Alignment, Axis, DistributeMode, GeometryConfig
from vectorkit.core.bounds import bounding_box, union_bounding_box
from vectorkit.core.transform import move_shape
from vectorkit.domain import BBox, Shape


def align_shapes(
    shapes: list[Shape], alignment: Alignment | str, config: GeometryConfig | None = None
) -> list[Shape]:
    """Align shapes to an edge or center line of their common bounds.

    Args:
        shapes: Shapes to align
        alignment: Edge or center line to align to
        config: Geometry settings used for bounds

    Returns:
        Moved shapes in input order; the input unchanged for fewer than
        two shapes
    """
    if len(shapes) < 2:
        return shapes

    alignment = Alignment(alignment)
    selection = union_bounding_box(shapes, include_stroke=True, config=config)
    if selection is None:
        return shapes

    aligned = []
    for shape in shapes:
        box = bounding_box(shape, include_stroke=True, config=config)
        dx = dy = 0.0
        if alignment is Alignment.LEFT:
            dx = selection.x - box.x
        elif alignment is Alignment.RIGHT:
            dx = selection.right - box.right
        elif alignment is Alignment.H_CENTER:
            dx = selection.center.x - box.center.x
        elif alignment is Alignment.TOP:
            dy = selection.y - box.y
        elif alignment is Alignment.BOTTOM:
            dy = selection.bottom - box.bottom
        elif alignment is Alignment.V_CENTER:
            dy = selection.center.y - box.center.y
        aligned.append(move_shape(shape, dx, dy))
    return aligned


def _start(box: BBox, axis: Axis) -> float:
    return box.x if axis is Axis.HORIZONTAL else box.y


def _size(box: BBox, axis: Axis) -> float:
    return box.width if axis is Axis.HORIZONTAL else box.height


def _center(box: BBox, axis: Axis) -> float:
    return _start(box, axis) + _size(box, axis) / 2


def _shift(shape: Shape, axis: Axis, delta: float) -> Shape:
    if axis is Axis.HORIZONTAL:
        return move_shape(shape, delta, 0.0)
    return move_shape(shape, 0.0, delta)


def distribute_shapes(
    shapes: list[Shape],
    axis: Axis | str,
    spacing: float | None = None,
    mode: DistributeMode | str = DistributeMode.EDGES,
    config: GeometryConfig | None = None,
) -> list[Shape]:
    """Distribute shapes along an axis.

    Shapes are ordered by the leading edge of their bounds. With a spacing,
    every shape after the first is placed exactly ``spacing`` after its
    predecessor, measured between facing edges or between centers. Without
    one (or with a negative spacing) the first and last shapes stay put and
    the ones between them are spread out evenly; this needs at least three
    shapes.

    Args:
        shapes: Shapes to distribute
        axis: Distribution axis
        spacing: Fixed gap, or None to space evenly
        mode: Measure gaps between edges or between centers
        config: Geometry settings used for bounds

    Returns:
        Shapes in their sorted order along the axis; the input unchanged
        when there are too few shapes
    """
    if len(shapes) < 2:
        return shapes

    axis = Axis(axis)
    mode = DistributeMode(mode)
    measured = [(shape, bounding_box(shape, include_stroke=True, config=config)) for shape in shapes]
    measured.sort(key=lambda item: _start(item[1], axis))

    first_shape, first_box = measured[0]

    if spacing is not None and spacing >= 0:
        result = [first_shape]
        if mode is DistributeMode.CENTERS:
            last_center = _center(first_box, axis)
            for shape, box in measured[1:]:
                target = last_center + spacing
                result.append(_shift(shape, axis, target - _center(box, axis)))
                last_center = target
        else:
            edge = _start(first_box, axis) + _size(first_box, axis)
            for shape, box in measured[1:]:
                result.append(_shift(shape, axis, edge + spacing - _start(box, axis)))
                edge += spacing + _size(box, axis)
        return result

    if len(shapes) < 3:
        return shapes

    last_shape, last_box = measured[-1]
    inner = measured[1:-1]

    if mode is DistributeMode.CENTERS:
        first_center = _center(first_box, axis)
        gap = (_center(last_box, axis) - first_center) / (len(measured) - 1)
        distributed = [
            _shift(shape, axis, first_center + gap * i - _center(box, axis))
            for i, (shape, box) in enumerate(inner, start=1)
        ]
    else:
        first_end = _start(first_box, axis) + _size(first_box, axis)
        inner_size = sum(_size(box, axis) for _, box in inner)
        gap = (_start(last_box, axis) - first_end - inner_size) / (len(inner) + 1)

        distributed = []
        position = first_end + gap
        for shape, box in inner:
            distributed.append(_shift(shape, axis, position - _start(box, axis)))
            position += _size(box, axis) + gap

    return [first_shape, *distributed, last_shape]
