"""Handle-driven resizing of box shapes and image crop rectangles.

Resizing works in the shape's local (unrotated) frame: pointer positions
are rotated back about the pivot, the box is scaled about the corner or edge
opposite the dragged handle, and for rotated shapes a final translation
keeps that anchor at the same global position.
"""

from dataclasses import replace

from vectorkit.config import GeometryConfig, ResizeHandle
from vectorkit.core.geometry import rotate_point
from vectorkit.core.transform import move_shape, scale_shape
from vectorkit.domain import BBox, BoxShapeBase, ImageShape, Point, Shape
from vectorkit.exceptions import UnsupportedShapeError

_DEFAULT_CONFIG = GeometryConfig()


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _resize_anchor(
    shape: BoxShapeBase, handle: ResizeHandle, local_initial: Point
) -> Point:
    """Pick the point that stays fixed while dragging a handle.

    Corners anchor at the opposite corner. Edge handles anchor at the
    opposite edge; the other coordinate is the far side from where the drag
    started, so an aspect-locked edge drag grows away from the pointer.
    """
    x, y, w, h = shape.x, shape.y, shape.width, shape.height
    center = shape.center
    name = handle.value

    anchor_x = x + w if "left" in name else x
    anchor_y = y + h if "top" in name else y

    if handle in (ResizeHandle.TOP, ResizeHandle.BOTTOM):
        anchor_x = x + w if local_initial.x < center.x else x
    if handle in (ResizeHandle.LEFT, ResizeHandle.RIGHT):
        anchor_y = y + h if local_initial.y < center.y else y

    return Point(anchor_x, anchor_y)


def resize_shape(
    shape: Shape,
    handle: ResizeHandle | str,
    current_pos: Point,
    initial_pos: Point,
    keep_aspect_ratio: bool,
    rotation_center: Point | None = None,
    config: GeometryConfig | None = None,
) -> BoxShapeBase:
    """Resize a box shape by dragging one of its eight handles.

    Args:
        shape: Box shape at drag start
        handle: Dragged handle
        current_pos: Pointer position now
        initial_pos: Pointer position at drag start
        keep_aspect_ratio: Lock the width/height ratio
        rotation_center: Shared pivot when resizing a multi-selection as
            one unit; defaults to the box center
        config: Geometry tolerances

    Returns:
        Resized shape with non-negative width and height; dragging through
        the anchor mirrors the shape via its scale sign

    Raises:
        UnsupportedShapeError: If the shape is not a box shape
    """
    if not isinstance(shape, BoxShapeBase):
        raise UnsupportedShapeError("resize", shape.tool)

    config = config or _DEFAULT_CONFIG
    handle = ResizeHandle(handle)
    name = handle.value
    rotation = shape.rotation
    pivot = rotation_center or shape.center

    local_current = current_pos
    local_initial = initial_pos
    if rotation:
        local_current = rotate_point(current_pos, pivot, -rotation)
        local_initial = rotate_point(initial_pos, pivot, -rotation)

    old_x, old_y = shape.x, shape.y
    old_width, old_height = shape.width, shape.height

    anchor = _resize_anchor(shape, handle, local_initial)
    anchor_global = rotate_point(anchor, pivot, rotation) if rotation else anchor

    dx_local = local_current.x - anchor.x
    dy_local = local_current.y - anchor.y
    dx_initial = local_initial.x - anchor.x
    dy_initial = local_initial.y - anchor.y

    affects_x = "left" in name or "right" in name
    affects_y = "top" in name or "bottom" in name

    degenerate_width = affects_x and abs(old_width) < config.zero_epsilon
    degenerate_height = affects_y and abs(old_height) < config.zero_epsilon

    if degenerate_width or degenerate_height:
        # Nothing to scale from: grow straight to the pointer
        left, right = old_x, old_x + old_width
        top, bottom = old_y, old_y + old_height
        if degenerate_width:
            left, right = min(local_current.x, anchor.x), max(local_current.x, anchor.x)
        if degenerate_height:
            top, bottom = min(local_current.y, anchor.y), max(local_current.y, anchor.y)
        return replace(
            shape,
            x=left,
            y=top,
            width=max(right - left, 0.0),
            height=max(bottom - top, 0.0),
        )

    base_width = -old_width if "left" in name else old_width
    base_height = -old_height if "top" in name else old_height

    new_width = dx_local if affects_x else base_width
    new_height = dy_local if affects_y else base_height

    if keep_aspect_ratio and old_width > 0 and old_height > 0:
        target_ratio = old_width / old_height
        height_sign = _sign(new_height) or (1 if "bottom" in name else -1)
        width_sign = _sign(new_width) or (1 if "right" in name else -1)

        if affects_x and affects_y:
            if abs(new_width) > abs(new_height) * target_ratio:
                new_height = abs(new_width) / target_ratio * height_sign
            else:
                new_width = abs(new_height) * target_ratio * width_sign
        elif affects_x:
            new_height = abs(new_width) / target_ratio * height_sign
        elif affects_y:
            new_width = abs(new_height) * target_ratio * width_sign

    applies_x = affects_x or (keep_aspect_ratio and affects_y)
    applies_y = affects_y or (keep_aspect_ratio and affects_x)

    scale_x = abs(new_width / base_width) if applies_x and base_width else 1.0
    scale_y = abs(new_height / base_height) if applies_y and base_height else 1.0

    # Dragging through the anchor mirrors
    if affects_x:
        start_sign, now_sign = _sign(dx_initial), _sign(dx_local)
        if start_sign and now_sign and start_sign != now_sign:
            scale_x = -scale_x
    if affects_y:
        start_sign, now_sign = _sign(dy_initial), _sign(dy_local)
        if start_sign and now_sign and start_sign != now_sign:
            scale_y = -scale_y

    result = scale_shape(shape, anchor, scale_x, scale_y)

    if rotation:
        rotation_pivot = rotation_center or result.center
        anchor_global_new = rotate_point(anchor, rotation_pivot, rotation)
        result = move_shape(
            result,
            anchor_global.x - anchor_global_new.x,
            anchor_global.y - anchor_global_new.y,
        )

    return result


def transform_crop_rect(
    initial_crop_rect: BBox,
    image: ImageShape,
    handle: ResizeHandle | str,
    current_pos: Point,
    initial_pos: Point,
) -> BBox:
    """Move the crop window edges named by a handle.

    The pointer is taken into the image's local frame; the resulting
    rectangle is normalized and clamped to the image box. The crop window
    is always axis-aligned in local space.

    Args:
        initial_crop_rect: Crop window at drag start, in image-local space
        image: Image being cropped
        handle: Dragged handle
        current_pos: Pointer position now
        initial_pos: Pointer position at drag start (unused, edges follow
            the current pointer directly)

    Returns:
        New crop window
    """
    name = ResizeHandle(handle).value
    local_current = rotate_point(current_pos, image.center, -image.rotation)

    x1 = initial_crop_rect.x
    y1 = initial_crop_rect.y
    x2 = initial_crop_rect.right
    y2 = initial_crop_rect.bottom

    if "left" in name:
        x1 = local_current.x
    if "right" in name:
        x2 = local_current.x
    if "top" in name:
        y1 = local_current.y
    if "bottom" in name:
        y2 = local_current.y

    final_x1 = max(min(x1, x2), image.x)
    final_y1 = max(min(y1, y2), image.y)
    final_x2 = min(max(x1, x2), image.x + image.width)
    final_y2 = min(max(y1, y2), image.y + image.height)

    return BBox(
        x=final_x1,
        y=final_y1,
        width=max(0.0, final_x2 - final_x1),
        height=max(0.0, final_y2 - final_y1),
    )

