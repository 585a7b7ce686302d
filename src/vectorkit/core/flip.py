"""Mirroring of shapes across a vertical or horizontal line.

``flip_shape`` is the kernel's only coroutine: mirroring an image shape
decodes, mirrors and re-encodes its raster with Pillow, which runs in a
worker thread. Everything else is a plain geometric reflection. Callers
must await the result before committing the flipped shape.
"""

import asyncio
import base64
import io
from dataclasses import replace
from typing import assert_never

from PIL import Image, ImageOps

from vectorkit.config import Axis
from vectorkit.core.transform import map_points
from vectorkit.domain import (
    ArcShape,
    BoxShapeBase,
    BrushShape,
    GroupShape,
    ImageShape,
    Point,
    Shape,
    TextShape,
    VectorPathShape,
)
from vectorkit.exceptions import ImageFlipError

_SWAPPED_ALIGN = {"left": "right", "right": "left", "center": "center"}


def flip_point(point: Point, center: Point, axis: Axis) -> Point:
    """Mirror a point across the line through center along the axis.

    A horizontal flip mirrors x across the vertical line ``x = center.x``;
    a vertical flip mirrors y across ``y = center.y``.
    """
    if axis is Axis.HORIZONTAL:
        return Point(2 * center.x - point.x, point.y)
    return Point(point.x, 2 * center.y - point.y)


def _decode_data_url(src: str) -> bytes:
    header, sep, payload = src.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("src is not a base64 data URL")
    return base64.b64decode(payload, validate=True)


def mirror_image_data(src: str, axis: Axis) -> str:
    """Mirror a base64 data-URL image and re-encode it as PNG.

    Args:
        src: Image data URL
        axis: Mirror axis

    Returns:
        PNG data URL of the mirrored image

    Raises:
        ValueError: If src is not a base64 data URL
        OSError: If Pillow cannot decode or encode the image
    """
    raw = _decode_data_url(src)
    with Image.open(io.BytesIO(raw)) as image:
        image.load()
        if axis is Axis.HORIZONTAL:
            mirrored = ImageOps.mirror(image)
        else:
            mirrored = ImageOps.flip(image)

    buffer = io.BytesIO()
    mirrored.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def _flip_box_geometry(shape: BoxShapeBase, center: Point, axis: Axis) -> dict:
    new_center = flip_point(shape.center, center, axis)
    return {
        "x": new_center.x - shape.width / 2,
        "y": new_center.y - shape.height / 2,
        "rotation": -shape.rotation,
    }


async def _flip_image(shape: ImageShape, center: Point, axis: Axis) -> ImageShape:
    if shape.src is None:
        raise ImageFlipError(shape.id, "image has no inline data to mirror")

    try:
        src = await asyncio.to_thread(mirror_image_data, shape.src, axis)
    except (ValueError, OSError) as e:
        raise ImageFlipError(shape.id, str(e)) from e

    return replace(shape, src=src, **_flip_box_geometry(shape, center, axis))


def _flip_text(shape: TextShape, center: Point, axis: Axis) -> TextShape:
    if axis is Axis.HORIZONTAL:
        return replace(
            shape,
            x=2 * center.x - (shape.x + shape.width),
            text_align=_SWAPPED_ALIGN.get(shape.text_align, shape.text_align),
        )
    return replace(shape, y=2 * center.y - (shape.y + shape.height))


async def flip_shape(shape: Shape, center: Point, axis: Axis | str) -> Shape:
    """Mirror a shape across the line through ``center``.

    - pen, line and brush shapes mirror every point, handles included
    - arcs mirror their three points; a horizontal flip also swaps start
      and end so the arc keeps its drawing direction
    - rectangles, ellipses, polygons and frames mirror their box center,
      negate rotation and record the mirror in ``scale_x`` (horizontal) or
      ``scale_y`` (vertical)
    - text mirrors its box and swaps left/right alignment on a horizontal
      flip
    - images mirror their raster as well as their box
    - groups flip their children concurrently, keeping paint order

    Flipping twice with the same center and axis restores the original
    position and rotation.

    Args:
        shape: Shape to flip
        center: Point on the mirror line
        axis: "horizontal" mirrors left/right, "vertical" mirrors up/down

    Returns:
        Flipped shape

    Raises:
        ImageFlipError: If an image's raster cannot be decoded or encoded
    """
    axis = Axis(axis)

    if isinstance(shape, (VectorPathShape, BrushShape)):
        return map_points(shape, lambda p: flip_point(p, center, axis))
    if isinstance(shape, ArcShape):
        start, end, via = (flip_point(p, center, axis) for p in shape.points)
        if axis is Axis.HORIZONTAL:
            start, end = end, start
        return replace(shape, points=(start, end, via))
    if isinstance(shape, ImageShape):
        return await _flip_image(shape, center, axis)
    if isinstance(shape, TextShape):
        return _flip_text(shape, center, axis)
    if isinstance(shape, BoxShapeBase):
        mirror = (
            {"scale_x": -shape.scale_x}
            if axis is Axis.HORIZONTAL
            else {"scale_y": -shape.scale_y}
        )
        return replace(shape, **_flip_box_geometry(shape, center, axis), **mirror)
    if isinstance(shape, GroupShape):
        children = await asyncio.gather(
            *(flip_shape(child, center, axis) for child in shape.children)
        )
        return replace(shape, children=tuple(children))
    assert_never(shape)
