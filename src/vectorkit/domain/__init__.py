"""Domain models for vectorkit.

This module contains the shape model the geometry kernel operates over.
All models are designed to be:

- Immutable (frozen dataclasses, tuples for sequences)
- Serializable to the editor's JSON shape format
- Free of behavior beyond invariant checks and serialization

Key classes:
- Point, Anchor, BBox: Coordinate vocabulary
- RectangleShape, EllipseShape, PolygonShape, ImageShape, TextShape,
  FrameShape: Box shapes
- VectorPathShape, BrushShape, ArcShape: Point-based shapes
- GroupShape: Shape trees
"""

from vectorkit.domain.geometry import Anchor, BBox, Point
from vectorkit.domain.shapes import (
    ArcShape,
    BoxShape,
    BoxShapeBase,
    BrushShape,
    EllipseShape,
    FrameShape,
    GroupShape,
    ImageShape,
    PolygonShape,
    RectangleShape,
    Shape,
    ShapeBase,
    TextShape,
    VectorPathShape,
    is_box_shape,
    new_shape_id,
    shape_from_dict,
    shape_to_dict,
    style_fields,
    validate_shape,
)

__all__: list[str] = [
    # Geometry
    "Point",
    "Anchor",
    "BBox",
    # Shapes
    "ShapeBase",
    "BoxShapeBase",
    "RectangleShape",
    "EllipseShape",
    "PolygonShape",
    "ImageShape",
    "TextShape",
    "FrameShape",
    "VectorPathShape",
    "BrushShape",
    "ArcShape",
    "GroupShape",
    "BoxShape",
    "Shape",
    # Functions
    "is_box_shape",
    "new_shape_id",
    "shape_from_dict",
    "shape_to_dict",
    "style_fields",
    "validate_shape",
]
