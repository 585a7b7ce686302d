"""Geometry kernel for vectorkit.

This module contains the core algorithms for:

- Affine transforms (move, rotate, scale, flip, resize, crop)
- Three-point arc geometry (circumcircle, SVG flags, sampling)
- Shape-to-path conversion
- Boolean operations on shape outlines
- Stroke simplification and freehand fitting
- Alignment and distribution
- Bounding boxes

All operations are designed to be:
- Pure (no side effects, inputs are never modified)
- Total over degenerate geometry (fallback values, not exceptions)

Key functions:
- move_shape, rotate_shape, scale_shape, scale_shape_uniform: Affine transforms
- flip_shape: Async mirror (images are re-encoded off the event loop)
- resize_shape, transform_crop_rect: Handle-driven resizing
- circumcircle, arc_path_d, sample_arc: Arc geometry
- to_vector_path: Convert any shape to a pen path
- boolean_op: Unite, subtract, intersect, exclude or trim shapes
- simplify_anchors, fit_freehand: Simplification and fitting
- align_shapes, distribute_shapes: Arrangement
- bounding_box, union_bounding_box: Bounds

Key classes:
- BooleanEngine: Boolean operations over a pluggable clipper
- ShapelyClipper: PathClipper implementation backed by shapely
"""

from vectorkit.core.arc import (
    ArcFlags,
    Circle,
    arc_flags,
    arc_path_d,
    arc_sweep_angle,
    arc_to_anchors,
    circumcircle,
    sample_arc,
)
from vectorkit.core.arrange import align_shapes, distribute_shapes
from vectorkit.core.boolean import BooleanEngine, boolean_op
from vectorkit.core.bounds import bounding_box, stroke_margin, union_bounding_box
from vectorkit.core.clipper import PathClipper, ShapelyClipper
from vectorkit.core.convert import (
    arc_to_path,
    brush_to_path,
    ellipse_to_path,
    line_to_path,
    polygon_to_path,
    rectangle_to_path,
    to_vector_path,
)
from vectorkit.core.fitting import (
    anchors_to_path_d,
    fit_freehand,
    natural_spline_anchors,
    simplify_anchors,
    simplify_path,
    simplify_points,
    smooth_handles,
)
from vectorkit.core.flip import flip_point, flip_shape
from vectorkit.core.geometry import (
    distance,
    flatten_path,
    polygon_vertices,
    rotate_point,
    sample_path,
    signed_area,
)
from vectorkit.core.resize import resize_shape, transform_crop_rect
from vectorkit.core.transform import (
    move_shape,
    rotate_resize_handle,
    rotate_shape,
    scale_shape,
    scale_shape_uniform,
)

__all__ = [
    # Arc geometry
    "ArcFlags",
    "Circle",
    "arc_flags",
    "arc_path_d",
    "arc_sweep_angle",
    "arc_to_anchors",
    "circumcircle",
    "sample_arc",
    # Arrangement
    "align_shapes",
    "distribute_shapes",
    # Boolean operations
    "BooleanEngine",
    "PathClipper",
    "ShapelyClipper",
    "boolean_op",
    # Bounds
    "bounding_box",
    "stroke_margin",
    "union_bounding_box",
    # Conversion
    "arc_to_path",
    "brush_to_path",
    "ellipse_to_path",
    "line_to_path",
    "polygon_to_path",
    "rectangle_to_path",
    "to_vector_path",
    # Fitting
    "anchors_to_path_d",
    "fit_freehand",
    "natural_spline_anchors",
    "simplify_anchors",
    "simplify_path",
    "simplify_points",
    "smooth_handles",
    # Geometry helpers
    "distance",
    "flatten_path",
    "polygon_vertices",
    "rotate_point",
    "sample_path",
    "signed_area",
    # Transforms
    "flip_point",
    "flip_shape",
    "move_shape",
    "resize_shape",
    "rotate_resize_handle",
    "rotate_shape",
    "scale_shape",
    "scale_shape_uniform",
    "transform_crop_rect",
]
