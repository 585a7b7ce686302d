"""Shape variants of the drawing document.

A shape is one member of a closed tagged union discriminated by its ``tool``
tag. All variants are frozen dataclasses whose sequences are tuples, so a
shape value never changes once built; kernel operations return new values
built with :func:`dataclasses.replace`.

Variants:
- Box shapes: RectangleShape, EllipseShape, PolygonShape, ImageShape,
  TextShape, FrameShape
- VectorPathShape: anchored bezier paths drawn with the pen or line tool
- BrushShape: raw freehand point streams
- ArcShape: three-point circular arcs (start, end, via)
- GroupShape: an ordered tree of child shapes
"""

import uuid
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, Literal, TypeAlias

from vectorkit.domain.geometry import Anchor, Point
from vectorkit.exceptions import ShapeValidationError, UnknownShapeError

DEFAULT_ROUGHNESS = 2.5
DEFAULT_BOWING = 1.0
DEFAULT_HACHURE_GAP = 10.25


@dataclass(frozen=True, slots=True, kw_only=True)
class ShapeBase:
    """Identity and style fields shared by every shape variant.

    Attributes:
        id: Unique identity within the document
        name: Optional layer name
        color: Stroke color
        fill: Fill color ("transparent" for none)
        fill_style: Rough fill style (e.g. "hachure", "solid")
        stroke_width: Stroke width in document units
        stroke_line_dash: Optional (dash, gap) pattern
        endpoint_size: Endpoint marker size as a multiple of stroke width
        is_rough: Whether the shape renders in hand-drawn style
        opacity: Optional opacity in [0, 1]
        rotation: Rotation in radians about the shape's box center
        scale_x: Horizontal mirror/scale factor (negative when mirrored)
        scale_y: Vertical mirror/scale factor (negative when mirrored)
        roughness: Rough renderer roughness
        bowing: Rough renderer bowing
        fill_weight: Hachure stroke weight (None for stroke_width / 2)
        hachure_angle: Hachure angle in degrees
        hachure_gap: Gap between hachure lines
        curve_tightness: Rough curve tightness
        curve_step_count: Rough curve step count
        blur: Optional blur radius
        shadow_offset_x: Optional shadow x offset
        shadow_offset_y: Optional shadow y offset
        shadow_blur: Optional shadow blur radius
    """

    id: str
    name: str | None = None
    color: str = "#000000"
    fill: str = "transparent"
    fill_style: str = "hachure"
    stroke_width: float = 1.0
    stroke_line_dash: tuple[float, float] | None = None
    endpoint_size: float | None = None
    is_rough: bool = True
    opacity: float | None = None
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    roughness: float = DEFAULT_ROUGHNESS
    bowing: float = DEFAULT_BOWING
    fill_weight: float | None = None
    hachure_angle: float = 0.0
    hachure_gap: float = DEFAULT_HACHURE_GAP
    curve_tightness: float = 0.0
    curve_step_count: float = 1.0
    blur: float | None = None
    shadow_offset_x: float | None = None
    shadow_offset_y: float | None = None
    shadow_blur: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with camelCase keys and a ``tool`` tag
        """
        return shape_to_dict(self)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True, kw_only=True)
class BoxShapeBase(ShapeBase):
    """A shape described by an unrotated box plus rotation and scale.

    Attributes:
        x: Left edge of the unrotated box
        y: Top edge of the unrotated box
        width: Box width (never negative)
        height: Box height (never negative)
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        """Center of the box."""
        return Point(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True, slots=True, kw_only=True)
class RectangleShape(BoxShapeBase):
    """Rectangle with optional rounded corners."""

    tool: Literal["rectangle"] = field(default="rectangle", init=False)
    border_radius: float = 0.0


@dataclass(frozen=True, slots=True, kw_only=True)
class EllipseShape(BoxShapeBase):
    """Ellipse inscribed in its box."""

    tool: Literal["ellipse"] = field(default="ellipse", init=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class PolygonShape(BoxShapeBase):
    """Regular polygon inscribed in its box, first vertex at top-middle."""

    tool: Literal["polygon"] = field(default="polygon", init=False)
    sides: int = 6
    border_radius: float = 0.0


@dataclass(frozen=True, slots=True, kw_only=True)
class ImageShape(BoxShapeBase):
    """Raster image placed in a box.

    Attributes:
        src: Image content as a data URL
        file_id: Reference into an external file store
        border_radius: Corner rounding of the clip box
    """

    tool: Literal["image"] = field(default="image", init=False)
    src: str | None = None
    file_id: str | None = None
    border_radius: float = 0.0


@dataclass(frozen=True, slots=True, kw_only=True)
class TextShape(BoxShapeBase):
    """Text block measured into a box."""

    tool: Literal["text"] = field(default="text", init=False)
    text: str = ""
    font_size: float = 20.0
    font_family: str = "sans-serif"
    text_align: Literal["left", "center", "right"] = "left"


@dataclass(frozen=True, slots=True, kw_only=True)
class FrameShape(BoxShapeBase):
    """Frame (artboard) box."""

    tool: Literal["frame"] = field(default="frame", init=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class VectorPathShape(ShapeBase):
    """Anchored bezier path drawn with the pen or line tool.

    Attributes:
        tool: "pen" for free bezier paths, "line" for polyline-style paths
        anchors: Ordered control vertices
        is_closed: Whether a closing segment joins the last and first anchor
    """

    tool: Literal["pen", "line"] = "pen"
    anchors: tuple[Anchor, ...]
    is_closed: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class BrushShape(ShapeBase):
    """Freehand stroke stored as its raw sampled points."""

    tool: Literal["brush"] = field(default="brush", init=False)
    points: tuple[Point, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class ArcShape(ShapeBase):
    """Circular arc through three points.

    Attributes:
        points: (start, end, via); the arc runs from start to end through via
    """

    tool: Literal["arc"] = field(default="arc", init=False)
    points: tuple[Point, Point, Point]


@dataclass(frozen=True, slots=True, kw_only=True)
class GroupShape(ShapeBase):
    """Ordered group of child shapes; child index is paint order.

    Attributes:
        children: Child shapes, later entries painted on top
        is_collapsed: Layer panel collapse state
        mask: "clip" when the first child clips the rest
    """

    tool: Literal["group"] = field(default="group", init=False)
    children: tuple["Shape", ...]
    is_collapsed: bool = False
    mask: Literal["clip"] | None = None


BoxShape: TypeAlias = (
    RectangleShape | EllipseShape | PolygonShape | ImageShape | TextShape | FrameShape
)

Shape: TypeAlias = BoxShape | VectorPathShape | BrushShape | ArcShape | GroupShape

SHAPE_TYPES: dict[str, type] = {
    "rectangle": RectangleShape,
    "ellipse": EllipseShape,
    "polygon": PolygonShape,
    "image": ImageShape,
    "text": TextShape,
    "frame": FrameShape,
    "pen": VectorPathShape,
    "line": VectorPathShape,
    "brush": BrushShape,
    "arc": ArcShape,
    "group": GroupShape,
}

# Fields every derived shape drops because the derived geometry bakes them in
_GEOMETRY_STYLE_FIELDS = frozenset({"id", "rotation", "scale_x", "scale_y"})


def new_shape_id(suffix: str = "v") -> str:
    """Generate a fresh shape identity.

    Args:
        suffix: Short tag describing how the shape was derived

    Returns:
        Unique identifier string
    """
    return f"{uuid.uuid4().hex}-{suffix}"


def is_box_shape(shape: Shape) -> bool:
    """Check whether a shape is described by a box."""
    return isinstance(shape, BoxShapeBase)


def style_fields(shape: Shape) -> dict[str, Any]:
    """Collect the style fields a derived shape inherits from its source.

    Identity, rotation and scale are excluded: derived outlines carry them in
    their geometry.

    Args:
        shape: Source shape

    Returns:
        Mapping of ShapeBase field names to values
    """
    return {
        f.name: getattr(shape, f.name)
        for f in fields(ShapeBase)
        if f.name not in _GEOMETRY_STYLE_FIELDS
    }


def validate_shape(shape: Shape) -> Shape:
    """Check the model invariants of a shape tree.

    Args:
        shape: Shape to validate

    Returns:
        The same shape, for chaining

    Raises:
        ShapeValidationError: If width/height is negative, a polygon has fewer
            than three sides or an arc does not have exactly three points
    """
    if isinstance(shape, BoxShapeBase):
        if shape.width < 0 or shape.height < 0:
            raise ShapeValidationError(shape.id, "width and height must be >= 0")
        if isinstance(shape, PolygonShape) and shape.sides < 3:
            raise ShapeValidationError(shape.id, "polygon needs at least 3 sides")
    elif isinstance(shape, ArcShape):
        if len(shape.points) != 3:
            raise ShapeValidationError(shape.id, "arc needs exactly 3 points")
    elif isinstance(shape, GroupShape):
        for child in shape.children:
            validate_shape(child)
    return shape


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _encode(value: Any) -> Any:
    if isinstance(value, (Point, Anchor)):
        return value.to_dict()
    if isinstance(value, ShapeBase):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_encode(v) for v in value]
    return value


def shape_to_dict(shape: Shape) -> dict[str, Any]:
    """Serialize any shape to a JSON-compatible dictionary.

    Optional fields holding None are omitted.

    Args:
        shape: Shape to serialize

    Returns:
        Dictionary with camelCase keys
    """
    data: dict[str, Any] = {}
    for f in fields(shape):  # type: ignore[arg-type]
        value = getattr(shape, f.name)
        if value is None:
            continue
        data[_camel(f.name)] = _encode(value)
    return data


def _decode(name: str, value: Any) -> Any:
    if name == "points":
        return tuple(Point.from_dict(p) for p in value)
    if name == "anchors":
        return tuple(Anchor.from_dict(a) for a in value)
    if name == "children":
        return tuple(shape_from_dict(c) for c in value)
    if name == "stroke_line_dash":
        return (float(value[0]), float(value[1]))
    return value


def shape_from_dict(data: dict[str, Any]) -> Shape:
    """Deserialize a shape dictionary, dispatching on its ``tool`` tag.

    Unknown keys are ignored so documents written by richer editors load.

    Args:
        data: Dictionary produced by :func:`shape_to_dict` or the editor

    Returns:
        Shape instance

    Raises:
        UnknownShapeError: If the tool tag is missing or unknown
        ShapeValidationError: If a required field is missing or an invariant
            does not hold
    """
    tool = data.get("tool")
    cls = SHAPE_TYPES.get(tool) if isinstance(tool, str) else None
    if cls is None:
        raise UnknownShapeError(str(tool))

    shape_id = str(data.get("id", "<unknown>"))
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if not f.init:
            continue
        key = _camel(f.name)
        if key not in data:
            if f.default is MISSING and f.default_factory is MISSING:
                raise ShapeValidationError(shape_id, f"missing field '{key}'")
            continue
        try:
            kwargs[f.name] = _decode(f.name, data[key])
        except (KeyError, TypeError, ValueError) as e:
            raise ShapeValidationError(shape_id, f"malformed field '{key}': {e!r}") from e

    return validate_shape(cls(**kwargs))
