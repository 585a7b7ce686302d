"""Tests for domain models to verify they work correctly."""

import pytest

from vectorkit.domain import (
    Anchor,
    ArcShape,
    BBox,
    BrushShape,
    EllipseShape,
    GroupShape,
    ImageShape,
    Point,
    PolygonShape,
    RectangleShape,
    TextShape,
    VectorPathShape,
    is_box_shape,
    new_shape_id,
    shape_from_dict,
    shape_to_dict,
    style_fields,
    validate_shape,
)
from vectorkit.exceptions import ShapeValidationError, UnknownShapeError


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(100.0, 200.0)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_point_hashable(self) -> None:
        """Test that equal points collapse in a set."""
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


class TestAnchor:
    """Tests for Anchor class."""

    def test_corner_anchor(self) -> None:
        """Test corner anchors have handles on their point."""
        anchor = Anchor.corner(Point(5, 5))
        assert anchor.handle_in == Point(5, 5)
        assert anchor.handle_out == Point(5, 5)
        assert anchor.is_corner()

    def test_curved_anchor_is_not_corner(self) -> None:
        """Test an anchor with a handle off its point is curved."""
        anchor = Anchor(Point(0, 0), Point(-1, 0), Point(1, 0))
        assert not anchor.is_corner()

    def test_map_transforms_all_points(self) -> None:
        """Test map applies the transform to the point and both handles."""
        anchor = Anchor(Point(0, 0), Point(-1, 0), Point(1, 0))
        moved = anchor.map(lambda p: Point(p.x + 10, p.y))
        assert moved == Anchor(Point(10, 0), Point(9, 0), Point(11, 0))

    def test_from_dict_defaults_missing_handles(self) -> None:
        """Test missing handles default to the anchor point."""
        anchor = Anchor.from_dict({"point": {"x": 3, "y": 4}})
        assert anchor.is_corner()
        assert anchor.point == Point(3.0, 4.0)

    def test_serialization_uses_camel_case(self) -> None:
        """Test anchor dictionaries use the editor's key names."""
        data = Anchor.corner(Point(1, 2)).to_dict()
        assert set(data) == {"point", "handleIn", "handleOut"}


class TestBBox:
    """Tests for BBox class."""

    def test_edges_and_center(self) -> None:
        """Test derived edges and center."""
        box = BBox(10, 20, 30, 40)
        assert box.right == 40
        assert box.bottom == 60
        assert box.center == Point(25, 40)

    def test_from_points(self) -> None:
        """Test the tight box around points."""
        box = BBox.from_points([Point(1, 5), Point(4, 2), Point(3, 3)])
        assert box == BBox(1, 2, 3, 3)

    def test_from_points_with_margin(self) -> None:
        """Test the margin grows every side."""
        box = BBox.from_points([Point(0, 0), Point(10, 10)], margin=2)
        assert box == BBox(-2, -2, 14, 14)

    def test_from_no_points(self) -> None:
        """Test an empty point list gives a zero box."""
        assert BBox.from_points([]) == BBox(0, 0, 0, 0)


class TestShapes:
    """Tests for shape variants."""

    def test_tool_tags(self) -> None:
        """Test each variant carries its tool tag."""
        assert RectangleShape(id="r", x=0, y=0, width=1, height=1).tool == "rectangle"
        assert EllipseShape(id="e", x=0, y=0, width=1, height=1).tool == "ellipse"
        assert BrushShape(id="b", points=()).tool == "brush"
        assert VectorPathShape(id="p", anchors=()).tool == "pen"
        assert VectorPathShape(id="l", tool="line", anchors=()).tool == "line"

    def test_box_center(self) -> None:
        """Test box shapes expose their center."""
        rect = RectangleShape(id="r", x=10, y=10, width=20, height=40)
        assert rect.center == Point(20, 30)

    def test_is_box_shape(self) -> None:
        """Test box shape detection."""
        assert is_box_shape(TextShape(id="t", x=0, y=0, width=1, height=1))
        assert not is_box_shape(BrushShape(id="b", points=()))

    def test_shapes_are_immutable(self) -> None:
        """Test shapes cannot be modified in place."""
        rect = RectangleShape(id="r", x=0, y=0, width=1, height=1)
        with pytest.raises(AttributeError):
            rect.x = 5  # type: ignore

    def test_new_shape_id_is_unique(self) -> None:
        """Test generated identities are unique and tagged."""
        first = new_shape_id("bool")
        second = new_shape_id("bool")
        assert first != second
        assert first.endswith("-bool")

    def test_style_fields_exclude_geometry(self) -> None:
        """Test style fields drop identity, rotation and scale."""
        rect = RectangleShape(
            id="r", x=0, y=0, width=1, height=1, color="#ff0000", rotation=1.0, scale_x=-1
        )
        styles = style_fields(rect)
        assert styles["color"] == "#ff0000"
        assert "id" not in styles
        assert "rotation" not in styles
        assert "scale_x" not in styles
        assert "x" not in styles


class TestValidation:
    """Tests for shape invariants."""

    def test_negative_width_rejected(self) -> None:
        """Test negative box sizes are rejected."""
        rect = RectangleShape(id="r", x=0, y=0, width=-1, height=1)
        with pytest.raises(ShapeValidationError, match="width and height"):
            validate_shape(rect)

    def test_polygon_needs_three_sides(self) -> None:
        """Test polygons need at least three sides."""
        polygon = PolygonShape(id="p", x=0, y=0, width=1, height=1, sides=2)
        with pytest.raises(ShapeValidationError):
            validate_shape(polygon)

    def test_group_children_validated(self) -> None:
        """Test validation descends into groups."""
        bad = RectangleShape(id="r", x=0, y=0, width=1, height=-1)
        group = GroupShape(id="g", children=(bad,))
        with pytest.raises(ShapeValidationError) as exc_info:
            validate_shape(group)
        assert exc_info.value.shape_id == "r"

    def test_valid_shape_returned(self) -> None:
        """Test a valid shape is returned for chaining."""
        rect = RectangleShape(id="r", x=0, y=0, width=1, height=1)
        assert validate_shape(rect) is rect


class TestShapeSerialization:
    """Tests for shape dictionaries."""

    def test_camel_case_keys(self) -> None:
        """Test field names are written in camelCase."""
        rect = RectangleShape(id="r", x=0, y=0, width=1, height=1, stroke_width=3)
        data = shape_to_dict(rect)
        assert data["tool"] == "rectangle"
        assert data["strokeWidth"] == 3
        assert data["borderRadius"] == 0.0
        assert "stroke_width" not in data

    def test_none_fields_omitted(self) -> None:
        """Test optional fields holding None are left out."""
        data = shape_to_dict(ImageShape(id="i", x=0, y=0, width=1, height=1))
        assert "src" not in data
        assert "opacity" not in data

    def test_group_tree(self) -> None:
        """Test a nested group survives serialization."""
        group = GroupShape(
            id="g",
            children=(
                RectangleShape(id="r", x=0, y=0, width=10, height=10),
                ArcShape(id="a", points=(Point(0, 0), Point(2, 0), Point(1, 1))),
                VectorPathShape(
                    id="p",
                    tool="line",
                    anchors=(Anchor.corner(Point(0, 0)), Anchor.corner(Point(5, 5))),
                    stroke_line_dash=(4.0, 2.0),
                ),
            ),
        )
        assert shape_from_dict(shape_to_dict(group)) == group

    def test_unknown_keys_ignored(self) -> None:
        """Test keys the model does not know are skipped."""
        data = {"tool": "brush", "id": "b", "points": [], "pressure": [0.5]}
        assert shape_from_dict(data) == BrushShape(id="b", points=())

    def test_unknown_tool(self) -> None:
        """Test an unknown tool tag is rejected."""
        with pytest.raises(UnknownShapeError) as exc_info:
            shape_from_dict({"tool": "spline", "id": "s"})
        assert exc_info.value.tool == "spline"

    def test_missing_required_field(self) -> None:
        """Test a missing required field is reported."""
        with pytest.raises(ShapeValidationError, match="missing field 'width'"):
            shape_from_dict({"tool": "rectangle", "id": "r", "x": 0, "y": 0, "height": 1})

    def test_missing_nested_coordinate(self) -> None:
        """Test a point without a coordinate is a validation error."""
        with pytest.raises(ShapeValidationError, match="malformed field 'points'") as exc_info:
            shape_from_dict({"tool": "brush", "id": "b", "points": [{"x": 1}]})
        assert exc_info.value.shape_id == "b"

    @pytest.mark.parametrize(
        "anchors",
        [
            [{"point": {"x": "left", "y": 0}}],
            [{"handleIn": {"x": 0, "y": 0}}],
            [[0, 0]],
            12,
        ],
    )
    def test_malformed_anchors(self, anchors) -> None:
        """Test malformed anchor data is a validation error."""
        with pytest.raises(ShapeValidationError, match="malformed field 'anchors'"):
            shape_from_dict({"tool": "pen", "id": "p", "anchors": anchors})

    def test_invariants_checked_on_load(self) -> None:
        """Test loaded shapes are validated."""
        with pytest.raises(ShapeValidationError):
            shape_from_dict(
                {"tool": "ellipse", "id": "e", "x": 0, "y": 0, "width": -5, "height": 1}
            )
