"""Unit tests for shape bounding boxes."""

import math

import pytest

from vectorkit.core.bounds import bounding_box, stroke_margin, union_bounding_box
from vectorkit.domain import (
    Anchor,
    ArcShape,
    BBox,
    BrushShape,
    EllipseShape,
    GroupShape,
    Point,
    PolygonShape,
    RectangleShape,
    VectorPathShape,
)

FLAT = {"is_rough": False, "stroke_width": 0}


def assert_box(box: BBox, x: float, y: float, width: float, height: float) -> None:
    assert box.x == pytest.approx(x, abs=1e-9)
    assert box.y == pytest.approx(y, abs=1e-9)
    assert box.width == pytest.approx(width, abs=1e-9)
    assert box.height == pytest.approx(height, abs=1e-9)


class TestStrokeMargin:
    """Tests for stroke_margin."""

    def test_smooth_shape(self) -> None:
        """Test smooth shapes reach half their stroke past the geometry."""
        rect = RectangleShape(id="r", x=0, y=0, width=1, height=1, stroke_width=6, is_rough=False)
        assert stroke_margin(rect) == 3.0

    def test_rough_shape(self) -> None:
        """Test rough shapes add roughness and bowing."""
        rect = RectangleShape(id="r", x=0, y=0, width=1, height=1, stroke_width=1)
        assert stroke_margin(rect) == pytest.approx(0.5 + 2.5 + 1.0)

    def test_rough_fill_weight(self) -> None:
        """Test a heavy hachure fill can dominate the margin."""
        rect = RectangleShape(
            id="r",
            x=0,
            y=0,
            width=1,
            height=1,
            stroke_width=0,
            fill="#ff0000",
            fill_weight=20,
            bowing=0,
        )
        assert stroke_margin(rect) == pytest.approx(10 + 2.5)


class TestBoundingBox:
    """Tests for bounding_box."""

    def test_rectangle(self) -> None:
        """Test an unrotated rectangle is its own box."""
        rect = RectangleShape(id="r", x=5, y=10, width=20, height=30, **FLAT)
        assert_box(bounding_box(rect), 5, 10, 20, 30)

    def test_stroke_included(self) -> None:
        """Test the stroke grows the box on every side."""
        rect = RectangleShape(id="r", x=0, y=0, width=10, height=10, stroke_width=4, is_rough=False)
        assert_box(bounding_box(rect), -2, -2, 14, 14)
        assert_box(bounding_box(rect, include_stroke=False), 0, 0, 10, 10)

    def test_rotated_rectangle(self) -> None:
        """Test a quarter-turned rectangle swaps its extents."""
        rect = RectangleShape(id="r", x=0, y=0, width=20, height=10, rotation=math.pi / 2, **FLAT)
        assert_box(bounding_box(rect), 5, -5, 10, 20)

    def test_rotated_ellipse_is_tight(self) -> None:
        """Test ellipses use their analytic extent, not the rotated box."""
        ellipse = EllipseShape(id="e", x=0, y=0, width=20, height=20, rotation=math.pi / 4, **FLAT)
        assert_box(bounding_box(ellipse), 0, 0, 20, 20)

    def test_polygon_vertices(self) -> None:
        """Test polygons are bounded by their vertices."""
        triangle = PolygonShape(id="p", x=0, y=0, width=10, height=10, sides=3, **FLAT)
        box = bounding_box(triangle)
        assert box.y == pytest.approx(0)
        assert box.height == pytest.approx(7.5)

    def test_pen_path_curve(self) -> None:
        """Test curved paths are bounded by the curve, not just anchors."""
        path = VectorPathShape(
            id="p",
            anchors=(
                Anchor(Point(0, 0), Point(0, 0), Point(0, -10)),
                Anchor(Point(10, 0), Point(10, -10), Point(10, 0)),
            ),
            **FLAT,
        )
        box = bounding_box(path)
        assert box.y == pytest.approx(-7.5)
        assert box.width == pytest.approx(10)

    def test_arc(self) -> None:
        """Test arcs are bounded by their sampled curve."""
        arc = ArcShape(id="a", points=(Point(-1, 0), Point(1, 0), Point(0, -1)), **FLAT)
        assert_box(bounding_box(arc), -1, -1, 2, 1)

    def test_brush(self) -> None:
        """Test brush strokes are bounded by their points."""
        brush = BrushShape(id="b", points=(Point(1, 2), Point(5, -1)), **FLAT)
        assert_box(bounding_box(brush), 1, -1, 4, 3)

    def test_empty_shapes(self) -> None:
        """Test shapes without points give a zero box."""
        assert bounding_box(BrushShape(id="b", points=())) == BBox(0, 0, 0, 0)
        assert bounding_box(VectorPathShape(id="p", anchors=())) == BBox(0, 0, 0, 0)
        assert bounding_box(GroupShape(id="g", children=())) == BBox(0, 0, 0, 0)

    def test_group_union(self) -> None:
        """Test groups are bounded by all their children."""
        group = GroupShape(
            id="g",
            children=(
                RectangleShape(id="a", x=0, y=0, width=1, height=1, **FLAT),
                RectangleShape(id="b", x=5, y=5, width=1, height=1, **FLAT),
            ),
        )
        assert_box(bounding_box(group), 0, 0, 6, 6)


class TestUnionBoundingBox:
    """Tests for union_bounding_box."""

    def test_empty_list(self) -> None:
        """Test an empty selection has no bounds."""
        assert union_bounding_box([]) is None

    def test_union(self) -> None:
        """Test the union covers every shape."""
        shapes = [
            RectangleShape(id="a", x=-5, y=0, width=1, height=1),
            BrushShape(id="b", points=(Point(3, 8),)),
        ]
        assert_box(union_bounding_box(shapes), -5, 0, 8, 8)
