"""Unit tests for handle-driven resizing and image cropping."""

import math

import pytest

from vectorkit.core.geometry import rotate_point
from vectorkit.core.resize import resize_shape, transform_crop_rect
from vectorkit.domain import BBox, BrushShape, ImageShape, Point, RectangleShape
from vectorkit.exceptions import UnsupportedShapeError


@pytest.fixture
def rect() -> RectangleShape:
    """A 100x50 rectangle at the origin."""
    return RectangleShape(id="r1", x=0, y=0, width=100, height=50)


class TestResizeShape:
    """Tests for resize_shape."""

    def test_corner_drag(self, rect: RectangleShape) -> None:
        """Test dragging a corner scales away from the opposite corner."""
        result = resize_shape(rect, "bottom-right", Point(150, 75), Point(100, 50), False)
        assert (result.x, result.y) == (0, 0)
        assert result.width == pytest.approx(150)
        assert result.height == pytest.approx(75)

    def test_left_edge_drag(self, rect: RectangleShape) -> None:
        """Test dragging the left edge keeps the right edge fixed."""
        result = resize_shape(rect, "left", Point(-20, 25), Point(0, 25), False)
        assert result.x == pytest.approx(-20)
        assert result.width == pytest.approx(120)
        assert result.x + result.width == pytest.approx(100)
        assert result.height == 50

    def test_edge_drag_ignores_other_axis(self, rect: RectangleShape) -> None:
        """Test an edge handle only changes its own dimension."""
        result = resize_shape(rect, "bottom", Point(500, 80), Point(50, 50), False)
        assert result.width == 100
        assert result.height == pytest.approx(80)

    def test_drag_through_anchor_mirrors(self, rect: RectangleShape) -> None:
        """Test dragging past the fixed edge mirrors the shape."""
        result = resize_shape(rect, "right", Point(-50, 25), Point(100, 25), False)
        assert result.x == pytest.approx(-50)
        assert result.width == pytest.approx(50)
        assert result.scale_x == -1
        assert result.scale_y == 1

    def test_aspect_ratio_corner(self, rect: RectangleShape) -> None:
        """Test locked corner drags follow the dominant axis."""
        result = resize_shape(rect, "bottom-right", Point(200, 60), Point(100, 50), True)
        assert result.width == pytest.approx(200)
        assert result.height == pytest.approx(100)

    def test_aspect_ratio_edge(self, rect: RectangleShape) -> None:
        """Test locked edge drags scale the other dimension too."""
        result = resize_shape(rect, "right", Point(200, 10), Point(100, 10), True)
        assert result.width == pytest.approx(200)
        assert result.height == pytest.approx(100)

    def test_zero_width_grows_to_pointer(self) -> None:
        """Test a collapsed box grows straight to the pointer."""
        line = RectangleShape(id="r", x=0, y=0, width=0, height=50)
        result = resize_shape(line, "right", Point(30, 10), Point(0, 10), False)
        assert (result.x, result.width) == (0, 30)
        assert result.height == 50

    def test_size_never_negative(self, rect: RectangleShape) -> None:
        """Test sizes stay non-negative for any drag."""
        for target in (Point(-300, -300), Point(0, 0), Point(100, -10), Point(-1, 49)):
            result = resize_shape(rect, "top-left", target, Point(0, 0), False)
            assert result.width >= 0
            assert result.height >= 0

    def test_rotated_shape_keeps_anchor(self) -> None:
        """Test a rotated shape keeps its fixed corner in place on screen."""
        square = RectangleShape(id="s", x=0, y=0, width=100, height=100, rotation=math.pi / 2)
        result = resize_shape(square, "bottom-right", Point(-50, 150), Point(0, 100), False)

        assert result.width == pytest.approx(150)
        assert result.height == pytest.approx(150)
        assert result.rotation == pytest.approx(math.pi / 2)
        fixed = rotate_point(Point(result.x, result.y), result.center, result.rotation)
        assert fixed.x == pytest.approx(100, abs=1e-9)
        assert fixed.y == pytest.approx(0, abs=1e-9)

    def test_non_box_rejected(self) -> None:
        """Test point-based shapes cannot be resized by handle."""
        brush = BrushShape(id="b", points=(Point(0, 0),))
        with pytest.raises(UnsupportedShapeError) as exc_info:
            resize_shape(brush, "right", Point(1, 1), Point(0, 0), False)
        assert exc_info.value.tool == "brush"


class TestTransformCropRect:
    """Tests for transform_crop_rect."""

    @pytest.fixture
    def image(self) -> ImageShape:
        """A 100x100 image at the origin."""
        return ImageShape(id="i", x=0, y=0, width=100, height=100)

    def test_move_corner(self, image: ImageShape) -> None:
        """Test a corner handle moves both of its edges."""
        crop = transform_crop_rect(BBox(10, 10, 80, 80), image, "top-left", Point(20, 30), Point(10, 10))
        assert crop == BBox(20, 30, 70, 60)

    def test_clamped_to_image(self, image: ImageShape) -> None:
        """Test the crop window cannot leave the image."""
        crop = transform_crop_rect(BBox(10, 10, 80, 80), image, "top-left", Point(-20, 30), Point(10, 10))
        assert crop == BBox(0, 30, 90, 60)

    def test_crossing_edges_normalized(self, image: ImageShape) -> None:
        """Test dragging an edge past its opposite swaps them."""
        crop = transform_crop_rect(BBox(10, 10, 80, 80), image, "right", Point(5, 50), Point(90, 50))
        assert crop == BBox(5, 10, 5, 80)

    def test_rotated_image_uses_local_frame(self) -> None:
        """Test the pointer is taken into the image's unrotated frame."""
        image = ImageShape(id="i", x=0, y=0, width=100, height=100, rotation=math.pi)
        # (80, 50) on screen is (20, 50) in the half-turned image
        crop = transform_crop_rect(BBox(0, 0, 100, 100), image, "left", Point(80, 50), Point(100, 50))
        assert crop.x == pytest.approx(20)
        assert crop.width == pytest.approx(80)
