"""Unit tests for shape mirroring."""

import asyncio
import base64
import io
import math

import pytest
from PIL import Image

from vectorkit.config import Axis
from vectorkit.core.flip import flip_point, flip_shape, mirror_image_data
from vectorkit.domain import (
    Anchor,
    ArcShape,
    BrushShape,
    EllipseShape,
    GroupShape,
    ImageShape,
    Point,
    RectangleShape,
    TextShape,
    VectorPathShape,
)
from vectorkit.exceptions import ImageFlipError

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def png_data_url(pixels: list[tuple[int, int, int, int]], width: int, height: int) -> str:
    """Encode RGBA pixels as a PNG data URL."""
    image = Image.new("RGBA", (width, height))
    for index, pixel in enumerate(pixels):
        image.putpixel((index % width, index // width), pixel)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def decode_pixels(src: str) -> list[tuple[int, int, int, int]]:
    """Decode a PNG data URL to RGBA pixels."""
    raw = base64.b64decode(src.partition(",")[2])
    with Image.open(io.BytesIO(raw)) as image:
        rgba = image.convert("RGBA")
        return [rgba.getpixel((x, y)) for y in range(rgba.height) for x in range(rgba.width)]


def flip(shape, center: Point, axis: str):
    return asyncio.run(flip_shape(shape, center, axis))


class TestFlipPoint:
    """Tests for flip_point."""

    def test_horizontal(self) -> None:
        """Test a horizontal flip mirrors x only."""
        assert flip_point(Point(3, 7), Point(5, 0), Axis.HORIZONTAL) == Point(7, 7)

    def test_vertical(self) -> None:
        """Test a vertical flip mirrors y only."""
        assert flip_point(Point(3, 7), Point(0, 5), Axis.VERTICAL) == Point(3, 3)


class TestFlipShape:
    """Tests for flip_shape."""

    def test_path_mirrors_handles(self) -> None:
        """Test paths mirror points and handles."""
        path = VectorPathShape(
            id="p",
            anchors=(Anchor(Point(1, 0), Point(0, 1), Point(2, -1)),),
        )
        flipped = flip(path, Point(0, 0), "horizontal")
        assert flipped.anchors[0] == Anchor(Point(-1, 0), Point(0, 1), Point(-2, -1))

    def test_brush(self) -> None:
        """Test brush points are mirrored."""
        brush = BrushShape(id="b", points=(Point(0, 0), Point(4, 2)))
        flipped = flip(brush, Point(0, 1), "vertical")
        assert flipped.points == (Point(0, 2), Point(4, 0))

    def test_arc_horizontal_swaps_endpoints(self) -> None:
        """Test a horizontal flip swaps start and end of an arc."""
        arc = ArcShape(id="a", points=(Point(0, 0), Point(2, 0), Point(1, 1)))
        flipped = flip(arc, Point(1, 0), "horizontal")
        assert flipped.points == (Point(0, 0), Point(2, 0), Point(1, 1))

    def test_arc_vertical_keeps_order(self) -> None:
        """Test a vertical flip keeps start and end in place."""
        arc = ArcShape(id="a", points=(Point(0, 0), Point(2, 0), Point(1, 1)))
        flipped = flip(arc, Point(0, 0), "vertical")
        assert flipped.points == (Point(0, 0), Point(2, 0), Point(1, -1))

    def test_box_records_mirror_in_scale(self) -> None:
        """Test boxes mirror their center and scale sign."""
        rect = RectangleShape(id="r", x=10, y=0, width=20, height=10, rotation=0.3)
        flipped = flip(rect, Point(0, 0), "horizontal")
        assert flipped.x == pytest.approx(-30)
        assert flipped.width == 20
        assert flipped.scale_x == -1
        assert flipped.scale_y == 1
        assert flipped.rotation == pytest.approx(-0.3)

    def test_vertical_box_flip(self) -> None:
        """Test a vertical flip records the mirror in scale_y."""
        ellipse = EllipseShape(id="e", x=0, y=10, width=5, height=10)
        flipped = flip(ellipse, Point(0, 0), "vertical")
        assert flipped.y == pytest.approx(-20)
        assert flipped.scale_y == -1
        assert flipped.scale_x == 1

    def test_double_flip_restores(self) -> None:
        """Test flipping twice restores position and rotation."""
        rect = RectangleShape(id="r", x=3, y=4, width=20, height=10, rotation=math.pi / 6)
        center = Point(7, 1)
        twice = flip(flip(rect, center, "horizontal"), center, "horizontal")
        assert twice.x == pytest.approx(rect.x)
        assert twice.y == pytest.approx(rect.y)
        assert twice.rotation == pytest.approx(rect.rotation)
        assert twice.scale_x == rect.scale_x

    def test_text_swaps_alignment(self) -> None:
        """Test text mirrors its box and swaps left/right alignment."""
        text = TextShape(id="t", x=0, y=0, width=40, height=10, text="hi", text_align="left")
        flipped = flip(text, Point(50, 0), "horizontal")
        assert flipped.x == 60
        assert flipped.text_align == "right"
        assert flipped.scale_x == 1

    def test_group_keeps_order(self) -> None:
        """Test groups flip every child in paint order."""
        group = GroupShape(
            id="g",
            children=(
                BrushShape(id="b1", points=(Point(1, 0),)),
                BrushShape(id="b2", points=(Point(2, 0),)),
            ),
        )
        flipped = flip(group, Point(0, 0), "horizontal")
        assert [c.id for c in flipped.children] == ["b1", "b2"]
        assert flipped.children[1].points == (Point(-2, 0),)

    def test_input_unchanged(self) -> None:
        """Test flipping never modifies its input."""
        rect = RectangleShape(id="r", x=10, y=0, width=20, height=10)
        flip(rect, Point(0, 0), "horizontal")
        assert rect.x == 10
        assert rect.scale_x == 1


class TestFlipImage:
    """Tests for mirroring embedded images."""

    def test_mirror_image_data_horizontal(self) -> None:
        """Test a horizontal mirror swaps columns."""
        src = png_data_url([RED, BLUE], 2, 1)
        assert decode_pixels(mirror_image_data(src, Axis.HORIZONTAL)) == [BLUE, RED]

    def test_mirror_image_data_vertical(self) -> None:
        """Test a vertical mirror swaps rows."""
        src = png_data_url([RED, BLUE], 1, 2)
        assert decode_pixels(mirror_image_data(src, Axis.VERTICAL)) == [BLUE, RED]

    def test_flip_image_shape(self) -> None:
        """Test image shapes mirror both box and raster."""
        image = ImageShape(
            id="i", x=0, y=0, width=2, height=1, src=png_data_url([RED, BLUE], 2, 1)
        )
        flipped = flip(image, Point(10, 0), "horizontal")
        assert flipped.x == pytest.approx(18)
        assert flipped.src.startswith("data:image/png;base64,")
        assert decode_pixels(flipped.src) == [BLUE, RED]

    def test_image_without_src(self) -> None:
        """Test an image with only a file reference cannot be mirrored."""
        image = ImageShape(id="i", x=0, y=0, width=2, height=1, file_id="f1")
        with pytest.raises(ImageFlipError) as exc_info:
            flip(image, Point(0, 0), "horizontal")
        assert exc_info.value.shape_id == "i"

    def test_invalid_data_url(self) -> None:
        """Test undecodable image data raises ImageFlipError."""
        image = ImageShape(id="i", x=0, y=0, width=2, height=1, src="https://example.com/a.png")
        with pytest.raises(ImageFlipError):
            flip(image, Point(0, 0), "horizontal")

    def test_corrupt_image_bytes(self) -> None:
        """Test data that is not an image raises ImageFlipError."""
        src = "data:image/png;base64," + base64.b64encode(b"not an image").decode("ascii")
        image = ImageShape(id="i", x=0, y=0, width=2, height=1, src=src)
        with pytest.raises(ImageFlipError):
            flip(image, Point(0, 0), "horizontal")
