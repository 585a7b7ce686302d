"""Boolean operations over shape outlines.

This module combines shapes as filled regions:
- unite, subtract, intersect, exclude: fold the operands left to right
- trim: cut the first operand by every following one, keeping all pieces

Operands are converted to pen paths first. Groups cannot be converted and
are dropped. Every ring of the result (outer boundaries and holes alike)
becomes its own closed path with the first operand's style.
"""

import logging

from vectorkit.config import BooleanConfig, BooleanOperation, FittingConfig, GeometryConfig
from vectorkit.core.clipper import PathClipper, ShapelyClipper
from vectorkit.core.convert import to_vector_path
from vectorkit.domain import Anchor, Point, Shape, VectorPathShape, new_shape_id, style_fields

logger = logging.getLogger(__name__)


class BooleanEngine:
    """Runs boolean operations through a pluggable clipping backend.

    Attributes:
        config: Boolean operation settings
        clipper: Planar clipping backend
        geometry: Geometry tolerances used when converting operands
        fitting: Fitting settings used when converting brush operands
    """

    def __init__(
        self,
        config: BooleanConfig | None = None,
        clipper: PathClipper | None = None,
        geometry: GeometryConfig | None = None,
        fitting: FittingConfig | None = None,
    ) -> None:
        self.config = config or BooleanConfig()
        self.clipper = clipper or ShapelyClipper(self.config)
        self.geometry = geometry
        self.fitting = fitting

    def _convert_operands(self, shapes: list[Shape]) -> list[VectorPathShape]:
        paths = []
        for shape in shapes:
            path = to_vector_path(shape, self.geometry, self.fitting)
            if path is None:
                logger.debug("Dropping boolean operand '%s' (%s)", shape.id, shape.tool)
                continue
            paths.append(path)
        return paths

    def _fold(self, op: BooleanOperation, regions: list[object]) -> object | None:
        combine = {
            BooleanOperation.UNITE: self.clipper.unite,
            BooleanOperation.SUBTRACT: self.clipper.subtract,
            BooleanOperation.INTERSECT: self.clipper.intersect,
            BooleanOperation.EXCLUDE: self.clipper.exclude,
        }[op]

        result = regions[0]
        for index, region in enumerate(regions[1:], start=1):
            result = combine(result, region)
            if self.clipper.is_empty(result):
                logger.debug("Boolean %s became empty at operand %d", op.value, index)
                return None
        return result

    def _trim(self, regions: list[object]) -> list[object]:
        fragments = [regions[0]]
        for region in regions[1:]:
            next_fragments = []
            for fragment in fragments:
                next_fragments.extend(self.clipper.divide(fragment, region))
            fragments = [f for f in next_fragments if not self.clipper.is_empty(f)]
        logger.debug("Trim produced %d fragments", len(fragments))
        return fragments

    def _contour_shape(self, source: VectorPathShape, contour: list[Point]) -> VectorPathShape:
        return VectorPathShape(
            id=new_shape_id("bool"),
            tool="pen",
            anchors=tuple(Anchor.corner(p) for p in contour),
            is_closed=True,
            **style_fields(source),
        )

    def run(self, shapes: list[Shape], op: BooleanOperation | str) -> list[VectorPathShape] | None:
        """Apply a boolean operation to shapes in order.

        Args:
            shapes: Operands; the first one is the base and donates its style
            op: Operation name

        Returns:
            One closed pen path per result contour, or None when fewer than
            two operands convert or the result is empty
        """
        op = BooleanOperation(op)
        paths = self._convert_operands(shapes)
        if len(paths) < 2:
            logger.debug("Boolean %s needs two operands, got %d", op.value, len(paths))
            return None

        regions = [self.clipper.region_from_path(p) for p in paths]

        if op is BooleanOperation.TRIM:
            pieces = self._trim(regions)
        else:
            result = self._fold(op, regions)
            pieces = [] if result is None else [result]

        contours = [c for piece in pieces for c in self.clipper.contours(piece)]
        if not contours:
            return None

        return [self._contour_shape(paths[0], contour) for contour in contours]


def boolean_op(shapes: list[Shape], op: BooleanOperation | str) -> list[VectorPathShape] | None:
    """Apply a boolean operation with the default engine.

    Curved operands are flattened before clipping, so every result contour
    is a polyline of corner anchors: an ellipse comes back as many short
    straight segments rather than four bezier arcs. Lower
    ``BooleanConfig.flatten_tolerance`` (through ``BooleanEngine``) for a
    closer outline at the cost of more anchors.

    Examples:
        >>> from vectorkit.domain import RectangleShape
        >>> a = RectangleShape(id="a", x=0, y=0, width=1, height=1)
        >>> b = RectangleShape(id="b", x=2, y=0, width=1, height=1)
        >>> boolean_op([a, b], "intersect") is None
        True
    """
    return BooleanEngine().run(shapes, op)
