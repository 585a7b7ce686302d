"""Planar clipping backend for boolean operations.

The boolean engine talks to clipping through the ``PathClipper`` protocol,
so any polygon library can stand behind it. ``ShapelyClipper`` is the
implementation shipped with vectorkit: bezier segments are flattened to
polylines and handed to shapely, and result rings come back as lists of
points.
"""

from typing import Protocol

import shapely
from shapely.errors import GEOSException
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from vectorkit.config import BooleanConfig
from vectorkit.core.geometry import flatten_path
from vectorkit.domain import Point, VectorPathShape
from vectorkit.exceptions import ClippingError


class PathClipper(Protocol):
    """Planar set operations over filled regions.

    Regions are opaque to the boolean engine; it only builds them from
    paths, combines them and reads back their contours.
    """

    def region_from_path(self, path: VectorPathShape) -> object: ...

    def unite(self, a: object, b: object) -> object: ...

    def subtract(self, a: object, b: object) -> object: ...

    def intersect(self, a: object, b: object) -> object: ...

    def exclude(self, a: object, b: object) -> object: ...

    def divide(self, a: object, b: object) -> list[object]: ...

    def is_empty(self, region: object) -> bool: ...

    def contours(self, region: object) -> list[list[Point]]: ...


def _polygons(geometry: BaseGeometry) -> list[Polygon]:
    if isinstance(geometry, Polygon):
        return [] if geometry.is_empty else [geometry]
    if isinstance(geometry, (MultiPolygon, GeometryCollection)):
        result: list[Polygon] = []
        for part in geometry.geoms:
            result.extend(_polygons(part))
        return result
    # Points and lines enclose nothing
    return []


def _ring_points(coords) -> list[Point]:
    points = [Point(float(x), float(y)) for x, y in coords]
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    return points


class ShapelyClipper:
    """PathClipper backed by shapely (GEOS).

    Attributes:
        config: Flattening tolerance and repair settings
    """

    def __init__(self, config: BooleanConfig | None = None) -> None:
        self.config = config or BooleanConfig()

    def region_from_path(self, path: VectorPathShape) -> BaseGeometry:
        """Build a filled region from a path, treating it as closed.

        Self-intersecting outlines are repaired with ``make_valid`` when
        ``repair_invalid`` is set. Paths with fewer than three distinct
        points give an empty region.
        """
        points = flatten_path(list(path.anchors), self.config.flatten_tolerance, is_closed=True)
        if len(set(points)) < 3:
            return Polygon()

        polygon = Polygon([p.to_tuple() for p in points])
        if self.config.repair_invalid and not polygon.is_valid:
            return shapely.make_valid(polygon)
        return polygon

    def _run(self, operation: str, a: BaseGeometry, b: BaseGeometry) -> BaseGeometry:
        methods = {
            "unite": a.union,
            "subtract": a.difference,
            "intersect": a.intersection,
            "exclude": a.symmetric_difference,
        }
        try:
            return methods[operation](b)
        except GEOSException as e:
            raise ClippingError(operation, str(e)) from e

    def unite(self, a: BaseGeometry, b: BaseGeometry) -> BaseGeometry:
        return self._run("unite", a, b)

    def subtract(self, a: BaseGeometry, b: BaseGeometry) -> BaseGeometry:
        return self._run("subtract", a, b)

    def intersect(self, a: BaseGeometry, b: BaseGeometry) -> BaseGeometry:
        return self._run("intersect", a, b)

    def exclude(self, a: BaseGeometry, b: BaseGeometry) -> BaseGeometry:
        return self._run("exclude", a, b)

    def divide(self, a: BaseGeometry, b: BaseGeometry) -> list[BaseGeometry]:
        """Split a into the pieces inside b and the pieces outside b.

        Returns:
            Individual polygons, inside pieces first, empty pieces dropped
        """
        inside = self._run("intersect", a, b)
        outside = self._run("subtract", a, b)
        return [piece for piece in _polygons(inside) + _polygons(outside) if not self.is_empty(piece)]

    def is_empty(self, region: BaseGeometry) -> bool:
        """Check whether a region encloses no area."""
        return region.is_empty or region.area <= 0.0

    def contours(self, region: BaseGeometry) -> list[list[Point]]:
        """List every ring of a region as an open point list.

        Each polygon contributes its exterior followed by its holes.
        """
        rings: list[list[Point]] = []
        for polygon in _polygons(region):
            rings.append(_ring_points(polygon.exterior.coords))
            for interior in polygon.interiors:
                rings.append(_ring_points(interior.coords))
        return [ring for ring in rings if len(ring) >= 3]
