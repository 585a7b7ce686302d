"""vectorkit - Geometry kernel for a 2D vector-drawing editor.

vectorkit provides pure, side-effect-free operations over an immutable shape
model: affine transforms, three-point arc math, shape-to-bezier conversion,
boolean operations on outlines, freehand stroke fitting and multi-shape
alignment.

Example:
    >>> from vectorkit.domain import Point, RectangleShape
    >>> from vectorkit.core import move_shape
    >>> rect = RectangleShape(id="r1", x=0, y=0, width=10, height=10)
    >>> move_shape(rect, 5, 5).x
    5
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
