"""Exception hierarchy for vectorkit.

Degenerate geometry is never an error in vectorkit; these exceptions cover
malformed input data, unsupported operands and failures of external
capabilities (image codecs, document files).
"""


class VectorKitError(Exception):
    """Base exception for all vectorkit errors."""

    pass


class ShapeError(VectorKitError):
    """Errors related to shape data."""

    pass


class ShapeValidationError(ShapeError):
    """Shape data violates a model invariant."""

    def __init__(self, shape_id: str, reason: str) -> None:
        self.shape_id = shape_id
        self.reason = reason
        super().__init__(f"Invalid shape '{shape_id}': {reason}")


class UnknownShapeError(ShapeError):
    """Shape dictionary carries a tool tag that is not part of the model."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Unknown shape tool '{tool}'")


class UnsupportedShapeError(ShapeError):
    """Operation does not apply to the given shape variant."""

    def __init__(self, operation: str, tool: str) -> None:
        self.operation = operation
        self.tool = tool
        super().__init__(f"Operation '{operation}' does not support '{tool}' shapes")


class GeometryError(VectorKitError):
    """Errors in geometric calculations."""

    pass


class ClippingError(GeometryError):
    """The polygon clipping backend failed on its input."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Clipping '{operation}' failed: {reason}")


class ImageError(VectorKitError):
    """Errors related to raster image content."""

    pass


class ImageFlipError(ImageError):
    """Decoding, mirroring or re-encoding an image failed."""

    def __init__(self, shape_id: str, reason: str) -> None:
        self.shape_id = shape_id
        self.reason = reason
        super().__init__(f"Failed to flip image '{shape_id}': {reason}")


class DocumentError(VectorKitError):
    """Errors related to shape documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a shape document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving a shape document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")
