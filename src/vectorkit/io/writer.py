"""Document writer for saving JSON shape documents."""

import json
from pathlib import Path

from vectorkit.domain import Shape, shape_to_dict
from vectorkit.exceptions import DocumentSaveError
from vectorkit.io.reader import DOCUMENT_TYPE, DOCUMENT_VERSION


class DocumentWriter:
    """Writes shapes as a versioned JSON shape document.

    Example:
        writer = DocumentWriter(Path("out.json"))
        writer.save(shapes)
    """

    def __init__(self, output_path: Path, indent: int | None = 2) -> None:
        """Initialize the document writer.

        Args:
            output_path: Path where the document will be saved
            indent: JSON indentation (None for compact output)
        """
        self._output_path = output_path
        self._indent = indent

    @staticmethod
    def to_document(shapes: list[Shape]) -> dict:
        """Build the JSON envelope for a list of shapes."""
        return {
            "type": DOCUMENT_TYPE,
            "version": DOCUMENT_VERSION,
            "shapes": [shape_to_dict(s) for s in shapes],
        }

    def save(self, shapes: list[Shape]) -> None:
        """Save shapes to the output path.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        text = json.dumps(self.to_document(shapes), indent=self._indent)
        try:
            self._output_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path, operation: str) -> Path:
        """Generate an output path tagged with the applied operation.

        Converts: drawing.json -> drawing-unite.json

        Args:
            input_path: Source document path
            operation: Operation tag appended to the stem

        Returns:
            Path next to the input with the tag before the extension
        """
        return input_path.parent / f"{input_path.stem}-{operation}{input_path.suffix or '.json'}"
