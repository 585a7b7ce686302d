"""Document reader for loading JSON shape documents.

This module provides the DocumentReader class for loading shape documents
and converting their dictionaries into domain models.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from vectorkit.domain import Shape, shape_from_dict
from vectorkit.exceptions import DocumentLoadError, ShapeError

DOCUMENT_TYPE = "vectorkit/shapes"
DOCUMENT_VERSION = 1


class DocumentReader:
    """Loads shape documents and yields domain shapes.

    A document is either a JSON object
    ``{"type": "vectorkit/shapes", "version": 1, "shapes": [...]}`` or a bare
    JSON list of shape dictionaries.

    Example:
        reader = DocumentReader(Path("drawing.json"))
        reader.load()
        for shape in reader.iter_shapes():
            print(shape.id)
    """

    def __init__(self, document_path: Path) -> None:
        """Initialize the document reader.

        Args:
            document_path: Path to the JSON document
        """
        self._document_path = document_path
        self._raw_shapes: list[dict[str, Any]] | None = None

    def load(self) -> None:
        """Load and validate the document envelope.

        Raises:
            DocumentLoadError: If the file is missing, is not valid JSON or
                is not a shape document
        """
        path = str(self._document_path)
        if not self._document_path.exists():
            raise DocumentLoadError(path, "file not found")

        try:
            data = json.loads(self._document_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(path, str(e)) from e
        except json.JSONDecodeError as e:
            raise DocumentLoadError(path, f"invalid JSON: {e}") from e

        if isinstance(data, dict):
            if data.get("type") != DOCUMENT_TYPE:
                raise DocumentLoadError(path, f"unexpected document type {data.get('type')!r}")
            if data.get("version") != DOCUMENT_VERSION:
                raise DocumentLoadError(path, f"unsupported version {data.get('version')!r}")
            data = data.get("shapes", [])

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise DocumentLoadError(path, "expected a list of shape objects")

        self._raw_shapes = data

    @property
    def shape_count(self) -> int:
        """Return the number of top-level shapes.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._raw_shapes is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        return len(self._raw_shapes)

    def iter_shapes(self) -> Iterator[Shape]:
        """Iterate over top-level shapes in paint order.

        Yields:
            Shape domain models

        Raises:
            RuntimeError: If the document has not been loaded yet
            DocumentLoadError: If a shape dictionary is malformed
        """
        if self._raw_shapes is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        for index, data in enumerate(self._raw_shapes):
            try:
                yield shape_from_dict(data)
            except ShapeError as e:
                raise DocumentLoadError(str(self._document_path), f"shape #{index}: {e}") from e

    def read_shapes(self) -> list[Shape]:
        """Load the document if needed and return all shapes."""
        if self._raw_shapes is None:
            self.load()
        return list(self.iter_shapes())
