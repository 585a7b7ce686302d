"""Document I/O layer for vectorkit.

This module handles reading and writing JSON shape documents. It keeps the
file format out of the kernel, which only ever sees domain shapes.

Key responsibilities:
- Load versioned shape documents or bare shape lists
- Convert shape dictionaries to domain models
- Write shapes back with a versioned envelope

Key classes:
- DocumentReader: Load documents and yield shapes
- DocumentWriter: Save shapes
"""

from vectorkit.io.reader import DOCUMENT_TYPE, DOCUMENT_VERSION, DocumentReader
from vectorkit.io.writer import DocumentWriter

__all__ = [
    "DOCUMENT_TYPE",
    "DOCUMENT_VERSION",
    "DocumentReader",
    "DocumentWriter",
]
