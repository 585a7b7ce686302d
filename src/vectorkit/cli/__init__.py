"""Command-line interface for vectorkit.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- One command per kernel operation over JSON shape documents
- Quiet output mode
- Structured logs written to a file
- Detailed error reporting
"""

from vectorkit.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
