"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from vectorkit.domain import BBox

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]vectorkit[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def _format_bbox(bbox: BBox | None) -> str:
    if bbox is None:
        return "empty"
    return (
        f"x={bbox.x:.2f} y={bbox.y:.2f} "
        f"{SYM_DOT} {bbox.width:.2f} × {bbox.height:.2f}"
    )


def print_document_info(
    document_path: str,
    shape_count: int,
    tool_counts: dict[str, int],
    bbox: BBox | None,
) -> None:
    """Print a summary of a shape document.

    Args:
        document_path: Path to the document
        shape_count: Number of top-level shapes
        tool_counts: Number of shapes per tool, groups included recursively
        bbox: Union bounding box of all shapes (None when empty)
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(document_path)
    console.print(line)
    console.print(f"  {shape_count:,} shapes {SYM_DOT} bounds {_format_bbox(bbox)}")

    if tool_counts:
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("tool")
        table.add_column("count", justify="right")
        for tool, count in sorted(tool_counts.items()):
            table.add_row(tool, str(count))
        console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    total_time_s: float,
    shapes_in: int,
    shapes_out: int,
    skipped: int = 0,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output document
        total_time_s: Total run time in seconds
        shapes_in: Number of shapes read
        shapes_out: Number of shapes written
        skipped: Number of shapes the operation did not apply to
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    summary = f"  {shapes_in} in {SYM_DOT} {shapes_out} out"
    if skipped:
        summary += f" {SYM_DOT} {skipped} skipped"
    console.print(summary)


def print_no_result(operation: str) -> None:
    """Print a notice that an operation produced nothing to write."""
    console.print(f"\n{SYM_DOT} [bold]{operation}[/bold] produced no result; nothing written")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
