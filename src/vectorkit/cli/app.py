"""CLI application entry point for vectorkit.

This module provides the main CLI interface using Typer. Every command reads
a JSON shape document, applies one kernel operation and writes the result to
a new document.
"""

import asyncio
import time
import traceback
from collections import Counter
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Annotated, TypeVar

import typer

from vectorkit import __version__
from vectorkit.cli.output import (
    console,
    print_document_info,
    print_error,
    print_header,
    print_no_result,
    print_step,
    print_success,
)
from vectorkit.config import (
    Alignment,
    Axis,
    BooleanOperation,
    DistributeMode,
    LoggingConfig,
    VectorKitSettings,
)
from vectorkit.core import (
    BooleanEngine,
    align_shapes,
    distribute_shapes,
    flip_shape,
    simplify_path,
    to_vector_path,
    union_bounding_box,
)
from vectorkit.domain import GroupShape, Shape, VectorPathShape
from vectorkit.exceptions import DocumentLoadError, DocumentSaveError, VectorKitError
from vectorkit.io import DocumentReader, DocumentWriter
from vectorkit.utils import OperationLogger, configure_logging

E = TypeVar("E", bound=Enum)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="vectorkit",
    help="Apply geometry kernel operations to JSON shape documents.",
    add_completion=False,
    no_args_is_help=True,
)

DocumentArg = Annotated[
    Path,
    typer.Argument(
        help="Path to input JSON shape document",
        show_default=False,
    ),
]
OutputOpt = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output path (default: {name}-{operation}.json)",
    ),
]
LogFileOpt = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOpt = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOpt = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]vectorkit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Apply geometry kernel operations to JSON shape documents."""


def _parse_choice(enum_cls: type[E], value: str, option: str) -> E:
    """Convert a CLI string to an enum member or exit with a usage error."""
    try:
        return enum_cls(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1)


def _tool_counts(shapes: list[Shape]) -> Counter:
    """Count shapes per tool, descending into groups."""
    counts: Counter = Counter()
    for shape in shapes:
        counts[shape.tool] += 1
        if isinstance(shape, GroupShape):
            counts.update(_tool_counts(list(shape.children)))
    return counts


def _build_settings(log_file: Path | None, log_level: str) -> VectorKitSettings:
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    return VectorKitSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
        ),
    )


def _run_operation(
    document: Path,
    output: Path | None,
    operation: str,
    apply: Callable[[list[Shape], OperationLogger], list[Shape] | None],
    settings: VectorKitSettings,
    quiet: bool,
) -> None:
    """Load a document, apply one operation and save the result.

    Args:
        document: Input document path
        output: Output path, or None for the default next to the input
        operation: Operation tag used in logs and the default output name
        apply: Callable that transforms the loaded shapes; returning None
            means there is nothing to write
        settings: Application settings
        quiet: Suppress console output
    """
    if not quiet:
        print_header(__version__)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    op_logger = OperationLogger(logger)
    stats = op_logger.stats
    stats.start_time = time.perf_counter()

    try:
        if not quiet:
            print_step("Loading document")

        reader = DocumentReader(document)
        shapes = reader.read_shapes()
        op_logger.log_document_loaded(str(document), len(shapes))

        if not quiet:
            print_document_info(
                document_path=str(document),
                shape_count=len(shapes),
                tool_counts=dict(_tool_counts(shapes)),
                bbox=union_bounding_box(shapes, config=settings.geometry),
            )
            print_step(f"Applying {operation}")

        op_start = time.perf_counter()
        result = apply(shapes, op_logger)
        op_logger.log_operation_complete(
            operation,
            shapes_out=0 if result is None else len(result),
            duration_ms=(time.perf_counter() - op_start) * 1000,
        )

        if result is None:
            if not quiet:
                print_no_result(operation)
            raise typer.Exit(code=0)

        output_path = output or DocumentWriter.get_output_path(document, operation)
        DocumentWriter(output_path).save(result)
        stats.end_time = time.perf_counter()

        if not quiet:
            print_success(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                shapes_in=stats.shapes_in,
                shapes_out=stats.shapes_out,
                skipped=stats.skipped_count,
            )

    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1)
    except DocumentSaveError as e:
        print_error(f"Could not save document: {e.reason}")
        raise typer.Exit(code=1)
    except VectorKitError as e:
        op_logger.log_operation_error(operation, e, traceback.format_exc())
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        op_logger.log_operation_error(operation, e, traceback.format_exc())
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def info(document: DocumentArg) -> None:
    """Show a summary of a shape document.

    Example:
        vectorkit info drawing.json
    """
    try:
        reader = DocumentReader(document)
        shapes = reader.read_shapes()
    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1)

    print_document_info(
        document_path=str(document),
        shape_count=len(shapes),
        tool_counts=dict(_tool_counts(shapes)),
        bbox=union_bounding_box(shapes),
    )


@app.command()
def boolean(
    document: DocumentArg,
    op: Annotated[
        str,
        typer.Option(
            "--op",
            help="Boolean operation (unite|subtract|intersect|exclude|trim)",
        ),
    ] = "unite",
    output: OutputOpt = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    quiet: QuietOpt = False,
) -> None:
    """Combine every shape of a document with a boolean operation.

    Shapes are folded in paint order; the first one is the base and donates
    its style to the result paths.

    Example:
        vectorkit boolean drawing.json --op subtract
    """
    operation = _parse_choice(BooleanOperation, op, "operation")
    settings = _build_settings(log_file, log_level)
    engine = BooleanEngine(
        config=settings.boolean,
        geometry=settings.geometry,
        fitting=settings.fitting,
    )

    def apply(shapes: list[Shape], _: OperationLogger) -> list[Shape] | None:
        result = engine.run(shapes, operation)
        return None if result is None else list(result)

    _run_operation(document, output, operation.value, apply, settings, quiet)


@app.command()
def align(
    document: DocumentArg,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Alignment (left|right|h-center|top|bottom|v-center)",
        ),
    ] = "left",
    output: OutputOpt = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    quiet: QuietOpt = False,
) -> None:
    """Align every shape of a document to an edge or center of their bounds.

    Example:
        vectorkit align drawing.json --mode h-center
    """
    alignment = _parse_choice(Alignment, mode, "alignment")
    settings = _build_settings(log_file, log_level)

    def apply(shapes: list[Shape], _: OperationLogger) -> list[Shape]:
        return align_shapes(shapes, alignment, settings.geometry)

    _run_operation(document, output, "align", apply, settings, quiet)


@app.command()
def distribute(
    document: DocumentArg,
    axis: Annotated[
        str,
        typer.Option(
            "--axis",
            "-a",
            help="Distribution axis (horizontal|vertical)",
        ),
    ] = "horizontal",
    spacing: Annotated[
        float | None,
        typer.Option(
            "--spacing",
            "-s",
            help="Fixed gap between shapes (default: spread evenly)",
        ),
    ] = None,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Measure gaps between edges or centers (edges|centers)",
        ),
    ] = "edges",
    output: OutputOpt = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    quiet: QuietOpt = False,
) -> None:
    """Distribute every shape of a document along an axis.

    Example:
        vectorkit distribute drawing.json --axis vertical --spacing 10
    """
    distribute_axis = _parse_choice(Axis, axis, "axis")
    distribute_mode = _parse_choice(DistributeMode, mode, "mode")
    settings = _build_settings(log_file, log_level)

    def apply(shapes: list[Shape], _: OperationLogger) -> list[Shape]:
        return distribute_shapes(
            shapes, distribute_axis, spacing, distribute_mode, settings.geometry
        )

    _run_operation(document, output, "distribute", apply, settings, quiet)


@app.command()
def simplify(
    document: DocumentArg,
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Maximum deviation of removed anchors",
            min=0.0,
        ),
    ] = 1.0,
    output: OutputOpt = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    quiet: QuietOpt = False,
) -> None:
    """Drop path anchors that deviate less than a tolerance.

    Only pen and line paths are simplified; other shapes are written back
    unchanged.

    Example:
        vectorkit simplify drawing.json --tolerance 2
    """
    settings = _build_settings(log_file, log_level)

    def apply(shapes: list[Shape], op_logger: OperationLogger) -> list[Shape]:
        simplified: list[Shape] = []
        for shape in shapes:
            if isinstance(shape, VectorPathShape):
                simplified.append(simplify_path(shape, tolerance))
            else:
                op_logger.log_shape_skipped(shape.id, f"{shape.tool} has no anchors")
                simplified.append(shape)
        return simplified

    _run_operation(document, output, "simplify", apply, settings, quiet)


@app.command()
def convert(
    document: DocumentArg,
    output: OutputOpt = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    quiet: QuietOpt = False,
) -> None:
    """Convert every shape of a document to a pen path.

    Groups cannot be converted and are written back unchanged.

    Example:
        vectorkit convert drawing.json
    """
    settings = _build_settings(log_file, log_level)

    def apply(shapes: list[Shape], op_logger: OperationLogger) -> list[Shape]:
        converted: list[Shape] = []
        for shape in shapes:
            path = to_vector_path(shape, settings.geometry, settings.fitting)
            if path is None:
                op_logger.log_shape_skipped(shape.id, f"{shape.tool} cannot be converted")
                converted.append(shape)
            else:
                converted.append(path)
        return converted

    _run_operation(document, output, "convert", apply, settings, quiet)


async def _flip_all(shapes: list[Shape], axis: Axis) -> list[Shape]:
    """Mirror shapes about the center of their common bounds."""
    bounds = union_bounding_box(shapes)
    if bounds is None:
        return shapes
    center = bounds.center
    return list(await asyncio.gather(*(flip_shape(s, center, axis) for s in shapes)))


@app.command()
def flip(
    document: DocumentArg,
    axis: Annotated[
        str,
        typer.Option(
            "--axis",
            "-a",
            help="Mirror axis (horizontal|vertical)",
        ),
    ] = "horizontal",
    output: OutputOpt = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    quiet: QuietOpt = False,
) -> None:
    """Mirror every shape of a document about the center of their bounds.

    Embedded images are re-encoded mirrored.

    Example:
        vectorkit flip drawing.json --axis vertical
    """
    flip_axis = _parse_choice(Axis, axis, "axis")
    settings = _build_settings(log_file, log_level)

    def apply(shapes: list[Shape], _: OperationLogger) -> list[Shape]:
        return asyncio.run(_flip_all(shapes, flip_axis))

    _run_operation(document, output, "flip", apply, settings, quiet)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
