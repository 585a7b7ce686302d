"""Logging utilities for vectorkit."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

_HANDLER_NAME = "vectorkit"


@dataclass
class OperationStats:
    """Statistics from a CLI run."""

    shapes_in: int = 0
    shapes_out: int = 0
    skipped_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate operation duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"vectorkit_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )
    file_handler.set_name(_HANDLER_NAME)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Repeated runs in one process replace the handlers of the previous run
    for handler in [h for h in root_logger.handlers if h.get_name() == _HANDLER_NAME]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_HANDLER_NAME)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("vectorkit")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class OperationLogger:
    """Logger for tracking CLI operations and their statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def log_document_loaded(self, path: str, shape_count: int) -> None:
        """Log a loaded shape document."""
        self._logger.debug("Document loaded", path=path, shapes=shape_count)
        self._stats.shapes_in += shape_count

    def log_operation_complete(
        self,
        operation: str,
        shapes_out: int,
        duration_ms: float,
    ) -> None:
        """Log a successful kernel operation."""
        self._logger.info(
            "Operation complete",
            operation=operation,
            shapes=shapes_out,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.shapes_out += shapes_out

    def log_shape_skipped(self, shape_id: str, reason: str) -> None:
        """Log a shape the operation did not apply to."""
        self._logger.debug("Shape skipped", shape=shape_id, reason=reason)
        self._stats.skipped_count += 1

    def log_operation_error(
        self,
        operation: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a failed kernel operation."""
        self._logger.error(
            "Operation failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((operation, str(error)))

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
