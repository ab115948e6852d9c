"""Logging utilities for Rasterlite."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class OperationStats:
    """Statistics from a CLI run over one or more images."""

    processed_count: int = 0
    failed_count: int = 0
    bytes_written: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
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

    logger = structlog.get_logger("rasterlite")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class OperationLogger:
    """Logger for tracking per-image progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def start(self) -> None:
        """Mark the start of a run."""
        self._stats.start_time = time.time()

    def finish(self) -> None:
        """Mark the end of a run."""
        self._stats.end_time = time.time()

    def log_image_loaded(self, path: str, width: int, height: int, channels: int) -> None:
        """Log a decoded input image."""
        self._logger.debug(
            "Image loaded",
            path=path,
            width=width,
            height=height,
            channels=channels,
        )

    def log_image_written(self, path: str, size_bytes: int, duration_ms: float) -> None:
        """Log a successfully written output image."""
        self._logger.info(
            "Image written",
            path=path,
            size_bytes=size_bytes,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.bytes_written += size_bytes

    def log_image_error(self, path: str, error: Exception) -> None:
        """Log a failed image operation."""
        self._logger.error(
            "Image operation failed",
            path=path,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.failed_count += 1
        self._stats.errors.append((path, str(error)))

    @property
    def stats(self) -> OperationStats:
        """Get current run statistics."""
        return self._stats
