import logging
import sys
from typing import TextIO


def configure_logging(level: str = "INFO", *, stream: TextIO | None = None) -> None:
    """Configures the root logger for the CLI and any embedding dashboard."""
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Invalid log level: {level}, defaulting to INFO", file=sys.stderr)
        numeric_level = logging.INFO

    # Format: "2026-10-17 10:00:00 [INFO] prodtracker.data.normalizer: Normalized 12 jobs from plan.xlsx"
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # stderr, so report text on stdout stays pipeable
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates on repeated calls
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(handler)

    # openpyxl reports unsupported workbook features through warnings
    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)
