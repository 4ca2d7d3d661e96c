"""
Logging configuration for level_compiler.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..settings import CompilerSettings


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        formatted = super().format(record)

        # Color only the level name
        if record.levelname in formatted:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{reset}", 1
            )

        return formatted


class CSVFormatter(logging.Formatter):
    """CSV-safe formatter for file logging."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname.ljust(8)
        duration = f"{int(record.relativeCreated)} ms"
        module = record.name
        line_no = str(record.lineno)
        message = record.getMessage()

        # Standard CSV quote escaping
        message = message.replace('"', '""')

        return f'"{timestamp}";{level};"{duration}";"{module}";"{line_no}";"{message}"'


def setup_logging(settings: "CompilerSettings") -> None:
    """
    Setup application logging with console and file handlers.

    Args:
        settings: CompilerSettings instance for all logging configuration
    """
    console_enabled = settings.console_logging
    console_level = settings.console_log_level
    use_colors = settings.console_use_colors
    file_enabled = settings.file_logging
    log_file = settings.log_file_path

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    if console_enabled:
        fmt = "%(asctime)s : %(levelname)-8s : %(message)s"
        if use_colors:
            console_formatter: logging.Formatter = ColoredFormatter(fmt=fmt, datefmt="%H:%M:%S")
        else:
            console_formatter = logging.Formatter(fmt=fmt, datefmt="%H:%M:%S")

        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    # File handler with rotation - only if enabled
    log_path = None
    if file_enabled:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Keep going with console logging only
            root_logger.warning(f"Could not setup file logging: {e}")
            log_path = None

    # Suppress DEBUG logs from noisy libraries
    logging.getLogger("PIL").setLevel(logging.INFO)
    logging.getLogger("PIL.PngImagePlugin").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized")
    if console_enabled:
        logger.debug(f"Console logging: {console_level} (colors: {use_colors})")
    if file_enabled and log_path:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")
