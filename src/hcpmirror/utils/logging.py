"""
Logging configuration for hcpmirror.

Console diagnostics are plain lines prefixed with the program name, written
to stderr. A file log with timestamps can be added from config.
"""

import logging
import sys
from pathlib import Path
from typing import Any

ROOT_LOGGER = "hcpmirror"
# Per-file copy/link/delete messages; silenced by --quiet
FSOPS_LOGGER = "hcpmirror.fsops"


class FileFormatter(logging.Formatter):
    """Formatter for file logs - clean and parseable."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with full exception info for errors."""
        result = super().format(record)

        if record.exc_info and not record.exc_text:
            import traceback

            result += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return result


class ProgramFormatter(logging.Formatter):
    """Console formatter: ``<program>: <message>``, warnings and errors tagged."""

    def __init__(self, program: str) -> None:
        super().__init__()
        self.program = program

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.ERROR:
            return f"{self.program}: ERROR: {message}"
        if record.levelno >= logging.WARNING:
            return f"{self.program}: WARNING: {message}"
        return f"{self.program}: {message}"


# Map string level names to logging constants
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(level: str | int) -> int:
    """
    Parse logging level from string or int.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int

    Returns:
        Logging level constant
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level_upper = level.upper()
        if level_upper in LEVEL_MAP:
            return LEVEL_MAP[level_upper]
    # Default to INFO if invalid
    return logging.INFO


def setup_logging(
    program: str = ROOT_LOGGER,
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    file_mode: str = "a",
    console_enabled: bool = True,
    use_rich: bool = False,
    quiet: bool = False,
) -> logging.Logger:
    """
    Setup logging configuration for hcpmirror.

    Args:
        program: Program name used as the console line prefix
        level: Logging level as string (DEBUG, INFO, etc.) or int (default: INFO)
        log_file: Optional file path to write logs to (default: None, console only)
        file_mode: File mode for file handler - 'a' for append, 'w' for overwrite
        console_enabled: Whether to enable console logging (default: True)
        use_rich: Whether to render console lines through rich's RichHandler
        quiet: Suppress per-file copy/link/delete messages

    Returns:
        Logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER)

    # Remove existing handlers to avoid duplicates across repeated CLI invocations
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_int = _parse_level(level)
    logger.setLevel(level_int)
    # Handlers live on the hcpmirror logger only
    logger.propagate = False

    if console_enabled:
        console_handler: logging.Handler
        if use_rich:
            from rich.console import Console
            from rich.logging import RichHandler

            console_handler = RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_level=False,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level_int)
        console_handler.setFormatter(ProgramFormatter(program))
        logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode=file_mode)
        # File captures everything the logger lets through
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    set_quiet(quiet)
    return logger


def setup_logging_from_config(
    config: dict[str, Any], program: str, quiet: bool = False, project_dir: Path | None = None
) -> logging.Logger:
    """
    Setup logging from hcpmirror configuration.

    Args:
        config: Configuration dictionary; settings are read from its 'logging' key
        program: Program name used as the console line prefix
        quiet: Suppress per-file copy/link/delete messages
        project_dir: Optional directory for resolving a relative log file path

    Returns:
        Logger instance
    """
    logging_config = config.get("logging") or {}

    level = logging_config.get("level", logging.INFO)
    file_mode = logging_config.get("file_mode", "a")
    console_enabled = logging_config.get("console_enabled", True)
    console_type = logging_config.get("console_type", "plain")

    log_file = logging_config.get("file") or logging_config.get("log_file")
    if log_file and project_dir:
        log_file = Path(log_file)
        if not log_file.is_absolute():
            log_file = project_dir / log_file

    return setup_logging(
        program=program,
        level=level,
        log_file=log_file,
        file_mode=file_mode,
        console_enabled=console_enabled,
        use_rich=console_type == "rich",
        quiet=quiet,
    )


def set_quiet(quiet: bool) -> None:
    """Silence (or restore) per-file operation logging."""
    logging.getLogger(FSOPS_LOGGER).setLevel(logging.WARNING if quiet else logging.NOTSET)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default: "hcpmirror")

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
