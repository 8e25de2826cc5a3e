"""Logging configuration for SuffixPy using loguru."""

from pathlib import Path
import sys

from loguru import logger

_DEBUG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
_FILE_DEBUG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def _level_for(verbose: bool, debug: bool) -> str:
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return "WARNING"


def setup_logger(verbose: bool = False, debug: bool = False) -> None:
    """Configure loguru logger based on verbose and debug flags.

    Args:
        verbose: Enable INFO level messages
        debug: Enable DEBUG level messages (overrides verbose)
    """
    # Remove default handler
    logger.remove()

    # Timestamps and call sites only in debug mode
    format_str = _DEBUG_FORMAT if debug else "<level>{message}</level>"

    logger.add(
        sys.stderr,
        format=format_str,
        level=_level_for(verbose, debug),
        colorize=True,
    )


def is_debug_enabled() -> bool:
    """Check if debug logging is currently enabled.

    Returns:
        True if any handler logs DEBUG level messages, False otherwise
    """
    # pylint: disable=protected-access
    for handler in logger._core.handlers.values():
        if handler.levelno <= logger.level("DEBUG").no:
            return True
    return False


def add_log_file_handler(log_file: str | Path, verbose: bool = False, debug: bool = False) -> int:
    """Add a file handler next to the existing stderr handler.

    Args:
        log_file: Path to log file; parent directories are created
        verbose: Enable INFO level messages
        debug: Enable DEBUG level messages (overrides verbose)

    Returns:
        Handler id, usable with ``logger.remove``
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    return logger.add(
        log_path,
        format=_FILE_DEBUG_FORMAT if debug else "{message}",
        level=_level_for(verbose, debug),
        colorize=False,
        encoding="utf-8",
    )
