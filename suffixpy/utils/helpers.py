"""Shared file helpers."""

import os
from pathlib import Path
from typing import Callable, TextIO

from loguru import logger


def expand_file_path(filepath: str | None) -> str | None:
    """Resolve ``~`` in a text, pattern, output or log path; empty means unset."""
    return os.path.expanduser(filepath) if filepath else None


def read_text_file(filepath: str, description: str = "text file") -> str:
    """Read a whole UTF-8 file, logging a hint before re-raising on failure.

    Args:
        filepath: Path to the file (may contain ~)
        description: What the file is, for error messages

    Returns:
        File contents

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    filepath = expand_file_path(filepath) or filepath
    try:
        with open(filepath, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        logger.error(f"✗ {description.capitalize()} not found: {filepath}")
        logger.error("  Please check the file path and try again")
        raise
    except PermissionError:
        logger.error(f"✗ Permission denied reading {description}: {filepath}")
        logger.error("  Please check file permissions and try again")
        raise
    except UnicodeDecodeError as e:
        logger.error(f"✗ Encoding error reading {filepath}: {e}")
        logger.error("  Please ensure the file is UTF-8 encoded")
        raise


def load_pattern_list(filepath: str | None) -> list[str]:
    """Load patterns from a file, one per line, skipping blank lines.

    Leading and trailing spaces are part of a pattern; only the line break
    is removed.
    """
    if not filepath:
        return []

    content = read_text_file(filepath, "pattern file")
    patterns = []
    for line in content.splitlines():
        if line.strip():
            patterns.append(line)
    return patterns


def ensure_directory_exists(dir_path: str | Path, description: str = "match file") -> None:
    """Create the directory that will hold a match file or run log.

    Raises:
        PermissionError: If the directory cannot be created
        OSError: If the path exists as a file or cannot be created otherwise
    """
    try:
        Path(dir_path).mkdir(parents=True, exist_ok=True)
    except PermissionError:
        logger.error(f"✗ Cannot create the {description} directory {dir_path}: permission denied")
        logger.error("  Please point --output at a writable location")
        raise
    except OSError as e:
        logger.error(f"✗ Cannot create the {description} directory {dir_path}: {e}")
        raise


def write_file_safely(
    file_path: str | Path,
    content_writer: Callable[[TextIO], None],
    description: str = "match file",
) -> None:
    """Write a result file, creating its parent directory first.

    Args:
        file_path: Destination, usually the ``--output`` path
        content_writer: Called with the open handle; writes the rows
        description: What is being written, for error messages

    Raises:
        PermissionError: If the destination is not writable
        OSError: If writing fails for any other OS reason
    """
    destination = Path(file_path)
    ensure_directory_exists(destination.parent, description)
    try:
        with open(destination, "w", encoding="utf-8") as f:
            content_writer(f)
    except PermissionError:
        logger.error(f"✗ Cannot write the {description} {destination}: permission denied")
        logger.error("  Please point --output at a writable location")
        raise
    except OSError as e:
        logger.error(f"✗ Writing the {description} {destination} failed: {e}")
        raise


def format_time(seconds: float) -> str:
    """Format time in seconds to human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes = int(seconds // 60)
    secs = seconds % 60
    return f"{minutes}m {secs:.2f}s"
