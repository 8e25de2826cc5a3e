"""Utility functions for SuffixPy."""

from suffixpy.utils.constants import Constants
from suffixpy.utils.helpers import (
    expand_file_path,
    format_time,
    load_pattern_list,
    read_text_file,
    write_file_safely,
)
from suffixpy.utils.logging import add_log_file_handler, setup_logger

__all__ = [
    "Constants",
    "add_log_file_handler",
    "expand_file_path",
    "format_time",
    "load_pattern_list",
    "read_text_file",
    "setup_logger",
    "write_file_safely",
]
