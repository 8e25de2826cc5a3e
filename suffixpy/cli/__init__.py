"""Command-line interface for SuffixPy."""

from suffixpy.cli.parser import create_parser

__all__ = ["create_parser"]
