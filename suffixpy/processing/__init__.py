"""Processing pipeline for SuffixPy."""

from suffixpy.processing.pipeline import run_search

__all__ = ["run_search"]
