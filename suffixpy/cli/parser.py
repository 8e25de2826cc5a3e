"""Command-line interface for the SuffixPy project."""

import argparse
from multiprocessing import cpu_count


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Index a text with a suffix tree and search it for patterns",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Exact search, one pattern per line in patterns.txt
  %(prog)s --text corpus.txt --patterns patterns.txt -o results.tsv

  # Inline patterns, binary search over the suffix array
  %(prog)s --text corpus.txt --pattern ana --pattern ban --mode suffix-array

  # Up to one mismatching symbol per match, on 8 worker threads
  %(prog)s --text corpus.txt --patterns patterns.txt --mode parallel --max-errors 1 -j 8 -v

  # Using JSON config
  %(prog)s --config config.json

Output is one match per line: pattern<TAB>start<TAB>length

Example config.json:
{
  "text": "corpus.txt",
  "patterns": "patterns.txt",
  "mode": "approximate",
  "max_errors": 1,
  "case_insensitive": true,
  "output": "results.tsv",
  "verbose": true
}
        """,
    )

    # Configuration
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="JSON configuration file (CLI args override JSON values)",
    )

    # Inputs
    parser.add_argument("--text", type=str, help="UTF-8 file holding the text to index")
    parser.add_argument("--patterns", type=str, help="File with one pattern per line")
    parser.add_argument(
        "-p",
        "--pattern",
        action="append",
        help="Pattern to search for (may be repeated)",
    )
    parser.add_argument(
        "--sentinel",
        type=str,
        default="$",
        help="Terminating symbol; must not occur in the text (default: $)",
    )

    # Search
    parser.add_argument(
        "--mode",
        type=str,
        choices=["exact", "suffix-array", "approximate", "parallel"],
        default="exact",
        help="Search strategy",
    )
    parser.add_argument(
        "-k",
        "--max-errors",
        type=int,
        default=0,
        help="Maximum mismatching symbols per match (approximate and parallel modes)",
    )
    parser.add_argument(
        "--case-insensitive",
        action="store_true",
        help="Treat upper and lower case letters as equal",
    )
    parser.add_argument(
        "--suffix-array-algorithm",
        type=str,
        choices=["doubling", "rotation"],
        default="doubling",
        help="Suffix array construction algorithm",
    )

    # Output
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file for matches (default: summary only)",
    )
    parser.add_argument("--log-file", type=str, help="Also write log messages to this file")

    # Flags
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        help=f"Number of worker threads for parallel mode (default: {cpu_count()})",
    )

    return parser
