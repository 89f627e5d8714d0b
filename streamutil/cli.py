"""
Command-Line Interface (CLI) setup for streamutil.

This module uses Python's `argparse` to define the sub-commands that expose
the utility layer for manual checks: transcoding, quoting, substitution,
suffix checks and stream URL parsing.
"""
import argparse
from typing import List, Optional

from .domain.conversion import ConversionMode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamutil",
        description="Text and process-lifecycle utilities for a streaming source client.",
    )
    parser.add_argument(
        "--log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level."
    )
    parser.add_argument(
        "--pid-file", type=str, default=None,
        help="Write the process id to this file (overrides pidfile.path in config.user.yaml)."
    )
    parser.add_argument(
        "--mode", type=str, default=None, choices=[m.value for m in ConversionMode],
        help="How to handle characters the target encoding cannot represent."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    to_utf8 = subparsers.add_parser("to-utf8", help="Convert text from the locale codeset to UTF-8.")
    to_utf8.add_argument("text")

    from_utf8 = subparsers.add_parser("from-utf8", help="Convert UTF-8 text to the locale codeset.")
    from_utf8.add_argument("text")

    quote = subparsers.add_parser("quote", help="Single-quote text for a shell command line.")
    quote.add_argument("text")

    replace = subparsers.add_parser("replace", help="Substitute a shell-quoted value for the first placeholder.")
    replace.add_argument("source")
    replace.add_argument("needle")
    replace.add_argument("replacement")

    parse_url = subparsers.add_parser("parse-url", help="Split an http://host:port/mount URL.")
    parse_url.add_argument(
        "url", nargs="?", default=None,
        help="URL to parse (defaults to stream.url in config.user.yaml)."
    )

    suffix = subparsers.add_parser("suffix", help="Check whether SUBJECT ends with SUFFIX.")
    suffix.add_argument("subject")
    suffix.add_argument("suffix")
    suffix.add_argument("--ignore-case", action="store_true", help="Compare case-insensitively.")

    return parser


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for streamutil.

    Args:
        argv: Argument list to parse instead of `sys.argv[1:]`.

    Returns:
        argparse.Namespace: The parsed arguments. Options left unset are
                            `None` so that `config.user.yaml` can supply them.
    """
    return build_parser().parse_args(argv)
