"""
Main entry point for streamutil.

This script configures logging, writes the pid-file when one is configured,
and runs the requested sub-command. Options not given on the command line are
taken from `config.user.yaml` when present.
"""

import os
import sys
from typing import List, Optional

from loguru import logger

from streamutil.cli import get_args
from streamutil.config.common import (
    LOGGER_FORMAT,
    configured_pid_file,
    configured_stream_url,
    configured_transcode_mode,
    load_user_config,
)
from streamutil.domain.conversion import ConversionMode
from streamutil.domain.exceptions import URLParseException
from streamutil.services.pidfile_service import write_pid_file
from streamutil.services.transcoder import char2utf8, utf82char
from streamutil.utils.string_utils import (
    replace_first,
    shell_quote,
    suffix_equals,
    suffix_equals_ci,
)
from streamutil.utils.url_utils import parse_stream_url


def _write_bytes(data: bytes):
    sys.stdout.buffer.write(data + b"\n")
    sys.stdout.flush()


def run_command(args, user_config: dict) -> int:
    """
    Executes the sub-command selected in `args`.

    Returns:
        The process exit status.
    """
    mode_name = args.mode or configured_transcode_mode(user_config)
    try:
        mode = ConversionMode(mode_name)
    except ValueError:
        logger.error(f"Unknown conversion mode '{mode_name}' in user config.")
        return 1

    if args.command == "to-utf8":
        _write_bytes(char2utf8(os.fsencode(args.text), mode))
    elif args.command == "from-utf8":
        _write_bytes(utf82char(args.text.encode("utf-8", "surrogateescape"), mode))
    elif args.command == "quote":
        print(shell_quote(args.text))
    elif args.command == "replace":
        print(replace_first(args.source, args.needle, args.replacement))
    elif args.command == "parse-url":
        url = args.url or configured_stream_url(user_config)
        if not url:
            logger.error("No URL given and stream.url is not set in the user config.")
            return 1
        try:
            stream_url = parse_stream_url(url)
        except URLParseException:
            return 1
        print(f"host={stream_url.host}")
        print(f"port={stream_url.port}")
        print(f"mount={stream_url.mount}")
    elif args.command == "suffix":
        compare = suffix_equals_ci if args.ignore_case else suffix_equals
        return 0 if compare(args.subject, args.suffix) else 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses arguments, configures the logger, writes the pid-file and runs the command.
    """
    args = get_args(argv)

    effective_log_level = args.log_level or ("DEBUG" if __debug__ else "INFO")
    logger.remove()
    logger.add(sys.stderr, level=effective_log_level, format=LOGGER_FORMAT)
    logger.debug(f"Parsed arguments: {args}")

    user_config = load_user_config()

    pid_file = args.pid_file or configured_pid_file(user_config)
    try:
        write_pid_file(pid_file)
    except OSError as e:
        logger.error(f"Could not create pid-file '{pid_file}': {e}")
        return 1

    return run_command(args, user_config)


if __name__ == "__main__":
    sys.exit(main())
