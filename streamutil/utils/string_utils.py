"""
This module contains helpers for comparing strings and building shell commands.

`shell_quote()` and `replace_first()` are used to put user-controlled values
(file names, metadata) into command lines that are run through a shell, such
as a configured decoder like `flac -d -c {TRACK}`.
"""

from loguru import logger

from ..config.text import SHELLQUOTE_INLEN_MAX


def suffix_equals(subject: str, suffix: str) -> bool:
    """
    Checks whether `subject` ends with exactly `suffix`.

    Args:
        subject: The string to inspect, e.g. a file name.
        suffix: The expected ending, e.g. ".mp3".

    Returns:
        True if the last `len(suffix)` characters of `subject` equal `suffix`.
        False if `suffix` is longer than `subject`.
    """
    if len(suffix) > len(subject):
        return False
    return subject[len(subject) - len(suffix):] == suffix


def suffix_equals_ci(subject: str, suffix: str) -> bool:
    """Case-insensitive variant of `suffix_equals()`."""
    return suffix_equals(subject.lower(), suffix.lower())


def shell_quote(text: str) -> str:
    """
    Wraps `text` in single quotes for use in a shell command line.

    Embedded single quotes and backslashes are escaped with a backslash, so
    `it's` becomes `'it\\'s'`.

    Input longer than `SHELLQUOTE_INLEN_MAX` characters is truncated to that
    length before quoting. The cap bounds the size of generated commands and
    is not reported as an error.

    Args:
        text: The value to quote.

    Returns:
        The quoted string, at most `2 * SHELLQUOTE_INLEN_MAX + 2` characters long.
    """
    if len(text) > SHELLQUOTE_INLEN_MAX:
        logger.debug(f"shell_quote: truncating input of {len(text)} characters to {SHELLQUOTE_INLEN_MAX}.")
        text = text[:SHELLQUOTE_INLEN_MAX]

    quoted = []
    for char in text:
        if char in ("'", "\\"):
            quoted.append("\\")
        quoted.append(char)
    return "'" + "".join(quoted) + "'"


def replace_first(source: str, needle: str, replacement: str) -> str:
    """
    Replaces the first occurrence of `needle` in `source` with the shell-quoted
    `replacement`.

    The replacement is quoted even when `needle` does not occur; in that case
    `source` is returned unchanged.

    Example:
        >>> replace_first("foo {X} bar", "{X}", "it's")
        "foo 'it\\\\'s' bar"
    """
    quoted = shell_quote(replacement)

    index = source.find(needle)
    if index == -1:
        return source
    return source[:index] + quoted + source[index + len(needle):]
