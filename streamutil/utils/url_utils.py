"""
Parser for stream endpoint URLs of the form `http://host:port/mount`.
"""

from typing import NamedTuple

from loguru import logger

from ..config.text import HTTP_SCHEME, PORT_MAX, PORT_MAX_DIGITS, PORT_MIN
from ..domain.exceptions import (
    InvalidPortException,
    InvalidSchemeException,
    MalformedMountException,
    MissingHostException,
    MissingPortException,
)


class StreamURL(NamedTuple):
    """A decomposed stream endpoint. `mount` keeps its leading "/"."""

    host: str
    port: int
    mount: str

    def __str__(self) -> str:
        return f"{HTTP_SCHEME}{self.host}:{self.port}{self.mount}"


def _fail(exception_cls, message: str):
    logger.error(f"invalid <url>: {message}")
    raise exception_cls(message)


def parse_stream_url(url: str) -> StreamURL:
    """
    Splits `url` into host, port and mountpoint.

    The grammar is strict: `http://` host `:` port mount, where the host is
    everything up to the first `:` after the scheme and the mount starts at
    the first `/` after that `:` and runs to the end of the string.

    Args:
        url: The URL to parse.

    Returns:
        A `StreamURL` with the host, the numeric port and the mount.

    Raises:
        InvalidSchemeException: `url` does not start with `http://`.
        MissingPortException: No `:` follows the host.
        MissingHostException: The host is empty.
        MalformedMountException: No `/` follows the port, or the port segment
                                 is longer than five characters.
        InvalidPortException: The port is not an integer in 1..65535.

    Each failure is logged at ERROR level before it is raised.
    """
    if not url.startswith(HTTP_SCHEME):
        _fail(InvalidSchemeException, "not an HTTP address")

    rest = url[len(HTTP_SCHEME):]
    colon = rest.find(":")
    if colon == -1:
        _fail(MissingPortException, "missing port")
    host = rest[:colon]
    if not host:
        _fail(MissingHostException, "missing host")

    after_colon = rest[colon + 1:]
    slash = after_colon.find("/")
    if slash == -1 or slash > PORT_MAX_DIGITS:
        _fail(MalformedMountException, "mountpoint missing, or port number too long")

    port_text = after_colon[:slash]
    # Only ASCII digits with an optional sign; int() alone also takes "8_0" and non-ASCII digits.
    digits = port_text.strip()
    if digits.startswith(("+", "-")):
        digits = digits[1:]
    if not (digits.isascii() and digits.isdigit()):
        _fail(InvalidPortException, f"port: {port_text} is invalid")
    port = int(port_text)
    if port < PORT_MIN:
        _fail(InvalidPortException, f"port: {port_text} is too small")
    if port > PORT_MAX:
        _fail(InvalidPortException, f"port: {port_text} is too large")

    return StreamURL(host=host, port=port, mount=after_colon[slash:])
