"""
Defines custom exception types for streamutil.

Instead of catching a generic `Exception`, callers can catch
`InvalidPortException` or `ConverterUnavailableException` and react
accordingly. All custom exceptions inherit from the base `StreamUtilException`.
"""


class StreamUtilException(Exception):
    """Base class for all custom exceptions in streamutil."""

    pass


# --- Transcoding Specific Exceptions ---
class TranscodingException(StreamUtilException):
    """Base class for exceptions raised by the converter layer."""

    pass


class ConverterUnavailableException(TranscodingException):
    """
    Raised when no converter exists for a pair of encoding names.

    Either name may be unknown to the codec registry, or may name a codec
    that does not convert text (such as `base64`).
    """

    pass


class ConverterCloseException(TranscodingException):
    """
    Raised when a converter cannot be closed cleanly.

    This happens when the final flush fails, e.g. a stateful encoder cannot
    emit its closing sequence. The partial output of that conversion is unusable.
    """

    pass


# --- Stream URL Specific Exceptions ---
class URLParseException(StreamUtilException):
    """Base class for exceptions raised while parsing a stream URL."""

    pass


class InvalidSchemeException(URLParseException):
    """Raised when the URL does not start with `http://`."""

    pass


class MissingPortException(URLParseException):
    """Raised when no `:` follows the host segment."""

    pass


class MissingHostException(URLParseException):
    """Raised when the host segment between scheme and `:` is empty."""

    pass


class MalformedMountException(URLParseException):
    """
    Raised when no mountpoint follows the port, or the port segment is too long.

    The two cases are reported together because both mean the text after the
    `:` could not be split into a port and a `/`-prefixed mount.
    """

    pass


class InvalidPortException(URLParseException):
    """Raised when the port is not a number between 1 and 65535."""

    pass
