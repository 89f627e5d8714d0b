"""Unit tests for streamutil.domain.exceptions module."""

import pytest

from streamutil.domain.exceptions import (
    ConverterCloseException,
    ConverterUnavailableException,
    InvalidPortException,
    InvalidSchemeException,
    MalformedMountException,
    MissingHostException,
    MissingPortException,
    StreamUtilException,
    TranscodingException,
    URLParseException,
)


class TestHierarchy:
    """All custom exceptions derive from StreamUtilException."""

    @pytest.mark.parametrize(
        "exc_cls",
        [ConverterUnavailableException, ConverterCloseException],
    )
    def test_transcoding_exceptions(self, exc_cls):
        assert issubclass(exc_cls, TranscodingException)
        assert issubclass(exc_cls, StreamUtilException)

    @pytest.mark.parametrize(
        "exc_cls",
        [
            InvalidSchemeException,
            MissingPortException,
            MissingHostException,
            MalformedMountException,
            InvalidPortException,
        ],
    )
    def test_url_exceptions(self, exc_cls):
        assert issubclass(exc_cls, URLParseException)
        assert issubclass(exc_cls, StreamUtilException)

    def test_message_kept(self):
        err = InvalidPortException("port: 0 is too small")
        assert str(err) == "port: 0 is too small"
