"""
This module converts byte strings between character encodings.

Conversion goes through a `Converter`, a short-lived handle bound to one
(source, target) pair, and is driven by `transcode()`, which feeds the input
through a fixed-size chunk buffer into an exactly-sized output buffer.

Characters the target cannot represent are handled according to the
`ConversionMode`:

- TRANSLITERATE: the converter substitutes an approximation ("é" -> "e"),
  or "?" when there is none.
- IGNORE: the converter drops them.
- REPLACE: the converter reports an error and the loop writes "?" for each
  input byte it has to skip.

`transcode()` never raises on conversion problems. When no converter can be
opened, or closing the converter fails, the error is logged and a copy of the
input is returned unchanged.
"""

import codecs
import functools
import locale
import unicodedata
from typing import Dict, Optional, Tuple, Union

from loguru import logger

from ..config.text import (
    PLACEHOLDER,
    TRANSCODE_CHUNK_SIZE,
    TRANSLIT_ERROR_HANDLER,
    TRANSLIT_SUFFIX,
    IGNORE_SUFFIX,
    TRANSLIT_TABLE,
    UTF8_ENCODING,
)
from ..domain.conversion import (
    ChunkBuffer,
    ConversionMode,
    ConversionStatus,
    OutputAccumulator,
)
from ..domain.exceptions import (
    ConverterCloseException,
    ConverterUnavailableException,
)


# --- Transliteration ---

def _can_encode(text: str, encoding: str) -> bool:
    try:
        text.encode(encoding)
    except UnicodeError:
        return False
    except LookupError:
        return text.isascii()
    return True


def _transliterate_char(char: str, encoding: str) -> str:
    candidates = []
    if char in TRANSLIT_TABLE:
        candidates.append(TRANSLIT_TABLE[char])
    decomposed = "".join(
        c for c in unicodedata.normalize("NFKD", char) if not unicodedata.combining(c)
    )
    if decomposed and decomposed != char:
        candidates.append(decomposed)

    for candidate in candidates:
        if _can_encode(candidate, encoding):
            return candidate
    return PLACEHOLDER.decode("ascii")


def transliterate_errors(exc: UnicodeError, encoding: Optional[str] = None) -> Tuple[str, int]:
    """
    Codec error handler that replaces unencodable characters with approximations.

    Each character is looked up in `TRANSLIT_TABLE` first, then decomposed
    (NFKD) with combining marks dropped. Whatever the target still cannot
    encode becomes "?".

    Candidates are checked against `encoding` when given. Otherwise the name
    the codec reports is used, which for charmap codecs (cp1252, ...) is only
    "charmap".
    """
    if not isinstance(exc, UnicodeEncodeError):
        raise exc
    replacement = "".join(
        _transliterate_char(char, encoding or exc.encoding) for char in exc.object[exc.start:exc.end]
    )
    return replacement, exc.end


codecs.register_error(TRANSLIT_ERROR_HANDLER, transliterate_errors)

_target_translit_handlers: Dict[str, str] = {}


def _translit_handler_for(encoding: str) -> str:
    """Returns the name of a transliteration handler bound to one target codec."""
    handler_name = _target_translit_handlers.get(encoding)
    if handler_name is None:
        handler_name = f"{TRANSLIT_ERROR_HANDLER}:{encoding}"
        codecs.register_error(handler_name, functools.partial(transliterate_errors, encoding=encoding))
        _target_translit_handlers[encoding] = handler_name
    return handler_name


# --- Converter Handle ---

def native_encoding() -> str:
    """The encoding used when a converter is opened with an empty name."""
    return locale.getpreferredencoding(False)


def _lookup_codec(name: str) -> codecs.CodecInfo:
    resolved = name or native_encoding()
    try:
        info = codecs.lookup(resolved)
    except LookupError as e:
        raise ConverterUnavailableException(f"unknown encoding '{resolved}'") from e
    if not getattr(info, "_is_text_encoding", True):
        raise ConverterUnavailableException(f"'{resolved}' is not a text encoding")
    return info


def _split_target(to_code: str) -> Tuple[str, str, str]:
    """
    Splits a qualified target name into (encoding, encode errors, decode errors).
    """
    if to_code.upper().endswith(TRANSLIT_SUFFIX):
        return to_code[: -len(TRANSLIT_SUFFIX)], TRANSLIT_ERROR_HANDLER, "replace"
    if to_code.upper().endswith(IGNORE_SUFFIX):
        return to_code[: -len(IGNORE_SUFFIX)], "ignore", "ignore"
    if "//" in to_code:
        raise ConverterUnavailableException(f"unsupported target qualifier in '{to_code}'")
    return to_code, "strict", "strict"


class Converter:
    """
    A conversion session bound to one (source encoding, target encoding) pair.

    Instances are created with `Converter.open()`, used for a single
    conversion and then closed. Input is consumed in whole units: a unit is
    the run of input bytes that decodes to at least one character. When a
    round stops early, the converter's state is rewound to the start of the
    unit it stopped on, so the caller can resume or skip from exactly there.

    Attributes:
        from_code (str): Source encoding name as requested ("" for native).
        to_code (str): Target encoding name as requested, including any
                       `//TRANSLIT` or `//IGNORE` qualifier.
    """

    def __init__(self, from_code: str, to_code: str):
        self.from_code = from_code
        self.to_code = to_code

        target_name, encode_errors, decode_errors = _split_target(to_code)
        source_info = _lookup_codec(from_code)
        target_info = _lookup_codec(target_name)
        if encode_errors == TRANSLIT_ERROR_HANDLER:
            encode_errors = _translit_handler_for(target_info.name)

        self._decoder = source_info.incrementaldecoder(decode_errors)
        self._encoder = target_info.incrementalencoder(encode_errors)
        self._closed = False

    @classmethod
    def open(cls, from_code: str, to_code: str) -> "Converter":
        """
        Opens a converter, raising `ConverterUnavailableException` if either
        side has no usable codec.
        """
        return cls(from_code, to_code)

    def __repr__(self) -> str:
        return f"Converter({self.from_code!r} -> {self.to_code!r})"

    def _save_state(self):
        try:
            return self._decoder.getstate(), self._encoder.getstate()
        except AttributeError:
            return None

    def _restore_state(self, state):
        if state is None:
            self._decoder.reset()
            self._encoder.reset()
            return
        decoder_state, encoder_state = state
        self._decoder.setstate(decoder_state)
        self._encoder.setstate(encoder_state)

    def convert(self, data: bytes, pos: int, chunk: ChunkBuffer) -> Tuple[int, ConversionStatus]:
        """
        Converts as much of `data[pos:]` as fits into `chunk`.

        Args:
            data: The complete input.
            pos: Offset of the first unconsumed input byte.
            chunk: The scratch buffer to write converted bytes into.

        Returns:
            A tuple `(new_pos, status)`. For OK, `new_pos == len(data)`. For any
            other status `new_pos` is the offset of the unit that could not be
            converted (BUFFER_FULL: did not fit; INVALID_SEQUENCE: cannot be
            decoded or encoded; INCOMPLETE_SEQUENCE: input ends inside it).
        """
        if self._closed:
            raise ValueError("convert() on a closed Converter")

        end = len(data)
        while pos < end:
            if chunk.available == 0:
                return pos, ConversionStatus.BUFFER_FULL

            start = pos
            saved = self._save_state()

            chars = ""
            try:
                while not chars and pos < end:
                    chars = self._decoder.decode(data[pos:pos + 1])
                    pos += 1
            except UnicodeDecodeError:
                self._restore_state(saved)
                return start, ConversionStatus.INVALID_SEQUENCE

            if not chars:
                # Input ran out while the decoder was still inside a unit.
                try:
                    chars = self._decoder.decode(b"", final=True)
                except UnicodeDecodeError:
                    self._restore_state(saved)
                    return start, ConversionStatus.INCOMPLETE_SEQUENCE
                if not chars:
                    continue

            try:
                encoded = self._encoder.encode(chars)
            except UnicodeEncodeError:
                self._restore_state(saved)
                return start, ConversionStatus.INVALID_SEQUENCE

            if len(encoded) > chunk.available:
                self._restore_state(saved)
                return start, ConversionStatus.BUFFER_FULL
            chunk.write(encoded)

        return pos, ConversionStatus.OK

    def close(self) -> bytes:
        """
        Flushes the encoder and releases the handle.

        Returns:
            Trailing bytes the encoder still had to emit (e.g. the shift back
            to ASCII of a stateful encoding), usually empty.

        Raises:
            ConverterCloseException: If the final flush fails.
        """
        if self._closed:
            return b""
        self._closed = True
        try:
            return self._encoder.encode("", final=True)
        except UnicodeError as e:
            raise ConverterCloseException(f"{self!r}: {e}") from e


def open_converter(from_encoding: str, to_code: str) -> Optional[Converter]:
    """
    Opens a converter using the three-step fallback.

    The attempts, in order, are:
    1. `from_encoding` -> `to_code`
    2. `from_encoding` -> native encoding
    3. native encoding -> `to_code`

    Returns:
        The first converter that opens, or `None` (after logging the error)
        when all three fail.
    """
    attempts = ((from_encoding, to_code), (from_encoding, ""), ("", to_code))
    last_error: Optional[ConverterUnavailableException] = None
    for source, target in attempts:
        try:
            return Converter.open(source, target)
        except ConverterUnavailableException as e:
            logger.debug(f"No converter '{source or 'native'}' -> '{target or 'native'}': {e}")
            last_error = e

    logger.error(f"Cannot open a converter from '{from_encoding}' to '{to_code}': {last_error}")
    return None


# --- Conversion Loop ---

def _convert_all(converter: Converter, data: bytes, chunk_size: int) -> OutputAccumulator:
    output = OutputAccumulator()
    chunk = ChunkBuffer(chunk_size)
    pos = 0
    remaining = len(data)

    while remaining > 0:
        chunk.clear()
        new_pos, status = converter.convert(data, pos, chunk)

        # A unit that does not fit an empty chunk can never fit; skip it like bad input.
        stalled = status is ConversionStatus.BUFFER_FULL and new_pos == pos
        if stalled or status in (
            ConversionStatus.INVALID_SEQUENCE,
            ConversionStatus.INCOMPLETE_SEQUENCE,
        ):
            chunk.put_placeholder(PLACEHOLDER)
            new_pos += 1

        output.append(chunk.getvalue())
        pos = new_pos
        remaining = len(data) - pos

    return output


def transcode(
    data: Union[bytes, bytearray, None],
    from_encoding: str,
    to_encoding: str,
    mode: ConversionMode = ConversionMode.TRANSLITERATE,
    chunk_size: int = TRANSCODE_CHUNK_SIZE,
) -> bytes:
    """
    Converts `data` from `from_encoding` to `to_encoding`.

    Args:
        data: The bytes to convert. `None` is treated as empty input.
        from_encoding: Encoding of `data`. An empty string means the native encoding.
        to_encoding: Desired output encoding, without any `//` qualifier.
        mode: How unrepresentable characters are handled.
        chunk_size: Capacity of the intermediate chunk buffer.

    Returns:
        A new bytes object: the converted text, possibly with "?" placeholders
        in REPLACE mode. If no converter is available, or it fails to close,
        a copy of `data` is returned instead.
    """
    if data is None:
        return b""
    data = bytes(data)
    if not data:
        return b""

    to_code = mode.qualify(to_encoding)
    converter = open_converter(from_encoding, to_code)
    if converter is None:
        return data

    output = _convert_all(converter, data, chunk_size)
    try:
        tail = converter.close()
        # Nothing converted means nothing to terminate; skips a lone BOM.
        if len(output):
            output.append(tail)
    except ConverterCloseException as e:
        logger.error(f"Failed to close converter, returning input unchanged: {e}")
        return data

    return output.getvalue()


# --- Locale Codeset ---

def get_locale_codeset() -> str:
    """
    Returns the codeset of the locale configured in the environment.

    LC_CTYPE is switched to the environment locale only for the duration of
    the lookup and restored afterwards, so other code never sees it change.
    """
    if not hasattr(locale, "nl_langinfo"):
        return native_encoding()

    previous = locale.setlocale(locale.LC_CTYPE)
    try:
        try:
            locale.setlocale(locale.LC_CTYPE, "")
        except locale.Error as e:
            logger.warning(f"Environment locale is unusable, keeping '{previous}': {e}")
        return locale.nl_langinfo(locale.CODESET)
    finally:
        locale.setlocale(locale.LC_CTYPE, previous)


def char2utf8(data: Union[bytes, bytearray, None], mode: ConversionMode = ConversionMode.TRANSLITERATE) -> bytes:
    """Converts text in the locale's codeset to UTF-8."""
    return transcode(data, get_locale_codeset(), UTF8_ENCODING, mode)


def utf82char(data: Union[bytes, bytearray, None], mode: ConversionMode = ConversionMode.TRANSLITERATE) -> bytes:
    """Converts UTF-8 text to the locale's codeset."""
    return transcode(data, UTF8_ENCODING, get_locale_codeset(), mode)
