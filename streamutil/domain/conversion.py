"""
Value types used by the transcoding loop.

`ConversionMode` selects how unrepresentable characters are treated.
`ChunkBuffer` is the fixed-capacity scratch area one conversion round writes
into, and `OutputAccumulator` collects the rounds into the final result.
"""
from enum import Enum

from ..config.text import IGNORE_SUFFIX, TRANSLIT_SUFFIX


class ConversionMode(Enum):
    """
    How characters without a representation in the target encoding are handled.

    TRANSLITERATE and IGNORE are delegated to the converter through a suffix
    on the target encoding name. REPLACE leaves the target name untouched and
    lets the conversion loop put a placeholder in for every byte it cannot
    convert.
    """

    TRANSLITERATE = "translit"
    IGNORE = "ignore"
    REPLACE = "replace"

    @property
    def suffix(self) -> str:
        if self is ConversionMode.TRANSLITERATE:
            return TRANSLIT_SUFFIX
        if self is ConversionMode.IGNORE:
            return IGNORE_SUFFIX
        return ""

    def qualify(self, encoding: str) -> str:
        """Returns `encoding` with this mode's suffix, e.g. `UTF-8//TRANSLIT`."""
        return f"{encoding}{self.suffix}"


class ConversionStatus(Enum):
    """Outcome of one `Converter.convert()` round."""

    OK = "ok"  # all input consumed
    BUFFER_FULL = "buffer_full"  # chunk filled up, more input remains
    INVALID_SEQUENCE = "invalid_sequence"  # input unit cannot be converted
    INCOMPLETE_SEQUENCE = "incomplete_sequence"  # input ends inside a unit


class ChunkBuffer:
    """
    A fixed-capacity scratch buffer reused across the rounds of one conversion.

    The last byte of the capacity is held back for the terminator, so at most
    `capacity - 1` bytes of converted output fit. `put_placeholder()` may use
    that reserved byte: the loop needs room for one `?` even in a full chunk.
    """

    def __init__(self, capacity: int):
        if capacity < 2:
            raise ValueError("ChunkBuffer capacity must leave room for data and terminator.")
        self.capacity = capacity
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    @property
    def available(self) -> int:
        """Bytes that can still be written by the converter this round."""
        return max(self.capacity - 1 - len(self._data), 0)

    def clear(self):
        self._data.clear()

    def write(self, payload: bytes):
        if len(payload) > self.available:
            raise OverflowError(
                f"Chunk overflow: {len(payload)} bytes requested, {self.available} available."
            )
        self._data += payload

    def put_placeholder(self, placeholder: bytes):
        if len(self._data) + len(placeholder) > self.capacity:
            raise OverflowError("No room left for the placeholder byte.")
        self._data += placeholder

    def getvalue(self) -> bytes:
        return bytes(self._data)


class OutputAccumulator:
    """
    Append-only, exactly-sized output buffer.

    The backing storage always ends with a NUL terminator. It starts with the
    terminator alone and every `append()` grows it to exactly
    `len(self) + len(chunk) + 1` bytes, so `capacity == len(self) + 1` holds
    at every observation point.
    """

    def __init__(self):
        self._buf = bytearray(b"\0")

    def __len__(self) -> int:
        return len(self._buf) - 1

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def append(self, chunk: bytes):
        if not chunk:
            return
        # Overwrite the terminator, then restore it after the new bytes.
        self._buf[-1:] = bytes(chunk) + b"\0"

    def getvalue(self) -> bytes:
        """Returns an independent copy of the meaningful bytes (no terminator)."""
        return bytes(self._buf[:-1])
