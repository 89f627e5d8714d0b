"""Unit tests for streamutil.domain.conversion module."""

import pytest

from streamutil.domain.conversion import (
    ChunkBuffer,
    ConversionMode,
    OutputAccumulator,
)


class TestConversionMode:
    """Tests for ConversionMode target-name qualification."""

    def test_transliterate_suffix(self):
        assert ConversionMode.TRANSLITERATE.qualify("UTF-8") == "UTF-8//TRANSLIT"

    def test_ignore_suffix(self):
        assert ConversionMode.IGNORE.qualify("UTF-8") == "UTF-8//IGNORE"

    def test_replace_leaves_name_untouched(self):
        assert ConversionMode.REPLACE.qualify("ISO-8859-1") == "ISO-8859-1"

    def test_modes_from_config_values(self):
        """Config strings map onto modes."""
        assert ConversionMode("translit") is ConversionMode.TRANSLITERATE
        assert ConversionMode("ignore") is ConversionMode.IGNORE
        assert ConversionMode("replace") is ConversionMode.REPLACE


class TestChunkBuffer:
    """Tests for the fixed-capacity chunk buffer."""

    def test_one_byte_reserved_for_terminator(self):
        chunk = ChunkBuffer(8)
        assert chunk.available == 7

    def test_write_reduces_available(self):
        chunk = ChunkBuffer(8)
        chunk.write(b"abc")
        assert len(chunk) == 3
        assert chunk.available == 4
        assert chunk.getvalue() == b"abc"

    def test_write_past_capacity_raises(self):
        chunk = ChunkBuffer(4)
        with pytest.raises(OverflowError):
            chunk.write(b"abcd")

    def test_placeholder_may_use_reserved_byte(self):
        chunk = ChunkBuffer(4)
        chunk.write(b"abc")
        assert chunk.available == 0
        chunk.put_placeholder(b"?")
        assert chunk.getvalue() == b"abc?"

    def test_clear_resets_buffer(self):
        chunk = ChunkBuffer(4)
        chunk.write(b"ab")
        chunk.clear()
        assert chunk.getvalue() == b""
        assert chunk.available == 3

    def test_capacity_too_small_rejected(self):
        with pytest.raises(ValueError):
            ChunkBuffer(1)


class TestOutputAccumulator:
    """Tests for the exactly-sized output buffer."""

    def test_starts_with_terminator_only(self):
        output = OutputAccumulator()
        assert len(output) == 0
        assert output.capacity == 1
        assert output.getvalue() == b""

    def test_append_grows_exactly(self):
        output = OutputAccumulator()
        output.append(b"hello")
        assert output.capacity == 6
        output.append(b", world")
        assert output.capacity == len(b"hello, world") + 1
        assert len(output) == 12
        assert output.getvalue() == b"hello, world"

    def test_empty_append_keeps_size(self):
        output = OutputAccumulator()
        output.append(b"")
        assert output.capacity == 1

    def test_getvalue_is_independent_copy(self):
        output = OutputAccumulator()
        output.append(b"abc")
        value = output.getvalue()
        output.append(b"def")
        assert value == b"abc"
