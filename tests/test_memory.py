"""Tests for the Memory module."""

import io
import struct

import pytest
from ctocpu.memory import CAPACITY, Memory, iter_words, resolve_byteorder
from ctocpu.errors import MemoryAccessError


class TestMemory:
    """Memory module tests."""

    def test_default_initialization(self):
        """Memory initializes with zeros."""
        mem = Memory()
        assert mem.size == CAPACITY
        assert mem.snapshot() == [0] * CAPACITY

    def test_write_and_read(self):
        """Can write and read back values."""
        mem = Memory(size=10)
        mem.write(5, 42)
        assert mem.read(5) == 42

    def test_bounds_check_read(self):
        """Reading out of bounds raises error."""
        mem = Memory(size=10)
        with pytest.raises(MemoryAccessError):
            mem.read(10)
        with pytest.raises(MemoryAccessError):
            mem.read(-1)

    def test_bounds_check_write(self):
        """Writing out of bounds raises error."""
        mem = Memory(size=10)
        with pytest.raises(MemoryAccessError):
            mem.write(10, 0)
        with pytest.raises(MemoryAccessError):
            mem.write(-1, 0)

    def test_normalization_signed_32bit(self):
        """Values are normalized to 32-bit two's complement."""
        mem = Memory(size=1)
        mem.write(0, 2**31 - 1)
        assert mem.read(0) == 2**31 - 1
        mem.write(0, 2**31)
        assert mem.read(0) == -(2**31)
        mem.write(0, 0xFFFFFFFF)
        assert mem.read(0) == -1
        mem.write(0, 2**32)
        assert mem.read(0) == 0

    def test_get_watched(self):
        """Get watched addresses as dict, ignoring out-of-range ones."""
        mem = Memory(size=4)
        mem.write(1, 7)
        assert mem.get_watched([0, 1, 9]) == {"0": 0, "1": 7}

    def test_snapshot(self):
        """Snapshot returns copy of memory."""
        mem = Memory(size=3)
        mem.write(0, 1)
        snap = mem.snapshot()
        snap[0] = 99
        assert mem.read(0) == 1


class TestLoadStream:
    """Grouping bytes into words."""

    def test_little_endian_words(self):
        data = struct.pack("<2I", 0x01000007, 0x03000000)
        mem = Memory(size=8)
        assert mem.load_stream(io.BytesIO(data)) == 2
        assert mem.read(0) == 0x01000007
        assert mem.read(1) == 0x03000000

    def test_big_endian_words(self):
        data = bytes([0x00, 0x00, 0x00, 0x05])
        mem = Memory(size=2)
        mem.load_stream(io.BytesIO(data), byteorder="big")
        assert mem.read(0) == 5

    def test_high_opcode_word_is_signed(self):
        """A word with the top bit set is stored as a negative value."""
        mem = Memory(size=1)
        mem.load_stream(io.BytesIO(struct.pack("<I", 0xFF000000)))
        assert mem.read(0) == 0xFF000000 - 2**32

    def test_trailing_partial_group_discarded(self):
        mem = Memory(size=4)
        assert mem.load_stream(io.BytesIO(b"\x01" * 9)) == 2
        assert mem.read(2) == 0

    def test_stops_at_capacity(self):
        mem = Memory(size=2)
        stream = io.BytesIO(b"\x01\x00\x00\x00" * 5)
        assert mem.load_stream(stream) == 2
        # The rest of the stream is not consumed past the limit
        assert stream.tell() == 8

    def test_iter_words_limit(self):
        words = list(iter_words(io.BytesIO(b"\x00" * 16), limit=3))
        assert words == [0, 0, 0]

    def test_unknown_byteorder(self):
        with pytest.raises(ValueError):
            resolve_byteorder("middle")

    def test_native_byteorder(self):
        import sys
        assert resolve_byteorder("native") == sys.byteorder
