"""Word-addressed memory model for the emulated CPU."""

import sys
from typing import BinaryIO, Iterator
from .errors import MemoryAccessError

CAPACITY = 1024
WORD_BITS = 32
WORD_BYTES = WORD_BITS // 8

BYTE_ORDERS = ("little", "big", "native")


def resolve_byteorder(byteorder: str) -> str:
    """Map a configured byte order to one accepted by int.from_bytes."""
    if byteorder == "native":
        return sys.byteorder
    if byteorder not in BYTE_ORDERS:
        raise ValueError(f"Unknown byte order: {byteorder!r}")
    return byteorder


def iter_words(stream: BinaryIO, byteorder: str = "little", limit: int = CAPACITY) -> Iterator[int]:
    """Yield unsigned words read from a binary stream.

    Every four consecutive bytes form one word. Reading stops after `limit`
    words or at end of stream; a trailing partial group is discarded.
    """
    order = resolve_byteorder(byteorder)
    count = 0
    while count < limit:
        chunk = stream.read(WORD_BYTES)
        if len(chunk) < WORD_BYTES:
            return
        yield int.from_bytes(chunk, order)
        count += 1


class Memory:
    """Flat memory of signed 32-bit words, zeroed at construction."""

    def __init__(self, size: int = CAPACITY, word_bits: int = WORD_BITS):
        self.size = size
        self.word_bits = word_bits
        self._data: list[int] = [0] * size

        self._max_val = (1 << (word_bits - 1)) - 1
        self._mask = (1 << word_bits) - 1

    def normalize(self, value: int) -> int:
        """Normalize value to a signed word (two's complement)."""
        value = value & self._mask
        if value > self._max_val:
            value -= 1 << self.word_bits
        return value

    def _check_bounds(self, addr: int) -> None:
        if addr < 0 or addr >= self.size:
            raise MemoryAccessError(f"Memory address out of range: {addr}", pc=addr)

    def read(self, addr: int) -> int:
        """Read word from memory address."""
        self._check_bounds(addr)
        return self._data[addr]

    def write(self, addr: int, value: int) -> None:
        """Write normalized word to memory address."""
        self._check_bounds(addr)
        self._data[addr] = self.normalize(value)

    def load_stream(self, stream: BinaryIO, byteorder: str = "little") -> int:
        """Overwrite the memory prefix with words from a stream.

        Returns the number of words loaded. Cells past the loaded prefix
        keep their value.
        """
        loaded = 0
        for word in iter_words(stream, byteorder, limit=self.size):
            self.write(loaded, word)
            loaded += 1
        return loaded

    def get_watched(self, addresses: list[int]) -> dict[str, int]:
        """Get values at watched addresses as string-keyed dict."""
        result = {}
        for addr in addresses:
            if 0 <= addr < self.size:
                result[str(addr)] = self._data[addr]
        return result

    def snapshot(self) -> list[int]:
        """Return a copy of the entire memory."""
        return self._data.copy()
