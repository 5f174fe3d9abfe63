"""Artifact dumpers: object bytes as bit groups, assembly as text."""

from typing import TextIO

from .config import TEXT_ENCODING, TEXT_ERRORS
from .errors import AllocationFailed, InputUnavailable


def format_byte(byte: int) -> str:
    """Eight bits, most significant first, followed by a space."""
    return f"{byte & 0xFF:08b} "


def format_bits(data: bytes) -> str:
    return "".join(format_byte(b) for b in data)


def dump_binary(path: str, out: TextIO) -> int:
    """Write every byte of the file at path as a bit group.

    Returns the number of bytes written.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except MemoryError as e:
        raise AllocationFailed("Memory allocation failed", path=str(path)) from e
    except OSError as e:
        raise InputUnavailable("Unable to open binary file", path=str(path)) from e

    out.write(format_bits(data))
    return len(data)


def dump_text(path: str, out: TextIO) -> int:
    """Stream a text file to out line by line and return the line count."""
    count = 0
    try:
        with open(path, "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as f:
            for line in f:
                out.write(line)
                count += 1
    except OSError as e:
        raise InputUnavailable("Unable to open text file", path=str(path)) from e
    return count
