"""Naive textual preprocessor.

Local ``#include "name"`` directives are inlined recursively, ``#define``
directives are dropped without building a macro table, and every other line
(system ``#include <...>`` included) is copied verbatim.
"""

import logging
import os
import re
from typing import Iterable, Optional, TextIO

from .config import TEXT_ENCODING, TEXT_ERRORS
from .errors import IncludeCycle, IncludeMissing, InputUnavailable, OutputUnavailable

logger = logging.getLogger(__name__)

_INCLUDE_RE = re.compile(r'^#include\s*"([^"]+)"')
_DEFINE_PREFIX = "#define"


def _include_target(line: str) -> Optional[str]:
    """Return the file named by a local include directive, if any."""
    match = _INCLUDE_RE.match(line)
    if match:
        return match.group(1)
    return None


def preprocess_stream(
    lines: Iterable[str],
    sink: TextIO,
    _stack: Optional[list[str]] = None,
) -> list[str]:
    """Filter lines into sink, expanding local includes depth-first.

    Returns the included file names in the order they were inlined.
    """
    stack = _stack if _stack is not None else []
    included: list[str] = []

    for line in lines:
        if line.startswith(_DEFINE_PREFIX):
            continue

        name = _include_target(line)
        if name is None:
            sink.write(line)
            continue

        key = os.path.abspath(name)
        if key in stack:
            diag = IncludeCycle(f"Recursive include skipped: {name}", path=name)
            logger.error("Error: %s", diag.message)
            continue

        try:
            handle = open(name, "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="")
        except OSError:
            diag = IncludeMissing(f"Unable to open included file: {name}", path=name)
            logger.error("Error: %s", diag.message)
            continue

        with handle:
            included.append(name)
            stack.append(key)
            try:
                included.extend(preprocess_stream(handle, sink, stack))
            finally:
                stack.pop()

    return included


def preprocess(input_path: str, output_path: str) -> list[str]:
    """Preprocess input_path into output_path (truncated first).

    Raises:
        InputUnavailable: input_path cannot be opened
        OutputUnavailable: output_path cannot be created
    """
    logger.info("Preprocessing %s", input_path)
    try:
        source = open(input_path, "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="")
    except OSError as e:
        raise InputUnavailable("Unable to open input file", path=str(input_path)) from e

    with source:
        try:
            sink = open(output_path, "w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="")
        except OSError as e:
            raise OutputUnavailable("Unable to create output file", path=str(output_path)) from e
        with sink:
            included = preprocess_stream(source, sink, [os.path.abspath(input_path)])

    logger.info("Preprocessing done (%d files included)", len(included))
    return included
