"""
ctocpu - C-to-CPU pipeline demonstrator CLI

Usage:
    ctocpu <input.c> <assembly.s> <binary.o> [--execute] [--cc gcc] [--as as]
           [--byteorder little|big|native] [-v]

The assembly path is reused: it first receives the preprocessed source and is
then overwritten by the compiler's assembly output.

Examples:
    ctocpu io/input.c io/assembly.s io/binary.o
    ctocpu io/input.c io/assembly.s io/binary.o --execute -v
    CTOCPU_CC=clang ctocpu main.c main.s main.o
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import NAME, TEXT_ENCODING, TEXT_ERRORS, VERSION, PipelineOptions
from .errors import CToCPUError
from .memory import BYTE_ORDERS
from .pipeline import run_pipeline

logger = logging.getLogger("ctocpu")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctocpu",
        description="Preprocess, compile and assemble a C file, then load it into a tiny CPU",
    )
    parser.add_argument("input", help="Input C source file")
    parser.add_argument("assembly", help="Assembly file (preprocessed text, then compiler output)")
    parser.add_argument("object", help="Object file written by the assembler")
    parser.add_argument("--execute", action="store_true",
                        help="Run the loaded program and print its trace")
    parser.add_argument("--cc", dest="compiler", default=None,
                        help="C compiler executable (default: gcc, or $CTOCPU_CC)")
    parser.add_argument("--as", dest="assembler", default=None,
                        help="Assembler executable (default: as, or $CTOCPU_AS)")
    parser.add_argument("--byteorder", choices=BYTE_ORDERS, default=None,
                        help="Byte order of object words (default: little)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Log progress to stderr (-vv for debug)")
    parser.add_argument("--version", action="version",
                        version=f"{NAME} {VERSION}")
    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def configure_stdout() -> None:
    """Let undecodable source bytes and CRLF endings reach stdout unchanged."""
    try:
        sys.stdout.reconfigure(encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="")
    except AttributeError:
        pass  # replaced by a stream without reconfigure()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    configure_stdout()

    try:
        options = PipelineOptions.from_env(
            compiler=args.compiler,
            assembler=args.assembler,
            byteorder=args.byteorder,
            execute=args.execute,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        run_pipeline(args.input, args.assembly, args.object, options)
    except CToCPUError as e:
        if e.path:
            logger.error("Error: %s: %s", e.message, e.path)
        else:
            logger.error("Error: %s", e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
