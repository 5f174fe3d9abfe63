"""Driver that sequences preprocessing, the toolchain and the CPU.

Standard output carries only the artifacts, separated by delimiter lines, so
an outer harness can split the stream. Progress goes to the log.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO

from .config import DELIMITER, NAME, VERSION, PipelineOptions
from .cpu import CPU
from .dumper import dump_binary, dump_text
from .preprocessor import preprocess
from .toolchain import emit_assembly, emit_object

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """Text stream wrapper that keeps delimiters on their own lines."""

    def __init__(self, out: TextIO):
        self._out = out
        self._at_line_start = True

    def write(self, text: str) -> int:
        if text:
            self._out.write(text)
            self._at_line_start = text.endswith("\n")
        return len(text)

    def line(self, text: str) -> None:
        self.write(f"{text}\n")

    def delimiter(self, final: bool = False) -> None:
        if not self._at_line_start:
            self.write("\n")
        self.write(DELIMITER if final else f"{DELIMITER}\n")

    def flush(self) -> None:
        self._out.flush()


@dataclass
class PipelineResult:
    """Outcome of a full pipeline run."""
    accumulator: int
    words_loaded: int
    final_state: dict
    trace: list[str] = field(default_factory=list)
    included: list[str] = field(default_factory=list)


def run_pipeline(
    input_path: str,
    asm_path: str,
    obj_path: str,
    options: Optional[PipelineOptions] = None,
    out: Optional[TextIO] = None,
) -> PipelineResult:
    """Run every stage in order, echoing each artifact to out.

    The assembly path first receives the preprocessed text, then is
    overwritten by the compiler. Any CToCPUError aborts the run.
    """
    if options is None:
        options = PipelineOptions()
    writer = ArtifactWriter(out if out is not None else sys.stdout)

    logger.info("%s %s", NAME, VERSION)

    included = preprocess(input_path, asm_path)
    dump_text(asm_path, writer)
    writer.delimiter()
    writer.flush()

    emit_assembly(input_path, asm_path, options.compiler, options.compiler_flags)
    dump_text(asm_path, writer)
    writer.delimiter()
    writer.flush()

    emit_object(asm_path, obj_path, options.assembler, options.assembler_flags)
    dump_binary(obj_path, writer)
    writer.delimiter()

    cpu = CPU(capacity=options.capacity, byteorder=options.byteorder, trace=writer.line)
    words_loaded = cpu.load(obj_path)
    if options.execute:
        logger.info("Executing %d words", words_loaded)
        cpu.run()

    writer.line(f"Result in accumulator: {cpu.acc}")
    writer.delimiter(final=True)
    writer.flush()

    return PipelineResult(
        accumulator=cpu.acc,
        words_loaded=words_loaded,
        final_state=cpu.get_state(),
        trace=list(cpu.trace),
        included=included,
    )
