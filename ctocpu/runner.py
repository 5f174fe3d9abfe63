"""Object runner with tracing for the C-to-CPU simulator."""

import io
from dataclasses import dataclass, field
from typing import Callable, Optional

from .cpu import CPU
from .errors import CToCPUError, ErrorInfo
from .memory import CAPACITY


@dataclass
class RunOptions:
    """Options for object execution."""
    capacity: int = CAPACITY
    byteorder: str = "little"
    execute: bool = True
    trace: bool = True
    watch: list[int] = field(default_factory=list)


@dataclass
class RunResult:
    """Result of loading and running an object."""
    status: str  # "ok" | "error"
    words_loaded: int
    final_state: dict
    trace: list[str]
    memory: dict[str, int] = field(default_factory=dict)
    diagnostics: list[ErrorInfo] = field(default_factory=list)
    error: Optional[ErrorInfo] = None

    @property
    def accumulator(self) -> int:
        return self.final_state["acc"]

    def to_dict(self) -> dict:
        result = {
            "status": self.status,
            "words_loaded": self.words_loaded,
            "final_state": self.final_state,
            "trace": self.trace,
            "memory": self.memory,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def run_object(
    data: bytes,
    options: Optional[RunOptions] = None,
    trace_sink: Optional[Callable[[str], None]] = None,
) -> RunResult:
    """Load raw object bytes into a fresh CPU and optionally run it.

    Args:
        data: Object bytes, consumed four at a time as words
        options: Execution options
        trace_sink: Called with each trace line as it is produced

    Returns:
        RunResult with status, final state and trace
    """
    if options is None:
        options = RunOptions()

    cpu = CPU(capacity=options.capacity, byteorder=options.byteorder, trace=trace_sink)
    words_loaded = 0
    error_info: Optional[ErrorInfo] = None

    try:
        words_loaded = cpu.load(io.BytesIO(data))
        if options.execute:
            cpu.run()
    except CToCPUError as e:
        e.step = cpu.steps
        e.pc = cpu.pc
        error_info = e.to_error_info()

    return RunResult(
        status="ok" if error_info is None else "error",
        words_loaded=words_loaded,
        final_state=cpu.get_state(),
        trace=cpu.trace if options.trace else [],
        memory=cpu.memory.get_watched(options.watch),
        diagnostics=[d.to_error_info() for d in cpu.diagnostics],
        error=error_info,
    )
