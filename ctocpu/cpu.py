"""Single-accumulator CPU for the C-to-CPU simulator."""

import logging
import os
from typing import BinaryIO, Callable, Optional, Union

from .errors import IllegalOpcode, NotRunning, SourceUnavailable
from .instructions import INSTRUCTION_EXECUTORS, Instruction, decode, execute_instruction
from .memory import CAPACITY, WORD_BITS, Memory, resolve_byteorder

logger = logging.getLogger(__name__)

ByteSource = Union[str, "os.PathLike[str]", BinaryIO]


class CPU:
    """CPU state: program counter, accumulator and word memory.

    The CPU is Ready while pc < capacity and Halted once pc == capacity.
    """

    def __init__(
        self,
        capacity: int = CAPACITY,
        byteorder: str = "little",
        trace: Optional[Callable[[str], None]] = None,
    ):
        self.capacity = capacity
        self.byteorder = resolve_byteorder(byteorder)
        self.memory = Memory(size=capacity, word_bits=WORD_BITS)
        self._trace_sink = trace

        # Registers
        self.acc: int = 0
        self.pc: int = 0
        self.ir: Optional[Instruction] = None  # Last decoded instruction
        self.steps: int = 0
        self.trace: list[str] = []
        self.diagnostics: list[IllegalOpcode] = []

    @property
    def halted(self) -> bool:
        return self.pc >= self.capacity

    def set_acc(self, value: int) -> None:
        """Set ACC with two's-complement wrap."""
        self.acc = self.memory.normalize(value)

    def load(self, source: ByteSource) -> int:
        """Fill the memory prefix with words read from a path or binary stream.

        Returns the number of words loaded. pc and acc are left alone.
        """
        if hasattr(source, "read"):
            loaded = self.memory.load_stream(source, self.byteorder)
        else:
            try:
                with open(source, "rb") as stream:
                    loaded = self.memory.load_stream(stream, self.byteorder)
            except OSError as e:
                raise SourceUnavailable(
                    f"Unable to open object file: {source}",
                    path=os.fspath(source),
                ) from e
        logger.debug("Loaded %d words into memory", loaded)
        return loaded

    def step(self) -> str:
        """Fetch, decode and execute the instruction at pc.

        Returns the trace line describing the effect.
        """
        if self.halted:
            raise NotRunning("CPU is halted", step=self.steps, pc=self.pc)

        instr = decode(self.memory.read(self.pc))
        self.ir = instr

        if instr.opcode not in INSTRUCTION_EXECUTORS:
            diag = IllegalOpcode(
                f"Unknown opcode {instr.opcode} at address {self.pc}",
                opcode=instr.opcode,
                step=self.steps + 1,
                pc=self.pc,
            )
            logger.warning("%s", diag.message)
            self.diagnostics.append(diag)

        line, new_pc = execute_instruction(instr, self)
        self.pc = new_pc if new_pc is not None else self.pc + 1
        self.steps += 1

        self.trace.append(line)
        if self._trace_sink is not None:
            self._trace_sink(line)
        return line

    def run(self) -> int:
        """Step until halted and return the accumulator."""
        while not self.halted:
            self.step()
        return self.acc

    def get_state(self) -> dict:
        """Get current register state as dictionary."""
        return {
            "acc": self.acc,
            "pc": self.pc,
            "halted": self.halted,
            "steps": self.steps,
            "ir": self.ir.text if self.ir is not None else "",
        }

    def reset(self) -> None:
        """Reset registers to initial state, keeping memory contents."""
        self.acc = 0
        self.pc = 0
        self.ir = None
        self.steps = 0
        self.trace = []
        self.diagnostics = []
