"""Instruction decoding and execution for the emulated CPU."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .cpu import CPU

OPCODE_SHIFT = 24
OPCODE_MASK = 0xFF
OPERAND_MASK = 0xFFFFFF
WORD_MASK = 0xFFFFFFFF

OP_LOAD = 0
OP_ADD = 1
OP_SUB = 2
OP_HALT = 3

MNEMONICS: dict[int, str] = {
    OP_LOAD: "LOAD",
    OP_ADD: "ADD",
    OP_SUB: "SUB",
    OP_HALT: "HALT",
}


@dataclass(frozen=True)
class Instruction:
    """Decoded instruction word."""
    word: int
    opcode: int
    operand: int

    @property
    def mnemonic(self) -> Optional[str]:
        return MNEMONICS.get(self.opcode)

    @property
    def text(self) -> str:
        if self.mnemonic is None:
            return f".word 0x{self.word:08x}"
        if self.opcode == OP_HALT:
            return self.mnemonic
        return f"{self.mnemonic} {self.operand}"


def decode(word: int) -> Instruction:
    """Split a word into its 8-bit opcode and unsigned 24-bit operand."""
    word &= WORD_MASK
    return Instruction(
        word=word,
        opcode=(word >> OPCODE_SHIFT) & OPCODE_MASK,
        operand=word & OPERAND_MASK,
    )


def encode(opcode: int, operand: int = 0) -> int:
    """Build an instruction word from opcode and operand."""
    if not 0 <= opcode <= OPCODE_MASK:
        raise ValueError(f"Opcode out of range: {opcode}")
    if not 0 <= operand <= OPERAND_MASK:
        raise ValueError(f"Operand out of range: {operand}")
    return (opcode << OPCODE_SHIFT) | operand


# Executors mutate the CPU and return the trace line. A returned new pc of
# None means fall through to pc + 1.
InstructionExecutor = Callable[[Instruction, "CPU"], tuple[str, Optional[int]]]


def execute_load(instr: Instruction, cpu: CPU) -> tuple[str, Optional[int]]:
    """LOAD imm: ACC := operand"""
    cpu.set_acc(instr.operand)
    return f"Loaded {instr.operand} into accumulator", None


def execute_add(instr: Instruction, cpu: CPU) -> tuple[str, Optional[int]]:
    """ADD imm: ACC := ACC + operand"""
    cpu.set_acc(cpu.acc + instr.operand)
    return f"Added {instr.operand} to accumulator", None


def execute_sub(instr: Instruction, cpu: CPU) -> tuple[str, Optional[int]]:
    """SUB imm: ACC := ACC - operand"""
    cpu.set_acc(cpu.acc - instr.operand)
    return f"Subtracted {instr.operand} from accumulator", None


def execute_halt(instr: Instruction, cpu: CPU) -> tuple[str, Optional[int]]:
    """HALT: PC := CAPACITY"""
    return "Halted execution", cpu.capacity


INSTRUCTION_EXECUTORS: dict[int, InstructionExecutor] = {
    OP_LOAD: execute_load,
    OP_ADD: execute_add,
    OP_SUB: execute_sub,
    OP_HALT: execute_halt,
}


def execute_instruction(instr: Instruction, cpu: CPU) -> tuple[str, Optional[int]]:
    """Execute a single decoded instruction.

    Returns:
        Trace line and the new PC (None to advance by one). Unknown
        opcodes produce an "Unknown opcode" trace line and leave the
        accumulator untouched.
    """
    executor = INSTRUCTION_EXECUTORS.get(instr.opcode)
    if executor is None:
        return f"Unknown opcode {instr.opcode}", None
    return executor(instr, cpu)
