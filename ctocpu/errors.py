"""Custom exceptions for the C-to-CPU simulator."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorInfo:
    """Structured error information for API responses."""
    type: str
    message: str
    step: int
    pc: int
    path: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "message": self.message,
            "step": self.step,
            "pc": self.pc,
            "path": self.path,
        }


class CToCPUError(Exception):
    """Base exception for all simulator errors."""

    def __init__(
        self,
        message: str,
        step: int = 0,
        pc: int = 0,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.step = step
        self.pc = pc
        self.path = path

    def to_error_info(self) -> ErrorInfo:
        return ErrorInfo(
            type=self.__class__.__name__,
            message=self.message,
            step=self.step,
            pc=self.pc,
            path=self.path,
        )


class InputUnavailable(CToCPUError):
    """A required input file cannot be opened."""
    pass


class SourceUnavailable(InputUnavailable):
    """The CPU loader cannot open its byte source."""
    pass


class OutputUnavailable(CToCPUError):
    """A required output file cannot be created."""
    pass


class ToolFailed(CToCPUError):
    """External compiler or assembler exited with a nonzero status."""

    def __init__(
        self,
        message: str,
        tool: str = "",
        returncode: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.tool = tool
        self.returncode = returncode


class AllocationFailed(CToCPUError):
    """Buffering an artifact in memory failed."""
    pass


class IncludeMissing(CToCPUError):
    """File named by #include "..." cannot be opened. Non-fatal."""
    pass


class IncludeCycle(IncludeMissing):
    """File includes itself directly or transitively. Non-fatal."""
    pass


class CPUError(CToCPUError):
    """Error raised by the emulated CPU."""
    pass


class IllegalOpcode(CPUError):
    """Decoded opcode outside the ISA. Non-fatal, reported as a diagnostic."""

    def __init__(self, message: str, opcode: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.opcode = opcode


class NotRunning(CPUError):
    """step() called on a halted CPU."""
    pass


class MemoryAccessError(CPUError):
    """Memory address out of bounds."""
    pass
