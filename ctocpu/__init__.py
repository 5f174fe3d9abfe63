"""C-to-CPU Simulator Core Package."""

from .cpu import CPU
from .memory import CAPACITY
from .runner import run_object, RunOptions, RunResult
from .pipeline import run_pipeline, PipelineResult
from .config import PipelineOptions
from .errors import (
    CToCPUError,
    InputUnavailable,
    SourceUnavailable,
    OutputUnavailable,
    ToolFailed,
    AllocationFailed,
    IncludeMissing,
    IllegalOpcode,
    NotRunning,
)

__all__ = [
    "CPU",
    "CAPACITY",
    "run_object",
    "RunOptions",
    "RunResult",
    "run_pipeline",
    "PipelineResult",
    "PipelineOptions",
    "CToCPUError",
    "InputUnavailable",
    "SourceUnavailable",
    "OutputUnavailable",
    "ToolFailed",
    "AllocationFailed",
    "IncludeMissing",
    "IllegalOpcode",
    "NotRunning",
]
