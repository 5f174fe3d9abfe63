"""Pipeline configuration."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .memory import BYTE_ORDERS, CAPACITY

NAME = "CtoCPUSimulator"
VERSION = "1.0.0"

DELIMITER = "##OUTPUT##"

# Text artifacts are passed through byte for byte: undecodable bytes survive
# as surrogates and line endings are never translated.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

ENV_COMPILER = "CTOCPU_CC"
ENV_ASSEMBLER = "CTOCPU_AS"
ENV_BYTEORDER = "CTOCPU_BYTEORDER"


@dataclass
class PipelineOptions:
    """Options for the preprocess/compile/assemble/load pipeline."""
    compiler: str = "gcc"
    assembler: str = "as"
    compiler_flags: list[str] = field(default_factory=list)
    assembler_flags: list[str] = field(default_factory=list)
    execute: bool = False
    byteorder: str = "little"
    capacity: int = CAPACITY

    def __post_init__(self):
        if self.byteorder not in BYTE_ORDERS:
            raise ValueError(f"Unknown byte order: {self.byteorder!r}")
        if self.capacity < 1:
            raise ValueError("Capacity must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "PipelineOptions":
        """Build options from CTOCPU_* environment variables.

        Keyword overrides that are not None take precedence.
        """
        if environ is None:
            environ = os.environ
        values = {}
        if environ.get(ENV_COMPILER):
            values["compiler"] = environ[ENV_COMPILER]
        if environ.get(ENV_ASSEMBLER):
            values["assembler"] = environ[ENV_ASSEMBLER]
        if environ.get(ENV_BYTEORDER):
            values["byteorder"] = environ[ENV_BYTEORDER]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
