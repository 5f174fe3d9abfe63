"""Wrappers around the external C compiler and assembler.

Neither wrapper captures tool output; results are read back from the files
the tools write.
"""

import logging
import subprocess
from typing import Optional, Sequence

from .errors import ToolFailed

logger = logging.getLogger(__name__)


def _run_tool(tool: str, cmd: list[str], what: str) -> None:
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError as e:
        raise ToolFailed(f"{what} not found: {tool}", tool=tool) from e
    if result.returncode != 0:
        raise ToolFailed(
            f"{what} failed with exit status {result.returncode}",
            tool=tool,
            returncode=result.returncode,
        )


def emit_assembly(
    source_path: str,
    asm_path: str,
    compiler: str = "gcc",
    flags: Optional[Sequence[str]] = None,
) -> None:
    """Compile source_path to assembly at asm_path.

    Raises:
        ToolFailed: compiler missing or exited nonzero
    """
    logger.info("Generating assembly code...")
    cmd = [compiler, "-S", *(flags or ()), "-o", str(asm_path), str(source_path)]
    _run_tool(compiler, cmd, "Compiler")
    logger.info("Assembly code generated")


def emit_object(
    asm_path: str,
    obj_path: str,
    assembler: str = "as",
    flags: Optional[Sequence[str]] = None,
) -> None:
    """Assemble asm_path to an object file at obj_path.

    Raises:
        ToolFailed: assembler missing or exited nonzero
    """
    logger.info("Generating binary code...")
    cmd = [assembler, *(flags or ()), "-o", str(obj_path), str(asm_path)]
    _run_tool(assembler, cmd, "Assembler")
    logger.info("Binary code generated")
