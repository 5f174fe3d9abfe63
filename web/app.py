"""FastAPI web adapter for the C-to-CPU simulator."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Optional

from ctocpu import CAPACITY, RunOptions, run_object
from ctocpu.config import NAME, VERSION
from ctocpu.instructions import MNEMONICS
from ctocpu.memory import BYTE_ORDERS, WORD_BYTES


# Constants
MAX_OBJECT_BYTES = CAPACITY * WORD_BYTES * 4


# Request/Response models
class RunOptionsModel(BaseModel):
    capacity: int = Field(default=CAPACITY, ge=1, le=65536)
    byteorder: str = "little"
    execute: bool = True
    trace: bool = True
    watch: list[int] = Field(default_factory=list)


class RunRequest(BaseModel):
    object_hex: str
    options: Optional[RunOptionsModel] = None


class RunResponse(BaseModel):
    status: str
    words_loaded: int
    final_state: dict
    trace: list[str]
    memory: dict[str, int]
    diagnostics: list[dict]
    error: Optional[dict] = None


# Create FastAPI app
app = FastAPI(
    title=NAME,
    description="Web API for loading object words into a single-accumulator CPU",
    version=VERSION,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/isa")
async def get_isa():
    """Opcode table of the emulated CPU."""
    return {
        "capacity": CAPACITY,
        "opcodes": {str(op): name for op, name in MNEMONICS.items()},
    }


@app.post("/api/run", response_model=RunResponse)
async def run_code(request: RunRequest):
    """Load and execute an object given as hex bytes.

    Args:
        request: Object bytes in hex and execution options

    Returns:
        Execution result with trace and final state
    """
    text = "".join(request.object_hex.split())
    if len(text) > MAX_OBJECT_BYTES * 2:
        raise HTTPException(
            status_code=400,
            detail=f"Object size exceeds limit of {MAX_OBJECT_BYTES} bytes",
        )
    try:
        data = bytes.fromhex(text)
    except ValueError:
        raise HTTPException(status_code=400, detail="object_hex is not valid hex")

    opts = request.options or RunOptionsModel()
    if opts.byteorder not in BYTE_ORDERS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid byte order: {opts.byteorder}",
        )

    run_opts = RunOptions(
        capacity=opts.capacity,
        byteorder=opts.byteorder,
        execute=opts.execute,
        trace=opts.trace,
        watch=opts.watch,
    )

    result = run_object(data, options=run_opts)
    return result.to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
