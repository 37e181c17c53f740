# src/vmcodegen/tables.py
from __future__ import annotations
from typing import Dict

# stack starts right after the 256 cells of registers and statics
STACK_BASE = 256

SP = "SP"

# base pointer registers of the indirect segments
SEGMENT_POINTERS: Dict[str, str] = {
    "local": "LCL",
    "argument": "ARG",
    "this": "THIS",
    "that": "THAT",
}

TEMP_BASE = "R5"
TEMP_SIZE = 8

# pointer 0 / pointer 1
POINTER_CELLS: Dict[int, str] = {
    0: "THIS",
    1: "THAT",
}

# reserved scratch cells, not reentrant
POP_ADDRESS = "R13"
FRAME = "R14"
RETURN_ADDRESS = "R15"

# saved by call, restored by return (in reverse)
FRAME_SEGMENTS = ("LCL", "ARG", "THIS", "THAT")
FRAME_SIZE = 5

BINARY_OPS: Dict[str, str] = {
    "add": "D=D+M",
    "sub": "D=M-D",
    "and": "D=D&M",
    "or": "D=D|M",
}

UNARY_OPS: Dict[str, str] = {
    "neg": "D=-M",
    "not": "D=!M",
}

# jump taken when (first - second) satisfies the comparison
COMPARISON_JUMPS: Dict[str, str] = {
    "eq": "JEQ",
    "gt": "JGT",
    "lt": "JLT",
}

INIT_FUNCTION = "Sys.init"
