# src/vmcodegen/memory.py
from __future__ import annotations
from typing import Union

from vmlang.commands import Pop, Push

from .context import TranslationUnitContext
from .emit_hack import (
    HackProgram, emit_load_cell, emit_load_constant, emit_pop_d, emit_push_d, emit_store_d,
)
from .errors import InvalidPopError, SegmentIndexError
from .tables import POINTER_CELLS, POP_ADDRESS, SEGMENT_POINTERS, TEMP_BASE, TEMP_SIZE


def _check_segment(p: HackProgram, cmd: Union[Push, Pop]) -> None:
    seg, idx = cmd.segment, cmd.index
    if seg == "constant" and isinstance(cmd, Pop):
        p.comment(f"Invalid command: {cmd.text()}")
        raise InvalidPopError(cmd, "constant segment is not addressable")
    if seg == "pointer" and idx not in POINTER_CELLS:
        p.comment(f"Invalid command: {cmd.text()}")
        raise SegmentIndexError(cmd, f"pointer index must be 0 or 1, got {idx}")
    if seg == "temp" and idx >= TEMP_SIZE:
        p.comment(f"Invalid command: {cmd.text()}")
        raise SegmentIndexError(cmd, f"temp index must be 0..{TEMP_SIZE - 1}, got {idx}")
    if seg not in SEGMENT_POINTERS and seg not in ("constant", "temp", "pointer", "static"):
        p.comment(f"Invalid command: {cmd.text()}")
        raise SegmentIndexError(cmd, f"unknown segment {seg!r}")


def static_symbol(ctx: TranslationUnitContext, index: int) -> str:
    return f"{ctx.unit_label}.{index}"


def emit_push(p: HackProgram, ctx: TranslationUnitContext, cmd: Push) -> None:
    _check_segment(p, cmd)
    seg, idx = cmd.segment, cmd.index

    if seg == "constant":
        emit_load_constant(p, idx)
    elif seg in SEGMENT_POINTERS:
        emit_load_constant(p, idx)
        p.add(f"@{SEGMENT_POINTERS[seg]}", "A=D+M", "D=M")
    elif seg == "temp":
        emit_load_constant(p, idx)
        p.add(f"@{TEMP_BASE}", "A=D+A", "D=M")
    elif seg == "pointer":
        emit_load_cell(p, POINTER_CELLS[idx])
    else:  # static
        emit_load_cell(p, static_symbol(ctx, idx))

    emit_push_d(p)


def emit_pop(p: HackProgram, ctx: TranslationUnitContext, cmd: Pop) -> None:
    """Pop the stack top into ``segment[index]``.

    Indirect destinations are computed first and parked in the POP_ADDRESS
    cell, since popping needs both D and A. The sequence is not reentrant.
    """
    _check_segment(p, cmd)
    seg, idx = cmd.segment, cmd.index

    if seg in SEGMENT_POINTERS or seg == "temp":
        emit_load_constant(p, idx)
        if seg == "temp":
            p.add(f"@{TEMP_BASE}", "D=D+A")
        else:
            p.add(f"@{SEGMENT_POINTERS[seg]}", "D=D+M")
        emit_store_d(p, POP_ADDRESS)
        emit_pop_d(p)
        p.add(f"@{POP_ADDRESS}", "A=M", "M=D")
    elif seg == "pointer":
        emit_pop_d(p)
        emit_store_d(p, POINTER_CELLS[idx])
    else:  # static
        emit_pop_d(p)
        emit_store_d(p, static_symbol(ctx, idx))
