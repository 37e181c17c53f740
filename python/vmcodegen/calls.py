# src/vmcodegen/calls.py
from __future__ import annotations

from vmlang.commands import Call, Function, Return

from .context import TranslationUnitContext
from .emit_hack import (
    HackProgram, emit_inc_sp, emit_jmp, emit_load_cell, emit_load_constant, emit_pop_d,
    emit_push_d, emit_store_d,
)
from .tables import FRAME, FRAME_SEGMENTS, FRAME_SIZE, INIT_FUNCTION, RETURN_ADDRESS, SP, STACK_BASE


def emit_function(p: HackProgram, ctx: TranslationUnitContext, cmd: Function) -> None:
    p.label(cmd.name)
    ctx.enter_function(cmd.name)
    # zero-initialise the locals
    for _ in range(cmd.n_locals):
        p.add(f"@{SP}", "A=M", "M=0")
        emit_inc_sp(p)


def emit_call(p: HackProgram, ctx: TranslationUnitContext, cmd: Call) -> None:
    ret_label = ctx.next_return_label()

    emit_load_constant(p, ret_label)
    emit_push_d(p)
    for reg in FRAME_SEGMENTS:
        emit_load_cell(p, reg)
        emit_push_d(p)

    # ARG = SP - n - 5, after the frame is on the stack
    p.add(f"@{SP}", "D=M", f"@{cmd.n_args + FRAME_SIZE}", "D=D-A")
    emit_store_d(p, "ARG")
    # LCL = SP
    emit_load_cell(p, SP)
    emit_store_d(p, "LCL")

    emit_jmp(p, cmd.name)
    p.label(ret_label)


def emit_return(p: HackProgram, ctx: TranslationUnitContext, cmd: Return) -> None:
    """Tear down the current frame and jump back to the caller.

    The return address is read before ``*ARG`` is overwritten: with no
    arguments both refer to the same cell.
    """
    emit_load_cell(p, "LCL")
    emit_store_d(p, FRAME)
    p.add(f"@{FRAME_SIZE}", "A=D-A", "D=M")
    emit_store_d(p, RETURN_ADDRESS)

    # *ARG = pop(); SP = ARG + 1
    emit_pop_d(p)
    p.add("@ARG", "A=M", "M=D")
    p.add("@ARG", "D=M+1")
    emit_store_d(p, SP)

    # THAT, THIS, ARG, LCL = *(FRAME-1) .. *(FRAME-4)
    for offset, reg in enumerate(reversed(FRAME_SEGMENTS), start=1):
        emit_load_cell(p, FRAME)
        p.add(f"@{offset}", "A=D-A", "D=M")
        emit_store_d(p, reg)

    p.add(f"@{RETURN_ADDRESS}", "A=M", "0;JMP")


def emit_bootstrap(p: HackProgram, ctx: TranslationUnitContext) -> None:
    emit_load_constant(p, STACK_BASE)
    emit_store_d(p, SP)
    # the call is made on behalf of Sys.init; counter 0 keeps its label
    # clear of Sys.init's own first call
    ctx.current_function = INIT_FUNCTION
    ctx.return_counter = 0
    p.comment(f"call {INIT_FUNCTION} 0")
    emit_call(p, ctx, Call(name=INIT_FUNCTION, n_args=0))
