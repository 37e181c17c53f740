# src/vmcodegen/arithmetic.py
from __future__ import annotations

from vmlang.commands import Arithmetic

from .context import TranslationUnitContext
from .emit_hack import HackProgram, emit_dec_sp, emit_inc_sp, emit_jmp, emit_pop_d, emit_push_d
from .errors import UnsupportedCommandError
from .tables import BINARY_OPS, COMPARISON_JUMPS, SP, UNARY_OPS


def emit_arithmetic(p: HackProgram, ctx: TranslationUnitContext, cmd: Arithmetic) -> None:
    op = cmd.op
    if op in BINARY_OPS:
        emit_binary(p, op)
    elif op in UNARY_OPS:
        emit_unary(p, op)
    elif op in COMPARISON_JUMPS:
        emit_comparison(p, ctx, op)
    else:
        # no stack pointer adjustment: nothing was popped
        p.comment(f"Unsupported command: {op}")
        raise UnsupportedCommandError(cmd, f"unsupported arithmetic command {op!r}")


def emit_binary(p: HackProgram, op: str) -> None:
    emit_pop_d(p)             # D = second operand
    emit_dec_sp(p)            # M = first operand
    p.add(BINARY_OPS[op])
    emit_push_d(p)


def emit_unary(p: HackProgram, op: str) -> None:
    emit_dec_sp(p)
    p.add(UNARY_OPS[op])
    emit_push_d(p)


def emit_comparison(p: HackProgram, ctx: TranslationUnitContext, op: str) -> None:
    true_label, end_label = ctx.next_comparison_labels(op)
    emit_pop_d(p)
    emit_dec_sp(p)
    p.add("D=M-D")            # first - second
    p.add(f"@{true_label}", f"D;{COMPARISON_JUMPS[op]}")
    p.add("D=0")
    emit_jmp(p, end_label)
    p.label(true_label)
    p.add("D=-1")
    p.label(end_label)
    p.add(f"@{SP}", "A=M", "M=D")
    emit_inc_sp(p)
