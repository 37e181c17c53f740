# src/vmcodegen/control.py
from __future__ import annotations

from vmlang.commands import Goto, IfGoto, Label

from .context import TranslationUnitContext
from .emit_hack import HackProgram, emit_jmp, emit_pop_d


def emit_label(p: HackProgram, ctx: TranslationUnitContext, cmd: Label) -> None:
    p.label(ctx.scoped(cmd.name))


def emit_goto(p: HackProgram, ctx: TranslationUnitContext, cmd: Goto) -> None:
    emit_jmp(p, ctx.scoped(cmd.label))


def emit_if_goto(p: HackProgram, ctx: TranslationUnitContext, cmd: IfGoto) -> None:
    # jump when the popped value is not false (0)
    emit_pop_d(p)
    p.add(f"@{ctx.scoped(cmd.label)}", "D;JNE")
