# src/vmcodegen/codegen.py
from __future__ import annotations
from typing import Callable, TextIO, Union

from vmlang.commands import (
    Arithmetic, Call, Command, Function, Goto, IfGoto, Label, Pop, Push, Return,
)

from .arithmetic import emit_arithmetic
from .calls import emit_bootstrap, emit_call, emit_function, emit_return
from .context import TranslationUnitContext
from .control import emit_goto, emit_if_goto, emit_label
from .emit_hack import HackProgram
from .errors import UnsupportedCommandError
from .memory import emit_pop, emit_push


class CodeWriter:
    """Translates VM commands into Hack assembly on ``out``.

    Each command becomes one block (a ``// command`` line followed by its
    instructions) written with a single ``out.write``. A ``CodegenError`` is
    raised after the block, which then holds only a diagnostic comment.
    I/O errors from ``out`` are not caught.
    """

    def __init__(self, out: TextIO, context: TranslationUnitContext):
        self.out = out
        self.context = context

    def _emit(self, header: str, emitter: Callable[[HackProgram], None]) -> None:
        p = HackProgram()
        p.comment(header)
        try:
            emitter(p)
        finally:
            self.out.write(p.render())

    def write(self, cmd: Command) -> None:
        if isinstance(cmd, Arithmetic):
            self.write_arithmetic(cmd)
        elif isinstance(cmd, (Push, Pop)):
            self.write_push_pop(cmd)
        elif isinstance(cmd, Label):
            self.write_label(cmd)
        elif isinstance(cmd, Goto):
            self.write_goto(cmd)
        elif isinstance(cmd, IfGoto):
            self.write_if(cmd)
        elif isinstance(cmd, Function):
            self.write_function(cmd)
        elif isinstance(cmd, Call):
            self.write_call(cmd)
        elif isinstance(cmd, Return):
            self.write_return(cmd)
        else:
            self._emit(type(cmd).__name__, lambda p: _unknown(p, cmd))

    def write_arithmetic(self, cmd: Arithmetic) -> None:
        self._emit(cmd.text(), lambda p: emit_arithmetic(p, self.context, cmd))

    def write_push_pop(self, cmd: Union[Push, Pop]) -> None:
        if isinstance(cmd, Push):
            self._emit(cmd.text(), lambda p: emit_push(p, self.context, cmd))
        else:
            self._emit(cmd.text(), lambda p: emit_pop(p, self.context, cmd))

    def write_label(self, cmd: Label) -> None:
        self._emit(cmd.text(), lambda p: emit_label(p, self.context, cmd))

    def write_goto(self, cmd: Goto) -> None:
        self._emit(cmd.text(), lambda p: emit_goto(p, self.context, cmd))

    def write_if(self, cmd: IfGoto) -> None:
        self._emit(cmd.text(), lambda p: emit_if_goto(p, self.context, cmd))

    def write_function(self, cmd: Function) -> None:
        self._emit(cmd.text(), lambda p: emit_function(p, self.context, cmd))

    def write_call(self, cmd: Call) -> None:
        self._emit(cmd.text(), lambda p: emit_call(p, self.context, cmd))

    def write_return(self, cmd: Return = Return()) -> None:
        self._emit(cmd.text(), lambda p: emit_return(p, self.context, cmd))

    def write_init(self) -> None:
        """Bootstrap: SP = 256, then call Sys.init. Uses its own context."""
        ctx = TranslationUnitContext(unit_label="bootstrap")
        self._emit("bootstrap", lambda p: emit_bootstrap(p, ctx))


def _unknown(p: HackProgram, cmd: Command) -> None:
    p.comment(f"Unsupported command: {type(cmd).__name__}")
    raise UnsupportedCommandError(cmd, f"unknown command type {type(cmd).__name__}")
