from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass
class ParseError:
    message: str
    line: int
    column: int


class CommandKind(Enum):
    ARITHMETIC = "arithmetic"
    PUSH = "push"
    POP = "pop"
    LABEL = "label"
    GOTO = "goto"
    IF_GOTO = "if-goto"
    FUNCTION = "function"
    CALL = "call"
    RETURN = "return"


# ---- Commands ----
class Command:
    """Base of the VM command variants.

    ``arg1``/``arg2`` mirror the classic parser accessors; ``arg2`` is only
    present for push, pop, function and call.
    """

    kind: CommandKind

    @property
    def arg1(self) -> str:
        return ""

    @property
    def arg2(self) -> Optional[int]:
        return None

    def text(self) -> str:
        parts = [self.kind.value, self.arg1, "" if self.arg2 is None else str(self.arg2)]
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class Arithmetic(Command):
    op: str

    kind = CommandKind.ARITHMETIC

    @property
    def arg1(self) -> str:
        return self.op

    def text(self) -> str:
        return self.op


@dataclass(frozen=True)
class Push(Command):
    segment: str
    index: int

    kind = CommandKind.PUSH

    @property
    def arg1(self) -> str:
        return self.segment

    @property
    def arg2(self) -> Optional[int]:
        return self.index


@dataclass(frozen=True)
class Pop(Command):
    segment: str
    index: int

    kind = CommandKind.POP

    @property
    def arg1(self) -> str:
        return self.segment

    @property
    def arg2(self) -> Optional[int]:
        return self.index


@dataclass(frozen=True)
class Label(Command):
    name: str

    kind = CommandKind.LABEL

    @property
    def arg1(self) -> str:
        return self.name


@dataclass(frozen=True)
class Goto(Command):
    label: str

    kind = CommandKind.GOTO

    @property
    def arg1(self) -> str:
        return self.label


@dataclass(frozen=True)
class IfGoto(Command):
    label: str

    kind = CommandKind.IF_GOTO

    @property
    def arg1(self) -> str:
        return self.label


@dataclass(frozen=True)
class Function(Command):
    name: str
    n_locals: int

    kind = CommandKind.FUNCTION

    @property
    def arg1(self) -> str:
        return self.name

    @property
    def arg2(self) -> Optional[int]:
        return self.n_locals


@dataclass(frozen=True)
class Call(Command):
    name: str
    n_args: int

    kind = CommandKind.CALL

    @property
    def arg1(self) -> str:
        return self.name

    @property
    def arg2(self) -> Optional[int]:
        return self.n_args


@dataclass(frozen=True)
class Return(Command):
    kind = CommandKind.RETURN


def has_arg2(kind: CommandKind) -> bool:
    return kind in (CommandKind.PUSH, CommandKind.POP, CommandKind.FUNCTION, CommandKind.CALL)
