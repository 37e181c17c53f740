# src/vmcodegen/emit_hack.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .tables import SP


@dataclass
class HackProgram:
    lines: List[str] = field(default_factory=list)

    def add(self, *instrs: str) -> None:
        self.lines.extend(instrs)

    def label(self, name: str) -> None:
        self.lines.append(f"({name})")

    def comment(self, text: str) -> None:
        self.lines.append(f"// {text}")

    def render(self) -> str:
        return "".join(line + "\n" for line in self.lines)


# ----------------- stack helpers -----------------

def emit_push_d(p: HackProgram) -> None:
    # *SP = D; SP++
    p.add(f"@{SP}", "A=M", "M=D")
    emit_inc_sp(p)

def emit_inc_sp(p: HackProgram) -> None:
    p.add(f"@{SP}", "M=M+1")

def emit_dec_sp(p: HackProgram) -> None:
    # SP--; A = SP
    p.add(f"@{SP}", "AM=M-1")

def emit_pop_d(p: HackProgram) -> None:
    emit_dec_sp(p)
    p.add("D=M")

def emit_load_constant(p: HackProgram, value: int | str) -> None:
    p.add(f"@{value}", "D=A")

def emit_load_cell(p: HackProgram, symbol: str) -> None:
    p.add(f"@{symbol}", "D=M")

def emit_store_d(p: HackProgram, symbol: str) -> None:
    p.add(f"@{symbol}", "M=D")

def emit_jmp(p: HackProgram, label: str) -> None:
    p.add(f"@{label}", "0;JMP")
