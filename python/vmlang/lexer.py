from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from lark import Lark, exceptions

COMMAND = "COMMAND"
ARG = "ARG"
ILLEGAL = "ILLEGAL"
EOF = "EOF"

GRAMMAR_PATH = Path(__file__).with_name("vm.lark")


@dataclass(frozen=True)
class Lexeme:
    kind: str   # COMMAND | ARG | ILLEGAL | EOF
    value: str
    line: int
    column: int


def make_lexer() -> Lark:
    grammar = GRAMMAR_PATH.read_text(encoding="utf-8")
    # basic lexer: tokens are classified without parser context
    return Lark(grammar, start="start", parser="lalr", lexer="basic")


_LEXER: Optional[Lark] = None


def _scan_line(text: str, lineno: int) -> List[Lexeme]:
    global _LEXER
    if _LEXER is None:
        _LEXER = make_lexer()

    out: List[Lexeme] = []
    offset = 0
    while offset < len(text):
        try:
            for tok in _LEXER.lex(text[offset:]):
                # first real word on the line is the command
                kind = ARG if any(lx.kind != ILLEGAL for lx in out) else COMMAND
                out.append(Lexeme(kind, str(tok), lineno, offset + tok.column))
            break
        except exceptions.UnexpectedCharacters as e:
            # report the character and keep scanning after it
            col = offset + e.column
            out.append(Lexeme(ILLEGAL, text[col - 1], lineno, col))
            offset = col
    return out


class VMLexer:
    """Pull-based scanner over VM source text.

    The first word of a line is a COMMAND, later words on the same line are
    ARGs. Comments and blank lines yield nothing. Once the input is exhausted
    ``next_token`` keeps returning an EOF lexeme.
    """

    def __init__(self, text: str):
        self.text = text
        self._lines = text.splitlines()
        self._it: Iterator[Lexeme] = self._lexemes()
        self._eof = Lexeme(EOF, "", len(self._lines) + 1, 1)

    def _lexemes(self) -> Iterator[Lexeme]:
        for lineno, line in enumerate(self._lines, start=1):
            yield from _scan_line(line, lineno)

    def next_token(self) -> Lexeme:
        return next(self._it, self._eof)

    def reset(self) -> None:
        self._it = self._lexemes()

    def __iter__(self) -> Iterator[Lexeme]:
        while True:
            lx = self.next_token()
            if lx.kind == EOF:
                return
            yield lx
