from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
from lark import Lark, Transformer, exceptions

from .commands import *
from .lexer import EOF, GRAMMAR_PATH, Lexeme, VMLexer

# largest constant an A-instruction can load
MAX_INDEX = 32767


@dataclass
class ParseResult:
    command: Optional[Command]
    error: Optional[ParseError]
    line: int
    source: str = ""


@dataclass
class ProgramParse:
    commands: List[Command]
    errors: List[ParseError]


class NoMoreCommandsError(Exception):
    pass


class CommandBuilder(Transformer):
    def start(self, items):
        # empty line (only a comment) -> no command
        return items[0] if items else None

    def segment(self, items):
        return str(items[0])

    def arithmetic(self, items):
        return Arithmetic(op=str(items[0]))

    def push(self, items):
        _, segment, index = items
        return Push(segment=segment, index=int(index))

    def pop(self, items):
        _, segment, index = items
        return Pop(segment=segment, index=int(index))

    def label(self, items):
        return Label(name=str(items[1]))

    def goto(self, items):
        return Goto(label=str(items[1]))

    def if_goto(self, items):
        return IfGoto(label=str(items[1]))

    def function(self, items):
        _, name, n_locals = items
        return Function(name=str(name), n_locals=int(n_locals))

    def call(self, items):
        _, name, n_args = items
        return Call(name=str(name), n_args=int(n_args))

    def return_(self, items):
        return Return()


def make_parser() -> Lark:
    grammar = GRAMMAR_PATH.read_text(encoding="utf-8")
    return Lark(grammar, start="start", parser="lalr", propagate_positions=True)


_PARSER: Optional[Lark] = None


def _describe(e: exceptions.UnexpectedInput, text: str) -> str:
    if isinstance(e, exceptions.UnexpectedCharacters):
        rest = text[e.column - 1:].split()
        return f"unexpected input {rest[0] if rest else text[e.column - 1:]!r}"
    if isinstance(e, exceptions.UnexpectedToken) and e.token.type != "$END":
        expected = ", ".join(sorted(e.expected))
        return f"unexpected {e.token.type} {str(e.token)!r}, expected {expected}"
    return "unexpected end of line, command is missing an argument"


def _error_column(e: exceptions.UnexpectedInput, text: str) -> int:
    if isinstance(e, exceptions.UnexpectedToken) and e.token.type == "$END":
        return len(text.split("//")[0].rstrip()) + 1
    if isinstance(e.column, int) and e.column > 0:
        return e.column
    return len(text) + 1


def _check_index(cmd: Command) -> Optional[str]:
    if cmd.arg2 is not None and cmd.arg2 > MAX_INDEX:
        return f"{cmd.kind.value} argument {cmd.arg2} out of range (max {MAX_INDEX})"
    return None


def parse_line(text: str, line: int = 1) -> ParseResult:
    """Parse one source line. Blank and comment-only lines give no command and no error."""
    global _PARSER
    if _PARSER is None:
        _PARSER = make_parser()
    try:
        tree = _PARSER.parse(text)
    except exceptions.UnexpectedInput as e:
        return ParseResult(
            command=None,
            error=ParseError(message=_describe(e, text), line=line, column=_error_column(e, text)),
            line=line,
            source=text,
        )

    cmd = CommandBuilder().transform(tree)
    if cmd is not None:
        msg = _check_index(cmd)
        if msg is not None:
            column = text.rfind(str(cmd.arg2)) + 1
            return ParseResult(None, ParseError(msg, line, column), line, text)
    return ParseResult(command=cmd, error=None, line=line, source=text)


class CommandParser:
    """Sequential parser handing out one command (or one error) per ``advance``.

    Lines are located with the scanner: every COMMAND lexeme starts a new
    command line, which is then parsed on its own so that a malformed line is
    reported and skipped without stopping the rest of the file.
    """

    def __init__(self, text: str):
        self.lexer = VMLexer(text)
        self._lines = text.splitlines()
        self._current_line = 0
        self._lookahead = self._next_line_start()

    def _next_line_start(self) -> Lexeme:
        lx = self.lexer.next_token()
        while lx.kind != EOF and lx.line == self._current_line:
            lx = self.lexer.next_token()
        return lx

    def has_more_commands(self) -> bool:
        return self._lookahead.kind != EOF

    def advance(self) -> ParseResult:
        if not self.has_more_commands():
            raise NoMoreCommandsError("parser has no more commands")

        lineno = self._lookahead.line
        self._current_line = lineno
        self._lookahead = self._next_line_start()
        return parse_line(self._lines[lineno - 1], lineno)


def parse_text(text: str) -> ProgramParse:
    parser = CommandParser(text)
    commands: List[Command] = []
    errors: List[ParseError] = []
    while parser.has_more_commands():
        res = parser.advance()
        if res.error is not None:
            errors.append(res.error)
        elif res.command is not None:
            commands.append(res.command)
    return ProgramParse(commands=commands, errors=errors)
