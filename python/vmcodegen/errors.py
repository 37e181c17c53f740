from __future__ import annotations

from vmlang.commands import Command


class CodegenError(Exception):
    """A command could not be translated. The rest of the file still can."""

    def __init__(self, command: Command, message: str):
        super().__init__(message)
        self.command = command
        self.message = message

    def __str__(self) -> str:
        return f"{self.command.text()}: {self.message}"


class UnsupportedCommandError(CodegenError):
    pass


class InvalidPopError(CodegenError):
    pass


class SegmentIndexError(CodegenError):
    pass
