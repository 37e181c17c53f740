from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class TranslationUnitContext:
    """Mutable naming state for one translation unit (usually one .vm file).

    Counters restart at 1 on every ``function`` command, so generated labels
    are unique within a function; the function name makes them unique across
    the program. Each worker translating a file owns its own instance.
    """
    unit_label: str
    current_function: str = ""
    comparison_counter: int = 1
    return_counter: int = 1

    def enter_function(self, name: str) -> None:
        self.current_function = name
        self.comparison_counter = 1
        self.return_counter = 1

    def scoped(self, label: str) -> str:
        # user labels outside any function stay global
        if self.current_function:
            return f"{self.current_function}${label}"
        return label

    def _owner(self) -> str:
        return self.current_function or self.unit_label

    def next_comparison_labels(self, op: str) -> Tuple[str, str]:
        n = self.comparison_counter
        self.comparison_counter += 1
        tag = op.upper()
        owner = self._owner()
        return f"{owner}${tag}$TRUE.{n}", f"{owner}${tag}$END.{n}"

    def next_return_label(self) -> str:
        n = self.return_counter
        self.return_counter += 1
        return f"{self._owner()}$ret.{n}"


def unit_label_for(file_name: str) -> str:
    # "dir/Main.vm" -> "Main"
    base = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    return base.split(".")[0]
