# src/vmcodegen/translator.py
from __future__ import annotations

import io
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from vmlang.parser import CommandParser

from .codegen import CodeWriter
from .context import TranslationUnitContext, unit_label_for
from .errors import CodegenError

SOURCE_SUFFIX = ".vm"
OUTPUT_SUFFIX = ".asm"


@dataclass
class TranslationIssue:
    kind: str            # "parse" | "codegen" | "io"
    file: str
    line: int
    message: str
    command: str = ""

    def format(self) -> str:
        if self.kind == "parse":
            return f"[parse error] {self.file}: line={self.line}: {self.message}"
        if self.kind == "codegen":
            return f"[codegen error] {self.file}: line={self.line}: {self.command}: {self.message}"
        return f"[io error] {self.file}: {self.message}"


@dataclass
class TranslationReport:
    output: Path
    sources: List[Path]
    issues: List[TranslationIssue] = field(default_factory=list)
    commands: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues


def translate_source(text: str, file_name: str, out: TextIO) -> Tuple[int, List[TranslationIssue]]:
    """Translate one file's VM text onto ``out`` with a fresh context.

    Parse and codegen errors are collected and the offending command is
    skipped. Write errors on ``out`` propagate.
    """
    writer = CodeWriter(out, TranslationUnitContext(unit_label=unit_label_for(file_name)))
    parser = CommandParser(text)
    issues: List[TranslationIssue] = []
    count = 0

    while parser.has_more_commands():
        res = parser.advance()
        if res.error is not None:
            msg = f"col={res.error.column}: {res.error.message}"
            issues.append(TranslationIssue("parse", file_name, res.line, msg, res.source.strip()))
            continue
        if res.command is None:
            continue
        try:
            writer.write(res.command)
            count += 1
        except CodegenError as e:
            issues.append(TranslationIssue("codegen", file_name, res.line, e.message, e.command.text()))

    return count, issues


def collect_sources(path: Path) -> List[Path]:
    if path.is_dir():
        return sorted(p for p in path.iterdir() if p.is_file() and p.suffix == SOURCE_SUFFIX)
    return [path]


def output_path_for(path: Path) -> Path:
    # Prog/Main.vm -> Prog/Main.asm ; Prog/ -> Prog/Prog.asm
    if path.is_dir():
        return path / f"{path.resolve().name}{OUTPUT_SUFFIX}"
    return path.with_suffix(OUTPUT_SUFFIX)


def _translate_to_text(src: Path) -> Tuple[str, int, List[TranslationIssue]]:
    try:
        text = src.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return "", 0, [TranslationIssue("io", src.name, 0, f"cannot read source: {e}")]
    buf = io.StringIO()
    count, issues = translate_source(text, src.name, buf)
    return buf.getvalue(), count, issues


def translate(
    path: Path,
    output: Optional[Path] = None,
    bootstrap: Optional[bool] = None,
    jobs: int = 1,
) -> TranslationReport:
    """Translate a .vm file or a directory of .vm files into one .asm file.

    A directory gets the bootstrap by default, a single file does not.
    Files are translated in sorted name order; with ``jobs > 1`` they are
    translated concurrently and concatenated in the same order.
    """
    path = Path(path)
    sources = collect_sources(path)
    if not sources:
        raise FileNotFoundError(f"no {SOURCE_SUFFIX} files in {path}")
    if bootstrap is None:
        bootstrap = path.is_dir()
    output = Path(output) if output is not None else output_path_for(path)

    report = TranslationReport(output=output, sources=sources)

    if jobs > 1 and len(sources) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            parts = list(ex.map(_translate_to_text, sources))
    else:
        parts = [_translate_to_text(src) for src in sources]

    tmp = output.with_name(output.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8", newline="\n") as f:
            if bootstrap:
                CodeWriter(f, TranslationUnitContext(unit_label=path.stem)).write_init()
            for text, count, issues in parts:
                f.write(text)
                report.commands += count
                report.issues.extend(issues)
        tmp.replace(output)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise

    return report
