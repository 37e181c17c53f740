# src/vmcodegen/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .translator import SOURCE_SUFFIX, collect_sources, output_path_for, translate


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="vmtranslate",
        description="Translate VM code (.vm file or directory of .vm files) to Hack assembly",
    )
    p.add_argument("input", help="Input .vm file or directory")
    p.add_argument("-o", "--output", help="Output .asm path (default: next to the input)")
    boot = p.add_mutually_exclusive_group()
    boot.add_argument("--bootstrap", dest="bootstrap", action="store_true", default=None,
                      help="Emit SP=256 / call Sys.init first (default for directories)")
    boot.add_argument("--no-bootstrap", dest="bootstrap", action="store_false",
                      help="Do not emit bootstrap code (default for single files)")
    p.add_argument("-j", "--jobs", type=int, default=1, help="Translate files on N threads")
    p.add_argument("--errors", help="Also write the issue list to this file")
    p.add_argument("-q", "--quiet", action="store_true", help="Only print errors")
    args = p.parse_args(argv)

    inp = Path(args.input)
    if not inp.exists():
        print(f"[vmtranslate] ERROR: input not found: {inp}", file=sys.stderr)
        return 2
    if inp.is_file() and inp.suffix != SOURCE_SUFFIX:
        print(f"[vmtranslate] ERROR: expected a {SOURCE_SUFFIX} file: {inp}", file=sys.stderr)
        return 2
    sources = collect_sources(inp)
    if not sources:
        print(f"[vmtranslate] ERROR: no {SOURCE_SUFFIX} files in {inp}", file=sys.stderr)
        return 2

    output = Path(args.output) if args.output else output_path_for(inp)
    if not args.quiet:
        for src in sources:
            print(f"[vmtranslate] translating {src}")

    try:
        report = translate(inp, output=output, bootstrap=args.bootstrap, jobs=max(1, args.jobs))
    except OSError as e:
        print(f"[io error] cannot write {output}: {e}", file=sys.stderr)
        return 3

    lines = [issue.format() for issue in report.issues]
    for line in lines:
        print(line, file=sys.stderr)
    if args.errors:
        try:
            Path(args.errors).write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
        except OSError as e:
            print(f"[io error] cannot write {args.errors}: {e}", file=sys.stderr)
            return 3

    if not args.quiet:
        print(f"OK. asm_written={report.output.resolve()}")
        print(f"Files: {len(report.sources)}; commands: {report.commands}; errors: {len(report.issues)}")
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
