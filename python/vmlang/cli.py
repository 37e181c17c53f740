from __future__ import annotations
import argparse
import sys
from functools import partial

from .lexer import VMLexer
from .parser import parse_text

def read_text_blocked(path: str, buf_size: int) -> str:
    # read in blocks, not the whole file in one call
    chunks = []
    with open(path, "r", encoding="utf-8") as f:
        for part in iter(partial(f.read, buf_size), ""):
            chunks.append(part)
    return "".join(chunks)

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="vmlang", description="Check a .vm file and list its commands")
    ap.add_argument("input", help="Input .vm file")
    ap.add_argument("--tokens", action="store_true", help="list scanner tokens instead of commands")
    ap.add_argument("--buf", type=int, default=64 * 1024, help="Read buffer size")
    args = ap.parse_args(argv)

    text = read_text_blocked(args.input, args.buf)

    if args.tokens:
        for lx in VMLexer(text):
            print(f"{lx.line}:{lx.column}\t{lx.kind}\t{lx.value}")
        return 0

    res = parse_text(text)
    for cmd in res.commands:
        print(cmd.text())

    if res.errors:
        for e in res.errors:
            print(f"[parse error] line={e.line} col={e.column}: {e.message}", file=sys.stderr)
        return 2

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
