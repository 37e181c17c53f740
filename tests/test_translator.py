from pathlib import Path

import pytest

from hackcpu import HackCPU
from vmcodegen.translator import output_path_for, translate

MAIN = """// Main.vm
function Main.main 0
push constant 6
pop static 0
push static 0
return
"""

SYS = """function Sys.init 0
call Main.main 0
pop static 1
label HALT
goto HALT
"""


def write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_single_file_without_bootstrap(tmp_path):
    src = write(tmp_path / "Simple.vm", "push constant 1\npop static 2\n")
    report = translate(src)
    assert report.output == tmp_path / "Simple.asm"
    assert report.ok
    assert report.commands == 2
    text = report.output.read_text(encoding="utf-8")
    assert text.startswith("// push constant 1\n")
    assert "@Simple.2" in text
    assert "bootstrap" not in text
    assert not (tmp_path / "Simple.asm.tmp").exists()


def test_directory_gets_bootstrap_and_per_file_statics(tmp_path):
    prog = tmp_path / "Prog"
    prog.mkdir()
    write(prog / "Sys.vm", SYS)
    write(prog / "Main.vm", MAIN)
    write(prog / "notes.txt", "ignored")

    report = translate(prog)
    assert report.output == prog / "Prog.asm"
    assert [p.name for p in report.sources] == ["Main.vm", "Sys.vm"]
    text = report.output.read_text(encoding="utf-8")
    assert text.startswith("// bootstrap\n")
    assert text.index("(Main.main)") < text.index("(Sys.init)")
    assert "@Main.0" in text and "@Sys.1" in text

    cpu = HackCPU(text)
    cpu.run(until="Sys.init$HALT")
    assert cpu.peek("Sys.1") == 6
    assert cpu.peek("Main.0") == 6


def test_bootstrap_can_be_overridden(tmp_path):
    src = write(tmp_path / "Sys.vm", SYS)
    assert translate(src, bootstrap=True).output.read_text().startswith("// bootstrap")
    prog = tmp_path / "P"
    prog.mkdir()
    write(prog / "Sys.vm", SYS)
    assert "bootstrap" not in translate(prog, bootstrap=False).output.read_text()


def test_errors_are_reported_and_translation_continues(tmp_path):
    prog = tmp_path / "Bad"
    prog.mkdir()
    write(prog / "A.vm", "push constant 1\npush constant zz\npop constant 0\npush constant 2\n")
    write(prog / "B.vm", "push constant 3\n")

    report = translate(prog, bootstrap=False)
    assert not report.ok
    kinds = [(i.kind, i.file, i.line) for i in report.issues]
    assert kinds == [("parse", "A.vm", 2), ("codegen", "A.vm", 3)]
    assert report.issues[1].command == "pop constant 0"
    assert report.issues[0].format().startswith("[parse error] A.vm: line=2:")
    assert report.issues[1].format().startswith("[codegen error] A.vm: line=3: pop constant 0:")

    cpu = HackCPU(report.output.read_text())
    cpu.poke("SP", 256)
    cpu.run()
    assert [cpu.peek(a) for a in (256, 257, 258)] == [1, 2, 3]
    assert cpu.peek("SP") == 259


def test_unreadable_file_does_not_stop_siblings(tmp_path):
    prog = tmp_path / "Mixed"
    prog.mkdir()
    (prog / "Broken.vm").write_bytes(b"\xff\xfe\x00push")
    write(prog / "Good.vm", "push constant 3\n")

    report = translate(prog, bootstrap=False)
    assert [i.kind for i in report.issues] == ["io"]
    assert report.issues[0].file == "Broken.vm"
    assert "@3" in report.output.read_text()


def test_parallel_output_matches_sequential(tmp_path):
    prog = tmp_path / "Par"
    prog.mkdir()
    for i in range(6):
        write(prog / f"F{i}.vm", f"function F{i}.f 0\npush constant {i}\npush constant 1\neq\nreturn\n")
    seq = translate(prog, output=tmp_path / "seq.asm").output.read_text()
    par = translate(prog, output=tmp_path / "par.asm", jobs=4).output.read_text()
    assert seq == par


def test_output_error_is_fatal(tmp_path):
    src = write(tmp_path / "X.vm", "push constant 1\n")
    with pytest.raises(OSError):
        translate(src, output=tmp_path / "missing" / "X.asm")


def test_empty_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        translate(tmp_path)


def test_output_path_for(tmp_path):
    (tmp_path / "Prog").mkdir()
    assert output_path_for(tmp_path / "Prog") == tmp_path / "Prog" / "Prog.asm"
    assert output_path_for(tmp_path / "Main.vm") == tmp_path / "Main.asm"
