import io

from hackcpu import HackCPU, asm_for, run_vm
from vmcodegen.codegen import CodeWriter
from vmcodegen.context import TranslationUnitContext
from vmcodegen.translator import translate_source


def program(**sources: str) -> HackCPU:
    """Bootstrap + every unit, in the given order."""
    out = io.StringIO()
    CodeWriter(out, TranslationUnitContext(unit_label="bootstrap")).write_init()
    for unit, text in sources.items():
        _, issues = translate_source(text, f"{unit}.vm", out)
        assert not issues, [i.format() for i in issues]
    return HackCPU(out.getvalue())


SYS = """
function Sys.init 0
push constant 3000
pop pointer 0
push constant 4000
pop pointer 1
push constant 3
push constant 4
call Math.add2 2
label AFTER
pop temp 0
label HALT
goto HALT
"""

MATH = """
function Math.add2 1
label IN
push constant 5000
pop pointer 0
push argument 0
push argument 1
add
pop local 0
push local 0
return
"""


def test_bootstrap_sets_sp_and_calls_sys_init():
    lines = asm_for("").splitlines()
    assert lines == []
    out = io.StringIO()
    CodeWriter(out, TranslationUnitContext(unit_label="Prog")).write_init()
    boot = out.getvalue().splitlines()
    assert boot[:5] == ["// bootstrap", "@256", "D=A", "@SP", "M=D"]
    assert "@Sys.init" in boot
    assert boot[-1] == "(Sys.init$ret.0)"


def test_callee_sees_arguments_and_fresh_frame():
    cpu = program(Sys=SYS, Math=MATH)
    cpu.run(until="Math.add2$IN")
    # bootstrap frame 256..260, Sys.init pushed 3, 4 at 261, 262, then 5 saved cells
    assert cpu.peek("ARG") == 261
    assert cpu.peek("LCL") == 268
    assert cpu.peek("SP") == 269   # one zeroed local
    assert cpu.peek(268) == 0


def test_return_restores_caller_state():
    cpu = program(Sys=SYS, Math=MATH)
    cpu.run(until="Sys.init$AFTER")
    # pre-call SP was 263: two arguments consumed, one value left
    assert cpu.peek("SP") == 263 - 2 + 1
    assert cpu.peek(261) == 7
    assert cpu.peek("THIS") == 3000
    assert cpu.peek("THAT") == 4000
    assert cpu.peek("LCL") == 261
    assert cpu.peek("ARG") == 256

    cpu.run(until="Sys.init$HALT")
    assert cpu.peek(5) == 7


def test_function_zeroes_locals():
    cpu = run_vm("function Foo.bar 3\n", ram={256: 9, 257: 9, 258: 9})
    assert [cpu.peek(a) for a in (256, 257, 258)] == [0, 0, 0]
    assert cpu.peek("SP") == 259


FACT = """
function Main.fact 0
push argument 0
push constant 1
gt
if-goto REC
push constant 1
return
label REC
push argument 0
push argument 0
push constant 1
sub
call Main.fact 1
call Main.mul 2
return

function Main.mul 1
label LOOP
push argument 1
push constant 0
eq
if-goto DONE
push local 0
push argument 0
add
pop local 0
push argument 1
push constant 1
sub
pop argument 1
goto LOOP
label DONE
push local 0
return
"""

FACT_SYS = """
function Sys.init 0
push constant 5
call Main.fact 1
pop temp 0
label HALT
goto HALT
"""


def test_recursion():
    cpu = program(Main=FACT, Sys=FACT_SYS)
    cpu.run(until="Sys.init$HALT", max_steps=500_000)
    assert cpu.peek(5) == 120
    assert cpu.peek("SP") == 261


def test_return_labels_distinct_per_call_site():
    asm = asm_for(FACT, "Main.vm")
    assert "(Main.fact$ret.1)" in asm
    assert "(Main.fact$ret.2)" in asm
    assert "(Main.mul$ret.1)" not in asm


def test_bootstrap_label_does_not_clash_with_sys_init_calls():
    cpu = program(Main=FACT, Sys=FACT_SYS)
    assert "Sys.init$ret.0" in cpu.symbols
    assert "Sys.init$ret.1" in cpu.symbols


def test_return_with_zero_args_keeps_return_address():
    # with no arguments *ARG and the saved return address share a cell
    sys_src = """
function Sys.init 0
call Main.seven 0
pop temp 0
label HALT
goto HALT
"""
    main_src = """
function Main.seven 0
push constant 7
return
"""
    cpu = program(Main=main_src, Sys=sys_src)
    cpu.run(until="Sys.init$HALT")
    assert cpu.peek(5) == 7
    assert cpu.peek("SP") == 261
