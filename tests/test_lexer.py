from vmlang.lexer import ARG, COMMAND, EOF, ILLEGAL, Lexeme, VMLexer

SOURCE = """// leading comment
push constant 7   // trailing

if-goto LOOP_1
function Sys.init 0
"""


def test_commands_and_args_with_positions():
    got = list(VMLexer(SOURCE))
    assert got == [
        Lexeme(COMMAND, "push", 2, 1),
        Lexeme(ARG, "constant", 2, 6),
        Lexeme(ARG, "7", 2, 15),
        Lexeme(COMMAND, "if-goto", 4, 1),
        Lexeme(ARG, "LOOP_1", 4, 9),
        Lexeme(COMMAND, "function", 5, 1),
        Lexeme(ARG, "Sys.init", 5, 10),
        Lexeme(ARG, "0", 5, 19),
    ]


def test_eof_is_sticky():
    lx = VMLexer("return\n")
    assert lx.next_token().value == "return"
    assert lx.next_token().kind == EOF
    assert lx.next_token().kind == EOF


def test_reset_gives_same_stream():
    lx = VMLexer(SOURCE)
    first = [lx.next_token() for _ in range(4)]
    lx.reset()
    assert [lx.next_token() for _ in range(4)] == first


def test_illegal_character_reported_and_scanning_continues():
    got = list(VMLexer("push constant # 3\n"))
    assert Lexeme(ILLEGAL, "#", 1, 15) in got
    assert got[-1] == Lexeme(ARG, "3", 1, 17)


def test_blank_and_comment_only_input():
    assert list(VMLexer("\n   \n// nothing here\n")) == []


def test_leading_illegal_character_does_not_shift_command():
    assert list(VMLexer("#push constant 1\n")) == [
        Lexeme(ILLEGAL, "#", 1, 1),
        Lexeme(COMMAND, "push", 1, 2),
        Lexeme(ARG, "constant", 1, 7),
        Lexeme(ARG, "1", 1, 16),
    ]
