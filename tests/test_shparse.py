import pytest

from xvtools.shparse import (
    MAXARGS,
    O_CREATE,
    O_RDONLY,
    O_TRUNC,
    O_WRONLY,
    WORD,
    BackCommand,
    ExecCommand,
    ListCommand,
    PipeCommand,
    RedirCommand,
    ShellSyntaxError,
    parse_command,
    tokenize,
)


def test_tokenize_kinds_and_text():
    tokens = tokenize("cat<in >>out|wc&")
    assert [t.kind for t in tokens] == [WORD, "<", WORD, ">>", WORD, "|", WORD, "&"]
    assert [t.text for t in tokens] == ["cat", "<", "in", ">>", "out", "|", "wc", "&"]


def test_tokenize_whitespace_only():
    assert tokenize(" \t\r\n\v") == []


def test_tokenize_positions_point_into_line():
    line = "  echo   hi ; ls"
    for tok in tokenize(line):
        assert line[tok.start:tok.start + len(tok.text)] == tok.text


def test_simple_exec():
    assert parse_command("echo hello world\n") == ExecCommand(["echo", "hello", "world"])


def test_empty_line():
    assert parse_command("\n") == ExecCommand([])


def test_redirections_nest_in_order():
    cmd = parse_command("sort < in > out")
    inner = RedirCommand(ExecCommand(["sort"]), "in", O_RDONLY, 0)
    assert cmd == RedirCommand(inner, "out", O_WRONLY | O_CREATE | O_TRUNC, 1)


def test_append_redirection():
    cmd = parse_command("echo x >> log")
    assert cmd == RedirCommand(ExecCommand(["echo", "x"]), "log", O_WRONLY | O_CREATE, 1)


def test_redirection_between_arguments():
    cmd = parse_command("grep < file pat")
    assert cmd == RedirCommand(ExecCommand(["grep", "pat"]), "file", O_RDONLY, 0)


def test_pipe_is_right_associative():
    cmd = parse_command("a | b | c")
    assert cmd == PipeCommand(
        ExecCommand(["a"]), PipeCommand(ExecCommand(["b"]), ExecCommand(["c"]))
    )


def test_list_and_background():
    cmd = parse_command("sleep 5 & ; echo done")
    assert cmd == ListCommand(
        BackCommand(ExecCommand(["sleep", "5"])), ExecCommand(["echo", "done"])
    )


def test_block_with_redirection():
    cmd = parse_command("(echo a; echo b) > out")
    body = ListCommand(ExecCommand(["echo", "a"]), ExecCommand(["echo", "b"]))
    assert cmd == RedirCommand(body, "out", O_WRONLY | O_CREATE | O_TRUNC, 1)


def test_missing_redirection_file():
    with pytest.raises(ShellSyntaxError, match="missing file for redirection"):
        parse_command("echo hi >")


def test_redirection_to_symbol():
    with pytest.raises(ShellSyntaxError, match="missing file for redirection"):
        parse_command("echo hi > | wc")


def test_missing_close_paren():
    with pytest.raises(ShellSyntaxError, match="missing"):
        parse_command("(echo hi")


def test_leftovers():
    with pytest.raises(ShellSyntaxError) as info:
        parse_command("echo hi ) rest")
    assert info.value.leftovers == ") rest"


def test_paren_inside_arguments():
    with pytest.raises(ShellSyntaxError, match="syntax"):
        parse_command("echo (x)")


def test_too_many_args():
    words = [f"w{i}" for i in range(MAXARGS)]
    with pytest.raises(ShellSyntaxError, match="too many args"):
        parse_command(" ".join(words))
    assert parse_command(" ".join(words[:-1])) == ExecCommand(words[:-1])