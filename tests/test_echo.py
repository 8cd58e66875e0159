from xvtools.echo import echo_line, main


def test_echo_line_joins_with_spaces():
    assert echo_line(["hello", "world"]) == "hello world\n"


def test_echo_line_single_argument():
    assert echo_line(["hi"]) == "hi\n"


def test_echo_line_no_arguments_prints_nothing():
    assert echo_line([]) == ""


def test_echo_line_keeps_inner_spaces():
    args = ["a b", "c"]
    assert echo_line(args).rstrip("\n").split(" ") == ["a", "b", "c"]


def test_main_writes_stdout(capsys):
    assert main(["echo", "OK"]) == 0
    assert capsys.readouterr().out == "echo OK\n"