"""Tokenizer and parser for the shell's command language."""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Union

O_RDONLY = 0x000
O_WRONLY = 0x001
O_RDWR = 0x002
O_CREATE = 0x200
O_TRUNC = 0x400

MAXARGS = 10

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"

WORD = "word"
_SINGLE = "|();&<"
_REDIRS = frozenset({"<", ">", ">>"})


class ShellSyntaxError(ValueError):
    """Raised when a command line cannot be parsed."""

    def __init__(self, message, leftovers=None):
        super().__init__(message)
        self.leftovers = leftovers


class Token(NamedTuple):
    kind: str
    text: str
    start: int


@dataclass
class ExecCommand:
    """Run a program with arguments."""

    argv: List[str] = field(default_factory=list)


@dataclass
class RedirCommand:
    """Run a command with one file descriptor redirected."""

    cmd: "Command"
    file: str
    mode: int
    fd: int


@dataclass
class PipeCommand:
    """Connect the output of left to the input of right."""

    left: "Command"
    right: "Command"


@dataclass
class ListCommand:
    """Run left, wait for it, then run right."""

    left: "Command"
    right: "Command"


@dataclass
class BackCommand:
    """Run a command in the background."""

    cmd: "Command"


Command = Union[ExecCommand, RedirCommand, PipeCommand, ListCommand, BackCommand]


def tokenize(line):
    """Split a command line into tokens.

    Symbol tokens have their own text as kind, '>>' included; everything
    else is a token of kind WORD.
    """
    tokens = []
    i, n = 0, len(line)
    while True:
        while i < n and line[i] in WHITESPACE:
            i += 1
        if i >= n:
            return tokens
        start = i
        c = line[i]
        if c in _SINGLE:
            kind = c
            i += 1
        elif c == ">":
            i += 1
            if i < n and line[i] == ">":
                kind = ">>"
                i += 1
            else:
                kind = ">"
        else:
            kind = WORD
            while i < n and line[i] not in WHITESPACE and line[i] not in SYMBOLS:
                i += 1
        tokens.append(Token(kind, line[start:i], start))


class _Parser:
    def __init__(self, line):
        self.line = line
        self.tokens = tokenize(line)
        self.pos = 0

    def current(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def peek(self, kinds):
        tok = self.current()
        return tok is not None and tok.kind in kinds

    def take(self) -> Optional[Token]:
        tok = self.current()
        if tok is not None:
            self.pos += 1
        return tok

    def parse_line(self):
        cmd = self.parse_pipe()
        while self.peek({"&"}):
            self.take()
            cmd = BackCommand(cmd)
        if self.peek({";"}):
            self.take()
            cmd = ListCommand(cmd, self.parse_line())
        return cmd

    def parse_pipe(self):
        cmd = self.parse_exec()
        if self.peek({"|"}):
            self.take()
            cmd = PipeCommand(cmd, self.parse_pipe())
        return cmd

    def parse_redirs(self, cmd):
        while self.peek(_REDIRS):
            op = self.take().kind
            target = self.take()
            if target is None or target.kind != WORD:
                raise ShellSyntaxError("missing file for redirection")
            if op == "<":
                cmd = RedirCommand(cmd, target.text, O_RDONLY, 0)
            elif op == ">":
                cmd = RedirCommand(cmd, target.text, O_WRONLY | O_CREATE | O_TRUNC, 1)
            else:
                cmd = RedirCommand(cmd, target.text, O_WRONLY | O_CREATE, 1)
        return cmd

    def parse_block(self):
        if not self.peek({"("}):
            raise ShellSyntaxError("parseblock")
        self.take()
        cmd = self.parse_line()
        if not self.peek({")"}):
            raise ShellSyntaxError("syntax - missing )")
        self.take()
        return self.parse_redirs(cmd)

    def parse_exec(self):
        if self.peek({"("}):
            return self.parse_block()
        exec_cmd = ExecCommand()
        ret = self.parse_redirs(exec_cmd)
        while not self.peek({"|", ")", "&", ";"}):
            tok = self.take()
            if tok is None:
                break
            if tok.kind != WORD:
                raise ShellSyntaxError("syntax")
            exec_cmd.argv.append(tok.text)
            if len(exec_cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.parse_redirs(ret)
        return ret


def parse_command(line):
    """Parse a full command line into a command tree."""
    parser = _Parser(line)
    cmd = parser.parse_line()
    rest = parser.current()
    if rest is not None:
        raise ShellSyntaxError("syntax", leftovers=line[rest.start:])
    return cmd