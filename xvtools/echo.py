"""Print the arguments separated by spaces."""

import sys


def echo_line(args):
    """Return the arguments joined by spaces and ended with a newline; empty if there are none."""
    args = list(args)
    if not args:
        return ""
    return " ".join(args) + "\n"


def main(argv=None):
    """Write the arguments to standard output; return the exit status."""
    args = sys.argv[1:] if argv is None else argv
    sys.stdout.write(echo_line(args))
    return 0