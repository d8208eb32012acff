"""Input file name sources."""

import sys
from typing import Iterator, Optional, Sequence, TextIO

STDIN_SENTINEL = "-"


def iter_lines(stream: TextIO) -> Iterator[str]:
    """Yield the lines of a stream lazily, without line terminators."""
    for line in stream:
        yield line.rstrip("\r\n")


def iter_input_names(args: Sequence[str], stdin: Optional[TextIO] = None) -> Iterator[str]:
    """Yield input file names in the order they were supplied.

    If the only argument is "-", names are read from ``stdin`` (one per line)
    instead of being taken from ``args``.

    Args:
        args: Positional command line arguments.
        stdin: Stream to read names from; defaults to ``sys.stdin``.
    """
    if len(args) == 1 and args[0] == STDIN_SENTINEL:
        yield from iter_lines(stdin if stdin is not None else sys.stdin)
    else:
        yield from args
