"""Line differs: turn two content streams into unified hunks."""

import difflib
import itertools
import logging
from typing import IO, List, Protocol, TextIO

from .errors import StreamReadError


class LineDiffer(Protocol):
    def diff(self, sink: TextIO, a: IO, b: IO) -> None:
        """Write the hunks turning ``a`` into ``b`` to ``sink`` (no header)."""


def read_lines(stream: IO | None, label: str = "content") -> List[str]:
    """Read ``stream`` once and split it into lines without terminators.

    ``None`` reads as empty. Bytes are decoded as UTF-8. A missing newline at
    the end of the content is not kept.
    """
    if stream is None:
        return []
    try:
        data = stream.read()
    except OSError as exc:
        raise StreamReadError(f"failed reading {label}: {exc}") from exc
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StreamReadError(f"{label} is not UTF-8 text: {exc}") from exc
    lines = data.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class UnifiedDiffer:
    """``difflib`` backed differ emitting git-compatible hunks."""

    def __init__(self, context: int = 3):
        if context < 0:
            raise ValueError("context must be >= 0")
        self.context = context

    def hunks(self, a_lines: List[str], b_lines: List[str]):
        diff = difflib.unified_diff(a_lines, b_lines, n=self.context, lineterm="")
        # difflib leads with its own ---/+++ pair; the header owns those
        return itertools.islice(diff, 2, None)

    def diff(self, sink: TextIO, a: IO, b: IO) -> None:
        a_lines = read_lines(a, "a")
        b_lines = read_lines(b, "b")
        count = 0
        for line in self.hunks(a_lines, b_lines):
            if line.startswith("@@"):
                count += 1
            sink.write(line + "\n")
        logging.debug("Wrote %d hunk(s) for %d -> %d lines", count, len(a_lines), len(b_lines))
