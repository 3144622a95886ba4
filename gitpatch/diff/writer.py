import io
import logging
from typing import IO, Callable, TextIO, Union

from .differ import LineDiffer
from .header import write_header
from .objects import Side, is_absent

DiffFunc = Callable[[TextIO, IO, IO], None]


class PatchWriter:
    """Writes git-style patches to one sink using an injected line differ.

    Call ``write_header`` then ``write_diff`` for each file, or
    ``write_patch`` to do both. The header must come first since its
    ``---``/``+++`` lines describe the hunks that follow; nothing here
    enforces that order.
    """

    def __init__(
        self,
        sink: TextIO,
        differ: Union[LineDiffer, DiffFunc],
        src_prefix: str = "",
        dst_prefix: str = "",
    ):
        self.sink = sink
        self.differ = differ
        self.src_prefix = src_prefix
        self.dst_prefix = dst_prefix

    def write_header(self, src: Side, dst: Side) -> None:
        write_header(self.sink, src, dst, self.src_prefix, self.dst_prefix)

    def write_diff(self, a: IO, b: IO) -> None:
        diff = getattr(self.differ, "diff", self.differ)
        diff(self.sink, a, b)

    def write_patch(self, src: Side, dst: Side) -> None:
        self.write_header(src, dst)
        a = io.BytesIO() if is_absent(src) else src.content
        b = io.BytesIO() if is_absent(dst) else dst.content
        logging.debug("Diffing %s", dst.path if is_absent(src) else src.path)
        self.write_diff(a, b)
