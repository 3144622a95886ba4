"""Git-style per-file header block."""

import logging
import os
from typing import TextIO

from .errors import EmptyComparisonError
from .objects import Side, is_absent, zero_id_like

DEV_NULL = "/dev/null"


def join_path(prefix: str, path: str) -> str:
    """Prefix ``path`` the way git does, even when ``path`` is absolute."""
    if not prefix:
        return path
    return os.path.normpath(os.path.join(prefix, path.lstrip("/")))


def _side_id(side: Side, other: Side) -> str:
    if is_absent(side):
        return zero_id_like(other).hex()
    return side.id.hex()


def render_header(src: Side, dst: Side, src_prefix: str = "", dst_prefix: str = "") -> str:
    """Return the header block comparing ``src`` with ``dst``.

    Either side may be ``ABSENT`` (creation or deletion) but not both.
    """
    if is_absent(src) and is_absent(dst):
        raise EmptyComparisonError()

    src_path = dst_path = ""
    if not is_absent(src):
        src_path = dst_path = join_path(src_prefix, src.path)
    if not is_absent(dst):
        dst_path = join_path(dst_prefix, dst.path)
        if is_absent(src):
            src_path = dst_path
    # TODO: rename detection needs a similarity index and rename from/to lines

    index = f"index {_side_id(src, dst)}..{_side_id(dst, src)}"
    lines = [f"diff --git {src_path} {dst_path}"]
    if is_absent(src):
        lines += [
            f"new file mode {dst.mode:o}",
            index,
            f"--- {DEV_NULL}",
            f"+++ {dst_path}",
        ]
    elif is_absent(dst):
        lines += [
            f"deleted file mode {src.mode:o}",
            index,
            f"--- {src_path}",
            f"+++ {DEV_NULL}",
        ]
    else:
        lines += [
            f"{index} {dst.mode:o}",
            f"--- {src_path}",
            f"+++ {dst_path}",
        ]
    return "".join(line + "\n" for line in lines)


def write_header(
    sink: TextIO, src: Side, dst: Side, src_prefix: str = "", dst_prefix: str = ""
) -> None:
    """Write the header for ``src``/``dst`` to ``sink``.

    Raises ``EmptyComparisonError`` before writing anything when both sides
    are absent. Errors raised by ``sink.write`` propagate as-is.
    """
    header = render_header(src, dst, src_prefix, dst_prefix)
    logging.debug("Writing header for %s -> %s", src.path or DEV_NULL, dst.path or DEV_NULL)
    sink.write(header)
