import io
import os
import stat
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from .objects import ABSENT, MODE_EXECUTABLE, MODE_FILE, MODE_SYMLINK, Object, Side, blob_id
from .header import DEV_NULL


def _mode(st: os.stat_result) -> int:
    if stat.S_ISLNK(st.st_mode):
        return MODE_SYMLINK
    if st.st_mode & stat.S_IXUSR:
        return MODE_EXECUTABLE
    return MODE_FILE


@contextmanager
def open_side(path: Path, relpath: str) -> Iterator[Side]:
    """Yield an ``Object`` for ``path``, or ``ABSENT`` if it is missing or a directory.

    The content stream is closed when the block exits.
    """
    if str(path) == DEV_NULL:
        yield ABSENT
        return
    try:
        st = path.lstat()
    except (FileNotFoundError, NotADirectoryError):
        yield ABSENT
        return
    if stat.S_ISDIR(st.st_mode):
        yield ABSENT
        return
    mode = _mode(st)
    if mode == MODE_SYMLINK:
        target = os.readlink(path).encode("utf-8")
        yield Object(io.BytesIO(target), blob_id(target), relpath, mode)
        return
    data = path.read_bytes()
    with io.BytesIO(data) as fh:
        yield Object(fh, blob_id(data), relpath, mode)


def is_entry(path: Path) -> bool:
    """True for a file or symlink at ``path``; False for directories and missing paths."""
    try:
        return not stat.S_ISDIR(path.lstat().st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False


def fingerprint(path: Path) -> tuple[bytes, int]:
    """Return ``(id, mode)`` for an existing file without keeping it open."""
    st = path.lstat()
    mode = _mode(st)
    if mode == MODE_SYMLINK:
        return blob_id(os.readlink(path).encode("utf-8")), mode
    return blob_id(path.read_bytes()), mode


def list_files(root: Path) -> List[str]:
    """Relative POSIX paths of every file under ``root``, sorted."""
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in filenames:
            full = Path(dirpath) / name
            found.append(full.relative_to(root).as_posix())
    return sorted(found)


def pair_trees(old_root: Path, new_root: Path) -> List[str]:
    """Union of the relative file paths under both roots, sorted."""
    return sorted(set(list_files(old_root)) | set(list_files(new_root)))


def atomic_write(path: Path, new_text: str) -> None:
    """Write text to a temp file then atomically replace the target."""
    temp = path.with_suffix(path.suffix + ".tmp")
    temp.write_text(new_text)
    temp.replace(path)
