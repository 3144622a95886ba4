import hashlib
import io
from dataclasses import dataclass
from typing import IO, Union

MODE_FILE = 0o100644
MODE_EXECUTABLE = 0o100755
MODE_SYMLINK = 0o120000

ZERO_ID = bytes(20)


def blob_id(data: bytes) -> bytes:
    """Return the git blob id (SHA-1 over ``blob <len>\\0<data>``)."""
    h = hashlib.sha1()
    h.update(b"blob %d\0" % len(data))
    h.update(data)
    return h.digest()


@dataclass(frozen=True)
class Object:
    """One present side of a comparison.

    ``content`` is read once by the differ and never rewound. Whoever builds
    the object owns the stream and closes it.
    """

    content: IO
    id: bytes
    path: str
    mode: int = MODE_FILE

    @classmethod
    def from_bytes(cls, data: bytes, path: str, mode: int = MODE_FILE) -> "Object":
        return cls(io.BytesIO(data), blob_id(data), path, mode)

    @classmethod
    def from_text(cls, text: str, path: str, mode: int = MODE_FILE) -> "Object":
        return cls.from_bytes(text.encode("utf-8"), path, mode)


class Absent:
    """The missing side of a creation or deletion."""

    _instance = None

    content = None
    id = b""
    path = ""
    mode = 0

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

Side = Union[Object, Absent]


def is_absent(side: Side) -> bool:
    return isinstance(side, Absent)


def zero_id_like(other: Side) -> bytes:
    """Zero fingerprint matching the length of ``other``'s id."""
    if is_absent(other) or not other.id:
        return ZERO_ID
    return bytes(len(other.id))
