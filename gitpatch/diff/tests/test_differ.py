import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))
from gitpatch.diff.differ import UnifiedDiffer, read_lines
from gitpatch.diff.errors import StreamReadError


def run(a, b, **kw):
    out = io.StringIO()
    UnifiedDiffer(**kw).diff(out, io.StringIO(a), io.StringIO(b))
    return out.getvalue()


@pytest.mark.parametrize(
    "a,b,want",
    [
        ("", "", ""),
        ("foo", "foo\nbar", "@@ -1 +1,2 @@\n foo\n+bar\n"),
        ("foo\nbar", "foo", "@@ -1,2 +1 @@\n foo\n-bar\n"),
        ("foo\nbar", "bar", "@@ -1,2 +1 @@\n-foo\n bar\n"),
    ],
)
def test_literal_cases(a, b, want):
    assert run(a, b) == want


def test_identical_writes_nothing():
    assert run("a\nb\nc\n", "a\nb\nc\n") == ""


def test_empty_to_content():
    assert run("", "x\ny\n") == "@@ -0,0 +1,2 @@\n+x\n+y\n"


def test_content_to_empty():
    assert run("x\n", "") == "@@ -1 +0,0 @@\n-x\n"


def test_bytes_streams():
    out = io.StringIO()
    UnifiedDiffer().diff(out, io.BytesIO(b"a\n"), io.BytesIO(b"b\n"))
    assert out.getvalue() == "@@ -1 +1 @@\n-a\n+b\n"


def test_context_splits_hunks():
    a = "".join(f"{i}\n" for i in range(10))
    b = a.replace("1\n", "one\n").replace("8\n", "eight\n")
    assert run(a, b, context=1).count("@@ -") == 2
    assert run(a, b, context=3).count("@@ -") == 1


def test_removed_line_starting_with_dashes():
    assert run("-- x\n", "") == "@@ -1 +0,0 @@\n--- x\n"


def test_negative_context_rejected():
    with pytest.raises(ValueError):
        UnifiedDiffer(context=-1)


def test_read_failure_is_stream_error():
    class Failing(io.BytesIO):
        def read(self, *args):
            raise OSError("boom")

    out = io.StringIO()
    with pytest.raises(StreamReadError) as excinfo:
        UnifiedDiffer().diff(out, io.BytesIO(b"a\n"), Failing())
    assert isinstance(excinfo.value.__cause__, OSError)
    assert out.getvalue() == ""


def test_undecodable_bytes_is_stream_error():
    with pytest.raises(StreamReadError):
        read_lines(io.BytesIO(b"\xff\xfe"))


def test_read_lines_drops_final_empty():
    assert read_lines(io.StringIO("a\nb\n")) == ["a", "b"]
    assert read_lines(io.StringIO("a\n\n")) == ["a", ""]
    assert read_lines(None) == []


def test_sink_error_propagates_unwrapped():
    err = OSError("disk full")

    class Broken(io.StringIO):
        def write(self, s):
            raise err

    with pytest.raises(OSError) as excinfo:
        UnifiedDiffer().diff(Broken(), io.StringIO("a\n"), io.StringIO("b\n"))
    assert excinfo.value is err
    assert not isinstance(excinfo.value, StreamReadError)
