"""Command-line interface: git-style patches between two files or trees."""

import argparse
import io
import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from .diff.differ import UnifiedDiffer
from .diff.errors import PatchError
from .diff.header import DEV_NULL
from .diff.objects import is_absent
from .diff.writer import PatchWriter
from .diff import store

EXIT_SAME = 0
EXIT_DIFFERENT = 1
EXIT_TROUBLE = 2


def _normalize(arg: str) -> str:
    if arg == DEV_NULL:
        return arg
    return os.path.normpath(arg).lstrip("/")


def _missing(path: Path) -> bool:
    return str(path) == DEV_NULL or not path.exists()


def compare_files(writer: PatchWriter, old: str, new: str) -> bool:
    """Write one patch between two files. Returns True if they differ."""
    old_path, new_path = Path(old), Path(new)
    with store.open_side(old_path, _normalize(old)) as src, store.open_side(
        new_path, _normalize(new)
    ) as dst:
        if not is_absent(src) and not is_absent(dst):
            if src.id == dst.id and src.mode == dst.mode:
                return False
        writer.write_patch(src, dst)
    return True


def compare_trees(writer: PatchWriter, old_root: Path, new_root: Path) -> tuple[bool, int]:
    """Write patches for every differing file under two directories.

    A file that fails is logged and skipped. Returns ``(differs, failures)``.
    """
    differs = False
    failures = 0
    for rel in store.pair_trees(old_root, new_root):
        old_path, new_path = old_root / rel, new_root / rel
        try:
            if store.is_entry(old_path) and store.is_entry(new_path):
                if store.fingerprint(old_path) == store.fingerprint(new_path):
                    continue
            with store.open_side(old_path, rel) as src, store.open_side(new_path, rel) as dst:
                writer.write_patch(src, dst)
            differs = True
        except (PatchError, OSError) as exc:
            logging.error("Skipping %s: %s", rel, exc)
            failures += 1
    return differs, failures


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="gitpatch", description=__doc__)
    parser.add_argument("old", help="Original file or directory (missing or /dev/null for none).")
    parser.add_argument("new", help="Updated file or directory (missing or /dev/null for none).")
    parser.add_argument("--src-prefix", default="a/", help="Prefix for source paths (default: a/).")
    parser.add_argument("--dst-prefix", default="b/", help="Prefix for destination paths (default: b/).")
    parser.add_argument("--no-prefix", action="store_true", help="Do not prefix paths.")
    parser.add_argument("-U", "--unified", type=int, default=3, metavar="N", help="Lines of context (default: 3).")
    parser.add_argument("-o", "--output", type=Path, help="Write the patch to this file instead of stdout.")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.unified < 0:
        parser.error("--unified must be >= 0")
    if args.no_prefix:
        args.src_prefix = args.dst_prefix = ""
    return args


def run(args, sink: TextIO) -> int:
    writer = PatchWriter(sink, UnifiedDiffer(args.unified), args.src_prefix, args.dst_prefix)
    old, new = Path(args.old), Path(args.new)
    if old.is_dir() or new.is_dir():
        if not all(p.is_dir() or _missing(p) for p in (old, new)):
            logging.error("Cannot compare a file with a directory")
            return EXIT_TROUBLE
        # a missing tree reads as empty
        differs, failures = compare_trees(writer, old, new)
        if failures:
            return EXIT_TROUBLE
        return EXIT_DIFFERENT if differs else EXIT_SAME
    try:
        differs = compare_files(writer, args.old, args.new)
    except (PatchError, OSError) as exc:
        logging.error("%s", exc)
        return EXIT_TROUBLE
    return EXIT_DIFFERENT if differs else EXIT_SAME


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    if args.output is None:
        return run(args, sys.stdout)
    buf = io.StringIO()
    status = run(args, buf)
    if status != EXIT_TROUBLE or buf.getvalue():
        store.atomic_write(args.output, buf.getvalue())
    return status


if __name__ == "__main__":
    sys.exit(main())
