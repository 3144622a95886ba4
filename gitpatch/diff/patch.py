import io
import subprocess
import tempfile
from pathlib import Path

from .differ import UnifiedDiffer


def generate(old: str, new: str, *, context: int = 3) -> str:
    """Return the hunk body (no header) turning ``old`` into ``new``."""
    out = io.StringIO()
    UnifiedDiffer(context).diff(out, io.StringIO(old), io.StringIO(new))
    return out.getvalue()


def apply(old: str, body: str, name: str = "file") -> str:
    """Apply a hunk body to ``old`` and return the new text.

    Falls back to the pure Python ``patch-ng`` library when the ``patch``
    binary is unavailable.
    """
    if not body:
        return old
    with tempfile.TemporaryDirectory() as td:
        old_path = Path(td) / name
        patch_path = Path(td) / "patch.diff"
        old_path.write_text(old)
        patch_path.write_text(f"--- a/{name}\n+++ b/{name}\n{body}")
        try:
            subprocess.run(
                ["patch", old_path.name, patch_path.name],
                cwd=td,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError:
            return _apply_patch_ng(old, old_path, patch_path)
        except subprocess.CalledProcessError as exc:
            raise RuntimeError(exc.stderr.strip() or exc.stdout.strip() or "patch failed")
        if not old_path.exists():
            return ""
        return old_path.read_text()


def _apply_patch_ng(old: str, old_path: Path, patch_path: Path) -> str:
    from patch_ng import fromfile
    patchset = fromfile(str(patch_path))
    if not patchset:
        raise RuntimeError("patch failed")
    if old == "":
        # patch_ng cannot apply a hunk starting at line 0 to an empty file
        added = []
        for hunk in patchset.items[0].hunks:
            for line in hunk.text:
                if not line.startswith(b"+"):
                    raise RuntimeError("patch failed")
                added.append(line[1:])
        return b"".join(added).decode("utf-8")
    if not patchset.apply(strip=1, root=str(old_path.parent)):
        raise RuntimeError("patch failed")
    if not old_path.exists():
        return ""
    return old_path.read_text()
