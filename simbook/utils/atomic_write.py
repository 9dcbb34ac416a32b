"""Atomic file write utility so a crash never leaves a half-written cache."""

import os
import tempfile
from pathlib import Path


def atomic_write_text(
    path: Path, content: str, encoding: str = "utf-8", mode: int | None = None
) -> None:
    """Write content to a file atomically using temp file + rename.

    If the process crashes mid-write, the original file is preserved.

    Args:
        path: Destination file. Its parent directory is created if missing.
        content: Text to write.
        encoding: Text encoding.
        mode: Optional permission bits applied before the rename (e.g. 0o600).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise
