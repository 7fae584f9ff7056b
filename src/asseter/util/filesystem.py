"""
Filesystem helpers for writing rendered markup.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)


def _resolve(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


@contextmanager
def file_lock(path: Path | str):
    """Hold a ``<name>.lock`` file next to the target while writing it."""
    target = _resolve(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with FileLock(str(target.with_suffix(f"{target.suffix}.lock"))):
        yield


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8") -> Path:
    """
    Atomically replace ``path`` with ``content``, creating parent directories.

    The text is staged in a temporary sibling file and renamed into place
    under a file lock, so readers never see a partial write.
    """
    target = _resolve(path)
    with file_lock(target):
        fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding=encoding) as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, target)
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
    logger.debug("Wrote %d characters to %s", len(content), target)
    return target
