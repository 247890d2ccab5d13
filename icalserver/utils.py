"""Utility functions for the calendar server."""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Generator


@contextmanager
def atomic_write(path: Path) -> Generator[BinaryIO, None, None]:
    """
    Context manager that writes to a temp file and swaps it into place on exit.

    Usage:
        with atomic_write(path) as f:
            f.write(content)
        # path now holds content; readers never see a partial file

    The temp file lives in the same directory as path so the final
    os.replace stays on one filesystem. On error the temp file is removed
    and path is left untouched.

    Args:
        path: Destination file

    Yields:
        Binary file object for the temp file
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        tmp_path.chmod(0o644)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
