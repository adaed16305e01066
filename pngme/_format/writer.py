"""
Writer — serializes Png containers and persists them.

Writes are atomic: the bytes go to a temp file in the target directory,
are fsynced, then renamed over the destination. A failed write leaves the
original file untouched.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pngme._format.png import Png

log = logging.getLogger(__name__)


class PngWriter:

    @staticmethod
    def serialize(png: Png) -> bytes:
        """Serialize a container to bytes. Pure — does not mutate the input."""
        return png.to_bytes()

    @staticmethod
    def write(png: Png, path: str | Path, mode: int = 0o644) -> int:
        """Write a container to file atomically. Returns bytes written.

        ``mode`` applies to new files only; an existing file keeps its own.
        """
        data = PngWriter.serialize(png)
        path = os.fspath(path)
        if os.path.exists(path):
            mode = stat.S_IMODE(os.stat(path).st_mode)
        dir_name = os.path.dirname(os.path.abspath(path)) or "."
        fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix=".png.tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        log.info("Wrote %s (%d bytes, %d chunk(s))", path, len(data), len(png))
        return len(data)
