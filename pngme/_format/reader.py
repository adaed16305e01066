"""
Reader — loads PNG files into Png containers.

Speed features:
  - Signature check on the first 8 bytes only (instant file identification)

Security features:
  - File size limits (prevents OOM from crafted or oversized files)
  - Strict chunk framing and CRC verification (delegated to Png.from_bytes)
"""

from __future__ import annotations

import logging
from pathlib import Path

from pngme import MAX_FILE_SIZE, PNG_SIGNATURE
from pngme._format.png import Png
from pngme._format.spec import SIGNATURE_SIZE

log = logging.getLogger(__name__)


class PngReader:
    """
    PNG file reader.

    Usage:
        png = PngReader.read("image.png")
        png = PngReader.parse(data)
    """

    @staticmethod
    def is_png(path: str | Path) -> bool:
        """Fast check if a file starts with the PNG signature. Reads 8 bytes."""
        with open(path, "rb") as f:
            head = f.read(SIGNATURE_SIZE)
        return head == PNG_SIGNATURE

    @staticmethod
    def is_png_bytes(data: bytes) -> bool:
        """Fast check if bytes start with the PNG signature."""
        return bytes(data[:SIGNATURE_SIZE]) == PNG_SIGNATURE

    @classmethod
    def read(cls, path: str | Path, max_size: int = MAX_FILE_SIZE) -> Png:
        """Read and fully parse a file."""
        path = Path(path)
        file_size = path.stat().st_size
        if file_size > max_size:
            raise ValueError(
                f"File size {file_size} exceeds maximum {max_size} bytes. "
                f"Pass max_size= to override."
            )
        data = path.read_bytes()
        log.info("Read %s (%d bytes)", path, len(data))
        return cls.parse(data, max_size=max_size)

    @classmethod
    def parse(cls, data: bytes, max_size: int = MAX_FILE_SIZE) -> Png:
        """Parse bytes into a Png."""
        if len(data) > max_size:
            raise ValueError(
                f"Input size {len(data)} exceeds maximum {max_size} bytes. "
                f"Pass max_size= to override."
            )
        return Png.from_bytes(data)
