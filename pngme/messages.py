"""
Messages — store and fetch text in PNG chunks.

A message is the UTF-8 payload of a chunk with a caller-chosen type
(e.g. "ruSt"). Several chunks may share a type; decode returns the first.

Png.remove_chunk drops one chunk per call. remove_all_chunks is the
"remove every match" helper: it repeats the single removal until NotFound.
"""

from __future__ import annotations

import logging

from pngme._format.chunk import Chunk
from pngme._format.chunk_type import ChunkType
from pngme._format.errors import NotFound
from pngme._format.png import Png

log = logging.getLogger(__name__)


def encode_message(png: Png, chunk_type: str, message: str) -> Chunk:
    """Append a chunk carrying ``message`` and return it.

    Raises InvalidType if ``chunk_type`` is not 4 ASCII letters.
    """
    chunk = Chunk(ChunkType.from_str(chunk_type), message.encode("utf-8"))
    png.append_chunk(chunk)
    log.info("Encoded %d-byte message into %s chunk", chunk.length, chunk_type)
    return chunk


def decode_message(png: Png, chunk_type: str) -> str | None:
    """Text of the first ``chunk_type`` chunk, or None if there is none.

    Raises NotUtf8 if the payload is not valid UTF-8.
    """
    chunk = png.chunk_by_type(chunk_type)
    if chunk is None:
        return None
    return chunk.data_as_string()


def remove_all_chunks(png: Png, chunk_type: str) -> int:
    """Remove every ``chunk_type`` chunk. Returns how many were removed."""
    removed = 0
    while True:
        try:
            png.remove_chunk(chunk_type)
        except NotFound:
            break
        removed += 1
    log.info("Removed %d %s chunk(s)", removed, chunk_type)
    return removed
