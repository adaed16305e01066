"""
Png — the container: signature followed by an ordered list of chunks.

Parsing is all-or-nothing: one bad chunk anywhere fails the whole buffer.
Order is preserved exactly; nothing is deduplicated or reordered.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from pngme import PNG_SIGNATURE
from pngme._format.chunk import Chunk
from pngme._format.errors import BadSignature, NotFound, PngError
from pngme._format.spec import LENGTH_STRUCT, MIN_CHUNK_SIZE, SIGNATURE_SIZE

log = logging.getLogger(__name__)


class Png:
    """In-memory PNG container.

    Usage:
        png = Png.from_bytes(data)
        png.append_chunk(Chunk(ChunkType.from_str("RuSt"), b"hello"))
        data = png.to_bytes()
    """

    def __init__(self, chunks: Iterable[Chunk] = ()) -> None:
        self._chunks: list[Chunk] = list(chunks)

    @classmethod
    def from_chunks(cls, chunks: Iterable[Chunk]) -> Png:
        return cls(chunks)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Png:
        """Parse a full PNG buffer.

        Raises BadSignature, or the chunk error (TooShort, LengthMismatch,
        InvalidType, ChecksumMismatch) of the first chunk that fails.
        """
        view = memoryview(data)
        head = bytes(view[:SIGNATURE_SIZE])
        if head != PNG_SIGNATURE:
            raise BadSignature(
                f"Bad signature: expected {PNG_SIGNATURE!r}, got {head!r}"
            )

        chunks: list[Chunk] = []
        total = len(view)
        offset = SIGNATURE_SIZE
        while offset < total:
            # A frame always ends length + 12 bytes after its start. If even
            # the length field is missing, hand over the tail as-is.
            if total - offset >= LENGTH_STRUCT.size:
                (length,) = LENGTH_STRUCT.unpack_from(view, offset)
                end = offset + length + MIN_CHUNK_SIZE
            else:
                end = total
            try:
                chunk = Chunk.from_bytes(view[offset:end])
            except PngError as e:
                raise type(e)(f"{e} (chunk #{len(chunks)} at offset {offset})") from e
            chunks.append(chunk)
            offset = end

        log.debug("Parsed %d chunk(s) from %d bytes", len(chunks), total)
        return cls(chunks)

    @property
    def header(self) -> bytes:
        return PNG_SIGNATURE

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        return tuple(self._chunks)

    def append_chunk(self, chunk: Chunk) -> None:
        """Add a chunk at the end. Duplicate types are allowed."""
        self._chunks.append(chunk)
        log.debug("Appended %s chunk (%d bytes)", chunk.chunk_type, chunk.length)

    def chunk_by_type(self, chunk_type: str) -> Chunk | None:
        """First chunk whose type renders as ``chunk_type``, or None."""
        for chunk in self._chunks:
            if str(chunk.chunk_type) == chunk_type:
                return chunk
        return None

    def remove_chunk(self, chunk_type: str) -> Chunk:
        """Remove the first chunk of the given type and return it.

        Only one chunk is removed per call. Raises NotFound when no chunk
        matches; to drop every match, call until NotFound.
        """
        for i, chunk in enumerate(self._chunks):
            if str(chunk.chunk_type) == chunk_type:
                del self._chunks[i]
                log.debug("Removed %s chunk at index %d", chunk_type, i)
                return chunk
        raise NotFound(f"No {chunk_type!r} chunk found")

    def to_bytes(self) -> bytes:
        """Signature followed by every chunk, in order."""
        return PNG_SIGNATURE + b"".join(chunk.to_bytes() for chunk in self._chunks)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __iter__(self) -> Iterator[Chunk]:
        return iter(tuple(self._chunks))

    def __len__(self) -> int:
        return len(self._chunks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Png):
            return NotImplemented
        return self._chunks == other._chunks

    def __str__(self) -> str:
        return "\n".join(str(chunk) for chunk in self._chunks)

    def __repr__(self) -> str:
        types = ", ".join(str(chunk.chunk_type) for chunk in self._chunks)
        return f"Png([{types}])"
