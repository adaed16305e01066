"""
Chunk — one length-prefixed, typed, CRC-protected record.

Wire form (all integers big-endian):
    [length: 4][type: 4][data: length][crc: 4]

Chunks are immutable. Build one from a type and payload (CRC computed), or
parse one from an exact byte frame (CRC verified).
"""

from __future__ import annotations

from pngme._format.chunk_type import ChunkType
from pngme._format.errors import (
    ChecksumMismatch, InvalidType, LengthMismatch, NotUtf8, TooShort,
)
from pngme._format.spec import (
    CHUNK_HEADER, CRC_STRUCT, HEADER_SIZE, LENGTH_STRUCT, MAX_CHUNK_LENGTH,
    MIN_CHUNK_SIZE, crc32,
)


class Chunk:
    """A single PNG chunk.

    Usage:
        chunk = Chunk(ChunkType.from_str("RuSt"), b"hello")
        raw = chunk.to_bytes()
        assert Chunk.from_bytes(raw) == chunk
    """

    __slots__ = ("_chunk_type", "_data", "_crc")

    def __init__(self, chunk_type: ChunkType | str, data: bytes) -> None:
        if isinstance(chunk_type, str):
            chunk_type = ChunkType.from_str(chunk_type)
        data = bytes(data)
        if len(data) > MAX_CHUNK_LENGTH:
            raise ValueError(
                f"Chunk data length {len(data)} exceeds max {MAX_CHUNK_LENGTH}"
            )
        self._chunk_type = chunk_type
        self._data = data
        self._crc = crc32(chunk_type.raw, data)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Chunk:
        """Parse one chunk from a buffer holding exactly one frame.

        Raises TooShort, LengthMismatch, InvalidType or ChecksumMismatch.
        """
        data = bytes(data)
        if len(data) < MIN_CHUNK_SIZE:
            raise TooShort(
                f"Chunk too short: need at least {MIN_CHUNK_SIZE} bytes, got {len(data)}"
            )

        (length,) = LENGTH_STRUCT.unpack_from(data, 0)
        expected = length + MIN_CHUNK_SIZE
        if expected != len(data):
            raise LengthMismatch(
                f"Chunk length mismatch: declared {length} (frame {expected} bytes), "
                f"got {len(data)} bytes"
            )

        type_bytes = data[LENGTH_STRUCT.size:HEADER_SIZE]
        try:
            type_text = type_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidType(f"Chunk type is not valid UTF-8: {type_bytes!r}") from e
        chunk_type = ChunkType.from_str(type_text)

        payload = data[HEADER_SIZE:HEADER_SIZE + length]
        (declared_crc,) = CRC_STRUCT.unpack_from(data, HEADER_SIZE + length)

        chunk = cls(chunk_type, payload)
        if chunk.crc != declared_crc:
            raise ChecksumMismatch(
                f"Checksum mismatch in {type_text} chunk: "
                f"stored {declared_crc:#010x}, computed {chunk.crc:#010x}"
            )
        return chunk

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def chunk_type(self) -> ChunkType:
        return self._chunk_type

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def crc(self) -> int:
        return self._crc

    @property
    def size(self) -> int:
        """Total on-wire size: length + 12."""
        return self.length + MIN_CHUNK_SIZE

    def data_as_string(self) -> str:
        """Payload as strict UTF-8 text. Raises NotUtf8."""
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise NotUtf8(
                f"{self._chunk_type} chunk data is not valid UTF-8: {e}"
            ) from e

    def data_as_lossy_string(self) -> str:
        """Payload as text, invalid sequences replaced with U+FFFD."""
        return self._data.decode("utf-8", errors="replace")

    def to_bytes(self) -> bytes:
        """Serialize to the wire form. Inverse of from_bytes."""
        return (
            CHUNK_HEADER.pack(self.length, self._chunk_type.raw)
            + self._data
            + CRC_STRUCT.pack(self._crc)
        )

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return (
            self._chunk_type == other._chunk_type
            and self._data == other._data
            and self._crc == other._crc
        )

    def __hash__(self) -> int:
        return hash((self._chunk_type, self._data, self._crc))

    def __str__(self) -> str:
        return (
            f"length: {self.length}, type: {self._chunk_type}, "
            f"message: {self.data_as_lossy_string()}, crc: {self._crc}"
        )

    def __repr__(self) -> str:
        return f"Chunk({self._chunk_type!r}, length={self.length}, crc={self._crc:#010x})"

