"""
Chunk type — the 4-byte code naming a chunk.

Two ways in:
  - ChunkType.from_bytes(b"RuSt")  unchecked, stores the bytes verbatim
  - ChunkType.from_str("RuSt")     checked, 4 ASCII letters only

The four property flags live in bit 5 (0x20) of each byte; see spec.py.
"""

from __future__ import annotations

from dataclasses import dataclass

from pngme._format.errors import InvalidCharacter, InvalidLength
from pngme._format.spec import FLAG_BIT, TYPE_SIZE


@dataclass(frozen=True)
class ChunkType:
    """Immutable 4-byte chunk type code.

    Attributes:
        raw: The four type bytes, exactly as stored in the file.
    """

    raw: bytes

    def __post_init__(self) -> None:
        if isinstance(self.raw, str):
            raise TypeError(
                f"ChunkType needs bytes, got str {self.raw!r}; use ChunkType.from_str"
            )
        object.__setattr__(self, "raw", bytes(self.raw))
        if len(self.raw) != TYPE_SIZE:
            raise InvalidLength(
                f"Chunk type must be {TYPE_SIZE} bytes, got {len(self.raw)}"
            )

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> ChunkType:
        """Build from 4 raw bytes. No alphabetic check."""
        return cls(bytes(data))

    @classmethod
    def from_str(cls, text: str) -> ChunkType:
        """Build from a 4-character string of ASCII letters.

        Raises InvalidLength or InvalidCharacter (both InvalidType).
        """
        if len(text) != TYPE_SIZE:
            raise InvalidLength(
                f"Chunk type must be {TYPE_SIZE} characters, got {len(text)}: {text!r}"
            )
        for c in text:
            if not ("A" <= c <= "Z" or "a" <= c <= "z"):
                raise InvalidCharacter(
                    f"Chunk type must contain only ASCII letters, got {c!r} in {text!r}"
                )
        return cls(text.encode("ascii"))

    def _flag(self, index: int) -> bool:
        return self.raw[index] & FLAG_BIT == 0

    def is_critical(self) -> bool:
        return self._flag(0)

    def is_public(self) -> bool:
        return self._flag(1)

    def is_reserved_bit_valid(self) -> bool:
        return self._flag(2)

    def is_safe_to_copy(self) -> bool:
        # Inverted: lowercase last letter means safe to copy
        return not self._flag(3)

    def is_valid(self) -> bool:
        return self.is_reserved_bit_valid()

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        try:
            return self.raw.decode("utf-8")
        except UnicodeDecodeError as e:
            return str(e)

    def __repr__(self) -> str:
        return f"ChunkType({str(self)!r})"
