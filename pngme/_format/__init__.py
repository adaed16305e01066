"""
PNG chunk format engine.

Byte-exact chunk codec (length-prefixed, CRC-32 protected) and the ordered
chunk container behind every pngme command. Chunk payloads are opaque bytes.
"""

from pngme._format.spec import SIGNATURE_SIZE, crc32
from pngme._format.errors import (
    PngError, BadSignature, TooShort, LengthMismatch, InvalidType,
    InvalidLength, InvalidCharacter, ChecksumMismatch, NotUtf8, NotFound,
)
from pngme._format.chunk_type import ChunkType
from pngme._format.chunk import Chunk
from pngme._format.png import Png
from pngme._format.reader import PngReader
from pngme._format.writer import PngWriter
