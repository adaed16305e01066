"""
PNG Container Format — chunk layer only.

Layout:
    89 50 4E 47 0D 0A 1A 0A      <- Signature (8 bytes, fixed)
    <chunk>*                     <- Zero or more chunks, no padding, no trailer

Chunk frame:
    length    4 bytes   big-endian uint32, payload size only
    type      4 bytes   ASCII letters A-Z / a-z
    payload   length bytes, opaque
    crc       4 bytes   big-endian uint32, CRC-32 (IEEE) over type + payload

Chunk type flags (bit 5, value 0x20, of each type byte):
    byte 0   unset -> critical        set -> ancillary
    byte 1   unset -> public          set -> private
    byte 2   unset -> reserved valid  set -> reserved invalid
    byte 3   set   -> safe to copy    unset -> unsafe to copy
"""

from __future__ import annotations

import struct
import zlib

from pngme import PNG_SIGNATURE, CHUNK_OVERHEAD

SIGNATURE_SIZE = len(PNG_SIGNATURE)

# Frame pieces, big-endian
LENGTH_STRUCT = struct.Struct(">I")
CRC_STRUCT = struct.Struct(">I")
CHUNK_HEADER = struct.Struct(">I4s")  # length + type
HEADER_SIZE = CHUNK_HEADER.size

TYPE_SIZE = 4
MIN_CHUNK_SIZE = CHUNK_OVERHEAD  # zero-length payload
MAX_CHUNK_LENGTH = 0xFFFFFFFF

# The property bit inside each of the four type bytes
FLAG_BIT = 0x20


def crc32(chunk_type: bytes, data: bytes) -> int:
    """CRC-32 (IEEE) over type bytes followed by payload bytes."""
    return zlib.crc32(data, zlib.crc32(chunk_type)) & 0xFFFFFFFF
