"""
Tests for Chunk — byte-exact parsing, CRC-32 integrity, rendering.
"""

from __future__ import annotations

import struct
import zlib

import pytest

from pngme._format.chunk import Chunk
from pngme._format.chunk_type import ChunkType
from pngme._format.errors import (
    ChecksumMismatch, InvalidType, LengthMismatch, NotUtf8, TooShort,
)

MESSAGE = b"This is where your secret message will be!"
MESSAGE_CRC = 2882656334


def frame(length: int, chunk_type: bytes, data: bytes, crc: int) -> bytes:
    return struct.pack(">I", length) + chunk_type + data + struct.pack(">I", crc)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def raw_chunk():
    """Wire bytes of a valid 42-byte RuSt chunk."""
    return frame(len(MESSAGE), b"RuSt", MESSAGE, MESSAGE_CRC)


@pytest.fixture
def chunk(raw_chunk):
    return Chunk.from_bytes(raw_chunk)


# ---------------------------------------------------------------------------
# TestNewChunk
# ---------------------------------------------------------------------------

class TestNewChunk:
    """Chunk(type, data) computes length and CRC."""

    def test_new_chunk(self):
        chunk = Chunk(ChunkType.from_str("RuSt"), MESSAGE)
        assert chunk.length == 42
        assert chunk.crc == MESSAGE_CRC

    def test_accepts_type_string(self):
        assert Chunk("RuSt", MESSAGE) == Chunk(ChunkType.from_str("RuSt"), MESSAGE)

    def test_rejects_bad_type_string(self):
        with pytest.raises(InvalidType):
            Chunk("Ru1t", b"")

    def test_crc_covers_type_and_data(self):
        chunk = Chunk("RuSt", b"hello")
        assert chunk.crc == zlib.crc32(b"RuSthello")

    def test_empty_payload_crc_covers_type_only(self):
        chunk = Chunk("IEND", b"")
        assert chunk.length == 0
        assert chunk.crc == zlib.crc32(b"IEND")
        # well-known IEND CRC
        assert chunk.crc == 0xAE426082

    def test_size(self):
        assert Chunk("RuSt", b"hello").size == 17

    def test_data_is_copied(self):
        buf = bytearray(b"hello")
        chunk = Chunk("RuSt", buf)
        buf[0] = ord("j")
        assert chunk.data == b"hello"


# ---------------------------------------------------------------------------
# TestParse
# ---------------------------------------------------------------------------

class TestParse:
    """Chunk.from_bytes follows the frame layout exactly."""

    def test_valid_chunk(self, chunk):
        assert chunk.length == 42
        assert str(chunk.chunk_type) == "RuSt"
        assert chunk.data_as_string() == MESSAGE.decode()
        assert chunk.crc == MESSAGE_CRC

    def test_accepts_bytearray_and_memoryview(self, raw_chunk):
        assert Chunk.from_bytes(bytearray(raw_chunk)) == Chunk.from_bytes(memoryview(raw_chunk))

    def test_zero_length_payload(self):
        raw = frame(0, b"IEND", b"", zlib.crc32(b"IEND"))
        chunk = Chunk.from_bytes(raw)
        assert len(raw) == 12
        assert chunk.length == 0
        assert chunk.data == b""

    def test_bad_crc(self):
        raw = frame(len(MESSAGE), b"RuSt", MESSAGE, MESSAGE_CRC - 1)
        with pytest.raises(ChecksumMismatch, match="stored"):
            Chunk.from_bytes(raw)

    @pytest.mark.parametrize("bit", range(32))
    def test_any_crc_bit_flip_is_detected(self, raw_chunk, bit):
        tampered = bytearray(raw_chunk)
        byte_index = len(tampered) - 4 + bit // 8
        tampered[byte_index] ^= 1 << (bit % 8)
        with pytest.raises(ChecksumMismatch):
            Chunk.from_bytes(bytes(tampered))

    def test_payload_tamper_is_detected(self, raw_chunk):
        tampered = bytearray(raw_chunk)
        tampered[10] ^= 0x01
        with pytest.raises(ChecksumMismatch):
            Chunk.from_bytes(bytes(tampered))

    def test_too_short(self):
        with pytest.raises(TooShort):
            Chunk.from_bytes(b"\x00" * 11)

    def test_empty_input(self):
        with pytest.raises(TooShort):
            Chunk.from_bytes(b"")

    def test_length_larger_than_frame(self):
        raw = frame(43, b"RuSt", MESSAGE, MESSAGE_CRC)
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(raw)

    def test_trailing_bytes(self, raw_chunk):
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(raw_chunk + b"\x00")

    def test_truncated(self, raw_chunk):
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(raw_chunk[:-1])

    def test_length_bit_flip(self, raw_chunk):
        tampered = bytearray(raw_chunk)
        tampered[3] ^= 0x01
        with pytest.raises(LengthMismatch):
            Chunk.from_bytes(bytes(tampered))

    def test_type_not_utf8(self):
        raw = frame(0, b"\xff\xffSt", b"", zlib.crc32(b"\xff\xffSt"))
        with pytest.raises(InvalidType, match="UTF-8") as exc_info:
            Chunk.from_bytes(raw)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_type_not_letters(self):
        raw = frame(0, b"Ru1t", b"", zlib.crc32(b"Ru1t"))
        with pytest.raises(InvalidType):
            Chunk.from_bytes(raw)


# ---------------------------------------------------------------------------
# TestSerialize
# ---------------------------------------------------------------------------

class TestSerialize:

    def test_to_bytes_matches_input(self, raw_chunk, chunk):
        assert chunk.to_bytes() == raw_chunk
        assert bytes(chunk) == raw_chunk

    def test_layout(self):
        raw = Chunk("RuSt", b"hello").to_bytes()
        assert raw[:4] == b"\x00\x00\x00\x05"
        assert raw[4:8] == b"RuSt"
        assert raw[8:13] == b"hello"
        assert struct.unpack(">I", raw[13:])[0] == zlib.crc32(b"RuSthello")

    def test_new_chunk_parses_back(self):
        original = Chunk("ruSt", "héllo wörld".encode("utf-8"))
        parsed = Chunk.from_bytes(original.to_bytes())
        assert parsed == original
        assert parsed.crc == zlib.crc32(b"ruSt" + original.data)


# ---------------------------------------------------------------------------
# TestText
# ---------------------------------------------------------------------------

class TestText:
    """Strict vs lossy payload decoding."""

    def test_data_as_string_not_utf8(self):
        chunk = Chunk("RuSt", b"\xffhello")
        with pytest.raises(NotUtf8):
            chunk.data_as_string()

    def test_lossy_string_replaces(self):
        chunk = Chunk("RuSt", b"\xffhello")
        assert chunk.data_as_lossy_string() == "�hello"

    def test_str(self):
        chunk = Chunk("RuSt", b"hello")
        assert str(chunk) == (
            f"length: 5, type: RuSt, message: hello, crc: {zlib.crc32(b'RuSthello')}"
        )

    def test_str_never_raises_on_binary(self):
        chunk = Chunk("RuSt", bytes(range(256)))
        assert "length: 256" in str(chunk)

    def test_repr(self):
        assert repr(Chunk("RuSt", b"")).startswith("Chunk(ChunkType('RuSt'), length=0")
