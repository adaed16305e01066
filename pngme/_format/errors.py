"""
Errors raised by the format engine.

Every failure is a PngError subclass, so callers can catch the whole family
or a single kind (e.g. ``except ChecksumMismatch``).
"""

from __future__ import annotations


class PngError(Exception):
    """Base class for chunk and container errors."""


class BadSignature(PngError):
    """Input does not start with the PNG signature."""


class TooShort(PngError):
    """Byte region is smaller than the minimum chunk frame."""


class LengthMismatch(PngError):
    """Declared length + 12 does not match the bytes available."""


class InvalidType(PngError):
    """Chunk type is not 4 ASCII letters."""


class InvalidLength(InvalidType):
    """Chunk type text is not exactly 4 characters."""


class InvalidCharacter(InvalidType):
    """Chunk type text contains something other than A-Z / a-z."""


class ChecksumMismatch(PngError):
    """Recomputed CRC-32 disagrees with the stored one."""


class NotUtf8(PngError):
    """Payload requested as text is not valid UTF-8."""


class NotFound(PngError):
    """No chunk of the requested type."""
