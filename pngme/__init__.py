"""
pngme — hide text messages inside PNG files as extra chunks.

Architecture:
    Format:    pngme._format   — chunk type, chunk codec, container model
    Messages:  pngme.messages  — encode / decode / remove text chunks
    Bridge:    pngme encode / decode / remove / print CLI commands
"""

__version__ = "0.1.0"

# 8-byte magic that opens every PNG file
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# length (4) + type (4) + checksum (4) around every chunk payload
CHUNK_OVERHEAD = 12

# Reader limits
MAX_FILE_SIZE = 100 * 1024 * 1024  # 100MB max input for the reader

# Environment overrides (CLI only)
ENV_MAX_FILE_SIZE = "PNGME_MAX_FILE_SIZE"
ENV_LOG_LEVEL = "PNGME_LOG_LEVEL"
