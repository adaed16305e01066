"""
pngme CLI — hide and reveal text messages in PNG files.

Commands:
  pngme encode  - Append a message chunk to a PNG file
  pngme decode  - Print the first chunk of a given type
  pngme remove  - Remove every chunk of a given type
  pngme print   - Print every chunk in the file

Environment:
  PNGME_MAX_FILE_SIZE - Maximum input size in bytes (default: 100MB)
  PNGME_LOG_LEVEL     - Logging level when no -v flag is given (default: WARNING)
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from pngme import ENV_LOG_LEVEL, ENV_MAX_FILE_SIZE, MAX_FILE_SIZE

log = logging.getLogger(__name__)


def _setup_logging(verbosity: int) -> None:
    """Configure root logging from -v count, falling back to PNGME_LOG_LEVEL."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        name = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()
        level = getattr(logging, name, None)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _max_file_size() -> int:
    """Read limit from PNGME_MAX_FILE_SIZE, or the built-in default."""
    raw = os.environ.get(ENV_MAX_FILE_SIZE, "")
    if not raw:
        return MAX_FILE_SIZE
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        print(
            f"Error: {ENV_MAX_FILE_SIZE} must be a positive integer, got {raw!r}",
            file=sys.stderr,
        )
        sys.exit(1)
    return value


def _load(path: str):
    """Read and parse a PNG file, exiting with status 1 on failure."""
    from pngme._format.errors import PngError
    from pngme._format.reader import PngReader

    try:
        return PngReader.read(path, max_size=_max_file_size())
    except (PngError, ValueError, OSError) as e:
        print(f"Error: Cannot read {path}: {e}", file=sys.stderr)
        sys.exit(1)


def _output_path(args: argparse.Namespace) -> str:
    """Where to write: -o if given, otherwise the input file itself."""
    if not args.output:
        return args.path
    if ".." in Path(args.output).parts:
        print("Error: Output path must not contain '..' (path traversal)", file=sys.stderr)
        sys.exit(1)
    return args.output


def _persist(png, path: str) -> int:
    """Atomically write a container, exiting with status 1 on failure."""
    from pngme._format.writer import PngWriter

    try:
        return PngWriter.write(png, path)
    except OSError as e:
        print(f"Error: Cannot write {path}: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_encode(args: argparse.Namespace) -> None:
    """Append a message chunk and save the file."""
    from pngme._format.errors import InvalidType
    from pngme.messages import encode_message

    png = _load(args.path)
    try:
        chunk = encode_message(png, args.chunk_type, args.message)
    except InvalidType as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output = _output_path(args)
    nbytes = _persist(png, output)
    print(f"Encoded {chunk.length} bytes into {args.chunk_type} chunk -> {output} ({nbytes} bytes)")


def cmd_decode(args: argparse.Namespace) -> None:
    """Print the first chunk of the requested type."""
    from pngme._format.errors import NotUtf8
    from pngme.messages import decode_message

    png = _load(args.path)
    if args.text:
        try:
            message = decode_message(png, args.chunk_type)
        except NotUtf8 as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print("no chunk found" if message is None else message)
        return

    chunk = png.chunk_by_type(args.chunk_type)
    if chunk is None:
        print("no chunk found")
        return
    print(chunk)


def cmd_remove(args: argparse.Namespace) -> None:
    """Remove every chunk of the requested type and save the file."""
    from pngme.messages import remove_all_chunks

    png = _load(args.path)
    removed = remove_all_chunks(png, args.chunk_type)
    if not removed:
        print(f"Error: No {args.chunk_type!r} chunk found in {args.path}", file=sys.stderr)
        sys.exit(1)

    output = _output_path(args)
    _persist(png, output)
    print(f"Removed {removed} {args.chunk_type} chunk(s) -> {output}")


def cmd_print(args: argparse.Namespace) -> None:
    """Print every chunk, in file order."""
    png = _load(args.path)
    for chunk in png:
        print(chunk)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="pngme",
        description="pngme — hide text messages in PNG files as extra chunks.",
    )
    from pngme import __version__
    parser.add_argument("--version", action="version", version=f"pngme {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    sub = parser.add_subparsers(dest="command")

    # encode
    p_enc = sub.add_parser("encode", help="Append a message chunk to a PNG file")
    p_enc.add_argument("path", help="Path to .png file")
    p_enc.add_argument("chunk_type", help="4-letter chunk type (e.g. ruSt)")
    p_enc.add_argument("message", help="Message text (stored as UTF-8)")
    p_enc.add_argument("-o", "--output", help="Output file path (default: overwrite input)")

    # decode
    p_dec = sub.add_parser("decode", help="Print the first chunk of a type")
    p_dec.add_argument("path", help="Path to .png file")
    p_dec.add_argument("chunk_type", help="4-letter chunk type")
    p_dec.add_argument(
        "-t", "--text", action="store_true",
        help="Print only the message text (fails if not UTF-8)",
    )

    # remove
    p_rem = sub.add_parser("remove", help="Remove every chunk of a type")
    p_rem.add_argument("path", help="Path to .png file")
    p_rem.add_argument("chunk_type", help="4-letter chunk type")
    p_rem.add_argument("-o", "--output", help="Output file path (default: overwrite input)")

    # print
    p_print = sub.add_parser("print", help="Print every chunk in the file")
    p_print.add_argument("path", help="Path to .png file")

    args = parser.parse_args()
    _setup_logging(args.verbose)

    if not args.command:
        print("pngme — hide text messages in PNG files")
        print()
        print("Usage:")
        print("  pngme encode dice.png ruSt \"This is a secret message!\"")
        print("  pngme decode dice.png ruSt")
        print("  pngme remove dice.png ruSt")
        print("  pngme print dice.png")
        print()
        print("Run 'pngme <command> --help' for details on any command.")
        sys.exit(0)

    commands = {
        "encode": cmd_encode,
        "decode": cmd_decode,
        "remove": cmd_remove,
        "print": cmd_print,
    }

    log.debug("Running %s on %s", args.command, args.path)
    commands[args.command](args)


if __name__ == "__main__":
    main()
