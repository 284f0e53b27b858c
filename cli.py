"""
Command-line front end for the Huffman text codec.

How to run:
  python cli.py compress notes.txt             # writes notes.huff
  python cli.py decompress notes.huff          # writes notes_decompressed.txt
  python cli.py compress notes.txt -o out.huff -v
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import codec
from errors import CodecError

logger = logging.getLogger("huffcodec")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def cmd_compress(args: argparse.Namespace) -> int:
    logger.info("Selected file for compression: %s", args.input)
    logger.info("Starting compression...")
    try:
        result = codec.compress_file(args.input, args.output)
    except UnicodeDecodeError as exc:
        logger.error("Error reading file for compression: not UTF-8 text (%s)", exc)
        return 1
    except OSError as exc:
        logger.error("Error reading file for compression: %s", exc)
        return 1

    if result is None:
        logger.warning("The selected file is empty. Nothing to compress.")
        return 1

    stats = result.stats
    out = args.output or codec.compressed_name(args.input)
    logger.info("Original size:   %s", codec.format_bytes(stats.original_bytes))
    logger.info("Compressed size: %s", codec.format_bytes(stats.compressed_bytes))
    logger.info("Compression finished. Ratio: %.2f%%. Time: %s", stats.ratio_percent,
                codec.format_duration(stats.elapsed_ms))
    logger.info("Wrote %s", out)
    return 0


def cmd_decompress(args: argparse.Namespace) -> int:
    logger.info("Selected file for decompression: %s", args.input)
    logger.info("Starting decompression...")
    try:
        result = codec.decompress_file(args.input, args.output)
    except CodecError as exc:
        logger.error("Error during decompression (%s). Make sure this file was created by this tool.", exc)
        return 1
    except OSError as exc:
        logger.error("Error reading file for decompression: %s", exc)
        return 1

    stats = result.stats
    out = args.output or codec.decompressed_name(args.input)
    logger.info("Compressed size:   %s", codec.format_bytes(stats.compressed_bytes))
    logger.info("Decompressed size: %s", codec.format_bytes(stats.original_bytes))
    logger.info("Decompression finished. Time: %s", codec.format_duration(stats.elapsed_ms))
    logger.info("Wrote %s", out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="huffcodec", description="Huffman compression for UTF-8 text files")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log codec internals")
    sub = ap.add_subparsers(dest="command", required=True)

    c = sub.add_parser("compress", help="Compress a text file into a .huff container")
    c.add_argument("input", help="Path to a UTF-8 text file")
    c.add_argument("-o", "--output", default=None, help="Output path (default: <stem>.huff)")
    c.set_defaults(func=cmd_compress)

    d = sub.add_parser("decompress", help="Restore a text file from a .huff container")
    d.add_argument("input", help="Path to a .huff file")
    d.add_argument("-o", "--output", default=None, help="Output path (default: <name>_decompressed.txt)")
    d.set_defaults(func=cmd_decompress)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
