import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import container
import huffman as huff

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

CONTAINER_SUFFIX = ".huff"


def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0


@dataclass
class CompressionStats:
    original_bytes: int
    compressed_bytes: int
    elapsed_ms: float

    @property
    def ratio_percent(self) -> float:
        # compressed size as a share of the original, e.g. 54.2 means 54.2%
        return self.compressed_bytes / max(1, self.original_bytes) * 100


@dataclass
class CompressionResult:
    buffer: bytes
    stats: CompressionStats


@dataclass
class DecompressionResult:
    text: str
    stats: CompressionStats


def encode(text: str) -> Optional[bytes]:
    """
    Encodes text into a self-describing .huff container.
    Returns None when there is nothing to compress (empty text).
    """
    ft = huff.freq_table(text)
    root = huff.build_huffman_tree(ft)
    if root is None:
        return None

    code_map = huff.generate_huffman_codes(root)
    packed, bit_length = huff.pack_bits(text, code_map)
    logger.debug("encoded %d symbols (%d distinct) into %d bits", len(text), len(ft), bit_length)
    return container.pack_container(bit_length, ft, packed)


def decode(buffer: bytes) -> str:
    """Decodes a container produced by encode(); raises CodecError subclasses on malformed input."""
    bit_length, ft, packed = container.unpack_container(buffer)
    root = huff.build_huffman_tree(ft)
    text = huff.unpack_and_decode(packed, root, bit_length)
    logger.debug("decoded %d bits into %d symbols", bit_length, len(text))
    return text


def compress_text(text: str) -> Optional[CompressionResult]:
    t0 = now_ns()
    buffer = encode(text)
    t1 = now_ns()
    if buffer is None:
        return None
    stats = CompressionStats(
        original_bytes=len(text.encode("utf-8")),
        compressed_bytes=len(buffer),
        elapsed_ms=ns_to_ms(t1 - t0),
    )
    return CompressionResult(buffer, stats)


def decompress_buffer(buffer: bytes) -> DecompressionResult:
    t0 = now_ns()
    text = decode(buffer)
    t1 = now_ns()
    stats = CompressionStats(
        original_bytes=len(text.encode("utf-8")),
        compressed_bytes=len(buffer),
        elapsed_ms=ns_to_ms(t1 - t0),
    )
    return DecompressionResult(text, stats)


def compressed_name(path: PathLike) -> Path:
    p = Path(path)
    return p.with_name(f"{p.stem or 'compressed'}{CONTAINER_SUFFIX}")

def decompressed_name(path: PathLike) -> Path:
    p = Path(path)
    name = p.name
    if name.lower().endswith(CONTAINER_SUFFIX):
        name = name[:-len(CONTAINER_SUFFIX)]
    return p.with_name(f"{name or 'decompressed'}_decompressed.txt")


def compress_file(path: PathLike, out_path: Optional[PathLike] = None) -> Optional[CompressionResult]:
    """
    Compresses a UTF-8 text file. Returns None (and writes nothing) if the file is empty.
    """
    src = Path(path)
    with src.open("r", encoding="utf-8", newline="") as f:
        text = f.read()

    result = compress_text(text)
    if result is None:
        return None

    dst = Path(out_path) if out_path is not None else compressed_name(src)
    dst.write_bytes(result.buffer)
    logger.debug("wrote %s", dst)
    return result


def decompress_file(path: PathLike, out_path: Optional[PathLike] = None) -> DecompressionResult:
    src = Path(path)
    result = decompress_buffer(src.read_bytes())

    dst = Path(out_path) if out_path is not None else decompressed_name(src)
    with dst.open("w", encoding="utf-8", newline="") as f:
        f.write(result.text)
    logger.debug("wrote %s", dst)
    return result


# Display helpers

def format_bytes(n: int) -> str:
    units = ["B", "KB", "MB", "GB"]
    i = 0
    while n >= 1024 ** (i + 1) and i < len(units) - 1:
        i += 1
    if i == 0:
        return f"{n} B"
    return f"{n / (1024 ** i):.2f} {units[i]}"

def format_duration(ms: float) -> str:
    total = int(ms)
    minutes = total // 60000
    seconds = (total % 60000) // 1000
    millis = total % 1000
    return f"{minutes} min {seconds} sec {millis} ms"
