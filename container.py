"""
.huff container layout:

  offset 0                uint32 header_length, big-endian
  offset 4                header_length bytes of UTF-8 JSON
                          {"bitLength": <int>, "freq": {"<symbol>": <count>, ...}}
  offset 4+header_length  packed bits, MSB-first, bitLength of them meaningful

The order of "freq" entries is the order leaves were fed to the heap when
encoding, so decoding rebuilds the identical tree.
"""

import json
import struct
from typing import Dict, Tuple

from errors import ContainerError

LENGTH_PREFIX = struct.Struct(">I")


def encode_header(bit_length: int, frequency_table: Dict[str, int]) -> bytes:
    header = {"bitLength": bit_length, "freq": frequency_table}
    return json.dumps(header, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decode_header(header_bytes: bytes) -> Tuple[int, Dict[str, int]]:
    try:
        header = json.loads(header_bytes.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ContainerError(f"header is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ContainerError(f"header is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ContainerError("header is not valid JSON: nested too deeply") from exc

    if not isinstance(header, dict):
        raise ContainerError("header must be a JSON object")
    if "bitLength" not in header:
        raise ContainerError("header is missing 'bitLength'")
    if "freq" not in header:
        raise ContainerError("header is missing 'freq'")

    bit_length = header["bitLength"]
    if not _is_count(bit_length) or bit_length < 0:
        raise ContainerError(f"'bitLength' must be a non-negative integer, got {bit_length!r}")

    freq = header["freq"]
    if not isinstance(freq, dict) or not freq:
        raise ContainerError("'freq' must be a non-empty object")
    for symbol, count in freq.items():
        if len(symbol) != 1:
            raise ContainerError(f"'freq' key {symbol!r} is not a single symbol")
        if 0xD800 <= ord(symbol) <= 0xDFFF:
            raise ContainerError(f"'freq' key {symbol!r} is a lone surrogate, not a text symbol")
        if not _is_count(count) or count < 1:
            raise ContainerError(f"count for {symbol!r} must be a positive integer, got {count!r}")

    return bit_length, freq


def pack_container(bit_length: int, frequency_table: Dict[str, int], packed: bytes) -> bytes:
    header = encode_header(bit_length, frequency_table)
    return LENGTH_PREFIX.pack(len(header)) + header + packed


def unpack_container(buffer: bytes) -> Tuple[int, Dict[str, int], bytes]:
    """Splits a container into (bit_length, frequency_table, packed_bytes)."""
    if len(buffer) < LENGTH_PREFIX.size:
        raise ContainerError(f"container is {len(buffer)} bytes, too short for the length prefix")

    (header_length,) = LENGTH_PREFIX.unpack_from(buffer, 0)
    start = LENGTH_PREFIX.size
    if header_length > len(buffer) - start:
        raise ContainerError(
            f"header length {header_length} exceeds the {len(buffer) - start} bytes that follow"
        )

    bit_length, freq = decode_header(bytes(buffer[start:start + header_length]))
    packed = bytes(buffer[start + header_length:])
    if bit_length > len(packed) * 8:
        raise ContainerError(
            f"header declares {bit_length} bits but the payload holds only {len(packed) * 8}"
        )
    return bit_length, freq, packed
