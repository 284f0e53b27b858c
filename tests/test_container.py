import json
import struct

import pytest

import container
from errors import CodecError, ContainerError


def _frame(header_obj, payload=b""):
    header = json.dumps(header_obj).encode("utf-8")
    return struct.pack(">I", len(header)) + header + payload


def test_header_is_compact_json():
    header = container.encode_header(4, {"a": 4})
    assert header == b'{"bitLength":4,"freq":{"a":4}}'


def test_header_keeps_non_ascii_symbols_literal():
    header = container.encode_header(3, {"é": 1, "😀": 2})
    assert "é".encode("utf-8") in header
    assert "😀".encode("utf-8") in header


def test_header_length_prefix_matches_header_segment():
    ft = {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    buffer = container.pack_container(23, ft, b"\x01\x02\x03")
    (header_length,) = struct.unpack(">I", buffer[:4])
    header = buffer[4:4 + header_length]
    assert header == container.encode_header(23, ft)
    assert buffer[4 + header_length:] == b"\x01\x02\x03"


def test_unpack_returns_same_fields_in_same_order():
    ft = {"z": 1, "a": 3, "日": 2}
    bit_length, freq, packed = container.unpack_container(container.pack_container(9, ft, b"\xff\x80"))
    assert bit_length == 9
    assert freq == ft
    assert list(freq) == ["z", "a", "日"]
    assert packed == b"\xff\x80"


def test_reads_container_written_with_whitespace_json():
    buffer = _frame({"bitLength": 2, "freq": {"a": 1, "b": 1}}, b"\x40")
    assert container.unpack_container(buffer) == (2, {"a": 1, "b": 1}, b"\x40")


def test_too_short_for_length_prefix():
    with pytest.raises(ContainerError):
        container.unpack_container(b"\x00\x01")


def test_header_length_larger_than_buffer():
    buffer = struct.pack(">I", 500) + b'{"bitLength":1}'
    with pytest.raises(ContainerError, match="exceeds"):
        container.unpack_container(buffer)


def test_header_not_json():
    bad = b"not json at all"
    with pytest.raises(ContainerError, match="JSON"):
        container.unpack_container(struct.pack(">I", len(bad)) + bad)


def test_header_not_utf8():
    bad = b"\xff\xfe\xfd"
    with pytest.raises(ContainerError, match="UTF-8"):
        container.unpack_container(struct.pack(">I", len(bad)) + bad)


@pytest.mark.parametrize("header", [
    [1, 2, 3],
    {"freq": {"a": 1}},
    {"bitLength": 1},
    {"bitLength": -1, "freq": {"a": 1}},
    {"bitLength": "8", "freq": {"a": 1}},
    {"bitLength": True, "freq": {"a": 1}},
    {"bitLength": 1, "freq": {}},
    {"bitLength": 1, "freq": ["a"]},
    {"bitLength": 1, "freq": {"ab": 1}},
    {"bitLength": 1, "freq": {"a": 0}},
    {"bitLength": 1, "freq": {"a": 1.5}},
    {"bitLength": 1, "freq": {"\ud800": 1}},
    {"bitLength": 1, "freq": {"\udfff": 2, "a": 1}},
])
def test_malformed_header_fields(header):
    with pytest.raises(ContainerError):
        container.unpack_container(_frame(header, b"\x00"))


def test_deeply_nested_header_is_reported():
    bad = b"[" * 100000 + b"]" * 100000
    with pytest.raises(ContainerError, match="JSON"):
        container.unpack_container(struct.pack(">I", len(bad)) + bad)


def test_truncated_payload_is_reported():
    buffer = container.pack_container(17, {"a": 1, "b": 1}, b"\x00\x00\x00")
    with pytest.raises(ContainerError, match="payload"):
        container.unpack_container(buffer[:-1])


def test_container_errors_are_value_errors():
    assert issubclass(ContainerError, CodecError)
    assert issubclass(ContainerError, ValueError)
