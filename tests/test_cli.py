import logging
import struct

import pytest

import cli


@pytest.fixture(autouse=True)
def _capture(caplog):
    caplog.set_level(logging.INFO, logger="huffcodec")


def test_compress_then_decompress(tmp_path, caplog):
    src = tmp_path / "story.txt"
    src.write_text("once upon a time, a time upon once\n", encoding="utf-8")

    assert cli.main(["compress", str(src)]) == 0
    huff_path = tmp_path / "story.huff"
    assert huff_path.exists()
    assert "Compression finished" in caplog.text

    out = tmp_path / "back.txt"
    assert cli.main(["decompress", str(huff_path), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == src.read_text(encoding="utf-8")
    assert "Decompression finished" in caplog.text


def test_compress_empty_file(tmp_path, caplog):
    src = tmp_path / "empty.txt"
    src.write_text("")
    assert cli.main(["compress", str(src)]) == 1
    assert "Nothing to compress" in caplog.text
    assert not (tmp_path / "empty.huff").exists()


def test_compress_missing_file(tmp_path, caplog):
    assert cli.main(["compress", str(tmp_path / "nope.txt")]) == 1
    assert "Error reading file for compression" in caplog.text


def test_compress_non_utf8_file(tmp_path, caplog):
    src = tmp_path / "binary.txt"
    src.write_bytes(b"\xff\xfe\x00\x81")
    assert cli.main(["compress", str(src)]) == 1
    assert "not UTF-8" in caplog.text


def test_decompress_garbage_reports_error(tmp_path, caplog):
    bad = tmp_path / "bad.huff"
    bad.write_bytes(b"\x00\x00\x10\x00garbage")
    assert cli.main(["decompress", str(bad)]) == 1
    assert "Make sure this file was created by this tool" in caplog.text
    assert not (tmp_path / "bad_decompressed.txt").exists()


def test_subcommand_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_decompress_surrogate_symbol_reports_error(tmp_path, caplog):
    header = b'{"bitLength":1,"freq":{"\\ud800":1}}'
    bad = tmp_path / "surrogate.huff"
    bad.write_bytes(struct.pack(">I", len(header)) + header + b"\x00")
    assert cli.main(["decompress", str(bad)]) == 1
    assert "surrogate" in caplog.text


def test_decompress_deeply_nested_header_reports_error(tmp_path, caplog):
    header = b"[" * 100000 + b"]" * 100000
    bad = tmp_path / "nested.huff"
    bad.write_bytes(struct.pack(">I", len(header)) + header)
    assert cli.main(["decompress", str(bad)]) == 1
    assert "Make sure this file was created by this tool" in caplog.text
