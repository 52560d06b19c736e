import pytest

from distmock.models import CDNFile
from distmock.services.cdn import (
    ByteRange,
    InvalidRangeError,
    build_asset_response,
    content_disposition,
    iter_asset_bytes,
    parse_range_header,
)


def test_parse_full_range():
    byte_range = parse_range_header("bytes=0-99", 500)
    assert byte_range == ByteRange(start=0, end=99, size=500)
    assert byte_range.length == 100
    assert byte_range.content_range == "bytes 0-99/500"


@pytest.mark.parametrize(
    "header,start,end",
    [
        ("bytes=100-", 100, 499),
        ("bytes=-20", 0, 20),
        ("bytes=-", 0, 499),
        ("bytes=x-20", 0, 20),
        ("bytes=5-y", 5, 499),
        ("bytes= 3 - 7 ", 3, 7),
        ("bytes=0-9, 20-29", 0, 9),
        ("BYTES=1-2", 1, 2),
        ("bytes=0-1_0", 0, 499),
        ("bytes=1_0-20", 0, 20),
        ("bytes=0-\u0661", 0, 499),
        ("bytes=+5-9", 5, 9),
    ],
)
def test_parse_range_defaults(header, start, end):
    byte_range = parse_range_header(header, 500)
    assert (byte_range.start, byte_range.end) == (start, end)


@pytest.mark.parametrize(
    "header",
    ["bytes=0-500", "bytes=500-", "bytes=10-9", "bytes=0--1", "bytes=7", "bytes", "lines=0-1"],
)
def test_parse_range_rejects_unsatisfiable(header):
    with pytest.raises(InvalidRangeError):
        parse_range_header(header, 500)


def test_any_range_on_empty_file_is_invalid():
    with pytest.raises(InvalidRangeError):
        parse_range_header("bytes=0-", 0)


def test_iter_asset_bytes_chunks():
    chunks = list(iter_asset_bytes(b"abcdefghij", 4))
    assert chunks == [b"abcd", b"efgh", b"ij"]
    assert list(iter_asset_bytes(b"", 4)) == []


def test_content_disposition_quotes_filename():
    assert content_disposition("game.zip") == 'attachment; filename="game.zip"'
    assert content_disposition('we"ird.zip') == 'attachment; filename="we\\"ird.zip"'


def test_content_disposition_non_latin_filename():
    value = content_disposition("игра.zip")
    assert value.startswith('attachment; filename="????.zip"')
    assert value.endswith("filename*=UTF-8''%D0%B8%D0%B3%D1%80%D0%B0.zip")


def test_build_asset_response_headers():
    cdn_file = CDNFile(filename="a.bin", size=10, contents=b"0123456789")

    full = build_asset_response(cdn_file, None, 4)
    assert full.status_code == 200
    assert full.headers["content-length"] == "10"
    assert "content-range" not in full.headers

    partial = build_asset_response(cdn_file, "bytes=2-5", 4)
    assert partial.status_code == 206
    assert partial.headers["content-length"] == "4"
    assert partial.headers["content-range"] == "bytes 2-5/10"
    assert partial.headers["accept-ranges"] == "bytes"
    assert partial.headers["connection"] == "close"
    assert partial.headers["content-type"] == "application/octet-stream"


def test_cdn_file_size_must_match_contents():
    with pytest.raises(ValueError):
        CDNFile(filename="a.bin", size=11, contents=b"0123456789")
