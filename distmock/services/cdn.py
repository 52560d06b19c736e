"""Byte-range aware delivery of CDN files.

Only single ranges of the form ``bytes=<start>-<end>`` are understood. When a
header lists several ranges the first one wins. A range outside the file is
not clamped: ``InvalidRangeError`` propagates and the request fails with a
generic internal error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import quote

from fastapi.responses import StreamingResponse

from ..models import CDNFile

logger = logging.getLogger(__name__)

OCTET_STREAM = "application/octet-stream"
_OFFSET_RE = re.compile(r"[+-]?[0-9]+")


class InvalidRangeError(ValueError):
    pass


@dataclass(frozen=True)
class ByteRange:
    start: int
    end: int
    size: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.size}"


def _parse_offset(raw: str) -> Optional[int]:
    value = raw.strip()
    if not _OFFSET_RE.fullmatch(value):
        return None
    return int(value)


def parse_range_header(header: str, size: int) -> ByteRange:
    unit, sep, ranges = header.partition("=")
    if not sep or unit.strip().lower() != "bytes":
        raise InvalidRangeError(f"malformed range header {header!r}")
    first = ranges.split(",", 1)[0]
    start_raw, dash, end_raw = first.partition("-")
    if not dash:
        raise InvalidRangeError(f"malformed range header {header!r}")

    start = _parse_offset(start_raw)
    if start is None:
        start = 0
    end = _parse_offset(end_raw)
    if end is None:
        end = size - 1

    if not 0 <= start <= end < size:
        raise InvalidRangeError(f"range {start}-{end} not satisfiable for {size} bytes")
    return ByteRange(start=start, end=end, size=size)


def iter_asset_bytes(data: bytes, chunk_size: int) -> Iterator[bytes]:
    view = memoryview(data)
    for offset in range(0, len(view), chunk_size):
        yield bytes(view[offset : offset + chunk_size])


def content_disposition(filename: str) -> str:
    escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
    try:
        escaped.encode("latin-1")
    except UnicodeEncodeError:
        fallback = escaped.encode("ascii", "replace").decode("ascii")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    return f'attachment; filename="{escaped}"'


def build_asset_response(
    cdn_file: CDNFile,
    range_header: Optional[str],
    chunk_size: int,
) -> StreamingResponse:
    data = cdn_file.contents
    headers = {
        "Accept-Ranges": "bytes",
        "Content-Disposition": content_disposition(cdn_file.filename),
        "Connection": "close",
    }
    if range_header:
        byte_range = parse_range_header(range_header, cdn_file.size)
        data = data[byte_range.start : byte_range.end + 1]
        headers["Content-Range"] = byte_range.content_range
        status_code = 206
    else:
        status_code = 200
    headers["Content-Length"] = str(len(data))

    def asset_stream() -> Iterator[bytes]:
        logger.info("Serving %s (%d bytes)", cdn_file.filename, len(data))
        yield from iter_asset_bytes(data, chunk_size)
        logger.info("Serving %s (done)", cdn_file.filename)

    return StreamingResponse(
        asset_stream(),
        status_code=status_code,
        media_type=OCTET_STREAM,
        headers=headers,
    )
