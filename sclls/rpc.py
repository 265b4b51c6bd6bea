"""Framing of JSON-RPC messages with ``Content-Length`` headers."""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Iterator

_SEPARATOR = b"\r\n\r\n"
_HEADER_PREFIX = b"Content-Length: "


class DecodeError(ValueError):
    """Raised when an incoming message cannot be decoded."""


def encode_msg(msg: Any) -> str:
    """Serialise ``msg`` as compact JSON behind a Content-Length header."""
    content = json.dumps(msg, separators=(",", ":"), ensure_ascii=False)
    return f"Content-Length: {len(content.encode('utf-8'))}\r\n\r\n{content}"


def _parse_frame(data: bytes) -> tuple[bytes, int, bytes] | None:
    header, sep, rest = data.partition(_SEPARATOR)
    if not sep:
        return None
    raw = header[len(_HEADER_PREFIX):]
    try:
        length = int(raw)
    except ValueError as exc:
        raise DecodeError(f"invalid Content-Length: {raw!r}") from exc
    if length < 0:
        raise DecodeError(f"negative Content-Length: {length}")
    return header, length, rest


def decode_msg(msg: bytes) -> tuple[str, bytes]:
    """Return the method name and the JSON content of a framed message."""
    frame = _parse_frame(msg)
    if frame is None:
        raise DecodeError("did not find header")
    _, length, rest = frame
    if length > len(rest):
        raise DecodeError(f"Content-Length {length} exceeds {len(rest)} bytes of content")
    content = rest[:length]
    try:
        payload = json.loads(content)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON content: {exc}") from exc
    if payload is None:
        return "", content
    if not isinstance(payload, dict):
        raise DecodeError("message is not a JSON object")
    method = next((v for k, v in reversed(payload.items()) if k.lower() == "method"), None)
    if method is not None and not isinstance(method, str):
        raise DecodeError("method must be a string")
    return method or "", content


def split(data: bytes) -> bytes | None:
    """Return the first complete framed message in ``data``, or None if more is needed."""
    frame = _parse_frame(data)
    if frame is None:
        return None
    header, length, rest = frame
    if len(rest) < length:
        return None
    return data[: len(header) + len(_SEPARATOR) + length]


def read_messages(stream: BinaryIO) -> Iterator[bytes]:
    """Yield complete framed messages read from a binary stream until it ends."""
    read = getattr(stream, "read1", None) or stream.read
    buffer = b""
    while True:
        token = split(buffer)
        if token is not None:
            buffer = buffer[len(token):]
            yield token
            continue
        chunk = read(4096)
        if not chunk:
            return
        buffer += chunk