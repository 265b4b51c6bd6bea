"""Locating need identifiers inside opened documents."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import unquote, urlsplit

from .needs import Need

_log = logging.getLogger("sclls")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass
class NeedPositionInfo:
    """Where one occurrence of a need id sits: zero-based line, byte columns."""

    line: int = 0
    start_col: int = 0
    end_col: int = 0


@dataclass
class NeedDocInfo:
    """A need together with all the places it is mentioned in a document."""

    positions: list[NeedPositionInfo] = field(default_factory=list)
    need: Need = field(default_factory=Need)


@dataclass
class DocumentNeeds:
    """The needs referenced by one document."""

    doc_name: str = ""
    uri: str = ""
    needs: list[NeedDocInfo] = field(default_factory=list)


@dataclass
class DocumentInfo:
    """An opened document's text and the needs found in it."""

    content: str = ""
    document_needs: DocumentNeeds = field(default_factory=DocumentNeeds)


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def get_document_name_from_uri(uri: str) -> str:
    """Return the file name at the end of the URI's path; raises ValueError if malformed."""
    if _BAD_ESCAPE.search(uri):
        raise ValueError(f"invalid URL escape in {uri!r}")
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in uri):
        raise ValueError(f"invalid control character in URL {uri!r}")
    path = unquote(urlsplit(uri).path)
    return _base(path)


def _as_bytes(content: str | bytes) -> bytes:
    return content.encode("utf-8") if isinstance(content, str) else bytes(content)


def line_and_column(content: str | bytes, position: int) -> tuple[int, int]:
    """Return the zero-based line and byte column of a byte offset in ``content``."""
    data = _as_bytes(content)
    head = data[: max(position, 0)]
    line = head.count(b"\n")
    col = len(head) - (head.rfind(b"\n") + 1)
    return line, col


def find_need_positions(content: str | bytes, need_id: str) -> list[NeedPositionInfo]:
    """Return every (possibly overlapping) occurrence of ``need_id`` in ``content``."""
    data = _as_bytes(content)
    needle = need_id.encode("utf-8")
    if not needle:
        raise ValueError("need id must not be empty")
    positions = []
    index = data.find(needle)
    while index != -1:
        line, col = line_and_column(data, index)
        positions.append(NeedPositionInfo(line=line, start_col=col, end_col=col + len(needle)))
        index = data.find(needle, index + 1)
    return positions


def find_all_needs_positions(
    content: str | bytes, needs: Mapping[str, Need]
) -> list[NeedDocInfo]:
    """Return the needs that occur in ``content`` with their positions."""
    data = _as_bytes(content)
    result = []
    for need_id, need in needs.items():
        positions = find_need_positions(data, need_id)
        if positions:
            result.append(NeedDocInfo(positions=positions, need=need))
    return result


def new_document_needs(uri: str) -> DocumentNeeds:
    """Create an empty record for the document at ``uri``."""
    try:
        doc_name = get_document_name_from_uri(uri)
    except ValueError as exc:
        _log.warning(
            "could not convert URI to document name. URI: %s Error: %s", uri, exc
        )
        doc_name = ""
    return DocumentNeeds(doc_name=doc_name, uri=uri)