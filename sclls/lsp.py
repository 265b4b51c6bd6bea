"""Language Server Protocol messages understood by the server."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _obj(data: Any) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _get(data: dict, key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"field {key!r} must be {kind.__name__}")
    return value


@dataclass
class ClientInfo:
    """Name and version the client reports about itself."""

    name: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ClientInfo:
        data = _obj(data)
        return cls(_get(data, "name", str, ""), _get(data, "version", str, ""))


@dataclass
class TextDocumentItem:
    """A text document as sent by the client."""

    uri: str = ""
    language_id: str = ""
    version: int = 0
    text: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> TextDocumentItem:
        data = _obj(data)
        language_key = "languageId" if "languageId" in data else "languageid"
        return cls(
            uri=_get(data, "uri", str, ""),
            language_id=_get(data, language_key, str, ""),
            version=_get(data, "version", int, 0),
            text=_get(data, "text", str, ""),
        )


@dataclass
class Position:
    """A zero-based line and character offset in a document."""

    line: int = 0
    character: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Position:
        data = _obj(data)
        return cls(_get(data, "line", int, 0), _get(data, "character", int, 0))


@dataclass
class InitializeRequest:
    """The ``initialize`` request."""

    id: int = 0
    method: str = ""
    jsonrpc: str = ""
    client_info: ClientInfo | None = None

    @classmethod
    def from_dict(cls, data: Any) -> InitializeRequest:
        data = _obj(data)
        raw_client = _obj(data.get("params")).get("clientInfo")
        return cls(
            id=_get(data, "id", int, 0),
            method=_get(data, "method", str, ""),
            jsonrpc=_get(data, "jsonrpc", str, ""),
            client_info=None if raw_client is None else ClientInfo.from_dict(raw_client),
        )


@dataclass
class DidOpenTextDocumentNotification:
    """The ``textDocument/didOpen`` notification."""

    method: str = ""
    jsonrpc: str = ""
    text_document: TextDocumentItem = field(default_factory=TextDocumentItem)

    @classmethod
    def from_dict(cls, data: Any) -> DidOpenTextDocumentNotification:
        data = _obj(data)
        params = _obj(data.get("params"))
        return cls(
            method=_get(data, "method", str, ""),
            jsonrpc=_get(data, "jsonrpc", str, ""),
            text_document=TextDocumentItem.from_dict(params.get("textDocument")),
        )


@dataclass
class DidChangeTextDocumentNotification:
    """The ``textDocument/didChange`` notification with full-text changes."""

    method: str = ""
    jsonrpc: str = ""
    text_document: TextDocumentItem = field(default_factory=TextDocumentItem)
    content_changes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> DidChangeTextDocumentNotification:
        data = _obj(data)
        params = _obj(data.get("params"))
        changes = _get(params, "contentChanges", list, [])
        return cls(
            method=_get(data, "method", str, ""),
            jsonrpc=_get(data, "jsonrpc", str, ""),
            text_document=TextDocumentItem.from_dict(params.get("textDocument")),
            content_changes=[_get(_obj(c), "text", str, "") for c in changes],
        )


@dataclass
class HoverRequest:
    """The ``textDocument/hover`` request."""

    id: int = 0
    method: str = ""
    jsonrpc: str = ""
    text_document_uri: str = ""
    position: Position = field(default_factory=Position)

    @classmethod
    def from_dict(cls, data: Any) -> HoverRequest:
        data = _obj(data)
        params = _obj(data.get("params"))
        return cls(
            id=_get(data, "id", int, 0),
            method=_get(data, "method", str, ""),
            jsonrpc=_get(data, "jsonrpc", str, ""),
            text_document_uri=_get(_obj(params.get("textDocument")), "uri", str, ""),
            position=Position.from_dict(params.get("position")),
        )


def _response(jsonrpc: str, request_id: int | None, result: dict) -> dict:
    response: dict[str, Any] = {"jsonrpc": jsonrpc}
    if request_id is not None:
        response["id"] = request_id
    response["result"] = result
    return response


def new_initialize_response(request_id: int | None) -> dict:
    """Build the reply to an ``initialize`` request."""
    return _response("", request_id, {
        "capabilities": {"textDocumentSync": 1, "hoverProvider": True},
        "serverInfo": {"name": "scl_lsp", "version": "0.0.0-alpha1"},
    })


def new_hover_response(request_id: int | None, contents: str) -> dict:
    """Build the reply to a ``textDocument/hover`` request."""
    return _response("2.0", request_id, {"contents": contents})