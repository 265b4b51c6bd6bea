"""Server configuration and the contents of a sphinx-needs ``needs.json``."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from typing import Any

_ASSUMED_VERSION = "0.1"


@dataclass
class ServerConfig:
    """Settings the server is started with."""

    needs_json_path: str = "needs.json"
    document_root_path: str = "docs"
    enabled: bool = True


def _require_object(data: Any, what: str) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _coerce(value: Any, kind: type, key: str) -> Any:
    if kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif kind is list:
        ok = isinstance(value, list) and all(
            item is None or isinstance(item, str) for item in value
        )
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise TypeError(
            f"field {key!r} must be {kind.__name__}, got {type(value).__name__}"
        )
    if kind is list:
        return ["" if item is None else item for item in value]
    return value


def _text(key: str) -> Any:
    return field(default="", metadata={"json": key, "kind": str})


def _number(key: str) -> Any:
    return field(default=0, metadata={"json": key, "kind": int})


def _flag(key: str) -> Any:
    return field(default=False, metadata={"json": key, "kind": bool})


def _strings(key: str) -> Any:
    return field(default_factory=list, metadata={"json": key, "kind": list})


@dataclass
class Creator:
    """The program that produced the needs file."""

    program: str = _text("program")
    version: str = _text("version")

    @classmethod
    def from_dict(cls, data: Any) -> Creator:
        data = _require_object(data, "creator")
        return cls(**_read_fields(cls, data))


@dataclass
class Need:
    """One need (requirement, specification, ...) as exported by sphinx-needs."""

    content: str = _text("content")
    docname: str = _text("docname")
    id: str = _text("id")
    lineno: int = _number("lineno")
    req_type: str = _text("req_type")
    safety: str = _text("safety")
    section_name: str = _text("section_name")
    security: str = _text("security")
    status: str = _text("status")
    title: str = _text("title")
    type: str = _text("type")
    type_name: str = _text("type_name")
    doc_type: str = _text("doc_type")
    is_external: bool = _flag("is_external")
    tags: list[str] = _strings("tags")
    approvers: list[str] = _strings("approvers")
    hash: str = _text("hash")
    implemented: str = _text("implemented")
    parent_covered: str = _text("parent_covered")
    parent_has_problem: str = _text("parent_has_problem")
    rationale: str = _text("rationale")
    req_covered: bool = _flag("req_covered")
    reviewers: list[str] = _strings("reviewers")
    source_code_link: list[str] = _strings("source_code_link")
    test_link: list[str] = _strings("testlink")
    test_covered: bool = _flag("test_covered")
    realizes: list[str] = _strings("realizes")
    links: list[str] = _strings("links")
    satisfies: list[str] = _strings("satisfies")
    contains: list[str] = _strings("contains")
    has: list[str] = _strings("has")
    input: list[str] = _strings("input")
    output: list[str] = _strings("output")
    responsible: list[str] = _strings("responsible")
    approved_by: list[str] = _strings("approved_by")
    supported_by: list[str] = _strings("supported_by")
    complies: list[str] = _strings("complies")
    fulfils: list[str] = _strings("fulfils")
    implements: list[str] = _strings("implements")
    uses: list[str] = _strings("uses")
    includes: list[str] = _strings("includes")
    included_by: list[str] = _strings("included_by")

    @classmethod
    def from_dict(cls, data: Any) -> Need:
        data = _require_object(data, "need")
        return cls(**_read_fields(cls, data))


def _read_fields(cls: type, data: dict) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for spec in fields(cls):
        key = spec.metadata["json"]
        value = data.get(key)
        if value is not None:
            values[spec.name] = _coerce(value, spec.metadata["kind"], key)
    return values


@dataclass
class Version:
    """One version entry of a needs file."""

    creator: Creator = field(default_factory=Creator)
    needs: dict[str, Need] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Version:
        data = _require_object(data, "version")
        raw_needs = _require_object(data.get("needs"), "needs")
        return cls(
            creator=Creator.from_dict(data.get("creator")),
            needs={need_id: Need.from_dict(raw) for need_id, raw in raw_needs.items()},
        )


@dataclass
class NeedsJsonInfo:
    """The whole needs file."""

    current_version: str = ""
    project: str = ""
    versions: dict[str, Version] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> NeedsJsonInfo:
        data = _require_object(data, "needs.json")
        raw_versions = _require_object(data.get("versions"), "versions")
        current = data.get("currentVersion")
        project = data.get("project")
        return cls(
            current_version="" if current is None else _coerce(current, str, "currentVersion"),
            project="" if project is None else _coerce(project, str, "project"),
            versions={
                name: Version.from_dict(raw) for name, raw in raw_versions.items()
            },
        )


def parse_needs_json(needs_path: str | os.PathLike[str]) -> NeedsJsonInfo:
    """Read and parse a needs file; raises OSError or ValueError on failure."""
    with open(needs_path, "rb") as handle:
        data = json.load(handle)
    return NeedsJsonInfo.from_dict(data)


def get_needs_list(needs_json: NeedsJsonInfo) -> dict[str, Need]:
    """Return the needs of the version the server works with ("0.1")."""
    version = needs_json.versions.get(_ASSUMED_VERSION)
    return version.needs if version is not None else {}