import json

import pytest

from sclls.needs import ServerConfig
from sclls.state import State


def _write_needs(path, needs):
    path.write_text(
        json.dumps(
            {
                "current_version": "0.1",
                "project": "Docs",
                "versions": {
                    "0.1": {
                        "creator": {"program": "sphinx_needs", "version": "5.1.0"},
                        "needs": needs,
                    }
                },
            }
        )
    )
    return path


@pytest.fixture
def state(tmp_path):
    path = _write_needs(
        tmp_path / "needs.json",
        {
            "REQ_1": {"id": "REQ_1", "title": "First"},
            "REQ_2": {"id": "REQ_2", "title": "Second"},
        },
    )
    return State(ServerConfig(needs_json_path=str(path)))


def _found_ids(state, uri):
    return sorted(info.need.id for info in state.documents[uri].document_needs.needs)


def test_loads_needs(state):
    assert sorted(state.needs_list) == ["REQ_1", "REQ_2"]
    assert state.needs_list["REQ_1"].title == "First"


def test_missing_needs_file_gives_empty_list(tmp_path):
    state = State(ServerConfig(needs_json_path=str(tmp_path / "absent.json")))
    assert state.needs_list == {}
    assert state.documents == {}


def test_open_document(state):
    uri = "file:///docs/index.rst"
    state.open_document(uri, "mentions REQ_1 only")
    info = state.documents[uri]
    assert info.content == "mentions REQ_1 only"
    assert info.document_needs.doc_name == "index.rst"
    assert info.document_needs.uri == uri
    assert _found_ids(state, uri) == ["REQ_1"]


def test_reopen_keeps_first_content(state):
    uri = "file:///docs/index.rst"
    state.open_document(uri, "REQ_1")
    state.open_document(uri, "REQ_2")
    assert state.documents[uri].content == "REQ_1"
    assert _found_ids(state, uri) == ["REQ_1"]


def test_update_document_recomputes(state):
    uri = "file:///docs/index.rst"
    state.open_document(uri, "REQ_1")
    state.update_document(uri, "REQ_2 and REQ_1")
    assert state.documents[uri].content == "REQ_2 and REQ_1"
    assert _found_ids(state, uri) == ["REQ_1", "REQ_2"]
    assert state.documents[uri].document_needs.doc_name == "index.rst"


def test_update_unknown_document_creates_entry(state):
    uri = "file:///docs/new.rst"
    state.update_document(uri, "REQ_2")
    assert state.documents[uri].document_needs.doc_name == ""
    assert _found_ids(state, uri) == ["REQ_2"]


def test_update_needs_json(state, tmp_path):
    other = _write_needs(tmp_path / "other.json", {"REQ_9": {"id": "REQ_9"}})
    state.update_needs_json(str(other))
    assert list(state.needs_list) == ["REQ_9"]


def test_update_needs_json_with_broken_file(state, tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    state.update_needs_json(str(broken))
    assert state.needs_list == {}