"""What the server knows about the workspace: needs and opened documents."""

from __future__ import annotations

import logging
import os

from .documents import DocumentInfo, DocumentNeeds, find_all_needs_positions, new_document_needs
from .needs import Need, ServerConfig, get_needs_list, parse_needs_json


class State:
    """Opened documents keyed by URI and the needs they may refer to."""

    def __init__(self, config: ServerConfig, logger: logging.Logger | None = None) -> None:
        self.config = config
        self.logger = logger or logging.getLogger("sclls")
        self.documents: dict[str, DocumentInfo] = {}
        self.needs_list: dict[str, Need] = self._load_needs(config.needs_json_path)

    def _load_needs(self, path: str | os.PathLike[str]) -> dict[str, Need]:
        try:
            return get_needs_list(parse_needs_json(path))
        except (OSError, ValueError, TypeError) as exc:
            self.logger.error("could not load needs file. Path: %s Error: %s", path, exc)
            return {}

    def open_document(self, uri: str, content: str) -> None:
        """Record a newly opened document; a document already open is left alone."""
        if uri in self.documents:
            return
        document_needs = new_document_needs(uri)
        document_needs.needs = find_all_needs_positions(content, self.needs_list)
        self.documents[uri] = DocumentInfo(content=content, document_needs=document_needs)

    def update_document(self, uri: str, content: str) -> None:
        """Replace a document's text and search it for needs again."""
        info = self.documents.setdefault(uri, DocumentInfo(document_needs=DocumentNeeds()))
        info.content = content
        info.document_needs.needs = find_all_needs_positions(content, self.needs_list)

    def update_needs_json(self, path: str | os.PathLike[str]) -> None:
        """Reload the needs from another needs file."""
        self.needs_list = self._load_needs(path)


def save_internal_state() -> None:
    """Persist the server state between runs.

    The server keeps nothing that outlives a session, so there is nothing to
    write and saving always succeeds.
    """