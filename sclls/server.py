"""The language server: reads framed messages and answers them."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, BinaryIO

from .lsp import (
    DidChangeTextDocumentNotification,
    DidOpenTextDocumentNotification,
    HoverRequest,
    InitializeRequest,
    new_hover_response,
    new_initialize_response,
)
from .needs import ServerConfig
from .rpc import DecodeError, decode_msg, encode_msg, read_messages
from .state import State


def write_response(writer: BinaryIO, msg: Any) -> None:
    """Frame ``msg`` and write it to ``writer``."""
    writer.write(encode_msg(msg).encode("utf-8"))
    if hasattr(writer, "flush"):
        writer.flush()


_REQUESTS = {
    "initialize": InitializeRequest,
    "textDocument/didOpen": DidOpenTextDocumentNotification,
    "textDocument/didChange": DidChangeTextDocumentNotification,
    "textDocument/hover": HoverRequest,
}


def handle_message(state: State, writer: BinaryIO, method: str, contents: bytes) -> None:
    """Act on one decoded message, writing a reply where the method needs one."""
    logger = state.logger
    logger.info("Received msg with method: %s", method)
    kind = _REQUESTS.get(method)
    if kind is None:
        return
    try:
        request = kind.from_dict(json.loads(contents))
    except (ValueError, TypeError) as exc:
        logger.error("could not parse %s: %s", method, exc)
        return

    if isinstance(request, InitializeRequest):
        if request.client_info is not None:
            logger.info("Connected to: %s %s", request.client_info.name, request.client_info.version)
        write_response(writer, new_initialize_response(request.id))
    elif isinstance(request, DidOpenTextDocumentNotification):
        logger.info("Opened: %s", request.text_document.uri)
        state.open_document(request.text_document.uri, request.text_document.text)
    elif isinstance(request, DidChangeTextDocumentNotification):
        logger.info("Changed: %s", request.text_document.uri)
        for text in request.content_changes:
            state.update_document(request.text_document.uri, text)
    else:
        logger.info("Hover was requested")
        write_response(writer, new_hover_response(request.id, ""))


def serve(state: State, reader: BinaryIO, writer: BinaryIO) -> None:
    """Handle messages from ``reader`` until it ends or its framing breaks."""
    try:
        for message in read_messages(reader):
            try:
                method, contents = decode_msg(message)
            except DecodeError as exc:
                state.logger.error("got an error: %s", exc)
                continue
            handle_message(state, writer, method, contents)
    except DecodeError as exc:
        state.logger.error("broken message framing: %s", exc)


def get_logger(filename: str) -> logging.Logger:
    """Return the server logger, writing to ``filename`` (truncated)."""
    logger = logging.getLogger("sclls")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handler = logging.FileHandler(filename, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(
        "[sclls]%(asctime)s %(filename)s:%(lineno)d: %(message)s", datefmt="%Y/%m/%d %H:%M:%S"
    ))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def _parse_bool(text: str) -> bool:
    if text in ("1", "t", "T", "TRUE", "true", "True"):
        return True
    if text in ("0", "f", "F", "FALSE", "false", "False"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {text!r}")


def main(argv: list[str] | None = None) -> int:
    """Run the language server over standard input and output."""
    parser = argparse.ArgumentParser(prog="sclls", description="Language server for sphinx-needs.")
    parser.add_argument("-needsPath", "--needsPath", dest="needs_path", default="needs.json")
    parser.add_argument("-enable", "--enable", dest="enabled", type=_parse_bool,
                        nargs="?", const=True, default=True)
    parser.add_argument("-docsPath", "--docsPath", dest="docs_path", default="docs")
    parser.add_argument("-logFile", "--logFile", dest="log_file", default="sclls.log")
    args = parser.parse_args(argv)

    logger = get_logger(args.log_file)
    logger.info("sclls started")
    config = ServerConfig(
        needs_json_path=args.needs_path,
        document_root_path=args.docs_path,
        enabled=args.enabled,
    )
    state = State(config, logger)
    if not config.enabled:
        logger.info("Server was disabled. Exiting")
        return 0
    serve(state, sys.stdin.buffer, sys.stdout.buffer)
    return 0


if __name__ == "__main__":
    sys.exit(main())