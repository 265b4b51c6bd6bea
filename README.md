# sclls

`sclls` is a small language server for documentation projects that use
sphinx-needs. It reads the project's `needs.json` export, keeps track of
the documents an editor opens, and records where every known need ID
appears in them. It speaks the Language Server Protocol over standard
input and output, so any LSP-capable editor can start it.

## Installation

```
pip install .
```

## Running

Your editor starts the server. The command is:

```
sclls --needsPath path/to/needs.json --docsPath docs
```

Options (each may also be written with a single dash, e.g. `-needsPath`):

- `--needsPath`: path to the `needs.json` file (default `needs.json`).
  If it cannot be read or parsed, the error is logged and the server runs
  with no known needs.
- `--docsPath`: root folder of the documentation (default `docs`). It is
  stored in the server configuration.
- `--enable`: `true` or `false` (also `1`/`0`, `t`/`f`); with `false` the
  server exits straight away. Given without a value it means `true`
  (default `true`).
- `--logFile`: file the server logs to; it is truncated on start
  (default `sclls.log`).

Only the needs of version `0.1` in the `needs.json` file are used.

## What the server answers

- `initialize`: replies with its capabilities (full text synchronisation
  and hover) and the server name `scl_lsp`, version `0.0.0-alpha1`.
- `textDocument/didOpen`: records the document and the positions of all
  known need IDs in it. A document that is already open is left as it is.
- `textDocument/didChange`: replaces the document's text with each full
  text change and searches it for need IDs again.
- `textDocument/hover`: replies with empty contents.

Other methods are ignored. Messages that cannot be decoded are logged and
skipped; broken `Content-Length` framing ends the session.

## What it does not do

The server only records where need IDs occur. It does not yet show need
details on hover, offer go-to-definition, completion or diagnostics, and
it keeps nothing between sessions (`sclls.state.save_internal_state`
writes nothing).

## Using it as a library

- `sclls.rpc`: `encode_msg` serialises a message as compact JSON behind a
  `Content-Length` header; `decode_msg` returns the method and content of
  a framed message; `split` returns the first complete framed message in a
  buffer, or `None` if more data is needed; `read_messages` yields framed
  messages from a binary stream. Decoding problems raise `DecodeError`.
- `sclls.lsp`: dataclasses for the handled messages (`InitializeRequest`,
  `DidOpenTextDocumentNotification`, `DidChangeTextDocumentNotification`,
  `HoverRequest`, ...) built with `from_dict`, and
  `new_initialize_response` / `new_hover_response` to build replies.
- `sclls.needs`: `ServerConfig`, the `Need` dataclass and friends,
  `parse_needs_json` to load a `needs.json` file, and `get_needs_list`
  returning the needs of version `0.1`.
- `sclls.documents`: `find_need_positions` and `find_all_needs_positions`
  locate need IDs in a text as zero-based lines and byte columns;
  `line_and_column` converts a byte offset; `get_document_name_from_uri`
  returns the file name of a document URI.
- `sclls.state`: `State` holds the open documents and the known needs.
- `sclls.server`: `serve` runs the message loop over any pair of binary
  streams; `handle_message` handles one decoded message; `main` is the
  command above.

```python
from sclls.documents import find_need_positions

positions = find_need_positions("see\nfeat_req__a here", "feat_req__a")
# [NeedPositionInfo(line=1, start_col=0, end_col=11)]
```

## Development

```
pip install -e ".[test]"
pytest
```