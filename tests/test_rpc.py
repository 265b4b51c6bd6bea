import io
import json

import pytest

from sclls.rpc import DecodeError, decode_msg, encode_msg, read_messages, split


def test_encode_msg():
    expected = 'Content-Length: 16\r\n\r\n{"Testing":true}'
    assert encode_msg({"Testing": True}) == expected


def test_decode_msg():
    inc_msg = b'Content-Length: 15\r\n\r\n{"Method":"hi"}'
    method, content = decode_msg(inc_msg)
    assert len(content) == 15
    assert method == "hi"


def test_decode_lowercase_method():
    method, content = decode_msg(encode_msg({"method": "initialize", "id": 1}).encode())
    assert method == "initialize"
    assert json.loads(content) == {"method": "initialize", "id": 1}


def test_decode_without_method_gives_empty_name():
    method, _ = decode_msg(encode_msg({"id": 1}).encode())
    assert method == ""


def test_round_trip_counts_bytes_not_characters():
    payload = {"text": "héllo wörld"}
    encoded = encode_msg(payload).encode("utf-8")
    method, content = decode_msg(encoded)
    assert method == ""
    assert json.loads(content) == payload


def test_decode_missing_header():
    with pytest.raises(DecodeError):
        decode_msg(b'{"method":"hi"}')


def test_decode_bad_length():
    with pytest.raises(DecodeError):
        decode_msg(b'Content-Length: abc\r\n\r\n{"method":"hi"}')


def test_decode_length_too_large():
    with pytest.raises(DecodeError):
        decode_msg(b'Content-Length: 99\r\n\r\n{"method":"hi"}')


def test_decode_invalid_json():
    with pytest.raises(DecodeError):
        decode_msg(b"Content-Length: 3\r\n\r\n{x}")


def test_decode_non_object():
    with pytest.raises(DecodeError):
        decode_msg(b"Content-Length: 3\r\n\r\n[1]")


def test_decode_non_string_method():
    with pytest.raises(DecodeError):
        decode_msg(encode_msg({"method": 5}).encode())


def test_split_needs_header():
    assert split(b"Content-Length: 15\r\n") is None


def test_split_needs_full_content():
    assert split(b'Content-Length: 15\r\n\r\n{"Method"') is None


def test_split_returns_first_message_only():
    first = encode_msg({"method": "a"}).encode()
    second = encode_msg({"method": "b"}).encode()
    assert split(first + second) == first


def test_split_bad_header():
    with pytest.raises(DecodeError):
        split(b"Content-Length: x\r\n\r\n{}")


def test_read_messages_yields_each_message():
    first = encode_msg({"method": "initialize", "id": 1}).encode()
    second = encode_msg({"method": "textDocument/didOpen"}).encode()
    stream = io.BytesIO(first + second)
    assert list(read_messages(stream)) == [first, second]


def test_read_messages_drops_incomplete_tail():
    first = encode_msg({"method": "a"}).encode()
    stream = io.BytesIO(first + b"Content-Length: 40\r\n\r\n{")
    assert list(read_messages(stream)) == [first]


def test_read_messages_large_message():
    msg = encode_msg({"method": "x", "text": "a" * 10000}).encode()
    messages = list(read_messages(io.BytesIO(msg)))
    assert messages == [msg]
    assert decode_msg(messages[0])[0] == "x"