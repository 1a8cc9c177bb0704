import io
import json
from wsgiref.headers import Headers

import pytest

from unikorncore.openapi.types import Tag
from unikorncore.server.errors import HTTPError
from unikorncore.server.messages import ResponseRecorder, ResponseWriter
from unikorncore.server.responses import (
    read_json_body,
    write_json_response,
    write_octet_stream_response,
)


class _BrokenWriter(ResponseWriter):
    def __init__(self):
        self.headers = Headers([])
        self.status = None

    def write(self, body):
        raise OSError("connection reset")

    def write_header(self, status_code):
        self.status = status_code


class _BrokenStream:
    def read(self):
        raise OSError("connection reset")


def test_write_json_response_sets_status_header_and_body():
    recorder = ResponseRecorder()
    write_json_response(recorder, 201, {"a": 1, "b": [1, 2]})
    assert recorder.status_code == 201
    assert recorder.headers["Content-Type"] == "application/json"
    assert json.loads(bytes(recorder.body)) == {"a": 1, "b": [1, 2]}


def test_write_json_response_escapes_html_characters():
    recorder = ResponseRecorder()
    write_json_response(recorder, 200, {"x": "<&>"})
    assert b"<" not in recorder.body
    assert b"\\u003c" in recorder.body
    assert json.loads(bytes(recorder.body)) == {"x": "<&>"}


def test_write_json_response_uses_to_dict():
    recorder = ResponseRecorder()
    tag = Tag(name="colour", value="blue")
    write_json_response(recorder, 200, [tag])
    assert json.loads(bytes(recorder.body)) == [tag.to_dict()]


def test_write_json_response_unencodable_writes_nothing():
    recorder = ResponseRecorder()
    write_json_response(recorder, 200, {"x": object()})
    assert recorder.status_code is None
    assert bytes(recorder.body) == b""
    assert recorder.headers.get("Content-Type") is None


def test_write_json_response_write_failure_is_swallowed():
    writer = _BrokenWriter()
    write_json_response(writer, 202, {"a": 1})
    assert writer.status == 202


def test_read_json_body_decodes():
    assert read_json_body(io.BytesIO(b'{"a": [1, "two"]}')) == {"a": [1, "two"]}


def test_read_json_body_invalid_json_raises_server_error():
    with pytest.raises(HTTPError) as info:
        read_json_body(io.BytesIO(b"{not json"))
    assert info.value.status == 500
    assert info.value.description == "unable to unmarshal request body"
    assert isinstance(info.value.error, json.JSONDecodeError)


def test_read_json_body_read_failure_raises_server_error():
    with pytest.raises(HTTPError) as info:
        read_json_body(_BrokenStream())
    assert info.value.status == 500
    assert info.value.description == "unable to read request body"
    assert isinstance(info.value.error, OSError)


def test_write_octet_stream_response():
    recorder = ResponseRecorder()
    payload = bytes(range(16))
    write_octet_stream_response(recorder, 200, payload)
    assert recorder.status_code == 200
    assert recorder.headers["Content-Type"] == "application/octet-stream"
    assert bytes(recorder.body) == payload


def test_write_octet_stream_response_write_failure_is_swallowed():
    writer = _BrokenWriter()
    write_octet_stream_response(writer, 200, b"data")
    assert writer.status == 200
    assert writer.headers["Content-Type"] == "application/octet-stream"