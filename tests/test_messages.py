from http import HTTPStatus

import pytest

from unikorncore.server.messages import (
    LoggingResponseWriter,
    Request,
    ResponseRecorder,
    ResponseWriter,
)


def test_request_headers_case_insensitive():
    request = Request(method="OPTIONS", path="/api")
    request.headers["Origin"] = "http://localhost"
    assert request.headers.get("origin") == "http://localhost"
    assert request.method == "OPTIONS"


def test_response_writer_is_abstract():
    with pytest.raises(TypeError):
        ResponseWriter()


def test_recorder_defaults_to_ok_on_write():
    recorder = ResponseRecorder()
    assert recorder.write(b"abc") == 3
    assert recorder.status_code == HTTPStatus.OK
    assert bytes(recorder.body) == b"abc"


def test_recorder_keeps_first_status():
    recorder = ResponseRecorder()
    recorder.write_header(HTTPStatus.NOT_FOUND)
    recorder.write_header(HTTPStatus.OK)
    assert recorder.status_code == HTTPStatus.NOT_FOUND


def test_logging_writer_defaults():
    writer = LoggingResponseWriter(ResponseRecorder())
    assert writer.status_code == HTTPStatus.OK
    assert writer.body is None


def test_logging_writer_records_and_forwards():
    recorder = ResponseRecorder()
    writer = LoggingResponseWriter(recorder)
    writer.write_header(HTTPStatus.CONFLICT)
    assert writer.write(b"hello ") == 6
    writer.write(b"world")
    assert writer.status_code == HTTPStatus.CONFLICT
    assert writer.body == b"hello world"
    assert recorder.status_code == HTTPStatus.CONFLICT
    assert bytes(recorder.body) == b"hello world"


def test_logging_writer_shares_headers():
    recorder = ResponseRecorder()
    writer = LoggingResponseWriter(recorder)
    writer.headers.add_header("Content-Type", "application/json")
    assert recorder.headers.get("content-type") == "application/json"