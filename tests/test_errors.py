import json
from http import HTTPStatus

import pytest

from unikorncore.server import errors
from unikorncore.server.errors import (
    ErrorType,
    HTTPError,
    RequestError,
    handle_error,
    is_http_not_found,
)
from unikorncore.server.messages import ResponseRecorder


@pytest.mark.parametrize(
    "factory, status, code",
    [
        (errors.http_forbidden, HTTPStatus.FORBIDDEN, ErrorType.FORBIDDEN),
        (errors.oauth2_invalid_request, HTTPStatus.BAD_REQUEST, ErrorType.INVALID_REQUEST),
        (errors.oauth2_unauthorized_client, HTTPStatus.BAD_REQUEST, ErrorType.UNAUTHORIZED_CLIENT),
        (errors.oauth2_unsupported_grant_type, HTTPStatus.BAD_REQUEST, ErrorType.UNSUPPORTED_GRANT_TYPE),
        (errors.oauth2_invalid_grant, HTTPStatus.BAD_REQUEST, ErrorType.INVALID_GRANT),
        (errors.oauth2_invalid_client, HTTPStatus.BAD_REQUEST, ErrorType.INVALID_CLIENT),
        (errors.oauth2_access_denied, HTTPStatus.UNAUTHORIZED, ErrorType.ACCESS_DENIED),
        (errors.oauth2_server_error, HTTPStatus.INTERNAL_SERVER_ERROR, ErrorType.SERVER_ERROR),
        (errors.oauth2_invalid_scope, HTTPStatus.UNAUTHORIZED, ErrorType.INVALID_SCOPE),
    ],
)
def test_described_factories(factory, status, code):
    err = factory("described")
    assert err.status == status
    assert err.code is code
    assert str(err) == "described"
    assert isinstance(err, RequestError)


def test_fixed_factories():
    assert http_codes(errors.http_not_found()) == (HTTPStatus.NOT_FOUND, "resource not found")
    assert http_codes(errors.http_method_not_allowed()) == (
        HTTPStatus.METHOD_NOT_ALLOWED,
        "the requested method was not allowed",
    )
    assert http_codes(errors.http_conflict()) == (
        HTTPStatus.CONFLICT,
        "the requested resource already exists",
    )


def http_codes(err):
    return err.status, err.description


def test_error_type_values():
    assert ErrorType.NOT_FOUND.value == "not_found"
    assert ErrorType("server_error") is ErrorType.SERVER_ERROR


def test_with_error_and_values_chain():
    cause = ValueError("inner")
    err = errors.oauth2_server_error("outer").with_error(cause).with_values("k", "v")
    assert err.error is cause
    assert err.__cause__ is cause
    assert err.values == ("k", "v")


def test_is_http_not_found():
    assert is_http_not_found(errors.http_not_found())
    assert not is_http_not_found(errors.http_conflict())
    assert not is_http_not_found(ValueError("x"))


def test_is_http_not_found_through_chain():
    try:
        try:
            raise errors.http_not_found()
        except HTTPError as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as outer:
        assert is_http_not_found(outer)


def test_write_response():
    recorder = ResponseRecorder()
    errors.http_not_found().write(recorder)
    assert recorder.status_code == HTTPStatus.NOT_FOUND
    assert recorder.headers.get("Cache-Control") == "no-cache"
    assert recorder.headers.get("Content-Type") == "application/json"
    assert json.loads(bytes(recorder.body)) == {
        "error": "not_found",
        "error_description": "resource not found",
    }


def test_write_body_is_compact():
    recorder = ResponseRecorder()
    errors.http_conflict().write(recorder)
    assert b" " not in bytes(recorder.body).replace(b"the requested resource already exists", b"")


def test_to_dict_round_trip():
    err = errors.oauth2_access_denied("expired")
    assert err.to_dict() == {"error": "access_denied", "error_description": "expired"}


def test_handle_error_http():
    recorder = ResponseRecorder()
    handle_error(recorder, errors.http_forbidden("nope"))
    assert recorder.status_code == HTTPStatus.FORBIDDEN
    assert json.loads(bytes(recorder.body))["error_description"] == "nope"


def test_handle_error_generic():
    recorder = ResponseRecorder()
    handle_error(recorder, KeyError("missing"))
    assert recorder.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert json.loads(bytes(recorder.body)) == {
        "error": "server_error",
        "error_description": "unhandled error",
    }