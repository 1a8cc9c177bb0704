"""HTTP errors in an OAuth2 compatible form and their rendering."""

from __future__ import annotations

import enum
import json
import logging
from http import HTTPStatus
from typing import Any, Iterator

from .messages import ResponseWriter

log = logging.getLogger(__name__)


class ErrorType(str, enum.Enum):
    """Terse error codes, based on OAuth2 with some additions."""

    ACCESS_DENIED = "access_denied"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    INVALID_REQUEST = "invalid_request"
    INVALID_SCOPE = "invalid_scope"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"


class RequestError(Exception):
    """Base class for all request handling errors."""


class HTTPError(RequestError):
    """A request error carrying the status and body to send to the client."""

    def __init__(self, status: int, code: ErrorType, description: str) -> None:
        super().__init__(description)
        self.status = status
        self.code = ErrorType(code)
        self.description = description
        self.error: BaseException | None = None
        self.values: tuple[Any, ...] = ()

    def __str__(self) -> str:
        return self.description

    def with_error(self, err: BaseException) -> HTTPError:
        """Attach the underlying error; it is logged but never sent to clients."""
        self.error = err
        self.__cause__ = err
        return self

    def with_values(self, *args: Any) -> HTTPError:
        """Attach key/value pairs for logging."""
        self.values = args
        return self

    def to_dict(self) -> dict[str, str]:
        """Return the wire form of the error."""
        return {"error": self.code.value, "error_description": self.description}

    def write(self, writer: ResponseWriter) -> None:
        """Log the error detail and write the error response to ``writer``."""
        details: list[Any] = []
        if self.description:
            details += ["detail", self.description]
        if self.error is not None:
            details += ["error", self.error]
        details += list(self.values)

        log.info("error detail %s", details)

        writer.headers.add_header("Cache-Control", "no-cache")
        writer.headers.add_header("Content-Type", "application/json")
        writer.write_header(self.status)

        body = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        for char, escape in (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026")):
            body = body.replace(char, escape)

        try:
            writer.write(body.encode("utf-8"))
        except OSError:
            log.exception("failed to write error response")


def _chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__ or err.__context__


def _to_http_error(err: BaseException) -> HTTPError | None:
    return next((e for e in _chain(err) if isinstance(e, HTTPError)), None)


def http_forbidden(description: str) -> HTTPError:
    """The user is not permitted to do this by RBAC."""
    return HTTPError(HTTPStatus.FORBIDDEN, ErrorType.FORBIDDEN, description)


def http_not_found() -> HTTPError:
    """The requested resource does not exist."""
    return HTTPError(HTTPStatus.NOT_FOUND, ErrorType.NOT_FOUND, "resource not found")


def is_http_not_found(err: BaseException) -> bool:
    """Return whether ``err``, or an error it wraps, is an HTTP 404 error."""
    http_error = _to_http_error(err)
    return http_error is not None and http_error.status == HTTPStatus.NOT_FOUND


def http_method_not_allowed() -> HTTPError:
    """The method is not supported."""
    return HTTPError(
        HTTPStatus.METHOD_NOT_ALLOWED,
        ErrorType.METHOD_NOT_ALLOWED,
        "the requested method was not allowed",
    )


def http_conflict() -> HTTPError:
    """The request conflicts with an existing resource."""
    return HTTPError(
        HTTPStatus.CONFLICT, ErrorType.CONFLICT, "the requested resource already exists"
    )


def oauth2_invalid_request(description: str) -> HTTPError:
    """A client error."""
    return HTTPError(HTTPStatus.BAD_REQUEST, ErrorType.INVALID_REQUEST, description)


def oauth2_unauthorized_client(description: str) -> HTTPError:
    """The client may not perform the requested operation."""
    return HTTPError(HTTPStatus.BAD_REQUEST, ErrorType.UNAUTHORIZED_CLIENT, description)


def oauth2_unsupported_grant_type(description: str) -> HTTPError:
    """The requested grant is not supported."""
    return HTTPError(HTTPStatus.BAD_REQUEST, ErrorType.UNSUPPORTED_GRANT_TYPE, description)


def oauth2_invalid_grant(description: str) -> HTTPError:
    """The requested grant is unknown."""
    return HTTPError(HTTPStatus.BAD_REQUEST, ErrorType.INVALID_GRANT, description)


def oauth2_invalid_client(description: str) -> HTTPError:
    """The client ID is not known."""
    return HTTPError(HTTPStatus.BAD_REQUEST, ErrorType.INVALID_CLIENT, description)


def oauth2_access_denied(description: str) -> HTTPError:
    """Authentication failed or must be repeated."""
    return HTTPError(HTTPStatus.UNAUTHORIZED, ErrorType.ACCESS_DENIED, description)


def oauth2_server_error(description: str) -> HTTPError:
    """The server is at fault."""
    return HTTPError(HTTPStatus.INTERNAL_SERVER_ERROR, ErrorType.SERVER_ERROR, description)


def oauth2_invalid_scope(description: str) -> HTTPError:
    """The client lacks the scope needed to access the resource."""
    return HTTPError(HTTPStatus.UNAUTHORIZED, ErrorType.INVALID_SCOPE, description)


def handle_error(writer: ResponseWriter, err: BaseException) -> None:
    """Write the response for any error raised by a request handler.

    HTTP errors are written as they are; anything else becomes a
    generic server error.
    """
    http_error = _to_http_error(err)
    if http_error is not None:
        http_error.write(writer)
        return

    log.error("unhandled error: %s", err, exc_info=err)

    oauth2_server_error("unhandled error").write(writer)