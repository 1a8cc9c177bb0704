"""Minimal request and response-writer types used by the server helpers."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from http import HTTPStatus
from wsgiref.headers import Headers


@dataclass
class Request:
    """An incoming HTTP request."""

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=lambda: Headers([]))
    body: bytes = b""


class ResponseWriter(abc.ABC):
    """Something an HTTP response can be written to."""

    headers: Headers

    @abc.abstractmethod
    def write(self, body: bytes) -> int:
        """Write part of the response body, returning the number of bytes written."""

    @abc.abstractmethod
    def write_header(self, status_code: int) -> None:
        """Send the response status code."""


class ResponseRecorder(ResponseWriter):
    """A response writer that keeps everything written to it in memory."""

    def __init__(self) -> None:
        self.headers = Headers([])
        self.status_code: int | None = None
        self.body = bytearray()

    def write(self, body: bytes) -> int:
        if self.status_code is None:
            self.status_code = HTTPStatus.OK
        self.body.extend(body)
        return len(body)

    def write_header(self, status_code: int) -> None:
        if self.status_code is None:
            self.status_code = status_code


class LoggingResponseWriter(ResponseWriter):
    """Wraps another writer, remembering the status code and body written."""

    def __init__(self, next: ResponseWriter) -> None:  # noqa: A002
        self._next = next
        self._code = 0
        self._body: bytearray | None = None

    @property
    def headers(self) -> Headers:  # type: ignore[override]
        return self._next.headers

    def write(self, body: bytes) -> int:
        if self._body is None:
            self._body = bytearray()
        self._body.extend(body)
        return self._next.write(body)

    def write_header(self, status_code: int) -> None:
        self._code = status_code
        self._next.write_header(status_code)

    @property
    def status_code(self) -> int:
        """The status written, or 200 if none was written explicitly."""
        return self._code or HTTPStatus.OK

    @property
    def body(self) -> bytes | None:
        """The body written so far, or ``None`` if nothing was written."""
        return None if self._body is None else bytes(self._body)