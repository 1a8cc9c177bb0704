"""Helpers that write JSON and binary responses and read JSON request bodies."""

from __future__ import annotations

import json
import logging
from typing import Any

from .errors import oauth2_server_error
from .messages import ResponseWriter

log = logging.getLogger(__name__)

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _marshal(value: Any) -> bytes:
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_default)
    for char, escape in _HTML_ESCAPES:
        text = text.replace(char, escape)
    return text.encode("utf-8")


def write_json_response(writer: ResponseWriter, code: int, response: Any) -> None:
    """Write ``response`` as a JSON body with status ``code``.

    Objects with a ``to_dict`` method are encoded through it.  If the
    response cannot be encoded, the error is logged and nothing is written.
    """
    try:
        body = _marshal(response)
    except (TypeError, ValueError):
        log.exception("unable to marshal body")
        return

    writer.headers.add_header("Content-Type", "application/json")
    writer.write_header(code)

    try:
        writer.write(body)
    except OSError:
        log.exception("failed to write response")


def read_json_body(stream: Any) -> Any:
    """Read a whole request body from ``stream`` and decode it as JSON.

    Raises an HTTP server error if the body cannot be read or decoded.
    """
    try:
        body = stream.read()
    except OSError as exc:
        raise oauth2_server_error("unable to read request body").with_error(exc) from exc

    try:
        return json.loads(body)
    except ValueError as exc:
        raise oauth2_server_error("unable to unmarshal request body").with_error(exc) from exc


def write_octet_stream_response(writer: ResponseWriter, code: int, body: bytes) -> None:
    """Write ``body`` as a binary response with status ``code``."""
    writer.headers.add_header("Content-Type", "application/octet-stream")
    writer.write_header(code)

    try:
        writer.write(body)
    except OSError:
        log.exception("failed to write response")