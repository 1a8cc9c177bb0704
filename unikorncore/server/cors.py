"""Cross-origin resource sharing middleware."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Callable, Sequence

from ..openapi.schema import Schema
from .errors import handle_error, oauth2_invalid_request
from .messages import Request, ResponseWriter

Handler = Callable[[ResponseWriter, Request], None]

_ALLOWED_HEADERS = (
    "Authorization",
    "Content-Type",
    "traceparent",
    "tracestate",
)


class _StringSliceAction(argparse.Action):
    """Comma separated values; repeated flags accumulate, replacing the default."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        seen = f"_{self.dest}_seen"
        current = list(getattr(namespace, self.dest)) if getattr(namespace, seen, False) else []
        current.extend(part.strip() for part in str(values).split(","))
        setattr(namespace, self.dest, current)
        setattr(namespace, seen, True)


@dataclass
class CorsOptions:
    """Allowed origins and preflight cache lifetime."""

    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    max_age: int = 86400

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register the CORS command line options, defaulting to these values."""
        parser.add_argument(
            "--cors-allow-origin",
            dest="cors_allow_origin",
            action=_StringSliceAction,
            default=list(self.allowed_origins),
            help="CORS allowed origins",
        )
        parser.add_argument(
            "--cors-max-age",
            dest="cors_max_age",
            type=int,
            default=self.max_age,
            help="CORS maximum age (may be overridden by the browser)",
        )

    @classmethod
    def from_arguments(cls, namespace: argparse.Namespace) -> CorsOptions:
        """Build options from parsed command line arguments."""
        return cls(
            allowed_origins=list(namespace.cors_allow_origin),
            max_age=namespace.cors_max_age,
        )


def _set_allow_origin(
    writer: ResponseWriter, request: Request, allowed_origins: Sequence[str]
) -> None:
    origin = request.headers.get("Origin")
    if origin and origin in allowed_origins:
        writer.headers.add_header("Access-Control-Allow-Origin", origin)
        return

    writer.headers.add_header("Access-Control-Allow-Origin", allowed_origins[0])


def cors_middleware(schema: Schema, options: CorsOptions) -> Callable[[Handler], Handler]:
    """Return middleware that adds CORS headers and answers preflight requests."""

    def middleware(next_handler: Handler) -> Handler:
        def handler(writer: ResponseWriter, request: Request) -> None:
            # Every response gets exactly one allow origin header.
            _set_allow_origin(writer, request, options.allowed_origins)

            if request.method.upper() != "OPTIONS":
                next_handler(writer, request)
                return

            method = request.headers.get("Access-Control-Request-Method")
            if not method:
                handle_error(
                    writer,
                    oauth2_invalid_request(
                        "OPTIONS missing Access-Control-Request-Method header"
                    ),
                )
                return

            try:
                route = schema.find_route(method, request.path)
            except Exception as exc:  # noqa: BLE001
                handle_error(writer, exc)
                return

            methods = [*route.operations, "OPTIONS"]

            writer.headers.add_header("Access-Control-Allow-Methods", ", ".join(methods))
            writer.headers.add_header(
                "Access-Control-Allow-Headers", ", ".join(_ALLOWED_HEADERS)
            )
            writer.headers.add_header("Access-Control-Max-Age", str(options.max_age))
            writer.write_header(HTTPStatus.NO_CONTENT)

        return handler

    return middleware