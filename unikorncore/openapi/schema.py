"""Access to an OpenAPI specification and lookup of routes within it."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping
from urllib.parse import urlsplit

from ..server.errors import oauth2_server_error

_METHODS = ("connect", "delete", "get", "head", "options", "patch", "post", "put", "trace")

_PARAMETER = re.compile(r"\{([^{}]+)\}")

SchemaGetter = Callable[[], Mapping[str, Any]]


class _PathNotFound(LookupError):
    """No path in the specification matches the request."""


class _MethodNotAllowed(LookupError):
    """A path matches but does not define the requested method."""


@dataclass
class Route:
    """A path from the specification matched by a request."""

    path: str
    method: str
    path_item: Mapping[str, Any]
    params: dict[str, str] = field(default_factory=dict)

    @property
    def operations(self) -> dict[str, Any]:
        """The operations of the path item, keyed by upper case method name."""
        return {
            key.upper(): value
            for key, value in self.path_item.items()
            if key.lower() in _METHODS
        }

    @property
    def operation(self) -> Any:
        """The operation for the matched method."""
        return self.operations.get(self.method)


@dataclass
class _CompiledPath:
    base: str
    template: str
    pattern: re.Pattern[str]
    names: list[str]
    item: Mapping[str, Any]


def _compile(base: str, template: str, item: Mapping[str, Any]) -> _CompiledPath:
    parts = _PARAMETER.split(template)
    literals = parts[0::2]
    names = parts[1::2]

    regex = "".join(
        re.escape(literal) + ("([^/]+)" if index < len(names) else "")
        for index, literal in enumerate(literals)
    )
    return _CompiledPath(base, template, re.compile(regex), names, item)


def _specificity(path: _CompiledPath) -> tuple[int, int]:
    literal_length = len(_PARAMETER.sub("", path.template))
    return (len(path.names), -literal_length)


def _server_bases(spec: Mapping[str, Any]) -> list[str]:
    bases: list[str] = []
    for server in spec.get("servers") or []:
        url = server.get("url", "") if isinstance(server, Mapping) else ""
        base = urlsplit(url).path.rstrip("/")
        if "{" in base:
            continue
        if base not in bases:
            bases.append(base)
    return bases or [""]


class Schema:
    """Holds a specification and finds the route a request refers to.

    Loading is slow for large documents: build one and reuse it.
    """

    def __init__(self, get: SchemaGetter) -> None:
        spec = get()
        if not isinstance(spec, Mapping):
            raise ValueError("specification must be a mapping")

        paths = spec.get("paths") or {}
        if not isinstance(paths, Mapping):
            raise ValueError("specification paths must be a mapping")

        self.spec = spec

        compiled = [
            _compile(base, template, item)
            for base in _server_bases(spec)
            for template, item in paths.items()
            if isinstance(item, Mapping)
        ]
        self._paths = sorted(compiled, key=_specificity)

    def find_route(self, method: str, path: str) -> Route:
        """Return the route for ``method`` and ``path``.

        Raises an HTTP server error if no operation matches.
        """
        method = method.upper()
        path = path.split("?", 1)[0]
        cause: LookupError = _PathNotFound(f"no path matches {path}")

        for candidate in self._paths:
            if not path.startswith(candidate.base):
                continue

            match = candidate.pattern.fullmatch(path[len(candidate.base):])
            if match is None:
                continue

            route = Route(
                path=candidate.template,
                method=method,
                path_item=candidate.item,
                params=dict(zip(candidate.names, match.groups())),
            )
            if method in route.operations:
                return route

            cause = _MethodNotAllowed(f"method {method} not allowed for {path}")

        raise oauth2_server_error("unable to find route").with_error(cause)