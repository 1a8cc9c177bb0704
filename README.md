# unikorncore

Building blocks for HTTP services that manage cloud resources: OAuth2-style
error responses, JSON and binary response helpers, CORS middleware driven by
an OpenAPI specification, shared API models, and a few small utilities.
The package uses only the standard library.

## Installation

```
pip install unikorncore
```

To run the test suite:

```
pip install "unikorncore[test]"
pytest
```

## HTTP server helpers

### Requests and response writers — `unikorncore.server.messages`

- `Request` is a dataclass with `method` (default `"GET"`), `path`
  (default `"/"`), `headers` (a `wsgiref.headers.Headers`) and `body`.
- `ResponseWriter` is the abstract interface the helpers write to: a
  `headers` attribute, `write(body)` and `write_header(status_code)`.
- `ResponseRecorder` keeps everything in memory: `headers`, `status_code`
  (the first status written, or 200 once a body is written without one) and
  `body`.
- `LoggingResponseWriter(next)` wraps another writer and remembers what
  passed through it: `status_code` is 200 unless a status was written, and
  `body` is `None` until something is written.

### Errors — `unikorncore.server.errors`

`HTTPError(status, code, description)` is an exception (derived from
`RequestError`) carrying an HTTP status, an `ErrorType` code and a
description. `with_error(err)` attaches an underlying error, which is logged
but never sent to the client; `with_values(*args)` attaches key/value pairs for
logging. `to_dict()` gives the wire form and `write(writer)` sends it as a
JSON response with `Cache-Control: no-cache`.

Constructors:

| Function | Status | Code |
| --- | --- | --- |
| `http_forbidden(description)` | 403 | `forbidden` |
| `http_not_found()` | 404 | `not_found` |
| `http_method_not_allowed()` | 405 | `method_not_allowed` |
| `http_conflict()` | 409 | `conflict` |
| `oauth2_invalid_request(description)` | 400 | `invalid_request` |
| `oauth2_unauthorized_client(description)` | 400 | `unauthorized_client` |
| `oauth2_unsupported_grant_type(description)` | 400 | `unsupported_grant_type` |
| `oauth2_invalid_grant(description)` | 400 | `invalid_grant` |
| `oauth2_invalid_client(description)` | 400 | `invalid_client` |
| `oauth2_access_denied(description)` | 401 | `access_denied` |
| `oauth2_invalid_scope(description)` | 401 | `invalid_scope` |
| `oauth2_server_error(description)` | 500 | `server_error` |

`is_http_not_found(err)` tells whether an exception, or one it was raised
from, is a 404 `HTTPError`. `handle_error(writer, err)` writes an `HTTPError`
found in the exception chain as it is, and turns anything else into a
generic `server_error` response with the description `"unhandled error"`.

```python
from unikorncore.server.errors import handle_error, http_not_found, is_http_not_found
from unikorncore.server.messages import ResponseRecorder

err = http_not_found()
assert is_http_not_found(err)
print(err.to_dict())
# {'error': 'not_found', 'error_description': 'resource not found'}

recorder = ResponseRecorder()
handle_error(recorder, ValueError("boom"))
print(recorder.status_code, bytes(recorder.body))
# 500 b'{"error":"server_error","error_description":"unhandled error"}'
```

### Responses — `unikorncore.server.responses`

- `write_json_response(writer, code, response)` writes compact JSON with
  `Content-Type: application/json`. Objects with a `to_dict()` method are
  encoded through it. If the value cannot be encoded, the failure is logged and
  nothing is written.
- `write_octet_stream_response(writer, code, body)` writes raw bytes with
  `Content-Type: application/octet-stream`.
- `read_json_body(stream)` reads a whole body from a file-like object and
  decodes it; a read or decode failure raises an `oauth2_server_error`.

### CORS — `unikorncore.server.cors`

`cors_middleware(schema, options)` returns a decorator for handlers of the
form `handler(writer, request)`. Every response gets one
`Access-Control-Allow-Origin` header: the request's `Origin` if it is in the
allowed list, otherwise the first allowed origin. `OPTIONS` requests are
answered as preflights: the method named in `Access-Control-Request-Method`
is looked up for the request path in the schema, and the response lists the
path's methods plus `OPTIONS`, the allowed headers (`Authorization`,
`Content-Type`, `traceparent`, `tracestate`) and the max age, with status
204. A missing request-method header gives an `invalid_request` error; an
unknown route gives a `server_error`.

`CorsOptions` holds `allowed_origins` (default `["*"]`) and `max_age`
(default `86400`). `add_arguments(parser)` registers `--cors-allow-origin`
(comma separated, may be repeated) and `--cors-max-age` on an
`argparse` parser, and `CorsOptions.from_arguments(namespace)` builds options
from the parsed result.

```python
from wsgiref.headers import Headers

from unikorncore.openapi.schema import Schema
from unikorncore.server.cors import CorsOptions, cors_middleware
from unikorncore.server.messages import Request, ResponseRecorder
from unikorncore.server.responses import write_json_response

spec = {"paths": {"/api/v1/things/{id}": {"get": {}, "delete": {}}}}
schema = Schema(lambda: spec)


def app(writer, request):
    write_json_response(writer, 200, {"ok": True})


handler = cors_middleware(schema, CorsOptions(allowed_origins=["https://app.example.com"]))(app)

request = Request(
    method="OPTIONS",
    path="/api/v1/things/42",
    headers=Headers([
        ("Origin", "https://app.example.com"),
        ("Access-Control-Request-Method", "DELETE"),
    ]),
)
recorder = ResponseRecorder()
handler(recorder, request)
print(recorder.status_code, recorder.headers["Access-Control-Allow-Methods"])
# 204 GET, DELETE, OPTIONS
```

## OpenAPI

### Models — `unikorncore.openapi.types`

Dataclasses for the shared API models, each with `to_dict()` and
`from_dict(data)` using the JSON field names (`creationTime`,
`provisioningStatus`, `organizationId` and so on); unset optional fields are
left out of `to_dict()`, and times are RFC 3339 strings.

- `Error` (aliased as `BadRequestResponse`, `NotFoundResponse` and the other
  error responses), with an `ErrorCode`.
- `Tag`.
- `ResourceMetadata` (also `ResourceWriteMetadata`): `name`, `description`,
  `tags`.
- `StaticResourceMetadata` adds `id`, `creation_time`, `created_by`,
  `modified_by`, `modified_time`.
- `ResourceReadMetadata` adds `provisioning_status`
  (a `ResourceProvisioningStatus`) and `deletion_time`.
- `OrganizationScopedResourceReadMetadata` adds `organization_id`;
  `ProjectScopedResourceReadMetadata` adds `project_id`.

### Route lookup — `unikorncore.openapi.schema`

`Schema(get)` takes a callable returning the specification as a mapping. It
honours the path part of the specification's server URLs and prefers the most
specific path template. `find_route(method, path)` returns a `Route` with the
matched `path` template, `method`, `path_item`, extracted `params`, and the
`operations` and `operation` it defines; when nothing matches it raises an
`oauth2_server_error`. Build a `Schema` once and reuse it.

## Provisioner helpers

- `unikorncore.provisioners.deletion`: `background_deletion(enabled=True)` is
  a context manager that sets a background-deletion flag for the code run
  inside it, restoring the previous value afterwards;
  `background_deletion_enabled()` reads it and is `False` when never set.
- `unikorncore.provisioners.scheduling`: `control_plane_tolerations()`,
  `control_plane_node_selector()` and `control_plane_init_tolerations()` give
  Helm value snippets for scheduling on the control plane;
  `get_configuration_hash(config)` returns the SHA-256 hex digest of the
  compact JSON form of `config`, for restarting workloads when their
  configuration changes (raises `TypeError` for values that are not JSON).

## Utilities

- `unikorncore.cache.TimeoutCache(refresh)` holds one value for `refresh`
  seconds (or a `timedelta`) after `set(value)`; `get(default=None)` returns
  `default` once it has expired or before anything was set.
- `unikorncore.retry`: `Retrier(period=1.0).do(callback, timeout=None)` calls
  `callback` at once and then every `period` seconds until it returns without
  raising, and returns its result. When `timeout` passes first, `RetryError`
  is raised with the last failure as `callback` and the timeout as `context`.
  `forever()` returns a retrier with a one second period.
- `unikorncore.trie.Trie`: `add_word(word)`, `add_dictionary(stream)` (adds
  every whitespace-separated word from a text stream), `check_word(word)` and
  the `in` operator.

```python
import io

from unikorncore.trie import Trie

words = Trie()
words.add_dictionary(io.StringIO("unicorn pegasus\ngriffin"))
assert "unicorn" in words
assert not words.check_word("uni")
```

## What the package does not do

The package offers no provisioner framework: there is no provisioner base
class, no way to run provisioners in sequence, concurrently or on a
condition, and no errors for a provisioner to yield or report a missing
resource. It also does not generate resource identifiers or discover the
public address the service runs behind. There is no HTTP server and no
command-line program; the helpers above are meant to be plugged into a
server of your own.