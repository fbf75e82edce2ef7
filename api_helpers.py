import re
import time
from contextlib import contextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional
from urllib.parse import quote

import httpx
import jsonschema
from hamcrest import all_of, assert_that, contains_string, empty, equal_to, is_not, not_none
from hamcrest.core.matcher import Matcher
from jsonschema.exceptions import ValidationError

import config
import json_path
from logging_helper import log_payload, log_status

# One client per process; tests swap it for an httpx.MockTransport-backed one
client = httpx.Client(timeout=config.REQUEST_TIMEOUT)

_PATH_PARAM = re.compile(r"\{(\w+)\}")


class TransportError(Exception):
    """The request never produced a response (connection refused, timeout, ...)."""

    def __init__(self, method: str, url: str, cause: Exception, attempts: int = 1):
        super().__init__(f"{method} {url} failed after {attempts} attempt(s): {cause!r}")
        self.method = method
        self.url = url
        self.cause = cause
        self.attempts = attempts


# ----------------------------
# Targets
# ----------------------------
@dataclass(frozen=True)
class Target:
    name: str
    base_url: str
    headers: Mapping[str, str]

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"


PRIMARY_TARGET = Target("jsonplaceholder", config.BASE_URL, config.DEFAULT_HEADERS)
SECONDARY_TARGET = Target(
    "reqres",
    config.REQRES_BASE_URL,
    {config.API_KEY_HEADER: config.API_KEY, **config.DEFAULT_HEADERS},
)

_current_target = PRIMARY_TARGET


def current_target() -> Target:
    return _current_target


def use_target(target: Target) -> Target:
    """Make `target` the default for requests that don't pass one. Returns the previous target."""
    global _current_target
    previous = _current_target
    _current_target = target
    if previous is not target:
        log_status("info", "Switched target: ", f"{previous.name} -> {target.name} ({target.base_url})")
    return previous


def use_primary_target() -> Target:
    return use_target(PRIMARY_TARGET)


def use_secondary_target() -> Target:
    return use_target(SECONDARY_TARGET)


@contextmanager
def using_target(target: Target) -> Iterator[Target]:
    """Switch the default target for the duration of the block, restoring it even on failure."""
    previous = use_target(target)
    try:
        yield target
    finally:
        use_target(previous)


# ----------------------------
# Matchers
# ----------------------------
def non_empty():
    """Not None and not an empty string/collection."""
    return all_of(not_none(), is_not(empty()))


def _as_matcher(expected) -> Matcher:
    return expected if isinstance(expected, Matcher) else equal_to(expected)


# ----------------------------
# Response
# ----------------------------
class ApiResponse:
    """
    Wraps an httpx.Response with lookups and chainable hamcrest assertions:

        make_request("GET", "/users/{id}", path_params={"id": 1}) \\
            .status_code(200) \\
            .content_type("application/json") \\
            .body("id", 1) \\
            .body("name", non_empty())

    Every assertion returns self and raises AssertionError on mismatch.
    """

    def __init__(self, response: httpx.Response, elapsed_ms: float, target: Target):
        self.raw = response
        self.elapsed_ms = elapsed_ms
        self.target = target
        self._json = None
        self._json_loaded = False

    @property
    def status(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def text(self) -> str:
        return self.raw.text

    def json(self) -> Any:
        if not self._json_loaded:
            try:
                self._json = self.raw.json()
            except ValueError as e:
                raise AssertionError(f"Response body is not JSON.\n{self.describe()}") from e
            self._json_loaded = True
        return self._json

    def header_value(self, name: str) -> Optional[str]:
        return self.raw.headers.get(name)

    def field(self, path: str) -> Any:
        try:
            return json_path.extract(self.json(), path)
        except json_path.MissingFieldError as e:
            raise json_path.MissingFieldError(e.path, f"{e.reason}\n{self.describe()}") from None

    def describe(self) -> str:
        request = self.raw.request
        return (
            f"{request.method} {request.url} -> {self.status} ({self.elapsed_ms:.0f} ms)\n"
            f"Body: {self.text[:1000]}"
        )

    # -- assertions --
    def status_code(self, expected) -> "ApiResponse":
        assert_that(self.status, _as_matcher(expected), f"Unexpected status code.\n{self.describe()}")
        return self

    def header(self, name: str, expected=None) -> "ApiResponse":
        matcher = non_empty() if expected is None else _as_matcher(expected)
        assert_that(self.header_value(name), matcher, f"Unexpected '{name}' header.\n{self.describe()}")
        return self

    def content_type(self, expected: str = "application/json") -> "ApiResponse":
        return self.header("Content-Type", contains_string(expected))

    def body(self, path: str, expected) -> "ApiResponse":
        assert_that(self.field(path), _as_matcher(expected), f"Unexpected value at '{path}'.\n{self.describe()}")
        return self

    def time(self, expected) -> "ApiResponse":
        assert_that(self.elapsed_ms, _as_matcher(expected), f"Response time (ms) out of bounds.\n{self.describe()}")
        return self

    def warn_if_slow(self, limit_ms=None) -> "ApiResponse":
        limit_ms = config.ACCEPTABLE_RESPONSE_TIME_MS if limit_ms is None else limit_ms
        if self.elapsed_ms > limit_ms:
            request = self.raw.request
            log_status("warning", f"Slow response: {request.method} {request.url}",
                       f" ({self.elapsed_ms:.0f} ms > {limit_ms} ms)")
        return self

    def matches_schema(self, schema: Dict[str, Any], label: str = "response") -> "ApiResponse":
        data = self.json()
        try:
            jsonschema.validate(instance=data, schema=schema)
        except ValidationError as e:
            raise AssertionError(
                f"Response JSON does not match '{label}' schema:\n"
                f"Validation message: {e.message}\n"
                f"Validator: {e.validator}\n"
                f"Validator path: {list(e.schema_path)}\n"
                f"Instance path: {list(e.path)}\n"
                f"Offending instance: {e.instance}\n"
                f"{self.describe()}"
            ) from None
        return self


# ----------------------------
# Requests
# ----------------------------
def build_path(path: str, path_params: Optional[Mapping[str, Any]] = None) -> str:
    """Fill `{name}` placeholders from path_params, URL-quoting each value."""
    path_params = path_params or {}

    def _fill(match):
        name = match.group(1)
        if name not in path_params:
            raise ValueError(f"Missing path parameter '{name}' for {path}")
        return quote(str(path_params[name]), safe="")

    return _PATH_PARAM.sub(_fill, path)


def _body_kwargs(json: Any = None, content: Any = None) -> Dict[str, Any]:
    if json is not None and content is not None:
        raise ValueError("Pass either json or content, not both")
    if content is None and isinstance(json, (str, bytes)):
        content, json = json, None
    if content is not None:
        return {"content": content.encode("utf-8") if isinstance(content, str) else content}
    if json is None:
        return {}
    if hasattr(json, "to_dict"):
        json = json.to_dict()
    return {"json": json}


def make_request(method, path, path_params=None, params=None, json=None, content=None,
                 headers=None, target=None, max_retries=None) -> ApiResponse:
    """
    Send one request to `target` (the current target when omitted).

    `json` may be a fixture record (anything with to_dict()), a dict/list, or a
    raw JSON string; `content` sends bytes/text as-is. Status codes are never
    raised on: tests assert them. Transport failures raise TransportError once
    max_retries attempts are used up.
    """
    target = target or _current_target
    max_retries = config.MAX_RETRIES if max_retries is None else max_retries
    if max_retries < 1:
        raise ValueError(f"max_retries must be >= 1, got {max_retries}")

    method = method.upper()
    url = target.url_for(build_path(path, path_params))
    request_headers = {**target.headers, **(headers or {})}
    body = _body_kwargs(json, content)

    log_status("request", f"{method} {url}", f" params={params}" if params else "")
    if "json" in body:
        log_payload("Request body", body["json"])
    elif "content" in body:
        log_payload("Request body", body["content"].decode("utf-8", errors="replace"))

    last_error = None
    for attempt in range(1, max_retries + 1):
        started = time.perf_counter()
        try:
            response = client.request(method, url, headers=request_headers, params=params, **body)
        except httpx.TransportError as e:
            last_error = e
            log_status("error", f"Attempt {attempt}: Request error with {method} {url}: ", repr(e))
            if attempt < max_retries:
                time.sleep(config.RETRY_DELAY)
            continue

        elapsed_ms = (time.perf_counter() - started) * 1000
        status = "good" if response.status_code < 400 else "warning"
        log_status(status, f"{response.status_code} {method} {url}", f" ({elapsed_ms:.0f} ms)")
        return ApiResponse(response, elapsed_ms, target)

    raise TransportError(method, url, last_error, attempts=max_retries) from last_error


def is_reachable(target: Optional[Target] = None) -> bool:
    target = target or _current_target
    try:
        make_request("GET", "/", target=target, max_retries=1)
    except TransportError:
        return False
    return True
