"""
Field lookup on decoded JSON bodies.

Paths look like the ones used in response assertions:

    id                  -> body["id"]
    address.street      -> body["address"]["street"]
    [0].userId          -> body[0]["userId"]
    items[-1].name      -> body["items"][-1]["name"]
    size()              -> len(body)
    company.bs.size()   -> len(body["company"]["bs"])

A path that does not resolve against the document raises MissingFieldError,
which is an AssertionError: an unexpected response shape fails the test that
asked for the field instead of crashing it.
"""
import re
from typing import Any, List, Tuple, Union

SIZE = "size()"

_TOKEN = re.compile(r"""
    (?P<key>[^.\[\]]+)        # object key
    | \[(?P<index>-?\d+)\]    # array index
    | (?P<dot>\.)             # separator
""", re.VERBOSE)

Step = Tuple[str, Union[str, int]]


class MissingFieldError(AssertionError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Field '{path}' not found in response body: {reason}")
        self.path = path
        self.reason = reason


def parse(path: str) -> List[Step]:
    """Split a path into ("key", name) / ("index", n) / ("size", "") steps."""
    if not isinstance(path, str) or not path.strip():
        raise ValueError(f"Invalid body path: {path!r}")

    steps: List[Step] = []
    pos = 0
    expect_separator = False
    while pos < len(path):
        match = _TOKEN.match(path, pos)
        if match is None:
            raise ValueError(f"Invalid body path {path!r} at position {pos}")
        pos = match.end()

        if match.group("dot"):
            if not expect_separator or pos == len(path):
                raise ValueError(f"Invalid body path {path!r}: misplaced '.'")
            expect_separator = False
            continue

        if match.group("index") is not None:
            steps.append(("index", int(match.group("index"))))
            expect_separator = True
            continue

        if expect_separator:
            raise ValueError(f"Invalid body path {path!r}: missing '.' before {match.group('key')!r}")
        key = match.group("key")
        if key.endswith("()"):
            if key != SIZE:
                raise ValueError(f"Unsupported function in body path {path!r}: {key}")
            if pos != len(path):
                raise ValueError(f"Invalid body path {path!r}: size() must be last")
            steps.append(("size", ""))
        else:
            steps.append(("key", key))
        expect_separator = True

    return steps


def extract(document: Any, path: str) -> Any:
    current = document
    walked = ""
    for kind, value in parse(path):
        if kind == "key":
            walked = f"{walked}.{value}" if walked else str(value)
            if not isinstance(current, dict):
                raise MissingFieldError(path, f"'{walked}' expected an object, got {type(current).__name__}")
            if value not in current:
                raise MissingFieldError(path, f"no key '{value}'")
            current = current[value]
        elif kind == "index":
            walked = f"{walked}[{value}]"
            if not isinstance(current, list):
                raise MissingFieldError(path, f"'{walked}' expected an array, got {type(current).__name__}")
            try:
                current = current[value]
            except IndexError:
                raise MissingFieldError(path, f"index {value} out of range (length {len(current)})") from None
        else:
            if not isinstance(current, (list, dict, str)):
                raise MissingFieldError(path, f"size() needs a collection, got {type(current).__name__}")
            current = len(current)
    return current
