"""JSON-path evaluation and JSON token equality"""

import json
from typing import Any, Union

from jsonpath_ng import parse as parse_path
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError


class JsonPathError(ValueError):
    """A JSON path could not be evaluated against a body."""


def load_json(body: Union[str, bytes, Any]) -> Any:
    """Parse body as JSON; values that are already decoded pass through."""
    if isinstance(body, (bytes, bytearray)):
        body = body.decode('utf-8')
    if not isinstance(body, str):
        return body
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise JsonPathError(f"Response body is not valid JSON: {e}") from e


def value_from_json_path(body: Union[str, bytes, Any], path: str) -> Any:
    """Return the value addressed by path in body.

    A single match returns its value, several matches return a list of values.
    Raises JsonPathError when the body is not JSON, the path is invalid, or
    nothing matches.
    """
    data = load_json(body)
    try:
        expr = parse_path(path)
    except (JsonPathLexerError, JsonPathParserError) as e:
        raise JsonPathError(f"Invalid JSON path '{path}': {e}") from e
    try:
        matches = [m.value for m in expr.find(data)]
    except (TypeError, KeyError, AttributeError) as e:
        raise JsonPathError(f"Unable to evaluate JSON path '{path}': {e}") from e
    if not matches:
        raise JsonPathError(f"JSON path '{path}' did not match any value")
    return matches[0] if len(matches) == 1 else matches


def _same(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_same(v, b[k]) for k, v in a.items())
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_same(x, y) for x, y in zip(a, b))
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    return type(a) is type(b) and a == b


def token_equals(expected: Any, actual: Any, decode_text: bool = True) -> bool:
    """JSON structural equality.

    With decode_text, a textual actual value (raw body or header text) is
    decoded as JSON when expected is not text. Pass decode_text=False for
    values that are already decoded JSON tokens, so the string "5" never
    equals the number 5.
    """
    if decode_text and isinstance(actual, (str, bytes, bytearray)) and not isinstance(expected, str):
        try:
            actual = load_json(actual)
        except JsonPathError:
            return False
    return _same(expected, actual)
