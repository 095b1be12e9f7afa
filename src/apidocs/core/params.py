"""Placeholder locations: where an expectation key reads its value from"""

from enum import Enum
from typing import Optional


class PlaceholderLocation(str, Enum):
    Invalid = "Invalid"
    Body = "Body"
    HttpHeader = "HttpHeader"
    Json = "Json"
    Url = "Url"
    StoredValue = "StoredValue"


BODY_KEY = '!body'
URL_KEY = '!url'


def classify_key(key: str) -> tuple[PlaceholderLocation, Optional[str]]:
    """Return (location, sub_key) for an expectation key.

    '!body'   -> Body
    '!url'    -> Url
    '$.a.b'   -> Json, sub_key is the path
    'ETag:'   -> HttpHeader, sub_key is the header name
    '[name]'  -> StoredValue, sub_key is the stored value name
    Anything else is Invalid.
    """
    if key == BODY_KEY:
        return PlaceholderLocation.Body, None
    if key == URL_KEY:
        return PlaceholderLocation.Url, None
    if key == '$' or key.startswith('$.') or key.startswith('$['):
        return PlaceholderLocation.Json, key
    if len(key) > 1 and key.endswith(':'):
        return PlaceholderLocation.HttpHeader, key[:-1].strip()
    if len(key) > 2 and key.startswith('[') and key.endswith(']'):
        return PlaceholderLocation.StoredValue, key[1:-1]
    return PlaceholderLocation.Invalid, None
