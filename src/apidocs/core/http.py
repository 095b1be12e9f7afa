"""HTTP request/response models, raw message parsing, and transport via requests"""

import logging
from typing import Any, Optional
from urllib.parse import urljoin

import requests
from pydantic import BaseModel

from apidocs.core.jsonpath import load_json


logger = logging.getLogger(__name__)


class HttpParserError(ValueError):
    """Raw HTTP message text could not be parsed."""


class HttpRequestError(RuntimeError):
    """A request could not be sent or no response was received."""


class HttpMessage(BaseModel):
    headers: list[tuple[str, str]] = []
    body:    str = ""

    def header_values(self, name: str) -> list[str]:
        """All values for a header, in order; names compare case-insensitively."""
        lname = name.lower()
        return [v for k, v in self.headers if k.lower() == lname]

    def first(self, name: str) -> Optional[str]:
        """First value for a header, or None when absent."""
        values = self.header_values(name)
        return values[0] if values else None


class HttpRequest(HttpMessage):
    method: str
    url:    str


class HttpResponse(HttpMessage):
    status_code: int = 200
    reason:      str = ""

    def json(self) -> Any:
        return load_json(self.body)


def _split_message(text: str) -> tuple[str, list[tuple[str, str]], str]:
    """Split raw message text into (start_line, headers, body)."""
    lines = text.replace('\r\n', '\n').lstrip('\n').split('\n')
    if not lines or not lines[0].strip():
        raise HttpParserError("message has no start line")
    start = lines[0].strip()

    headers: list[tuple[str, str]] = []
    i = 1
    while i < len(lines) and lines[i].strip():
        name, sep, value = lines[i].partition(':')
        if not sep or not name.strip():
            raise HttpParserError(f"malformed header line: {lines[i]!r}")
        headers.append((name.strip(), value.strip()))
        i += 1
    body = '\n'.join(lines[i + 1:]).strip('\n')
    return start, headers, body


def parse_http_request(text: str) -> HttpRequest:
    """Parse documented request text ('GET /users/1 HTTP/1.1', headers, blank line, body)."""
    start, headers, body = _split_message(text)
    parts = start.split()
    if len(parts) < 2:
        raise HttpParserError(f"malformed request line: {start!r}")
    return HttpRequest(method=parts[0].upper(), url=parts[1], headers=headers, body=body)


def parse_http_response(text: str) -> HttpResponse:
    """Parse documented response text ('HTTP/1.1 200 OK', headers, blank line, body)."""
    start, headers, body = _split_message(text)
    parts = start.split(None, 2)
    if len(parts) < 2 or not parts[0].upper().startswith('HTTP/') or not parts[1].isdigit():
        raise HttpParserError(f"malformed status line: {start!r}")
    return HttpResponse(
        status_code=int(parts[1]),
        reason=parts[2] if len(parts) > 2 else "",
        headers=headers,
        body=body,
    )


def substitute_placeholders(text: str, placeholders: dict[str, str]) -> str:
    """Replace each '{name}' in text with its placeholder value."""
    for name, value in placeholders.items():
        text = text.replace(f"{{{name}}}", value)
    return text


def send_request(
    request: HttpRequest,
    base_url: str,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
    ) -> HttpResponse:
    """Issue request against base_url and return the observed HttpResponse.

    Without a session, a private one is opened and closed around the call.
    """
    if session is None:
        with requests.Session() as owned:
            return send_request(request, base_url, owned, timeout)
    url = urljoin(base_url.rstrip('/') + '/', request.url.lstrip('/'))
    logger.debug("%s %s", request.method, url)
    try:
        resp = session.request(
            request.method,
            url,
            headers=dict(request.headers),
            data=request.body.encode('utf-8') if request.body else None,
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise HttpRequestError(f"{request.method} {url} failed: {e}") from e
    return HttpResponse(
        status_code=resp.status_code,
        reason=resp.reason or "",
        headers=list(resp.headers.items()),
        body=resp.text,
    )
