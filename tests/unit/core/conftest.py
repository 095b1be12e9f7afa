"""Shared fixtures for core unit tests"""

import json

import pytest
from markdown_it import MarkdownIt

from apidocs.core.http import HttpResponse


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("commonmark", options_update={"linkify": False})


@pytest.fixture(name="annotated")
def annotated_fixture():
    """Build an annotation comment followed by a fenced code block."""
    def _annotated(meta: dict, code: str, lang: str = "json") -> str:
        return f"<!-- {json.dumps(meta)} -->\n\n```{lang}\n{code}\n```\n\n"
    return _annotated


@pytest.fixture(name="json_response")
def json_response_fixture():
    def _response(body, headers=None) -> HttpResponse:
        text = body if isinstance(body, str) else json.dumps(body)
        return HttpResponse(status_code=200, body=text, headers=headers or [])
    return _response
