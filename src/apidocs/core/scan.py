"""Scan a document's blocks for annotated resource, request, and response examples.

An annotation is a raw HTML comment wrapping a JSON object, immediately
followed by the code block it describes:

    <!-- {"blockType": "request", "parameters": ["id"]} -->
    ```http
    GET /users/{id} HTTP/1.1
    ```

Pairs that cannot be interpreted are logged and skipped; only a failure to
produce the block sequence aborts the scan.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from apidocs.core.blocks import BlockParser, block_parser
from apidocs.core.errors import DocumentScanError, MalformedAnnotationError
from apidocs.core.models import Block, BlockKind, DocFile, ResourceDefinition


logger = logging.getLogger(__name__)

COMMENT_OPEN = '<!--'
COMMENT_CLOSE = '-->'


@dataclass
class _ScanState:
    """Working state for a single scan pass."""
    last_request: Optional[int] = None      # index of the most recent request method


def parse_annotation(content: str) -> dict[str, Any]:
    """Strip the comment wrapper from an annotation and return its JSON object."""
    text = content.strip()
    if not (text.startswith(COMMENT_OPEN) and text.endswith(COMMENT_CLOSE)):
        raise MalformedAnnotationError("annotation is not an HTML comment")
    body = text[len(COMMENT_OPEN):-len(COMMENT_CLOSE)]
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise MalformedAnnotationError(f"annotation is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedAnnotationError(f"annotation must be a JSON object, got {type(data).__name__}")
    return data


def _optional_str(data: dict[str, Any], field: str) -> Optional[str]:
    """Return field as text; JSON scalars are converted, objects and arrays are malformed."""
    value = data.get(field)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise MalformedAnnotationError(f"'{field}' must be a string")
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _parameter_names(data: dict[str, Any]) -> Optional[tuple[str, ...]]:
    params = data.get('parameters')
    if params is None:
        return None
    if not isinstance(params, list):
        raise MalformedAnnotationError("'parameters' must be an array")
    # null entries name nothing
    return tuple(str(p) for p in params if p is not None)


def _apply_pair(doc: DocFile, state: _ScanState, annotation: Block, payload: Optional[Block]) -> None:
    """Interpret one annotation/payload pair and update doc in place."""
    if annotation.kind != BlockKind.html:
        raise MalformedAnnotationError("metadata block does not appear to be metadata")
    if payload is None:
        raise MalformedAnnotationError("annotation is not followed by a code block")
    if payload.kind != BlockKind.code:
        raise MalformedAnnotationError("code block does not appear to be code")

    data = parse_annotation(annotation.content)
    block_type = data.get('blockType')
    if not isinstance(block_type, str):
        raise MalformedAnnotationError("annotation is missing required 'blockType'")
    odata_type = _optional_str(data, '@odata.type')

    if block_type == 'resource':
        if odata_type is None:
            raise MalformedAnnotationError("resource annotation is missing '@odata.type'")
        if doc._add_resource(ResourceDefinition(type_name=odata_type, schema_text=payload.content)):
            logger.warning("%s: resource '%s' is defined more than once; keeping the last definition",
                           doc.display_name, odata_type)

    elif block_type == 'request':
        state.last_request = doc._add_method(payload.content, _parameter_names(data))

    elif block_type == 'response':
        if state.last_request is None:
            raise MalformedAnnotationError("response annotation has no preceding request")
        doc._attach_response(state.last_request, payload.content, odata_type)


def scan_blocks(doc: DocFile, blocks: list[Block]) -> None:
    """Walk blocks pairing each annotation with the block after it, replacing doc's earlier results."""
    code_blocks = [b for b in blocks if b.kind in (BlockKind.code, BlockKind.html)]
    doc._reset(code_blocks)
    state = _ScanState()

    i = 0
    while i < len(code_blocks):
        annotation = code_blocks[i]
        if annotation.kind != BlockKind.html:
            i += 1
            continue
        payload = code_blocks[i + 1] if i + 1 < len(code_blocks) else None
        try:
            _apply_pair(doc, state, annotation, payload)
        except MalformedAnnotationError as e:
            where = f" (line {annotation.line + 1})" if annotation.line is not None else ""
            logger.warning("%s%s: skipping annotation: %s", doc.display_name, where, e)
        i += 2


def scan_into(
    doc: DocFile,
    text: str,
    to_blocks: Optional[BlockParser] = None,
    preset: str = 'commonmark',
    ) -> None:
    """Transform text into blocks and scan them into doc, replacing earlier results."""
    parse = to_blocks or block_parser(preset)
    try:
        blocks = parse(text)
    except DocumentScanError:
        raise
    except Exception as e:
        raise DocumentScanError(f"{doc.display_name}: {e}") from e

    scan_blocks(doc, blocks)
    logger.debug("%s: %d resource(s), %d method(s)",
                 doc.display_name, len(doc.resources), len(doc.methods))


def scan_document(
    text: str,
    display_name: str,
    full_path: Optional[Path] = None,
    to_blocks: Optional[BlockParser] = None,
    preset: str = 'commonmark',
    ) -> DocFile:
    """Scan text into a new DocFile named display_name."""
    doc = DocFile(display_name, full_path)
    scan_into(doc, text, to_blocks=to_blocks, preset=preset)
    return doc
