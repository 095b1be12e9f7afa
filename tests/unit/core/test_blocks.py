"""Unit tests for core/blocks.py"""

import pytest

from apidocs.core.blocks import block_parser, to_blocks, tokens_to_blocks
from apidocs.core.errors import DocumentScanError
from apidocs.core.models import BlockKind


def test_fence_block_content_excludes_fences():
    """Fenced code maps to BlockKind.code with the code body as content."""
    blocks = to_blocks("```json\n{\"a\": 1}\n```\n")
    assert len(blocks) == 1
    assert blocks[0].kind == BlockKind.code
    assert blocks[0].content == '{"a": 1}\n'


def test_html_comment_block():
    """An HTML comment on its own lines maps to BlockKind.html."""
    blocks = to_blocks('<!-- {"blockType": "resource"} -->\n')
    assert [b.kind for b in blocks] == [BlockKind.html]
    assert blocks[0].content.strip() == '<!-- {"blockType": "resource"} -->'


@pytest.mark.parametrize("md,expected", [
    ("```python\nprint('x')\n```\n", BlockKind.code),
    ("    indented code\n",          BlockKind.code),
    ("<div>raw html</div>\n",        BlockKind.html),
    ("# Heading\n",                  BlockKind.other),
    ("A paragraph.\n",               BlockKind.other),
])
def test_block_kind_mapping(md, expected):
    """Each markdown construct maps to its BlockKind."""
    assert any(b.kind == expected for b in to_blocks(md))


def test_block_order_and_lines(parser):
    """Blocks keep document order and record their starting source line."""
    md = "# Title\n\n<!-- {} -->\n\n```\ncode\n```\n"
    blocks = tokens_to_blocks(parser.parse(md))
    assert [b.kind for b in blocks] == [BlockKind.other, BlockKind.html, BlockKind.code]
    assert [b.line for b in blocks] == [0, 2, 4]


def test_nested_paragraphs_are_not_separate_blocks():
    """Only top-level constructs become 'other' blocks."""
    blocks = to_blocks("- item one\n- item two\n")
    assert len(blocks) == 1
    assert blocks[0].kind == BlockKind.other


def test_unknown_preset_is_document_error():
    """An unknown MarkdownIt preset surfaces as DocumentScanError."""
    with pytest.raises(DocumentScanError):
        to_blocks("# Hi\n", preset="no-such-preset")


def test_block_parser_binds_preset():
    parse = block_parser("gfm-like")
    assert parse("| a |\n|---|\n| 1 |\n")[0].kind == BlockKind.other
