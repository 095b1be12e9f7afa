"""Markdown-to-block conversion backed by markdown-it tokens"""

from typing import Callable

from markdown_it import MarkdownIt

from apidocs.core.errors import DocumentScanError
from apidocs.core.models import Block, BlockKind


BlockParser = Callable[[str], list[Block]]

BLOCK_KIND_MAP: dict[str, BlockKind] = {
    'fence':      BlockKind.code,
    'code_block': BlockKind.code,
    'html_block': BlockKind.html,
}


def make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name, with raw HTML enabled."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": True})


def _is_other_block(token) -> bool:
    """True for top-level block openers the scanner does not consume (paragraphs, headings, ...)."""
    return token.level == 0 and token.block and (token.nesting == 1 or token.type == 'hr')


def tokens_to_blocks(tokens: list) -> list[Block]:
    """Convert a markdown-it token stream to an ordered list of Blocks."""
    blocks: list[Block] = []
    for tok in tokens:
        kind = BLOCK_KIND_MAP.get(tok.type)
        if kind is None:
            if not _is_other_block(tok):
                continue
            kind = BlockKind.other
        line = tok.map[0] if tok.map else None
        blocks.append(Block(kind=kind, content=tok.content, line=line))
    return blocks


def to_blocks(text: str, preset: str = 'commonmark') -> list[Block]:
    """Parse markdown text into Blocks; any parser failure is a DocumentScanError."""
    try:
        tokens = make_parser(preset).parse(text)
    except Exception as e:
        raise DocumentScanError(f"Unable to parse markdown: {e}") from e
    return tokens_to_blocks(tokens)


def block_parser(preset: str) -> BlockParser:
    """Return a to_blocks callable bound to preset."""
    return lambda text: to_blocks(text, preset)
