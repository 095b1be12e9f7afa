"""File discovery, frontmatter stripping, and per-file document scanning"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml

from apidocs.core.errors import DocumentScanError
from apidocs.core.models import DocFile
from apidocs.core.scan import scan_document


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise DocumentScanError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise DocumentScanError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def display_name_for(path: Path, base_path: Optional[Path] = None) -> str:
    """Name a document by its path relative to base_path ('/guide/users.md'), else its file name."""
    if base_path is not None:
        try:
            return '/' + path.relative_to(base_path).as_posix()
        except ValueError:
            pass
    return path.name


def parse_file(path: Path, base_path: Optional[Path] = None, parser_config: str = 'commonmark') -> DocFile:
    """Read a markdown file and scan it into a DocFile."""
    try:
        raw = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentScanError(f"Unable to read {path}: {e}") from e
    _, body = _strip_frontmatter(raw)
    return scan_document(body, display_name_for(path, base_path), full_path=path, preset=parser_config)
