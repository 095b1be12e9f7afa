"""Data models for scanned documentation: blocks, resources, methods, documents"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict


class BlockKind(str, Enum):
    """Restrict block kinds to the ones the scanner distinguishes"""
    code = "code"
    html = "html"
    other = "other"


class DocType(str, Enum):
    unknown = "unknown"
    resource = "resource"
    method_request = "method_request"


@dataclass(frozen=True)
class Block:
    """A single segment of a parsed document."""
    kind:    BlockKind
    content: str
    line:    Optional[int] = None     # 0-based source line; None when unknown


class ResourceDefinition(BaseModel):
    """A named JSON schema example for a resource type."""
    model_config = ConfigDict(frozen=True)
    type_name:   str
    schema_text: str


class MethodDefinition(BaseModel):
    """One documented request, plus the response documented after it."""
    display_name:       str
    request_text:       str
    parameter_names:    Optional[tuple[str, ...]] = None
    response_text:      str = ""
    response_type_name: Optional[str] = None


class DocFile:
    """Resources and request/response methods defined by one document.

    Collections are populated by a scan and exposed as read-only views.
    """

    def __init__(self, display_name: str, full_path: Optional[Path] = None):
        self.display_name = display_name
        self.full_path = full_path
        self._resources: dict[str, ResourceDefinition] = {}
        self._methods: list[MethodDefinition] = []
        self._code_blocks: list[Block] = []

    def __repr__(self) -> str:
        return (f"DocFile({self.display_name!r}, resources={len(self._resources)}, "
                f"methods={len(self._methods)})")

    def scan(self, text: str, **kwargs) -> "DocFile":
        """Scan text into this document's collections; see scan.scan_into."""
        from apidocs.core.scan import scan_into
        scan_into(self, text, **kwargs)
        return self

    @property
    def resources(self) -> Mapping[str, ResourceDefinition]:
        return MappingProxyType(self._resources)

    @property
    def methods(self) -> tuple[MethodDefinition, ...]:
        return tuple(self._methods)

    @property
    def code_blocks(self) -> tuple[Block, ...]:
        return tuple(self._code_blocks)

    @property
    def doc_type(self) -> DocType:
        if self._resources:
            return DocType.resource
        if self._methods:
            return DocType.method_request
        return DocType.unknown

    # Mutators used while scanning; callers outside the scan see read-only views.

    def _reset(self, code_blocks: list[Block]) -> None:
        self._resources.clear()
        self._methods.clear()
        self._code_blocks = list(code_blocks)

    def _add_resource(self, resource: ResourceDefinition) -> bool:
        """Store resource by type name; True when it replaced an earlier definition."""
        replaced = resource.type_name in self._resources
        self._resources[resource.type_name] = resource
        return replaced

    def _add_method(self, request_text: str, parameter_names: Optional[tuple[str, ...]]) -> int:
        """Append a method named '<display name> #<index>' and return its index."""
        index = len(self._methods)
        self._methods.append(MethodDefinition(
            display_name=f"{self.display_name} #{index}",
            request_text=request_text,
            parameter_names=parameter_names,
        ))
        return index

    def _attach_response(self, index: int, response_text: str, response_type_name: Optional[str]) -> None:
        method = self._methods[index]
        method.response_text = response_text
        method.response_type_name = response_type_name

    def method(self, display_name: str) -> Optional[MethodDefinition]:
        """Return the method with display_name, or None."""
        return next((m for m in self._methods if m.display_name == display_name), None)
