"""Exceptions and validation diagnostics"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class DocumentScanError(Exception):
    """A whole document could not be transformed into blocks."""


class MalformedAnnotationError(ValueError):
    """An annotation/payload pair could not be interpreted; the pair is skipped."""


class Severity(str, Enum):
    error = "error"
    warning = "warning"


class ValidationErrorCode(str, Enum):
    """Closed set of diagnostic codes"""
    ExpectationConditionFailed = "ExpectationConditionFailed"
    JsonParserException = "JsonParserException"
    InvalidExpectationKey = "InvalidExpectationKey"
    MethodNotFound = "MethodNotFound"
    HttpRequestFailed = "HttpRequestFailed"
    HttpParserError = "HttpParserError"


class Diagnostic(BaseModel):
    """One error or warning produced while checking a response."""
    model_config = ConfigDict(frozen=True)
    severity: Severity
    code:     ValidationErrorCode
    source:   Optional[str] = None
    message:  str

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.warning

    def __str__(self) -> str:
        where = f" [{self.source}]" if self.source else ""
        return f"{self.severity.value}: {self.code.value}{where}: {self.message}"


def _format(message: str, args: tuple[Any, ...]) -> str:
    return message.format(*args) if args else message


def validation_error(code: ValidationErrorCode, source: Optional[str], message: str, *args: Any) -> Diagnostic:
    """Build an error-severity Diagnostic; message is a str.format template filled from args."""
    return Diagnostic(severity=Severity.error, code=code, source=source, message=_format(message, args))


def validation_warning(code: ValidationErrorCode, source: Optional[str], message: str, *args: Any) -> Diagnostic:
    """Build a warning-severity Diagnostic; message is a str.format template filled from args."""
    return Diagnostic(severity=Severity.warning, code=code, source=source, message=_format(message, args))
