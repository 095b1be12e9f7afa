"""Pipeline step functions: scan documents, then check scenarios against responses"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import requests
from pydantic import BaseModel

from apidocs.core.errors import Diagnostic, DocumentScanError, ValidationErrorCode, validation_error
from apidocs.core.http import (
    HttpParserError,
    HttpRequestError,
    HttpResponse,
    parse_http_request,
    parse_http_response,
    send_request,
    substitute_placeholders,
)
from apidocs.core.models import DocFile, MethodDefinition
from apidocs.core.parse import discover_files, parse_file
from apidocs.core.scenario import ScenarioDefinition
from apidocs.core.validate import validate_expectations


logger = logging.getLogger(__name__)


class CheckResult(BaseModel):
    """Outcome of checking one scenario."""
    scenario:    str
    method:      str
    diagnostics: list[Diagnostic] = []

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_warning]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]

    @property
    def passed(self) -> bool:
        return not self.errors


def run_scan(path: str, parser_config: str = 'commonmark') -> list[DocFile]:
    """Scan every markdown file under path. Document-level failures raise RuntimeError."""
    root = Path(path)
    base = root if root.is_dir() else root.parent
    docs = []
    for p in discover_files(root):
        try:
            docs.append(parse_file(p, base, parser_config))
        except DocumentScanError as e:
            raise RuntimeError(f"Failed to scan {p}: {e}") from e
    logger.info("Scanned %d document(s) under %s", len(docs), path)
    return docs


def find_method(docs: Iterable[DocFile], display_name: str) -> Optional[MethodDefinition]:
    """Return the first method named display_name across docs."""
    for doc in docs:
        method = doc.method(display_name)
        if method is not None:
            return method
    return None


def _observe(
    method: MethodDefinition,
    scenario: ScenarioDefinition,
    base_url: Optional[str],
    session: Optional[requests.Session],
    timeout: float,
    ) -> HttpResponse:
    """Issue the method's request live, or read its documented response when base_url is None."""
    if base_url is None:
        return parse_http_response(method.response_text)
    text = substitute_placeholders(method.request_text, scenario.placeholders)
    return send_request(parse_http_request(text), base_url, session=session, timeout=timeout)


def check_scenario(
    docs: list[DocFile],
    scenario: ScenarioDefinition,
    base_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
    ) -> CheckResult:
    """Exercise one scenario and collect its diagnostics."""
    result = CheckResult(scenario=scenario.name, method=scenario.method)
    method = find_method(docs, scenario.method)
    if method is None:
        result.diagnostics.append(validation_error(
            ValidationErrorCode.MethodNotFound, scenario.name,
            "Scenario {0} refers to unknown method '{1}'", scenario.name, scenario.method,
        ))
        return result

    try:
        response = _observe(method, scenario, base_url, session, timeout)
    except HttpParserError as e:
        result.diagnostics.append(validation_error(ValidationErrorCode.HttpParserError, method.display_name, str(e)))
        return result
    except HttpRequestError as e:
        result.diagnostics.append(validation_error(ValidationErrorCode.HttpRequestFailed, method.display_name, str(e)))
        return result

    validate_expectations(scenario, response, result.diagnostics)
    logger.debug("%s: %d diagnostic(s)", scenario.name, len(result.diagnostics))
    return result


def run_check(
    docs: list[DocFile],
    scenarios: list[ScenarioDefinition],
    base_url: Optional[str] = None,
    names: Optional[list[str]] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
    ) -> list[CheckResult]:
    """Check every enabled scenario (restricted to names when given).

    Live checks without a session share one that is closed when all scenarios finish.
    """
    selected = [
        s for s in scenarios
        if s.enabled and (not names or s.name in names)
    ]
    if base_url is not None and session is None:
        with requests.Session() as owned:
            return [check_scenario(docs, s, base_url, owned, timeout) for s in selected]
    return [check_scenario(docs, s, base_url, session, timeout) for s in selected]
