"""Render scan catalogs and check results as text or JSON"""

import json

from apidocs.core.models import DocFile
from apidocs.core.pipeline import CheckResult


def render_catalog(docs: list[DocFile]) -> list[str]:
    """One line per document, resource, and method."""
    lines = []
    for doc in docs:
        lines.append(f"{doc.display_name} ({doc.doc_type.value})")
        for name in doc.resources:
            lines.append(f"  resource: {name}")
        for m in doc.methods:
            params = f" ({', '.join(m.parameter_names)})" if m.parameter_names else ""
            response = f" -> {m.response_type_name}" if m.response_type_name else ""
            lines.append(f"  method: {m.display_name}{params}{response}")
    return lines


def render_text(results: list[CheckResult]) -> list[str]:
    """Per-scenario status lines followed by their diagnostics and a summary line."""
    lines = []
    for r in results:
        status = "PASS" if r.passed else "FAIL"
        lines.append(f"{status}: {r.scenario} ({r.method})")
        lines.extend(f"  {d}" for d in r.diagnostics)
    failed = sum(1 for r in results if not r.passed)
    warnings = sum(len(r.warnings) for r in results)
    lines.append(f"{len(results)} scenario(s): {len(results) - failed} passed, {failed} failed, {warnings} warning(s)")
    return lines


def render_json(results: list[CheckResult]) -> str:
    return json.dumps(
        [
            {
                "scenario": r.scenario,
                "method": r.method,
                "passed": r.passed,
                "diagnostics": [d.model_dump(mode="json") for d in r.diagnostics],
            }
            for r in results
        ],
        indent=2,
    )
