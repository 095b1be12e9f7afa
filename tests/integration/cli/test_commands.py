"""Integration tests for the scan and check commands"""

import json

import pytest
from typer.testing import CliRunner

from apidocs.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no APIDOCS_* overrides."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("APIDOCS_BASE_URL", raising=False)
    monkeypatch.delenv("APIDOCS_OUTPUT_FORMAT", raising=False)


def test_scan_lists_catalog(docs_dir):
    result = runner.invoke(app, ["scan", str(docs_dir)])
    assert result.exit_code == 0, result.output
    assert "resource: user" in result.output
    assert "method: /users.md #0 (id) -> user" in result.output
    assert "Scanned 1 document(s)" in result.output


def test_scan_empty_directory(tmp_path):
    result = runner.invoke(app, ["scan", str(tmp_path)])
    assert result.exit_code == 1
    assert "No .md/.mdx files found." in result.output


def test_check_offline_reports_failures(docs_dir, scenarios_file):
    result = runner.invoke(app, ["check", str(docs_dir), str(scenarios_file), "--offline"])
    assert result.exit_code == 1
    assert "PASS: get-user" in result.output
    assert "FAIL: wrong-name" in result.output
    assert "ExpectationConditionFailed" in result.output


def test_check_offline_single_scenario_passes(docs_dir, scenarios_file):
    result = runner.invoke(app, [
        "check", str(docs_dir), str(scenarios_file), "--offline", "--scenario", "get-user",
    ])
    assert result.exit_code == 0, result.output


def test_check_json_format(docs_dir, scenarios_file):
    result = runner.invoke(app, [
        "check", str(docs_dir), str(scenarios_file), "--offline", "--format", "json",
    ])
    data = json.loads(result.output)
    assert [r["scenario"] for r in data] == ["get-user", "wrong-name"]


def test_check_fail_on_warning(docs_dir, tmp_path):
    scenarios = tmp_path / "warn.yaml"
    scenarios.write_text("- name: w\n  method: '/users.md #0'\n  expectations:\n    '!url': null\n")
    args = ["check", str(docs_dir), str(scenarios), "--offline"]
    assert runner.invoke(app, args).exit_code == 0
    assert runner.invoke(app, args + ["--fail-on-warning"]).exit_code == 1


def test_check_requires_base_url(docs_dir, scenarios_file):
    result = runner.invoke(app, ["check", str(docs_dir), str(scenarios_file)])
    assert result.exit_code == 1
    assert "No base URL configured" in result.output


def test_check_invalid_scenarios_file(docs_dir, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("scenarios: [unclosed\n")
    result = runner.invoke(app, ["check", str(docs_dir), str(bad), "--offline"])
    assert result.exit_code == 1
    assert "Invalid bad.yaml" in result.output
