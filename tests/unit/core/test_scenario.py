"""Unit tests for core/scenario.py"""

import pytest

from apidocs.core.scenario import (
    AnyOf,
    NoConstraint,
    Scalar,
    ScenarioDefinition,
    expectation_from_value,
    load_scenarios,
)


@pytest.mark.parametrize("value,expected", [
    (None,          NoConstraint()),
    (5,             Scalar(5)),
    ("abc",         Scalar("abc")),
    ({"id": 5},     Scalar({"id": 5})),
    ([1, "a"],      AnyOf((1, "a"))),
])
def test_expectation_from_value(value, expected):
    assert expectation_from_value(value) == expected


def test_scenario_decides_expectations_at_load():
    s = ScenarioDefinition.model_validate({
        "name": "s",
        "expectations": {"!body": None, "$.id": [1, 2], "ETag:": "x"},
    })
    assert s.expectations == {"!body": NoConstraint(), "$.id": AnyOf((1, 2)), "ETag:": Scalar("x")}
    assert s.enabled is True
    assert s.placeholders == {}


def test_scenario_placeholders_are_strings():
    s = ScenarioDefinition.model_validate({"name": "s", "placeholders": {"id": 5}})
    assert s.placeholders == {"id": "5"}


def test_scenario_rejects_non_mapping_expectations():
    with pytest.raises(ValueError):
        ScenarioDefinition.model_validate({"name": "s", "expectations": ["!body"]})


def test_load_scenarios(scenarios_file):
    scenarios = load_scenarios(scenarios_file)
    assert [s.name for s in scenarios] == ["get-user", "wrong-name", "disabled"]
    assert scenarios[0].expectations["Content-Type:"] == NoConstraint()
    assert scenarios[0].expectations["$.name"] == AnyOf(("Ada", "Grace"))
    assert scenarios[2].enabled is False


def test_load_scenarios_bare_list(tmp_path):
    f = tmp_path / "s.yaml"
    f.write_text("- name: only\n  method: '/a.md #0'\n")
    assert [s.method for s in load_scenarios(f)] == ["/a.md #0"]


def test_load_scenarios_empty_file(tmp_path):
    f = tmp_path / "s.yaml"
    f.write_text("")
    assert load_scenarios(f) == []


@pytest.mark.parametrize("content", [
    "scenarios: [unclosed\n",
    "scenarios: 5\n",
    "scenarios:\n  - method: no-name\n",
])
def test_load_scenarios_invalid(tmp_path, content):
    f = tmp_path / "s.yaml"
    f.write_text(content)
    with pytest.raises(ValueError, match="Invalid s.yaml"):
        load_scenarios(f)
