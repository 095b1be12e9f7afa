"""Check a scenario's expectations against an observed HTTP response"""

from typing import Any

from apidocs.core.errors import Diagnostic, ValidationErrorCode, validation_error, validation_warning
from apidocs.core.http import HttpResponse
from apidocs.core.jsonpath import JsonPathError, token_equals, value_from_json_path
from apidocs.core.params import PlaceholderLocation, classify_key
from apidocs.core.scenario import AnyOf, Expectation, NoConstraint, ScenarioDefinition


UNSUPPORTED_LOCATIONS = {
    PlaceholderLocation.Invalid,
    PlaceholderLocation.StoredValue,
    PlaceholderLocation.Url,
}


def _matches(expected: Any, actual: Any, decode_text: bool) -> bool:
    """Strings compare as plain values; everything else is a JSON token."""
    if isinstance(expected, str):
        return isinstance(actual, str) and actual == expected
    return token_equals(expected, actual, decode_text=decode_text)


def _describe(expectation: Expectation) -> Any:
    if isinstance(expectation, AnyOf):
        return list(expectation.values)
    if isinstance(expectation, NoConstraint):
        return None
    return expectation.value


def expectation_satisfied(
    key: str,
    actual: Any,
    expectation: Expectation,
    detected_errors: list[Diagnostic],
    decode_text: bool = True,
    ) -> bool:
    """Return True if actual satisfies expectation; otherwise append one failure and return False.

    decode_text is False when actual is an already-decoded JSON value rather than raw text.
    """
    if actual is None and not isinstance(expectation, NoConstraint):
        detected_errors.append(validation_error(
            ValidationErrorCode.ExpectationConditionFailed, None,
            "Expectation {0}={1!r} failed. Actual value was null and a value was expected.",
            key, _describe(expectation),
        ))
        return False

    if isinstance(expectation, NoConstraint):
        return True
    if isinstance(expectation, AnyOf):
        if any(_matches(candidate, actual, decode_text) for candidate in expectation.values):
            return True
    elif _matches(expectation.value, actual, decode_text):
        return True

    detected_errors.append(validation_error(
        ValidationErrorCode.ExpectationConditionFailed, None,
        "Expectation {0} = {1!r} failed. Actual value: {2!r}",
        key, _describe(expectation), actual,
    ))
    return False


def validate_expectations(
    scenario: ScenarioDefinition,
    actual_response: HttpResponse,
    detected_errors: list[Diagnostic],
    ) -> None:
    """Append one diagnostic per unmet or unsupported expectation in scenario."""
    if scenario is None:
        raise ValueError("scenario is required")
    if actual_response is None:
        raise ValueError("actual_response is required")
    if detected_errors is None:
        raise ValueError("detected_errors is required")

    for key, expectation in scenario.expectations.items():
        location, sub_key = classify_key(key)

        if location == PlaceholderLocation.Body:
            expectation_satisfied(key, actual_response.body, expectation, detected_errors)

        elif location == PlaceholderLocation.HttpHeader:
            expectation_satisfied(key, actual_response.first(sub_key), expectation, detected_errors)

        elif location == PlaceholderLocation.Json:
            try:
                value = value_from_json_path(actual_response.body, sub_key)
            except JsonPathError as e:
                detected_errors.append(validation_error(ValidationErrorCode.JsonParserException, None, str(e)))
                continue
            expectation_satisfied(key, value, expectation, detected_errors, decode_text=False)

        elif location in UNSUPPORTED_LOCATIONS:
            detected_errors.append(validation_warning(
                ValidationErrorCode.InvalidExpectationKey, None,
                "The expectation key {0} is invalid. Supported types are Body, HttpHeader, and JsonPath.",
                key,
            ))
