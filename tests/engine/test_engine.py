# tests/engine/test_engine.py
from __future__ import annotations

import pytest
from samples import Email, Nickname, Title, Username

from specval import (
    SUCCESS,
    Condition,
    MandatoryValueMissing,
    Report,
    Specification,
    ValueContainer,
    ValueInvalid,
)
from specval.engine.engine import ValidationEngine, configure, get_engine
from specval.schemas.models import EngineConfig


def test_all_conditions_satisfied_returns_success() -> None:
    # --- Arrange ---
    c = Username("bob")

    # --- Act ---
    result = get_engine().check(c)

    # --- Assert ---
    assert result is SUCCESS


def test_empty_string_fails_only_non_empty_condition() -> None:
    """
    @brief
    "" violates isNonEmpty but satisfies hasMaxLength(3).
    """
    result = Username("").check()

    assert isinstance(result, ValueInvalid)
    assert result.failed_conditions == ("isNonEmpty",)
    assert result.value == ""


def test_too_long_string_fails_only_max_length_condition() -> None:
    result = Username("abcd").check()

    assert isinstance(result, ValueInvalid)
    assert result.failed_conditions == ("hasMaxLength(3)",)


def test_simultaneous_failures_are_reported_in_declaration_order() -> None:
    """
    @brief
    Both conditions fail on "" and both appear, in declared order.

    @details
    The second condition signals failure by raising ConditionUnsatisfied,
    which the engine records like a False result.
    """
    result = Title("").check()

    assert isinstance(result, ValueInvalid)
    assert result.failed_conditions == ("isNonEmpty", "startsWithUppercase")


def test_conditions_do_not_short_circuit() -> None:
    # --- Arrange ---
    calls: list[str] = []

    def recording(name: str, outcome: bool) -> Condition:
        def predicate(value):
            calls.append(name)
            return outcome

        return Condition(name, predicate)

    class Recorded(ValueContainer):
        specification = Specification(
            conditions=[recording("first", False), recording("second", True), recording("third", False)]
        )

    # --- Act ---
    result = Recorded("x").check()

    # --- Assert ---
    assert calls == ["first", "second", "third"]
    assert result.failed_conditions == ("first", "third")


def test_mandatory_missing_precedes_condition_evaluation() -> None:
    """
    @brief
    An absent mandatory value never reaches the conditions.

    @details
    Email's only condition would raise TypeError on None ("@" in None);
    the missing-value check must run first.
    """
    result = Email(None).check()

    assert isinstance(result, MandatoryValueMissing)
    assert "mandatory" in result.report.message


def test_unset_value_is_checked_by_conditions_when_not_mandatory() -> None:
    result = Username(None).check()

    assert isinstance(result, ValueInvalid)
    assert result.failed_conditions == ("isNonEmpty",)
    assert result.value is None


def test_allow_unset_skips_conditions() -> None:
    assert Nickname(None).check() is SUCCESS


def test_repeated_checks_are_structurally_identical() -> None:
    # --- Arrange ---
    c = Title("")

    # --- Act ---
    first = c.check()
    second = c.check()

    # --- Assert ---
    assert first is not second
    assert first == second
    assert first.to_dict() == second.to_dict()
    assert first.report.message == second.report.message


def test_origin_is_the_checked_container() -> None:
    c = Username("abcd")

    result = c.check()

    assert result.origin == c.reference
    assert result.origin.kind == "Username"
    assert result.origin.identifier == c.identifier


def test_unexpected_predicate_error_propagates() -> None:
    class Broken(ValueContainer):
        specification = Specification(conditions=[Condition("divides", lambda v: 1 / v)])

    with pytest.raises(ZeroDivisionError):
        Broken(0).check()


def test_default_report_lists_failed_conditions() -> None:
    result = Title("").check()

    assert result.report.title == "Validation failed"
    lines = result.report.message.splitlines()
    assert lines[0] == '"Title" does not satisfy the following conditions:'
    assert lines[1:] == ["- isNonEmpty", "- startsWithUppercase"]


def test_report_builder_overrides_default_report() -> None:
    # --- Arrange ---
    seen = {}

    def builder(value, failed, nested):
        seen.update(value=value, failed=failed, nested=nested)
        return Report(title="Custom", message=f"{len(failed)} problem(s) with {value!r}")

    class Custom(ValueContainer):
        specification = Specification(
            conditions=[Condition("isPositive", lambda v: v > 0)], report_builder=builder
        )

    # --- Act ---
    result = Custom(-1).check()

    # --- Assert ---
    assert result.report == Report(title="Custom", message="1 problem(s) with -1")
    assert seen == {"value": -1, "failed": ["isPositive"], "nested": []}


def test_engine_config_controls_default_title() -> None:
    # --- Arrange ---
    engine = ValidationEngine(EngineConfig(default_report_title="Invalid input"))

    # --- Act ---
    result = engine.check(Username(""))

    # --- Assert ---
    assert result.report.title == "Invalid input"


def test_configure_replaces_default_engine_for_containers() -> None:
    # --- Act ---
    engine = configure(EngineConfig(default_report_title="Rejected"))

    # --- Assert ---
    assert get_engine() is engine
    assert Username("").check().report.title == "Rejected"


def test_container_class_engine_takes_precedence() -> None:
    class Strict(ValueContainer):
        engine = ValidationEngine(EngineConfig(default_report_title="Strict"))
        specification = Specification(conditions=[Condition("isTrue", lambda v: v is True)])

    assert Strict(False).check().report.title == "Strict"


def test_merge_reports_keeps_parent_first() -> None:
    engine = ValidationEngine(EngineConfig(report_separator="~~~"))

    merged = engine.merge_reports(
        Report(title="Parent", message="outer"), Report(title="Child", message="inner")
    )

    assert merged.title == "Parent"
    assert merged.message == "outer\n~~~\ninner\n~~~"
