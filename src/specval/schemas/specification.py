# src/specval/schemas/specification.py
from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from specval.errors import SpecificationError, ValidationIssue
from specval.schemas.conditions import Condition
from specval.schemas.results import Report

# (value, failed_conditions, nested_issues) -> Report
ReportBuilder = Callable[[Any, Sequence[str], Sequence[ValidationIssue]], Report]


@dataclass(frozen=True)
class Specification:
    """
    @brief
    Immutable rule set bound to one container type.

    @details
    Declared once as a class attribute of a ValueContainer subclass and
    shared read-only by every instance of that type.

    @params
        conditions : Sequence[Condition]
            Evaluated in declaration order; all of them run on every check.
        perform_nested_validation : bool
            If True and the value exposes its own `validate()`, the engine
            also validates the value itself.
        mandatory : bool
            An unset value fails with MandatoryValueMissing before any
            condition runs.
        allow_unset : bool
            An unset value is valid without running conditions.
        report_builder : ReportBuilder | None
            Override hook for the report of this container type. When None
            the default report is rendered.
    """

    conditions: Sequence[Condition] = ()
    perform_nested_validation: bool = True
    mandatory: bool = False
    allow_unset: bool = False
    report_builder: ReportBuilder | None = None

    def __post_init__(self) -> None:
        # (1) Freeze the condition list so the shared instance stays read-only
        conditions = tuple(self.conditions)
        object.__setattr__(self, "conditions", conditions)

        # (2) Reject malformed declarations at class-definition time
        for item in conditions:
            if not isinstance(item, Condition):
                raise SpecificationError(
                    f"Expected Condition, got {type(item).__name__}",
                    source="Specification.__post_init__",
                    suggested_action="Wrap predicates with Condition(...) or @condition(...).",
                )

        if self.mandatory and self.allow_unset:
            raise SpecificationError(
                "A specification cannot be both mandatory and allow unset values",
                source="Specification.__post_init__",
                suggested_action="Set only one of 'mandatory' or 'allow_unset'.",
            )

    def failed_conditions(self, value: Any) -> list[str]:
        """Descriptions of every condition rejecting `value`, in declaration order."""
        return [c.description for c in self.conditions if not c.is_satisfied(value)]

    @staticmethod
    def default_report(
        display_name: str,
        failed_conditions: Sequence[str],
        title: str = "Validation failed",
    ) -> Report:
        """
        @brief
        Render the default report of a failed check.

        @details
        Lists every failed condition on its own line. When no local
        condition failed (the failure comes from a nested value only) the
        message says so instead.
        """
        if failed_conditions:
            lines = [f'"{display_name}" does not satisfy the following conditions:']
            lines.extend(f"- {name}" for name in failed_conditions)
            message = "\n".join(lines)
        else:
            message = f'"{display_name}" contains a value that failed its own validation.'
        return Report(title=title, message=message)

    def prepare_report(
        self,
        value: Any,
        failed_conditions: Sequence[str],
        nested_issues: Sequence[ValidationIssue],
        suggested: Report,
    ) -> Report:
        """Report of this level: the override hook if set, else `suggested`."""
        if self.report_builder is None:
            return suggested
        return self.report_builder(value, list(failed_conditions), list(nested_issues))


__all__ = ["Specification", "ReportBuilder"]
