# src/specval/errors.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from specval.schemas.results import InstanceReference, Report


class SpecvalError(Exception):
    """Base class for all structured specval exceptions."""

    def __init__(
        self, message: str, source: str | None = None, suggested_action: str | None = None
    ):
        super().__init__(message)
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.error_type = self.__class__.__name__
        self.source = source or "unknown"
        self.suggested_action = suggested_action

    def __str__(self) -> str:
        base = f"[{self.error_type}] {self.args[0]}"
        if self.source:
            base += f" (source={self.source})"
        if self.suggested_action:
            base += f" | action: {self.suggested_action}"
        return base


class ConfigError(SpecvalError):
    """Invalid or missing engine configuration (config.yaml)"""


class SpecificationError(SpecvalError):
    """Contradictory or malformed Specification declaration"""


class ReportError(SpecvalError):
    """Failure while persisting a validation report"""


class ConditionUnsatisfied(SpecvalError):
    """
    Raised by a condition predicate as an alternative to returning False.

    The engine records the owning condition as failed; it never escapes
    a check.
    """

    def __init__(self, value: Any, condition: str) -> None:
        super().__init__(f"Condition '{condition}' is not satisfied", source="condition")
        self.value = value
        self.condition = condition


# ----------------------------
# VALIDATION RESULT TAXONOMY
# ----------------------------
def _preview(value: Any, limit: int) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


class ValidationIssue(SpecvalError):
    """
    @brief
    Base class of the four structured validation failures.

    @details
    Issues are returned by ValidationEngine.check() and raised by validate().
    They are immutable once constructed. Two issues compare equal when they
    have the same variant, origin, report and variant-specific payload, so
    repeated checks of an unchanged container produce equal results.
    """

    def __init__(self, origin: InstanceReference, report: Report) -> None:
        super().__init__(report.message, source=str(origin))
        self.origin = origin
        self.report = report

    @property
    def has_nested_issues(self) -> bool:
        return False

    @property
    def nested(self) -> tuple[ValidationIssue, ...]:
        """Direct children of this node in the failure tree."""
        return ()

    def unwrap(self) -> list[ValidationIssue]:
        """Children to embed when this issue is found one level down."""
        return [self]

    def to_dict(self, preview_length: int = 80) -> dict[str, Any]:
        """JSON-ready representation of the whole failure tree."""
        return {
            "kind": self.error_type,
            "origin": self.origin.model_dump(),
            "report": self.report.model_dump(),
        }

    def _structure(self) -> tuple[Any, ...]:
        return (type(self), self.origin, self.report)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationIssue):
            return NotImplemented
        return self._structure() == other._structure()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.error_type}(origin={self.origin!s}, title={self.report.title!r})"


class MandatoryValueMissing(ValidationIssue):
    """Value required but absent."""


class ValueInvalid(ValidationIssue):
    """One or more local conditions failed on a plain value."""

    def __init__(
        self,
        origin: InstanceReference,
        value: Any,
        failed_conditions: Sequence[str],
        report: Report,
    ) -> None:
        super().__init__(origin, report)
        self.value = value
        self.failed_conditions = tuple(failed_conditions)

    def to_dict(self, preview_length: int = 80) -> dict[str, Any]:
        data = super().to_dict(preview_length)
        data["value"] = _preview(self.value, preview_length)
        data["failed_conditions"] = list(self.failed_conditions)
        return data

    def _structure(self) -> tuple[Any, ...]:
        return super()._structure() + (self.value, self.failed_conditions)


class NestedValidationFailed(ValidationIssue):
    """
    @brief
    Value is itself validatable and the check failed at some level.

    @details
    Produced when the nested value's own validation failed, or when it
    succeeded but local conditions of the container failed (then
    `nested_issues` is empty and `failed_conditions` is not).
    """

    def __init__(
        self,
        origin: InstanceReference,
        value: Any,
        failed_conditions: Sequence[str],
        nested_issues: Sequence[ValidationIssue],
        report: Report,
    ) -> None:
        super().__init__(origin, report)
        self.value = value
        self.failed_conditions = tuple(failed_conditions)
        self.nested_issues = tuple(nested_issues)

    @property
    def has_nested_issues(self) -> bool:
        return True

    @property
    def nested(self) -> tuple[ValidationIssue, ...]:
        return self.nested_issues

    def to_dict(self, preview_length: int = 80) -> dict[str, Any]:
        data = super().to_dict(preview_length)
        data["value"] = _preview(self.value, preview_length)
        data["failed_conditions"] = list(self.failed_conditions)
        data["nested_issues"] = [i.to_dict(preview_length) for i in self.nested_issues]
        return data

    def _structure(self) -> tuple[Any, ...]:
        return super()._structure() + (self.value, self.failed_conditions, self.nested_issues)


class EntityInvalid(ValidationIssue):
    """
    @brief
    Composite failure folding the field-level failures of one entity.

    @details
    `field_issues` keeps field declaration order. `field_names`, when
    known, is aligned index by index with `field_issues`.
    """

    def __init__(
        self,
        origin: InstanceReference,
        field_issues: Sequence[ValidationIssue],
        report: Report,
        field_names: Sequence[str] | None = None,
    ) -> None:
        super().__init__(origin, report)
        self.field_issues = tuple(field_issues)
        self.field_names = tuple(field_names) if field_names is not None else ()
        if self.field_names and len(self.field_names) != len(self.field_issues):
            raise ValueError("field_names must be aligned with field_issues")

    @property
    def has_nested_issues(self) -> bool:
        return True

    @property
    def nested(self) -> tuple[ValidationIssue, ...]:
        return self.field_issues

    def unwrap(self) -> list[ValidationIssue]:
        return list(self.field_issues)

    def issues_by_field(self) -> dict[str, ValidationIssue]:
        return dict(zip(self.field_names, self.field_issues))

    def to_dict(self, preview_length: int = 80) -> dict[str, Any]:
        data = super().to_dict(preview_length)
        data["field_issues"] = [i.to_dict(preview_length) for i in self.field_issues]
        if self.field_names:
            data["field_names"] = list(self.field_names)
        return data

    def _structure(self) -> tuple[Any, ...]:
        return super()._structure() + (self.field_issues, self.field_names)


def as_entity_issue(issues: Iterable[ValidationIssue], entity: Any) -> EntityInvalid:
    """
    @brief
    Fold issues collected for an entity into one EntityInvalid.

    @details
    Companion of the collecting `valid_value(collect_into=...)`: callers
    gather field issues one by one, then wrap them for the entity.
    `entity` must expose `reference` and `build_report(issues)`.
    """
    collected = list(issues)
    return EntityInvalid(
        origin=entity.reference,
        field_issues=collected,
        report=entity.build_report(collected),
    )


__all__ = [
    "SpecvalError",
    "ConfigError",
    "SpecificationError",
    "ReportError",
    "ConditionUnsatisfied",
    "ValidationIssue",
    "MandatoryValueMissing",
    "ValueInvalid",
    "NestedValidationFailed",
    "EntityInvalid",
    "as_entity_issue",
]
