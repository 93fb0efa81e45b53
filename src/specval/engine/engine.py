# src/specval/engine/engine.py
from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, Union, runtime_checkable

from specval.errors import (
    EntityInvalid,
    MandatoryValueMissing,
    NestedValidationFailed,
    ValidationIssue,
    ValueInvalid,
)
from specval.schemas.models import EngineConfig
from specval.schemas.results import SUCCESS, InstanceReference, Report, Success
from specval.schemas.specification import Specification

logger = logging.getLogger(__name__)

ValidationResult = Union[Success, ValidationIssue]


@runtime_checkable
class Validatable(Protocol):
    """Any value able to validate itself: returns normally or raises."""

    def validate(self) -> None: ...


def is_nested_validatable(value: Any) -> bool:
    """
    @brief
    Decide at validation time whether a value validates itself.

    @details
    The protocol check only sees that a `validate` attribute exists, so the
    method must also be callable without arguments. This excludes classes
    (a container class exposes `validate` as an unbound function) and
    objects whose `validate` means something else, such as the pydantic
    `BaseModel.validate(value)` classmethod.
    """
    if isinstance(value, type) or not isinstance(value, Validatable):
        return False
    try:
        inspect.signature(value.validate).bind()
    except (TypeError, ValueError):
        return False
    return True


# ---------------------------
# ENGINE CLASS
# ----------------------------
class ValidationEngine:
    """
    @brief
    Evaluates specifications and produces validation results.

    @details
    Stateless apart from its configuration: every call runs to completion
    and returns either SUCCESS or a ValidationIssue. Issues are returned,
    never raised, by the check methods; foreign exceptions raised by
    predicates or by nested `validate()` calls propagate unchanged.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    # ---------- Single value ----------
    def check(self, container: Any) -> ValidationResult:
        """
        @brief
        Validate one container against its type's specification.

        @params
            container : ValueContainer
                Any object exposing `specification`, `value` and `reference`.

        @returns
            SUCCESS or one of the four failure variants.
        """
        return self.check_value(container.specification, container.value, container.reference)

    def check_value(
        self, spec: Specification, value: Any, origin: InstanceReference
    ) -> ValidationResult:
        """
        @brief
        Core algorithm shared by containers and class-level probes.

        @details
        (1) An unset value is resolved first: mandatory -> missing-value
            failure, allow_unset -> success.
        (2) Every condition runs, no short-circuit.
        (3) A nested validatable value is validated itself when the
            specification asks for it, otherwise failed conditions decide.
        """
        logger.debug("Checking %s", origin)

        # (1) Missing-value rules precede condition evaluation
        if value is None:
            if spec.mandatory:
                issue = MandatoryValueMissing(origin, self._missing_report(origin))
                logger.debug("Check %s: %s", origin, issue.error_type)
                return issue
            if spec.allow_unset:
                return SUCCESS

        # (2) Collect every failed condition in declaration order
        failed = spec.failed_conditions(value)

        # (3) Either recurse into the value or judge local conditions only
        if spec.perform_nested_validation and is_nested_validatable(value):
            result = self._check_nested(spec, value, failed, origin)
        elif failed:
            result = ValueInvalid(
                origin=origin,
                value=value,
                failed_conditions=failed,
                report=spec.prepare_report(
                    value, failed, [], suggested=self._default_report(origin, failed)
                ),
            )
        else:
            result = SUCCESS

        if isinstance(result, ValidationIssue):
            logger.debug("Check %s: %s %s", origin, result.error_type, failed)
        return result

    # ---------- Composite entity ----------
    def check_fields(
        self,
        fields: Iterable[tuple[str, Any]],
        *,
        origin: InstanceReference,
        build_report: Callable[[list[ValidationIssue]], Report],
    ) -> ValidationResult:
        """
        @brief
        Validate every field of one entity and fold the failures.

        @details
        Collecting mode: each field is checked even after an earlier one
        failed. Failures keep field declaration order; successful fields
        are absent from the result.

        @params
            fields : Iterable[tuple[str, Any]]
                (field name, container or nested validatable) pairs.
            origin : InstanceReference
                Reference of the owning entity.
            build_report : Callable
                Entity report renderer receiving the collected issues.

        @returns
            SUCCESS or EntityInvalid.
        """
        names: list[str] = []
        issues: list[ValidationIssue] = []

        for name, item in fields:
            result = self._check_field(item)
            if isinstance(result, ValidationIssue):
                names.append(name)
                issues.append(result)

        if not issues:
            return SUCCESS

        logger.debug("Entity %s: %d invalid field(s) %s", origin, len(issues), names)
        return EntityInvalid(
            origin=origin,
            field_issues=issues,
            report=build_report(issues),
            field_names=names,
        )

    # ---------- Report helpers ----------
    def merge_reports(self, parent: Report, child: Report) -> Report:
        """Parent message first, then the child message, fenced by the separator."""
        sep = self.config.report_separator
        return Report(
            title=parent.title,
            message=f"{parent.message}\n{sep}\n{child.message}\n{sep}",
        )

    def _default_report(self, origin: InstanceReference, failed: Sequence[str]) -> Report:
        return Specification.default_report(
            origin.kind, failed, title=self.config.default_report_title
        )

    def _missing_report(self, origin: InstanceReference) -> Report:
        return Report(
            title=self.config.default_report_title,
            message=f'"{origin.kind}" is mandatory, but no value is set.',
        )

    # ---------- Internals ----------
    def _check_nested(
        self,
        spec: Specification,
        value: Any,
        failed: list[str],
        origin: InstanceReference,
    ) -> ValidationResult:
        try:
            value.validate()
        except ValidationIssue as issue:
            # EntityInvalid contributes its fields, anything else itself
            return self._nested_failed(spec, value, failed, issue.unwrap(), issue.report, origin)

        if not failed:
            return SUCCESS

        # Nested value is consistent, local conditions still failed
        return self._nested_failed(spec, value, failed, [], None, origin)

    def _nested_failed(
        self,
        spec: Specification,
        value: Any,
        failed: list[str],
        nested_issues: list[ValidationIssue],
        child_report: Report | None,
        origin: InstanceReference,
    ) -> NestedValidationFailed:
        report = spec.prepare_report(
            value, failed, nested_issues, suggested=self._default_report(origin, failed)
        )
        if child_report is not None:
            report = self.merge_reports(report, child_report)

        return NestedValidationFailed(
            origin=origin,
            value=value,
            failed_conditions=failed,
            nested_issues=nested_issues,
            report=report,
        )

    def _check_field(self, item: Any) -> ValidationResult:
        # Containers are checked through the engine, other validatables validate themselves
        if hasattr(item, "specification"):
            return self.check(item)
        try:
            item.validate()
        except ValidationIssue as issue:
            return issue
        return SUCCESS


# ----------------------------
# PROCESS-WIDE DEFAULT ENGINE
# ----------------------------
_default_engine = ValidationEngine()


def get_engine() -> ValidationEngine:
    """Engine used by containers and entities that do not set their own."""
    return _default_engine


def configure(config: EngineConfig) -> ValidationEngine:
    """Install a new default engine built from `config` and return it."""
    global _default_engine
    _default_engine = ValidationEngine(config)
    logger.info("Default validation engine configured")
    return _default_engine


__all__ = [
    "ValidationEngine",
    "ValidationResult",
    "Validatable",
    "is_nested_validatable",
    "get_engine",
    "configure",
]
