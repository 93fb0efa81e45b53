"""
specval: a validation engine for identity-bearing value containers.

Containers hold one raw value checked against a declarative Specification;
entities group containers and report every failing field at once. Failures
form a tree of ValidationIssue exceptions with mergeable human-readable
reports.
"""

from specval.containers import Entity, OptionalContainer, ValueContainer
from specval.engine import Validatable, ValidationEngine, configure, get_engine
from specval.errors import (
    ConditionUnsatisfied,
    ConfigError,
    EntityInvalid,
    MandatoryValueMissing,
    NestedValidationFailed,
    SpecificationError,
    SpecvalError,
    ValidationIssue,
    ValueInvalid,
    as_entity_issue,
)
from specval.schemas.conditions import Condition, condition
from specval.schemas.results import SUCCESS, InstanceReference, Report, Success
from specval.schemas.specification import Specification

__version__ = "0.1.0"

__all__ = [
    "SUCCESS",
    "Condition",
    "ConditionUnsatisfied",
    "ConfigError",
    "Entity",
    "EntityInvalid",
    "InstanceReference",
    "MandatoryValueMissing",
    "NestedValidationFailed",
    "OptionalContainer",
    "Report",
    "Specification",
    "SpecificationError",
    "SpecvalError",
    "Success",
    "Validatable",
    "ValidationEngine",
    "ValidationIssue",
    "ValueContainer",
    "ValueInvalid",
    "as_entity_issue",
    "condition",
    "configure",
    "get_engine",
]
