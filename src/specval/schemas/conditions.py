# src/specval/schemas/conditions.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from specval.errors import ConditionUnsatisfied

Predicate = Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class Condition:
    """
    @brief
    Named, pure predicate over a raw value.

    @details
    The description is what ends up in `failed_conditions` when the
    predicate rejects a value. A predicate rejects a value by returning a
    falsy result or by raising ConditionUnsatisfied; any other exception
    is a defect in the predicate and propagates to the caller.

    The `condition` name carried by a raised ConditionUnsatisfied is not
    recorded: a failure is always reported under the description of the
    Condition that owns the predicate, so one predicate shared by several
    Conditions reports each of them under its own name.
    """

    description: str
    predicate: Predicate

    def is_satisfied(self, value: Any) -> bool:
        try:
            return bool(self.predicate(value))
        except ConditionUnsatisfied:
            return False

    def __call__(self, value: Any) -> bool:
        return self.is_satisfied(value)


def condition(description: str) -> Callable[[Predicate], Condition]:
    """Decorator turning a predicate function into a Condition."""

    def wrap(func: Predicate) -> Condition:
        return Condition(description=description, predicate=func)

    return wrap


__all__ = ["Condition", "Predicate", "condition"]
