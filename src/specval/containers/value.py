# src/specval/containers/value.py
from __future__ import annotations

import copy
import uuid
from collections.abc import Callable
from typing import Any, ClassVar

from specval.engine.engine import ValidationEngine, ValidationResult, get_engine
from specval.errors import ValidationIssue
from specval.schemas.results import InstanceReference
from specval.schemas.specification import Specification


def new_identifier() -> str:
    return uuid.uuid4().hex


class ValueContainer:
    """
    @brief
    Identity-bearing holder of one optional raw value.

    @details
    Subclasses declare their rules once as a class attribute:

        class Username(ValueContainer):
            specification = Specification(conditions=[is_non_empty, max_len_3])

    The identifier is generated once per instance and never changes; the
    value may be reassigned freely. Validation never happens implicitly:
    construction, direct assignment and `load()` keep whatever value is
    given, `set()` assigns and then validates.

    Class attributes:
        specification : Specification shared by every instance.
        display_name  : name used in origins and reports (class name if None).
        engine        : engine override (process default if None).
        identifier_factory : zero-argument callable producing identifiers.
    """

    specification: ClassVar[Specification] = Specification()
    display_name: ClassVar[str | None] = None
    engine: ClassVar[ValidationEngine | None] = None
    identifier_factory: ClassVar[Callable[[], str]] = staticmethod(new_identifier)

    def __init__(self, value: Any = None) -> None:
        self._identifier = type(self).identifier_factory()
        self.value = value

    # ---------- Identity ----------
    @property
    def identifier(self) -> str:
        return self._identifier

    @classmethod
    def kind(cls) -> str:
        return cls.display_name or cls.__name__

    @property
    def reference(self) -> InstanceReference:
        return InstanceReference(kind=self.kind(), identifier=self._identifier)

    @classmethod
    def _engine(cls) -> ValidationEngine:
        return cls.engine or get_engine()

    # ---------- Validation ----------
    def check(self) -> ValidationResult:
        """Validate without raising: SUCCESS or a ValidationIssue."""
        return self._engine().check(self)

    @property
    def is_valid(self) -> bool:
        return not isinstance(self.check(), ValidationIssue)

    def validate(self) -> None:
        """
        @brief
        Fail-fast validation of the current value.

        @raises
            ValidationIssue
                The first structural failure found for this container.
        """
        result = self.check()
        if isinstance(result, ValidationIssue):
            raise result

    def set(self, new_value: Any) -> None:
        """
        Assign `new_value`, then validate it.

        On failure the new value stays assigned and the issue is raised.
        """
        self.value = new_value
        self.validate()

    def validate_value(self, candidate: Any) -> None:
        """
        @brief
        Probe whether `candidate` would validate, without mutating self.

        @details
        Works on a shallow copy of this container. `set` only rebinds the
        copy's `value`, so the live container keeps its value and identity,
        even transiently, and the current value never needs to be copyable.

        @raises
            ValidationIssue
                The failure `set(candidate)` would raise.
        """
        probe = copy.copy(self)
        probe.set(candidate)

    def would_be_valid_if_set(self, candidate: Any) -> bool:
        try:
            self.validate_value(candidate)
        except ValidationIssue:
            return False
        return True

    def valid_value(self, collect_into: list[ValidationIssue] | None = None) -> Any:
        """
        @brief
        Return the current value, validating it first.

        @details
        Without `collect_into` this is fail-fast: a failure is raised.
        With `collect_into` the value is returned regardless of its
        validity and any ValidationIssue is appended to the list instead.
        Foreign exceptions propagate in both modes.

        @params
            collect_into : list[ValidationIssue] | None
                Caller-owned accumulator for the collecting mode.
        """
        if collect_into is None:
            self.validate()
            return self.value

        result = self.check()
        if isinstance(result, ValidationIssue):
            collect_into.append(result)
        return self.value

    # ---------- Constructors / probes ----------
    @classmethod
    def create_validated(cls, value: Any) -> ValueContainer:
        """New container holding `value`; raises if the value is invalid."""
        container = cls()
        container.set(value)
        return container

    @classmethod
    def validate_raw(cls, value: Any) -> None:
        """Validate `value` against this type's rules on a throwaway instance."""
        cls.create_validated(value)

    # ---------- Raw value I/O ----------
    def dump(self) -> Any:
        """Raw value for serialization. Does not validate."""
        return self.value

    @classmethod
    def load(cls, raw: Any) -> ValueContainer:
        """Container built from a deserialized raw value, possibly invalid."""
        return cls(raw)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self.value!r}, identifier={self._identifier!r})"


class OptionalContainer(ValueContainer):
    """
    Container with nothing to check locally: any value, or none, is valid.

    A nested validatable value is still validated itself.
    """

    specification = Specification(allow_unset=True)


__all__ = ["ValueContainer", "OptionalContainer", "new_identifier"]
