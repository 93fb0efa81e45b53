# src/specval/containers/entity.py
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, ClassVar

from specval.containers.value import ValueContainer, new_identifier
from specval.engine.engine import ValidationEngine, ValidationResult, get_engine
from specval.errors import ValidationIssue
from specval.schemas.results import InstanceReference, Report


class Entity:
    """
    @brief
    Composite of several independently validated fields.

    @details
    Fields are the public instance attributes holding a ValueContainer or
    another Entity, in assignment order, unless the subclass lists them
    explicitly in `field_order`. Validation checks every field and reports
    all failing ones together as a single EntityInvalid.

    The identifier is assigned in `__new__`, so subclasses (plain classes
    or dataclasses) need not call `super().__init__()`.
    """

    display_name: ClassVar[str | None] = None
    field_order: ClassVar[Sequence[str] | None] = None
    engine: ClassVar[ValidationEngine | None] = None
    identifier_factory: ClassVar[Callable[[], str]] = staticmethod(new_identifier)

    _identifier: str

    def __new__(cls, *args: Any, **kwargs: Any) -> Entity:
        instance = super().__new__(cls)
        instance._identifier = cls.identifier_factory()
        return instance

    @property
    def identifier(self) -> str:
        return self._identifier

    @classmethod
    def kind(cls) -> str:
        return cls.display_name or cls.__name__

    @property
    def reference(self) -> InstanceReference:
        return InstanceReference(kind=self.kind(), identifier=self._identifier)

    def fields(self) -> list[tuple[str, Any]]:
        """Ordered (name, field) pairs taking part in validation."""
        names = self.field_order if self.field_order is not None else list(vars(self))
        pairs = []
        for name in names:
            if name.startswith("_"):
                continue
            item = getattr(self, name, None)
            if isinstance(item, (ValueContainer, Entity)):
                pairs.append((name, item))
        return pairs

    def check(self) -> ValidationResult:
        engine = self.engine or get_engine()
        return engine.check_fields(
            self.fields(), origin=self.reference, build_report=self.build_report
        )

    @property
    def is_valid(self) -> bool:
        return not isinstance(self.check(), ValidationIssue)

    def validate(self) -> None:
        result = self.check()
        if isinstance(result, ValidationIssue):
            raise result

    def build_report(self, field_issues: Sequence[ValidationIssue]) -> Report:
        """
        Default entity report: one line per failing field, followed by the
        field's own report message indented below it. Override to customise.

        Fields are labelled by attribute name; an issue raised by something
        other than one of this entity's fields falls back to its origin kind.
        """
        engine = self.engine or get_engine()
        names = {item.reference: name for name, item in self.fields()}
        lines = [f'"{self.kind()}" is invalid, {len(field_issues)} field(s) failed validation:']
        for issue in field_issues:
            lines.append(f"- {names.get(issue.origin, issue.origin.kind)}:")
            lines.extend(f"    {line}" for line in issue.report.message.splitlines())
        return Report(title=engine.config.default_report_title, message="\n".join(lines))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(identifier={self._identifier!r})"


__all__ = ["Entity"]
