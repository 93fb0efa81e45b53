# src/specval/schemas/results.py
"""
@brief
Value objects of the validation result model.

@details
Holds the non-exception parts of the result taxonomy:
    - Report: human-readable (title, message) summary of a failure
    - InstanceReference: origin of a failure (type display name + instance id)
    - Success: the single successful outcome

The four failure variants are exceptions and live in specval.errors.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


class Report(BaseModel):
    """Human-readable summary of one failure. Immutable."""

    model_config = {"extra": "forbid", "frozen": True}

    title: str
    message: str


class InstanceReference(BaseModel):
    """
    @brief
    Identifies the container or entity where a failure was detected.

    @details
    `kind` is the display name of the container/entity type,
    `identifier` the opaque token generated once per instance.
    """

    model_config = {"extra": "forbid", "frozen": True}

    kind: str
    identifier: str

    def __str__(self) -> str:
        return f"{self.kind}#{self.identifier}"


@dataclass(frozen=True, slots=True)
class Success:
    """Outcome of a check with zero failed conditions and no nested failure."""

    def __repr__(self) -> str:
        return "SUCCESS"


SUCCESS = Success()


__all__ = ["Report", "InstanceReference", "Success", "SUCCESS"]
