"""
Violation models: one frozen record per detected inconsistency.

Violations are pure data, a tagged union discriminated by ``kind`` so a
list of them round-trips through JSON.  Every violation names the
``subject`` capability it is filed under; the validator orders them by
that subject's catalog position.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _ViolationBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    subject: str = Field(..., description="Capability the violation is filed under")


class UnknownCapability(_ViolationBase):
    """The selection names something the catalog does not define."""

    kind: Literal["unknown_capability"] = "unknown_capability"


class InvalidValue(_ViolationBase):
    """The selected value's type does not fit the capability's kind."""

    kind: Literal["invalid_value"] = "invalid_value"
    value: str = Field(..., description="repr() of the rejected value")
    expected: str = Field(..., description="What the capability accepts")


class MissingDependency(_ViolationBase):
    kind: Literal["missing_dependency"] = "missing_dependency"
    target: str
    note: Optional[str] = None


class UnsatisfiedAny(_ViolationBase):
    kind: Literal["unsatisfied_any"] = "unsatisfied_any"
    targets: tuple[str, ...]
    note: Optional[str] = None


class ConflictingExclusion(_ViolationBase):
    kind: Literal["conflicting_exclusion"] = "conflicting_exclusion"
    target: str
    note: Optional[str] = None


class OutOfRangeParameter(_ViolationBase):
    kind: Literal["out_of_range_parameter"] = "out_of_range_parameter"
    value: int
    minimum: int
    maximum: int
    note: Optional[str] = None


Violation = Annotated[
    Union[
        UnknownCapability,
        InvalidValue,
        MissingDependency,
        UnsatisfiedAny,
        ConflictingExclusion,
        OutOfRangeParameter,
    ],
    Field(discriminator="kind"),
]
