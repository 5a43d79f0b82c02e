"""
Pydantic v2 models for the capability catalog and its constraint rules.

A catalog file declares every configurable capability (module flag,
alternate-implementation hook or numeric tuning parameter) together
with the rules relating them.  Rules are a tagged union discriminated
by ``kind``:

- ``requires``      subject enabled => target enabled
- ``requires_any``  subject enabled => at least one of targets enabled
- ``excludes``      subject and target never both enabled
- ``range``         owner of parameter enabled => minimum <= value <= maximum

All models are frozen and use ``extra="forbid"`` so a typo in a catalog
file fails at parse time instead of silently dropping a rule.

Usage::

    from cryptoconf.catalog.schema import CatalogDocument
    import yaml

    with open("mbedcrypto.yaml") as fh:
        raw = yaml.safe_load(fh)
    doc = CatalogDocument.model_validate(raw)
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

from cryptoconf.types import CapabilityKind

_IDENTIFIER = r"^[A-Za-z_][A-Za-z0-9_]*$"


# ---------------------------------------------------------------------------
# Capability
# ---------------------------------------------------------------------------


class Capability(BaseModel):
    """A single configurable unit.

    Flags and alternate-implementation hooks carry a boolean default;
    parameters carry an integer default.  Parameters and hooks always
    belong to an owning flag, checked when the catalog is built.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(
        ..., min_length=1, pattern=_IDENTIFIER, description="Unique identifier"
    )
    kind: CapabilityKind = Field(
        CapabilityKind.FLAG, description="flag | parameter | alt_hook"
    )
    default: Union[StrictBool, StrictInt] = Field(
        False, description="Default state (bool) or default value (int)"
    )
    owner: Optional[str] = Field(
        None, description="Owning flag (required for parameters and hooks)"
    )
    section: Optional[str] = Field(
        None, description="Grouping label, e.g. 'module' or 'alt'"
    )
    description: Optional[str] = Field(None)

    @property
    def is_parameter(self) -> bool:
        return self.kind == CapabilityKind.PARAMETER


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class _RuleBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    subject: str = Field(..., min_length=1, description="Capability the rule is about")
    note: Optional[str] = Field(
        None, description="Hint shown next to violations of this rule"
    )

    @property
    def objects(self) -> tuple[str, ...]:
        """Identifiers the rule refers to besides its subject."""
        return ()

    @property
    def identifiers(self) -> tuple[str, ...]:
        return (self.subject, *self.objects)


class Requires(_RuleBase):
    """If ``subject`` is enabled, ``target`` must be enabled."""

    kind: Literal["requires"] = "requires"
    target: str = Field(..., min_length=1)

    @property
    def objects(self) -> tuple[str, ...]:
        return (self.target,)


class RequiresAny(_RuleBase):
    """If ``subject`` is enabled, at least one of ``targets`` must be.

    All members of the group are equally acceptable.
    """

    kind: Literal["requires_any"] = "requires_any"
    targets: tuple[str, ...] = Field(..., min_length=1)

    @property
    def objects(self) -> tuple[str, ...]:
        return self.targets


class Excludes(_RuleBase):
    """``subject`` and ``target`` cannot both be enabled (symmetric)."""

    kind: Literal["excludes"] = "excludes"
    target: str = Field(..., min_length=1)

    @property
    def objects(self) -> tuple[str, ...]:
        return (self.target,)


class Range(_RuleBase):
    """Parameter ``subject`` must satisfy ``minimum <= value <= maximum``.

    Only checked while the parameter's owning flag is enabled.
    """

    kind: Literal["range"] = "range"
    minimum: StrictInt
    maximum: StrictInt


Rule = Annotated[
    Union[Requires, RequiresAny, Excludes, Range],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Top-level document
# ---------------------------------------------------------------------------


class CatalogDocument(BaseModel):
    """
    Root model for a capability catalog YAML file.

    Structural checks (duplicates, dangling references, owner kinds,
    ranges) are not done here; they happen when the document is turned
    into a ``CapabilityCatalog`` and ``RuleSet``.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(
        ..., min_length=1, description="Catalog schema version (e.g. 0.1.0)"
    )
    contract_type: Literal["capability_catalog"] = Field(
        ..., description="Must be 'capability_catalog'"
    )
    catalog_id: str = Field(
        ..., min_length=1, description="Toolkit this catalog describes"
    )
    capabilities: list[Capability] = Field(
        ..., description="Every capability, in declaration order"
    )
    rules: list[Rule] = Field(
        default_factory=list, description="Constraint rules, in declaration order"
    )
    description: Optional[str] = Field(None)
