"""
Configuration validator: certifies a selection or lists every violation.

Given a catalog and rule set, ``ConfigValidator.validate`` takes an
integrator's explicit selection and:

1. Normalizes it.  Unknown identifiers become ``UnknownCapability`` and
   values of the wrong type become ``InvalidValue``; both are skipped
   for the remaining checks.  Every other capability falls back to its
   catalog default.
2. Checks ``Requires`` and ``RequiresAny`` rules of enabled subjects.
3. Checks each ``Excludes`` pair once.
4. Range-checks parameters whose owning flag is enabled, using the
   catalog default when no value was assigned.

Validation always runs over the full rule set and never raises on user
input.  Violations come back in a stable order: input-level problems
first (in input order), then rule violations by the catalog position of
their subject and the declaration order of the rule.

Usage::

    from cryptoconf.validation.validator import ConfigValidator

    validator = ConfigValidator.builtin()
    result = validator.validate([("GCM_C", True), ("AES_C", False)])
    if not result.passed:
        print(format_violations(result.violations))
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from cryptoconf.catalog.builtin import builtin_tables
from cryptoconf.catalog.catalog import CapabilityCatalog, default_state
from cryptoconf.catalog.rules import RuleSet
from cryptoconf.catalog.schema import Capability, Excludes, Range, Requires, RequiresAny, Rule
from cryptoconf.errors import CatalogError
from cryptoconf.snapshot.schema import CapabilityState, Snapshot
from cryptoconf.types import CapabilityKind
from cryptoconf.validation.violations import (
    ConflictingExclusion,
    InvalidValue,
    MissingDependency,
    OutOfRangeParameter,
    UnknownCapability,
    UnsatisfiedAny,
    Violation,
)

logger = logging.getLogger(__name__)

Selection = Union[Snapshot, Mapping[str, Any], Iterable[tuple[str, Any]]]

_EXPECTED = {
    CapabilityKind.FLAG: "bool",
    CapabilityKind.ALT_HOOK: "bool",
    CapabilityKind.PARAMETER: "int",
}


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class Certificate(BaseModel):
    """Proof that a configuration was accepted.

    Carries the fully normalized snapshot (explicit and defaulted
    values) for the build step that consumes it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    catalog_id: str
    snapshot: Snapshot

    def enabled_names(self) -> list[str]:
        return self.snapshot.enabled_names()

    def as_defines(self, prefix: str = "") -> list[str]:
        """Compiler ``-D`` style entries for everything enabled."""
        return self.snapshot.as_defines(prefix)


class ValidationResult(BaseModel):
    """Outcome of one ``validate`` call."""

    model_config = ConfigDict(extra="forbid")

    passed: bool
    catalog_id: str
    certificate: Optional[Certificate] = None
    violations: list[Violation] = Field(default_factory=list)
    checked_rules: int = 0
    enabled_count: int = 0

    def count_by_kind(self) -> dict[str, int]:
        return dict(Counter(v.kind for v in self.violations))


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class ConfigValidator:
    """Validates selections against a catalog and its rule set.

    Holds no per-call state, so one instance may serve concurrent
    callers.

    Args:
        catalog: The capability catalog.
        rules: Rule set built against *catalog*.

    Raises:
        CatalogError: If *rules* was built for a different catalog.
    """

    def __init__(self, catalog: CapabilityCatalog, rules: RuleSet) -> None:
        if rules.catalog is not catalog:
            raise CatalogError(
                f"Rule set was built for catalog {rules.catalog.catalog_id!r}, "
                f"not {catalog.catalog_id!r}"
            )
        self._catalog = catalog
        self._rules = rules

    @classmethod
    def builtin(cls) -> ConfigValidator:
        """Validator over the shipped mbed-crypto catalog."""
        catalog, rules = builtin_tables()
        return cls(catalog, rules)

    @property
    def catalog(self) -> CapabilityCatalog:
        return self._catalog

    @property
    def rules(self) -> RuleSet:
        return self._rules

    # -- public API ---------------------------------------------------------

    def normalize(self, selection: Selection) -> tuple[Snapshot, list[Violation]]:
        """Merge *selection* with catalog defaults.

        Returns:
            The normalized snapshot and the input-level violations
            (unknown names, wrong value types) in input order.
        """
        catalog = self._catalog
        explicit: dict[str, CapabilityState] = {}
        problems: list[Violation] = []

        for name, raw in _iter_selection(selection):
            if not isinstance(name, str) or name not in catalog:
                problems.append(UnknownCapability(subject=str(name)))
                logger.debug("Unknown capability in selection: %r", name)
                continue

            cap = catalog.lookup(name)
            state = _coerce(cap, raw)
            if state is None:
                problems.append(
                    InvalidValue(
                        subject=name, value=repr(raw), expected=_EXPECTED[cap.kind]
                    )
                )
                explicit.pop(name, None)
                continue
            explicit[name] = state

        snapshot = Snapshot(
            states={
                cap.name: explicit[cap.name] if cap.name in explicit else default_state(cap)
                for cap in catalog
            }
        )
        return snapshot, problems

    def validate(self, selection: Selection) -> ValidationResult:
        """Validate *selection* in a single pass over every rule.

        Args:
            selection: Ordered ``(identifier, value)`` pairs, a mapping,
                or an already normalized ``Snapshot``.

        Returns:
            ``ValidationResult`` carrying a ``Certificate`` when no
            violation was found.
        """
        snapshot, violations = self.normalize(selection)

        for name in self._catalog.all_identifiers():
            for rule in self._rules.rules_with_subject(name):
                violation = self._check_rule(rule, snapshot)
                if violation is not None:
                    violations.append(violation)

        passed = not violations
        enabled_count = len(snapshot.enabled_names())
        result = ValidationResult(
            passed=passed,
            catalog_id=self._catalog.catalog_id,
            certificate=(
                Certificate(catalog_id=self._catalog.catalog_id, snapshot=snapshot)
                if passed
                else None
            ),
            violations=violations,
            checked_rules=len(self._rules),
            enabled_count=enabled_count,
        )

        if passed:
            logger.debug(
                "Configuration accepted: catalog=%s enabled=%d rules=%d",
                self._catalog.catalog_id,
                enabled_count,
                len(self._rules),
            )
        else:
            logger.warning(
                "Configuration rejected: catalog=%s violations=%d %s",
                self._catalog.catalog_id,
                len(violations),
                result.count_by_kind(),
            )
        return result

    # -- internal -------------------------------------------------------------

    def _check_rule(self, rule: Rule, snapshot: Snapshot) -> Optional[Violation]:
        if isinstance(rule, Requires):
            if snapshot.is_enabled(rule.subject) and not snapshot.is_enabled(rule.target):
                return MissingDependency(
                    subject=rule.subject, target=rule.target, note=rule.note
                )
        elif isinstance(rule, RequiresAny):
            if snapshot.is_enabled(rule.subject) and not any(
                snapshot.is_enabled(t) for t in rule.targets
            ):
                return UnsatisfiedAny(
                    subject=rule.subject, targets=rule.targets, note=rule.note
                )
        elif isinstance(rule, Excludes):
            if snapshot.is_enabled(rule.subject) and snapshot.is_enabled(rule.target):
                return ConflictingExclusion(
                    subject=rule.subject, target=rule.target, note=rule.note
                )
        elif isinstance(rule, Range):
            return self._check_range(rule, snapshot)
        return None

    def _check_range(self, rule: Range, snapshot: Snapshot) -> Optional[Violation]:
        cap = self._catalog.lookup(rule.subject)
        if cap.owner is None or not snapshot.is_enabled(cap.owner):
            return None
        value = snapshot.value_of(rule.subject)
        if value is None:
            value = int(cap.default)
        if rule.minimum <= value <= rule.maximum:
            return None
        return OutOfRangeParameter(
            subject=rule.subject,
            value=value,
            minimum=rule.minimum,
            maximum=rule.maximum,
            note=rule.note,
        )


def validate(selection: Selection) -> ValidationResult:
    """Validate *selection* against the built-in catalog."""
    return ConfigValidator.builtin().validate(selection)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _iter_selection(selection: Selection) -> Iterator[tuple[Any, Any]]:
    if isinstance(selection, Snapshot):
        yield from selection.states.items()
    elif isinstance(selection, Mapping):
        yield from selection.items()
    else:
        for name, value in selection:
            yield name, value


def _coerce(cap: Capability, raw: Any) -> Optional[CapabilityState]:
    """Turn a raw selection value into a state, or ``None`` if it does not fit.

    Flags and hooks take a bool, ``0``/``1`` or ``None`` (bare define).
    Parameters take an int, ``False`` (override removed) or ``None``
    (defined without a value, i.e. the default).
    """
    if isinstance(raw, CapabilityState):
        if cap.kind == CapabilityKind.PARAMETER:
            if raw.value is None:
                return raw.model_copy(update={"value": cap.default})
            return raw
        return raw.model_copy(update={"value": None})

    if cap.kind == CapabilityKind.PARAMETER:
        if raw is None:
            return CapabilityState(enabled=True, value=cap.default, explicit=True)
        if raw is False:
            return CapabilityState(enabled=False, value=cap.default, explicit=True)
        if isinstance(raw, int) and not isinstance(raw, bool):
            return CapabilityState(enabled=True, value=raw, explicit=True)
        return None

    if raw is None:
        return CapabilityState(enabled=True, explicit=True)
    if isinstance(raw, bool):
        return CapabilityState(enabled=raw, explicit=True)
    if isinstance(raw, int) and raw in (0, 1):
        return CapabilityState(enabled=bool(raw), explicit=True)
    return None
