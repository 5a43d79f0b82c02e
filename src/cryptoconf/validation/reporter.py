"""
Human-readable and JSON rendering of validation outcomes.

One line per violation, in the order the validator produced them, with
every identifier and numeric bound involved so the integrator can fix
each problem without opening the catalog.  Formatting never raises; an
empty list renders as ``no violations``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable

from cryptoconf.catalog.schema import Excludes, Range, Requires, RequiresAny, Rule
from cryptoconf.types import ViolationKind
from cryptoconf.validation.validator import ValidationResult
from cryptoconf.validation.violations import (
    ConflictingExclusion,
    InvalidValue,
    MissingDependency,
    OutOfRangeParameter,
    UnknownCapability,
    UnsatisfiedAny,
    Violation,
)

NO_VIOLATIONS = "no violations"


def _unknown(v: UnknownCapability) -> str:
    return f"{v.subject} is not a known capability"


def _invalid(v: InvalidValue) -> str:
    return f"{v.subject} was given {v.value}, expected {v.expected}"


def _missing(v: MissingDependency) -> str:
    return f"{v.subject} requires {v.target}, which is disabled"


def _unsatisfied(v: UnsatisfiedAny) -> str:
    return (
        f"{v.subject} requires at least one of {', '.join(v.targets)}; "
        f"none is enabled"
    )


def _conflict(v: ConflictingExclusion) -> str:
    return f"{v.subject} and {v.target} cannot both be enabled"


def _range(v: OutOfRangeParameter) -> str:
    return (
        f"{v.subject} = {v.value} is outside the allowed range "
        f"[{v.minimum}, {v.maximum}]"
    )


_FORMATTERS: dict[str, Callable[[Any], str]] = {
    ViolationKind.UNKNOWN_CAPABILITY.value: _unknown,
    ViolationKind.INVALID_VALUE.value: _invalid,
    ViolationKind.MISSING_DEPENDENCY.value: _missing,
    ViolationKind.UNSATISFIED_ANY.value: _unsatisfied,
    ViolationKind.CONFLICTING_EXCLUSION.value: _conflict,
    ViolationKind.OUT_OF_RANGE_PARAMETER.value: _range,
}


def format_violation(violation: Violation) -> str:
    """Render a single violation as one line."""
    kind = getattr(violation, "kind", type(violation).__name__)
    formatter = _FORMATTERS.get(kind)
    body = formatter(violation) if formatter else str(violation)
    note = getattr(violation, "note", None)
    if note:
        body = f"{body} ({note})"
    return f"[{kind}] {body}"


def format_violations(violations: Sequence[Violation]) -> str:
    """Render violations one per line, or ``no violations``."""
    if not violations:
        return NO_VIOLATIONS
    return "\n".join(format_violation(v) for v in violations)


def format_result(result: ValidationResult) -> str:
    """Header line plus the violation lines."""
    if result.passed:
        header = (
            f"configuration accepted ({result.enabled_count} capabilities enabled, "
            f"{result.checked_rules} rules checked)"
        )
        return f"{header}\n{NO_VIOLATIONS}"
    header = f"configuration rejected: {len(result.violations)} violation(s)"
    return f"{header}\n{format_violations(result.violations)}"


def result_to_dict(result: ValidationResult) -> dict[str, Any]:
    """JSON-able summary of *result*.

    The certificate is reduced to the enabled identifiers and ``-D``
    entries; the full snapshot is available on the result itself.
    """
    data: dict[str, Any] = {
        "passed": result.passed,
        "catalog_id": result.catalog_id,
        "checked_rules": result.checked_rules,
        "enabled_count": result.enabled_count,
        "violations": [
            {**v.model_dump(mode="json"), "message": format_violation(v)}
            for v in result.violations
        ],
    }
    if result.certificate is not None:
        data["certificate"] = {
            "enabled": result.certificate.enabled_names(),
            "defines": result.certificate.as_defines(),
        }
    return data


def format_rule(rule: Rule) -> str:
    """Render a catalog rule as one line (used by ``cryptoconf explain``)."""
    if isinstance(rule, Requires):
        body = f"{rule.subject} requires {rule.target}"
    elif isinstance(rule, RequiresAny):
        body = f"{rule.subject} requires one of {', '.join(rule.targets)}"
    elif isinstance(rule, Excludes):
        body = f"{rule.subject} excludes {rule.target}"
    elif isinstance(rule, Range):
        body = f"{rule.subject} in [{rule.minimum}, {rule.maximum}]"
    else:
        body = str(rule)
    if rule.note:
        body = f"{body} ({rule.note})"
    return body
