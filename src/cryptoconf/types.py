"""
Core enums shared by the catalog, rule set and validator.

``CAPABILITY_KIND_VALUES`` and ``RULE_KIND_VALUES`` feed the CLI
``--kind`` and ``--rule-kind`` choices.
"""

from __future__ import annotations

from enum import Enum


class CapabilityKind(str, Enum):
    """What sort of configurable unit a capability is."""

    FLAG = "flag"
    PARAMETER = "parameter"
    ALT_HOOK = "alt_hook"


class RuleKind(str, Enum):
    """Relationship kinds between capabilities."""

    REQUIRES = "requires"
    REQUIRES_ANY = "requires_any"
    EXCLUDES = "excludes"
    RANGE = "range"


class ViolationKind(str, Enum):
    """Every inconsistency the validator can report."""

    UNKNOWN_CAPABILITY = "unknown_capability"
    INVALID_VALUE = "invalid_value"
    MISSING_DEPENDENCY = "missing_dependency"
    UNSATISFIED_ANY = "unsatisfied_any"
    CONFLICTING_EXCLUSION = "conflicting_exclusion"
    OUT_OF_RANGE_PARAMETER = "out_of_range_parameter"


CAPABILITY_KIND_VALUES = [k.value for k in CapabilityKind]
RULE_KIND_VALUES = [k.value for k in RuleKind]
