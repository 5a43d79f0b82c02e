"""
Configuration validation: validator, violations, reporter.

Public API::

    from cryptoconf.validation import (
        # Validator
        ConfigValidator,
        Certificate,
        ValidationResult,
        validate,
        # Violations
        Violation,
        UnknownCapability,
        InvalidValue,
        MissingDependency,
        UnsatisfiedAny,
        ConflictingExclusion,
        OutOfRangeParameter,
        # Reporter
        format_violation,
        format_violations,
        format_result,
        format_rule,
        result_to_dict,
        # OTel helpers
        emit_validation_result,
        emit_violation,
    )
"""

from cryptoconf.validation.otel import emit_validation_result, emit_violation
from cryptoconf.validation.reporter import (
    format_result,
    format_rule,
    format_violation,
    format_violations,
    result_to_dict,
)
from cryptoconf.validation.validator import (
    Certificate,
    ConfigValidator,
    ValidationResult,
    validate,
)
from cryptoconf.validation.violations import (
    ConflictingExclusion,
    InvalidValue,
    MissingDependency,
    OutOfRangeParameter,
    UnknownCapability,
    UnsatisfiedAny,
    Violation,
)

__all__ = [
    # Validator
    "ConfigValidator",
    "Certificate",
    "ValidationResult",
    "validate",
    # Violations
    "Violation",
    "UnknownCapability",
    "InvalidValue",
    "MissingDependency",
    "UnsatisfiedAny",
    "ConflictingExclusion",
    "OutOfRangeParameter",
    # Reporter
    "format_violation",
    "format_violations",
    "format_result",
    "format_rule",
    "result_to_dict",
    # OTel
    "emit_validation_result",
    "emit_violation",
]
