"""
OTel span event emission helpers for configuration validation.

Events go through ``cryptoconf._otel_helpers.record_event`` and are
dropped when OTel is not installed or no span is recording.

Usage::

    from cryptoconf.validation.otel import emit_validation_result, emit_violation

    emit_validation_result(result)
    for v in result.violations:
        emit_violation(v)
"""

from __future__ import annotations

import logging

from cryptoconf._otel_helpers import AttributeValue, record_event
from cryptoconf.validation.reporter import format_violation
from cryptoconf.validation.validator import ValidationResult
from cryptoconf.validation.violations import Violation

logger = logging.getLogger(__name__)

# Offending subjects attached to the result event
_SUBJECT_LIMIT = 3


def emit_validation_result(result: ValidationResult) -> None:
    """Emit a span event summarising one validation run.

    Event name: ``cryptoconf.validation.result``
    """
    attrs: dict[str, AttributeValue] = {
        "catalog_id": result.catalog_id,
        "passed": result.passed,
        "violation_count": len(result.violations),
        "checked_rules": result.checked_rules,
        "enabled_count": result.enabled_count,
    }
    for kind, count in sorted(result.count_by_kind().items()):
        attrs[f"violations.{kind}"] = count
    for i, v in enumerate(result.violations[:_SUBJECT_LIMIT]):
        attrs[f"subject.{i}"] = v.subject

    logger.debug(
        "Validation %s: catalog=%s enabled=%d violations=%d",
        "passed" if result.passed else "failed",
        result.catalog_id,
        result.enabled_count,
        len(result.violations),
    )
    record_event("validation.result", attrs)


def emit_violation(violation: Violation) -> None:
    """Emit a span event for a single violation.

    Event name: ``cryptoconf.validation.violation``
    """
    message = format_violation(violation)
    logger.info("Configuration violation: %s", message)
    record_event(
        "validation.violation",
        {"kind": violation.kind, "subject": violation.subject, "message": message},
    )
