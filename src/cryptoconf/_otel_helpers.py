"""
Span events under the ``cryptoconf.`` namespace.

OpenTelemetry is optional.  Without it, or without a recording span,
``record_event`` does nothing, so validation code can call it
unconditionally.

Usage::

    from cryptoconf._otel_helpers import record_event

    record_event("validation.result", {"passed": True, "checked_rules": 42})
    # -> event "cryptoconf.validation.result" with "cryptoconf.passed", ...
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

try:
    from opentelemetry import trace as otel_trace

    HAS_OTEL = True
except ImportError:  # pragma: no cover
    HAS_OTEL = False

NAMESPACE = "cryptoconf"

AttributeValue = Union[str, int, float, bool]


def namespaced(name: str) -> str:
    return f"{NAMESPACE}.{name}"


def _recording_span() -> Optional[Any]:
    if not HAS_OTEL:
        return None
    span = otel_trace.get_current_span()
    if span is None or not span.is_recording():
        return None
    return span


def record_event(event: str, attributes: Mapping[str, AttributeValue]) -> None:
    """Attach *event* to the current span with namespaced attribute keys."""
    span = _recording_span()
    if span is None:
        return
    span.add_event(
        name=namespaced(event),
        attributes={namespaced(key): value for key, value in attributes.items()},
    )
