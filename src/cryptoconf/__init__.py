"""
cryptoconf - feature configuration validator for modular crypto toolkits.

A toolkit build is parameterised by a set of capability toggles (modules,
feature options, platform alternatives, numeric parameters).  cryptoconf
holds the catalog of those capabilities and the rules between them, and
certifies a proposed selection or lists every inconsistency in it before
a build is attempted.

Example usage:
    from cryptoconf import validate, format_violations

    result = validate([("GCM_C", True), ("AES_C", False), ("CAMELLIA_C", False)])
    if not result.passed:
        print(format_violations(result.violations))
    else:
        print(result.certificate.as_defines(prefix="MBEDCRYPTO_"))
"""

from cryptoconf.catalog import CapabilityCatalog, RuleSet, builtin_tables
from cryptoconf.errors import (
    CatalogError,
    CryptoconfError,
    SelectionError,
    UnknownCapabilityError,
)
from cryptoconf.snapshot import CapabilityState, Snapshot
from cryptoconf.validation import (
    Certificate,
    ConfigValidator,
    ValidationResult,
    format_result,
    format_violations,
    validate,
)

__version__ = "0.1.0"
__all__ = [
    # Tables
    "CapabilityCatalog",
    "RuleSet",
    "builtin_tables",
    # Snapshot
    "CapabilityState",
    "Snapshot",
    # Validation
    "ConfigValidator",
    "Certificate",
    "ValidationResult",
    "validate",
    "format_violations",
    "format_result",
    # Errors
    "CryptoconfError",
    "CatalogError",
    "UnknownCapabilityError",
    "SelectionError",
    "__version__",
]
