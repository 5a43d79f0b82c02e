"""
Exception hierarchy for cryptoconf.

Only defects in the static tables and malformed selection text raise.
Problems with an integrator's selection (unknown names, missing
dependencies, conflicts, out-of-range values) are returned as
``Violation`` data by the validator and never raised.
"""

from __future__ import annotations


class CryptoconfError(Exception):
    """Base class for all cryptoconf errors."""


class CatalogError(CryptoconfError):
    """The capability catalog or rule table is internally corrupt.

    Raised at construction time.  A process that cannot build its
    catalog must not proceed to validation.
    """


class UnknownCapabilityError(CryptoconfError, KeyError):
    """Raised by ``CapabilityCatalog.lookup`` for a name it does not know."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown capability: {self.name!r}"


class SelectionError(CryptoconfError, ValueError):
    """A selection source (YAML, ``-D`` text, environment) cannot be parsed."""
