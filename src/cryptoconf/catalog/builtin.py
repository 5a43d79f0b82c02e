"""
Built-in mbed-crypto catalog, initialised once per process.

The catalog ships as package data (``catalog/data/mbedcrypto.yaml``) and
is parsed the first time it is requested.  ``functools.lru_cache`` makes
that a one-time initialisation: every later call returns the same
read-only ``CapabilityCatalog`` / ``RuleSet`` pair, which lives until the
process exits.  A ``CatalogError`` here means the shipped table is
corrupt and the caller must not continue.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources

from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.catalog.loader import CatalogLoader, build_tables
from cryptoconf.catalog.rules import RuleSet

BUILTIN_CATALOG_FILE = "mbedcrypto.yaml"


@lru_cache(maxsize=None)
def builtin_tables() -> tuple[CapabilityCatalog, RuleSet]:
    """Parse and build the shipped catalog (first call only)."""
    text = (
        resources.files("cryptoconf.catalog")
        .joinpath("data")
        .joinpath(BUILTIN_CATALOG_FILE)
        .read_text(encoding="utf-8")
    )
    return build_tables(CatalogLoader().load_from_string(text))


def get_catalog() -> CapabilityCatalog:
    return builtin_tables()[0]


def get_rules() -> RuleSet:
    return builtin_tables()[1]
