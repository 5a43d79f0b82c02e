"""
Capability catalog and constraint rule set.

Public API::

    from cryptoconf.catalog import (
        # Schema models
        Capability,
        CatalogDocument,
        Excludes,
        Range,
        Requires,
        RequiresAny,
        Rule,
        # Tables
        CapabilityCatalog,
        RuleSet,
        # Loading
        CatalogLoader,
        build_tables,
        builtin_tables,
        get_catalog,
        get_rules,
    )
"""

from cryptoconf.catalog.builtin import builtin_tables, get_catalog, get_rules
from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.catalog.loader import CatalogLoader, build_tables
from cryptoconf.catalog.rules import RuleSet
from cryptoconf.catalog.schema import (
    Capability,
    CatalogDocument,
    Excludes,
    Range,
    Requires,
    RequiresAny,
    Rule,
)

__all__ = [
    # Schema
    "Capability",
    "CatalogDocument",
    "Excludes",
    "Range",
    "Requires",
    "RequiresAny",
    "Rule",
    # Tables
    "CapabilityCatalog",
    "RuleSet",
    # Loading
    "CatalogLoader",
    "build_tables",
    "builtin_tables",
    "get_catalog",
    "get_rules",
]
