"""
YAML catalog loader with per-path caching.

Loads a capability catalog file, validates it against ``CatalogDocument``
and builds the immutable ``CapabilityCatalog`` / ``RuleSet`` pair from it.
Schema errors surface as ``pydantic.ValidationError``; unreadable YAML and
structural errors (duplicates, dangling rule references) as ``CatalogError``.

Usage::

    from cryptoconf.catalog.loader import CatalogLoader

    catalog, rules = CatalogLoader().load_tables(Path("toolkit.catalog.yaml"))
"""

from __future__ import annotations

from pathlib import Path

from cryptoconf._loader_base import BaseYamlLoader
from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.catalog.rules import RuleSet
from cryptoconf.catalog.schema import CatalogDocument
from cryptoconf.errors import CatalogError


def build_tables(doc: CatalogDocument) -> tuple[CapabilityCatalog, RuleSet]:
    """Turn a parsed document into a catalog and its rule set.

    Raises:
        CatalogError: If the tables are structurally inconsistent.
    """
    catalog = CapabilityCatalog(doc.capabilities, catalog_id=doc.catalog_id)
    return catalog, RuleSet(catalog, doc.rules)


class CatalogLoader(BaseYamlLoader[CatalogDocument]):
    """Loads and caches capability catalog documents from YAML files."""

    _model_class = CatalogDocument
    _document_error = CatalogError

    def load_tables(self, path: Path) -> tuple[CapabilityCatalog, RuleSet]:
        """Load *path* and build the catalog and rule set from it."""
        return build_tables(self.load(path))

    def _log_loaded(self, doc: CatalogDocument, key: str) -> None:
        self._logger.debug(
            "Loaded capability catalog: id=%s, capabilities=%d, rules=%d (%s)",
            doc.catalog_id,
            len(doc.capabilities),
            len(doc.rules),
            key,
        )
