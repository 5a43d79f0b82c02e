"""Catalog resolution shared by the CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from cryptoconf.catalog.builtin import builtin_tables
from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.catalog.loader import CatalogLoader
from cryptoconf.catalog.rules import RuleSet
from cryptoconf.config import get_config
from cryptoconf.errors import CatalogError

logger = logging.getLogger(__name__)

CATALOG_ERROR_EXIT = 3


def load_tables(catalog_file: Optional[Path]) -> tuple[CapabilityCatalog, RuleSet]:
    """Catalog from ``--catalog``, then ``CRYPTOCONF_CATALOG_FILE``, then built-in.

    Any failure to build the catalog ends the process with exit code 3.
    """
    path = catalog_file or get_config().get_catalog_path()
    try:
        if path is None:
            return builtin_tables()
        logger.debug("Loading catalog from %s", path)
        return CatalogLoader().load_tables(path)
    except (CatalogError, ValidationError, FileNotFoundError) as exc:
        click.echo(f"Error: cannot build capability catalog: {exc}", err=True)
        raise SystemExit(CATALOG_ERROR_EXIT)
