"""
Pytest configuration and fixtures for cryptoconf tests.
"""

from __future__ import annotations

import logging
import os
import textwrap
from typing import Generator

import pytest

from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.catalog.loader import CatalogLoader
from cryptoconf.catalog.rules import RuleSet
from cryptoconf.catalog.schema import Capability, Excludes, Range, Requires, RequiresAny
from cryptoconf.config import reset_config
from cryptoconf.snapshot.loader import SelectionLoader
from cryptoconf.validation.validator import ConfigValidator


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Strip CRYPTOCONF_* variables and reset settings around each test."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("CRYPTOCONF_")}
    for key in saved:
        del os.environ[key]
    reset_config()

    yield

    for key in [k for k in os.environ if k.startswith("CRYPTOCONF_")]:
        del os.environ[key]
    os.environ.update(saved)
    reset_config()


@pytest.fixture(autouse=True)
def clear_loader_caches() -> Generator[None, None, None]:
    CatalogLoader.clear_cache()
    SelectionLoader.clear_cache()
    yield
    CatalogLoader.clear_cache()
    SelectionLoader.clear_cache()


@pytest.fixture(autouse=True)
def drop_cli_log_handlers() -> Generator[None, None, None]:
    """The CLI installs a stderr handler; don't let it outlive the runner."""
    yield
    logger = logging.getLogger("cryptoconf")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ============================================================================
# Catalog Fixtures
# ============================================================================


@pytest.fixture
def toy_catalog() -> CapabilityCatalog:
    """Three flags: CIPHER_AES (on), MODE_GCM (off), ALT_AES (off)."""
    return CapabilityCatalog(
        [
            Capability(name="CIPHER_AES", default=True),
            Capability(name="MODE_GCM", default=False),
            Capability(name="ALT_AES", default=False),
        ],
        catalog_id="toy",
    )


@pytest.fixture
def toy_rules(toy_catalog: CapabilityCatalog) -> RuleSet:
    return RuleSet(
        toy_catalog,
        [
            Requires(subject="MODE_GCM", target="CIPHER_AES"),
            Excludes(subject="ALT_AES", target="CIPHER_AES"),
        ],
    )


@pytest.fixture
def toy_validator(toy_catalog: CapabilityCatalog, toy_rules: RuleSet) -> ConfigValidator:
    return ConfigValidator(toy_catalog, toy_rules)


@pytest.fixture
def module_catalog() -> CapabilityCatalog:
    """A small catalog with every capability kind and an owned parameter."""
    return CapabilityCatalog(
        [
            Capability(name="AES_C", default=True, section="module"),
            Capability(name="CAMELLIA_C", default=True, section="module"),
            Capability(name="GCM_C", default=True, section="module"),
            Capability(name="BIGNUM_C", default=True, section="module"),
            Capability(name="AES_ALT", kind="alt_hook", owner="AES_C"),
            Capability(
                name="MPI_WINDOW_SIZE", kind="parameter", default=6, owner="BIGNUM_C"
            ),
        ],
        catalog_id="modules",
    )


@pytest.fixture
def module_rules(module_catalog: CapabilityCatalog) -> RuleSet:
    return RuleSet(
        module_catalog,
        [
            RequiresAny(subject="GCM_C", targets=("AES_C", "CAMELLIA_C")),
            Range(subject="MPI_WINDOW_SIZE", minimum=1, maximum=6),
        ],
    )


@pytest.fixture
def module_validator(
    module_catalog: CapabilityCatalog, module_rules: RuleSet
) -> ConfigValidator:
    return ConfigValidator(module_catalog, module_rules)


TOY_CATALOG_YAML = textwrap.dedent("""\
    schema_version: "0.1.0"
    contract_type: capability_catalog
    catalog_id: toy
    capabilities:
      - name: CIPHER_AES
        default: true
      - name: MODE_GCM
      - name: ALT_AES
    rules:
      - kind: requires
        subject: MODE_GCM
        target: CIPHER_AES
      - kind: excludes
        subject: ALT_AES
        target: CIPHER_AES
        note: use one AES implementation
""")


@pytest.fixture
def toy_catalog_yaml() -> str:
    return TOY_CATALOG_YAML
