"""Tests for the constraint rule set and catalog loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.catalog.loader import CatalogLoader
from cryptoconf.catalog.rules import RuleSet
from cryptoconf.catalog.schema import (
    Capability,
    CatalogDocument,
    Excludes,
    Range,
    Requires,
    RequiresAny,
)
from cryptoconf.errors import CatalogError


# ---------------------------------------------------------------------------
# Schema tests
# ---------------------------------------------------------------------------


class TestRuleSchema:
    def test_discriminated_union(self):
        doc = CatalogDocument.model_validate(
            {
                "schema_version": "0.1.0",
                "contract_type": "capability_catalog",
                "catalog_id": "t",
                "capabilities": [{"name": "A"}, {"name": "B"}],
                "rules": [
                    {"kind": "requires", "subject": "A", "target": "B"},
                    {"kind": "requires_any", "subject": "A", "targets": ["B"]},
                    {"kind": "excludes", "subject": "A", "target": "B"},
                ],
            }
        )
        assert [type(r) for r in doc.rules] == [Requires, RequiresAny, Excludes]

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            CatalogDocument.model_validate(
                {
                    "schema_version": "0.1.0",
                    "contract_type": "capability_catalog",
                    "catalog_id": "t",
                    "capabilities": [],
                    "rules": [{"kind": "implies", "subject": "A", "target": "B"}],
                }
            )

    def test_empty_requires_any_rejected(self):
        with pytest.raises(ValidationError):
            RequiresAny(subject="A", targets=())

    def test_wrong_contract_type(self):
        with pytest.raises(ValidationError):
            CatalogDocument(
                schema_version="0.1.0",
                contract_type="wrong",
                catalog_id="t",
                capabilities=[],
            )

    def test_identifiers(self):
        rule = RequiresAny(subject="GCM_C", targets=("AES_C", "CAMELLIA_C"))
        assert rule.identifiers == ("GCM_C", "AES_C", "CAMELLIA_C")
        assert Range(subject="P", minimum=1, maximum=2).objects == ()


# ---------------------------------------------------------------------------
# Construction checks
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_unknown_target(self, toy_catalog):
        with pytest.raises(CatalogError, match="unknown capability 'CIPHER_FOO'"):
            RuleSet(toy_catalog, [Requires(subject="MODE_GCM", target="CIPHER_FOO")])

    def test_unknown_subject(self, toy_catalog):
        with pytest.raises(CatalogError, match="unknown capability 'MODE_CCM'"):
            RuleSet(toy_catalog, [Excludes(subject="MODE_CCM", target="ALT_AES")])

    def test_self_reference(self, toy_catalog):
        with pytest.raises(CatalogError, match="refer to itself"):
            RuleSet(toy_catalog, [Requires(subject="MODE_GCM", target="MODE_GCM")])

    def test_range_on_flag(self, module_catalog):
        with pytest.raises(CatalogError, match="not a parameter"):
            RuleSet(module_catalog, [Range(subject="AES_C", minimum=0, maximum=1)])

    def test_empty_range(self, module_catalog):
        with pytest.raises(CatalogError, match="empty range"):
            RuleSet(module_catalog, [Range(subject="MPI_WINDOW_SIZE", minimum=6, maximum=1)])

    def test_default_outside_own_range(self, module_catalog):
        with pytest.raises(CatalogError, match="outside its own range"):
            RuleSet(module_catalog, [Range(subject="MPI_WINDOW_SIZE", minimum=1, maximum=5)])

    def test_duplicate_exclusion_collapses(self, toy_catalog):
        rules = RuleSet(
            toy_catalog,
            [
                Excludes(subject="ALT_AES", target="CIPHER_AES"),
                Excludes(subject="CIPHER_AES", target="ALT_AES"),
            ],
        )
        assert len(rules) == 1
        assert rules.excludes("CIPHER_AES", "ALT_AES")
        assert rules.excludes("ALT_AES", "CIPHER_AES")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_rules_for_subject_and_object(self, toy_rules):
        kinds = [r.kind for r in toy_rules.rules_for("CIPHER_AES")]
        assert kinds == ["requires", "excludes"]

    def test_rules_for_unmentioned(self, module_rules):
        assert module_rules.rules_for("AES_ALT") == ()

    def test_rules_with_subject(self, toy_rules):
        assert [r.kind for r in toy_rules.rules_with_subject("ALT_AES")] == ["excludes"]
        assert toy_rules.rules_with_subject("CIPHER_AES") == ()

    def test_dependencies_and_dependents(self, module_rules):
        assert module_rules.dependencies_of("GCM_C") == ("AES_C", "CAMELLIA_C")
        assert module_rules.dependents_of("CAMELLIA_C") == ("GCM_C",)
        assert module_rules.dependents_of("GCM_C") == ()

    def test_exclusions_not_dependencies(self, toy_rules):
        assert toy_rules.dependencies_of("ALT_AES") == ()

    def test_iteration_in_declaration_order(self, toy_rules):
        assert [r.subject for r in toy_rules] == ["MODE_GCM", "ALT_AES"]
        assert toy_rules.catalog.catalog_id == "toy"


# ---------------------------------------------------------------------------
# Loader tests
# ---------------------------------------------------------------------------


class TestLoader:
    def test_load_tables_from_file(self, tmp_path: Path, toy_catalog_yaml: str):
        f = tmp_path / "toy.yaml"
        f.write_text(toy_catalog_yaml)
        catalog, rules = CatalogLoader().load_tables(f)
        assert catalog.catalog_id == "toy"
        assert len(catalog) == 3
        assert len(rules) == 2
        assert rules.catalog is catalog

    def test_caching(self, tmp_path: Path, toy_catalog_yaml: str):
        f = tmp_path / "toy.yaml"
        f.write_text(toy_catalog_yaml)
        loader = CatalogLoader()
        assert loader.load(f) is loader.load(f)

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            CatalogLoader().load(Path("/nonexistent.yaml"))

    def test_non_mapping_root(self):
        with pytest.raises(CatalogError, match="found list"):
            CatalogLoader().load_from_string("- just\n- a list\n")

    def test_structural_error_surfaces(self, tmp_path: Path):
        f = tmp_path / "bad.yaml"
        f.write_text(
            textwrap.dedent("""\
                schema_version: "0.1.0"
                contract_type: capability_catalog
                catalog_id: bad
                capabilities:
                  - name: A
                  - name: A
            """)
        )
        with pytest.raises(CatalogError):
            CatalogLoader().load_tables(f)


def test_rule_set_catalog_property():
    catalog = CapabilityCatalog([Capability(name="A"), Capability(name="B")])
    rules = RuleSet(catalog, [])
    assert rules.catalog is catalog
    assert len(rules) == 0
