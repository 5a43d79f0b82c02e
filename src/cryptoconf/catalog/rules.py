"""
Constraint rule set: relationships between catalog capabilities.

Built once against a ``CapabilityCatalog`` and read-only afterwards.
``Requires`` and ``RequiresAny`` rules form a directed dependency graph;
``Excludes`` rules form a set of unordered pairs; ``Range`` rules bound
numeric parameters.

Every identifier a rule mentions must exist in the catalog.  A dangling
reference is a bug in the rule table itself and raises ``CatalogError``
at construction, as does a parameter whose default violates its own
range.

Usage::

    from cryptoconf.catalog.rules import RuleSet
    from cryptoconf.catalog.schema import Requires

    rules = RuleSet(catalog, [Requires(subject="GCM_C", target="AES_C")])
    rules.rules_for("AES_C")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.catalog.schema import Excludes, Range, Requires, RequiresAny, Rule
from cryptoconf.errors import CatalogError
from cryptoconf.types import CapabilityKind

logger = logging.getLogger(__name__)


class RuleSet:
    """Immutable rule table bound to a catalog.

    Args:
        catalog: The catalog every rule is checked against.
        rules: Rules in declaration order.

    Raises:
        CatalogError: On dangling references, self-references, range
            rules on non-parameters, ``minimum > maximum`` or a default
            outside its own range.
    """

    def __init__(self, catalog: CapabilityCatalog, rules: Iterable[Rule]) -> None:
        self._catalog = catalog
        kept: list[Rule] = []
        exclusion_pairs: set[frozenset[str]] = set()

        for pos, rule in enumerate(rules):
            self._check_rule(rule, pos)
            if isinstance(rule, Excludes):
                pair = frozenset((rule.subject, rule.target))
                if pair in exclusion_pairs:
                    logger.debug(
                        "Dropping duplicate exclusion %s/%s at position %d",
                        rule.subject,
                        rule.target,
                        pos,
                    )
                    continue
                exclusion_pairs.add(pair)
            kept.append(rule)

        mentions: dict[str, list[Rule]] = {}
        by_subject: dict[str, list[Rule]] = {}
        for rule in kept:
            by_subject.setdefault(rule.subject, []).append(rule)
            for name in dict.fromkeys(rule.identifiers):
                mentions.setdefault(name, []).append(rule)

        self._rules = tuple(kept)
        self._mentions = MappingProxyType({k: tuple(v) for k, v in mentions.items()})
        self._by_subject = MappingProxyType(
            {k: tuple(v) for k, v in by_subject.items()}
        )
        self._exclusion_pairs = frozenset(exclusion_pairs)

        logger.debug(
            "Built rule set for %s: %d rules (%d exclusion pairs)",
            catalog.catalog_id,
            len(kept),
            len(exclusion_pairs),
        )

    @property
    def catalog(self) -> CapabilityCatalog:
        return self._catalog

    # -- queries ------------------------------------------------------------

    def rules_for(self, name: str) -> tuple[Rule, ...]:
        """Rules mentioning *name* as subject or object, in declaration order."""
        return self._mentions.get(name, ())

    def rules_with_subject(self, name: str) -> tuple[Rule, ...]:
        """Rules whose subject is *name*, in declaration order."""
        return self._by_subject.get(name, ())

    def dependencies_of(self, name: str) -> tuple[str, ...]:
        """Outgoing dependency edges of *name* (direct only)."""
        targets: dict[str, None] = {}
        for rule in self.rules_with_subject(name):
            if isinstance(rule, (Requires, RequiresAny)):
                targets.update(dict.fromkeys(rule.objects))
        return tuple(targets)

    def dependents_of(self, name: str) -> tuple[str, ...]:
        """Capabilities with a dependency edge pointing at *name*."""
        subjects: dict[str, None] = {}
        for rule in self.rules_for(name):
            if isinstance(rule, (Requires, RequiresAny)) and name in rule.objects:
                subjects[rule.subject] = None
        return tuple(subjects)

    def excludes(self, a: str, b: str) -> bool:
        return frozenset((a, b)) in self._exclusion_pairs

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    # -- construction checks -------------------------------------------------

    def _check_rule(self, rule: Rule, pos: int) -> None:
        for name in rule.identifiers:
            if name not in self._catalog:
                raise CatalogError(
                    f"Rule #{pos} ({rule.kind} on {rule.subject!r}) references "
                    f"unknown capability {name!r}"
                )
        if rule.subject in rule.objects:
            raise CatalogError(
                f"Rule #{pos} ({rule.kind}) makes {rule.subject!r} refer to itself"
            )
        if isinstance(rule, Range):
            self._check_range(rule, pos)

    def _check_range(self, rule: Range, pos: int) -> None:
        cap = self._catalog.lookup(rule.subject)
        if cap.kind != CapabilityKind.PARAMETER:
            raise CatalogError(
                f"Rule #{pos}: range rule on {cap.name!r} which is a "
                f"{cap.kind.value}, not a parameter"
            )
        if rule.minimum > rule.maximum:
            raise CatalogError(
                f"Rule #{pos}: empty range [{rule.minimum}, {rule.maximum}] "
                f"for {cap.name!r}"
            )
        if not rule.minimum <= cap.default <= rule.maximum:
            raise CatalogError(
                f"Default {cap.default} of parameter {cap.name!r} is outside "
                f"its own range [{rule.minimum}, {rule.maximum}]"
            )
