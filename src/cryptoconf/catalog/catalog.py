"""
Capability catalog: the static table of every configurable capability.

The catalog is built once and is read-only afterwards, so a single
instance can be shared by any number of concurrent validations.
Construction is where corrupt tables are caught: a duplicate identifier
or a parameter/hook with a missing owner raises ``CatalogError``, which
must stop the process before any validation happens.

Usage::

    from cryptoconf.catalog.catalog import CapabilityCatalog
    from cryptoconf.catalog.schema import Capability

    catalog = CapabilityCatalog([
        Capability(name="AES_C", default=True),
        Capability(name="AES_ALT", kind="alt_hook", owner="AES_C"),
    ])
    catalog.lookup("AES_C")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from cryptoconf.catalog.schema import Capability
from cryptoconf.errors import CatalogError, UnknownCapabilityError
from cryptoconf.snapshot.schema import CapabilityState, Snapshot
from cryptoconf.types import CapabilityKind

logger = logging.getLogger(__name__)


class CapabilityCatalog:
    """Immutable, ordered collection of ``Capability`` definitions.

    Args:
        capabilities: Capabilities in declaration order.  That order is
            used for every deterministic iteration downstream.
        catalog_id: Name of the toolkit this catalog describes.

    Raises:
        CatalogError: On duplicate identifiers, bad owners or defaults
            whose type does not match the capability kind.
    """

    def __init__(
        self,
        capabilities: Iterable[Capability],
        *,
        catalog_id: str = "custom",
    ) -> None:
        caps = tuple(capabilities)
        positions: dict[str, int] = {}
        for pos, cap in enumerate(caps):
            if cap.name in positions:
                raise CatalogError(
                    f"Duplicate capability identifier {cap.name!r} "
                    f"(declared at positions {positions[cap.name]} and {pos})"
                )
            positions[cap.name] = pos

        by_name = {cap.name: cap for cap in caps}
        owned: dict[str, list[str]] = {}
        for cap in caps:
            _check_default(cap)
            if cap.owner is not None:
                _check_owner(cap, by_name)
                owned.setdefault(cap.owner, []).append(cap.name)
            elif cap.kind != CapabilityKind.FLAG:
                raise CatalogError(
                    f"Capability {cap.name!r} of kind '{cap.kind.value}' "
                    f"must declare an owning flag"
                )

        self.catalog_id = catalog_id
        self._capabilities = caps
        self._identifiers = tuple(cap.name for cap in caps)
        self._positions = MappingProxyType(positions)
        self._by_name = MappingProxyType(by_name)
        self._owned = MappingProxyType({k: tuple(v) for k, v in owned.items()})

        logger.debug(
            "Built capability catalog %s: %d capabilities (%d flags, "
            "%d parameters, %d hooks)",
            catalog_id,
            len(caps),
            sum(1 for c in caps if c.kind == CapabilityKind.FLAG),
            sum(1 for c in caps if c.kind == CapabilityKind.PARAMETER),
            sum(1 for c in caps if c.kind == CapabilityKind.ALT_HOOK),
        )

    # -- lookup -------------------------------------------------------------

    def lookup(self, name: str) -> Capability:
        """Return the capability called *name*.

        Raises:
            UnknownCapabilityError: If no such capability exists.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownCapabilityError(name) from None

    def all_identifiers(self) -> tuple[str, ...]:
        """All identifiers in declaration order."""
        return self._identifiers

    def index_of(self, name: str) -> int:
        """Declaration position of *name*."""
        try:
            return self._positions[name]
        except KeyError:
            raise UnknownCapabilityError(name) from None

    def owned_by(self, flag: str) -> tuple[str, ...]:
        """Parameters, hooks and sub-flags owned by *flag*."""
        return self._owned.get(flag, ())

    def default_snapshot(self) -> Snapshot:
        """Every capability at its declared default."""
        return Snapshot(
            states={cap.name: default_state(cap) for cap in self._capabilities}
        )

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Capability]:
        return iter(self._capabilities)

    def __len__(self) -> int:
        return len(self._capabilities)

    def __repr__(self) -> str:
        return f"CapabilityCatalog({self.catalog_id!r}, {len(self)} capabilities)"


def default_state(cap: Capability) -> CapabilityState:
    """Catalog-default state for *cap*.

    A parameter's override is not defined by default, so it starts
    disabled and carries its declared default value.
    """
    if cap.kind == CapabilityKind.PARAMETER:
        return CapabilityState(enabled=False, value=cap.default)
    return CapabilityState(enabled=bool(cap.default))


def _check_default(cap: Capability) -> None:
    if cap.kind == CapabilityKind.PARAMETER:
        if isinstance(cap.default, bool):
            raise CatalogError(
                f"Parameter {cap.name!r} needs an integer default, "
                f"got {cap.default!r}"
            )
    elif not isinstance(cap.default, bool):
        raise CatalogError(
            f"{cap.kind.value} {cap.name!r} needs a boolean default, "
            f"got {cap.default!r}"
        )


def _check_owner(cap: Capability, by_name: dict[str, Capability]) -> None:
    owner = by_name.get(cap.owner or "")
    if owner is None:
        raise CatalogError(
            f"Capability {cap.name!r} references non-existent owner {cap.owner!r}"
        )
    if owner.name == cap.name:
        raise CatalogError(f"Capability {cap.name!r} cannot own itself")
    if owner.kind != CapabilityKind.FLAG:
        raise CatalogError(
            f"Owner {owner.name!r} of {cap.name!r} must be a flag, "
            f"not '{owner.kind.value}'"
        )
