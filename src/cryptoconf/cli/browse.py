"""
Catalog browsing commands.

Commands:
    cryptoconf list      List capabilities with kind, default and owner
    cryptoconf explain   Show one capability and every rule mentioning it
    cryptoconf defaults  Dump the default configuration as YAML or -D flags
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
import yaml

from cryptoconf.catalog.catalog import CapabilityCatalog
from cryptoconf.errors import UnknownCapabilityError
from cryptoconf.snapshot.schema import Snapshot
from cryptoconf.types import CAPABILITY_KIND_VALUES, RULE_KIND_VALUES, CapabilityKind
from cryptoconf.validation.reporter import format_rule

from ._tables import load_tables

_catalog_option = click.option(
    "--catalog",
    "catalog_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Alternative catalog YAML (default: built-in mbed-crypto catalog)",
)


def _selection_values(catalog: CapabilityCatalog, snapshot: Snapshot) -> dict:
    """Snapshot as a selection mapping that ``cryptoconf check`` accepts back."""
    values: dict = {}
    for cap in catalog:
        state = snapshot.states[cap.name]
        if cap.kind == CapabilityKind.PARAMETER and state.enabled:
            values[cap.name] = state.value
        else:
            values[cap.name] = state.enabled
    return values


@click.command("list")
@click.option(
    "--kind",
    type=click.Choice(CAPABILITY_KIND_VALUES),
    default=None,
    help="Only show capabilities of this kind",
)
@click.option("--enabled-only", is_flag=True, help="Only show capabilities enabled by default")
@_catalog_option
def list_capabilities(
    kind: Optional[str], enabled_only: bool, catalog_file: Optional[Path]
) -> None:
    """List catalog capabilities and their defaults."""
    catalog, _ = load_tables(catalog_file)
    defaults_ = catalog.default_snapshot()

    shown = 0
    for cap in catalog:
        if kind and cap.kind.value != kind:
            continue
        if enabled_only and not defaults_.is_enabled(cap.name):
            continue
        default = cap.default if cap.is_parameter else ("on" if cap.default else "off")
        owner = f"  (owner: {cap.owner})" if cap.owner else ""
        click.echo(f"{cap.name:<40} {cap.kind.value:<10} {default}{owner}")
        shown += 1

    click.echo(f"\n{shown} of {len(catalog)} capabilities ({catalog.catalog_id})")


@click.command()
@click.argument("name")
@click.option(
    "--rule-kind",
    type=click.Choice(RULE_KIND_VALUES),
    multiple=True,
    help="Only show rules of this kind (repeatable)",
)
@_catalog_option
def explain(name: str, rule_kind: tuple[str, ...], catalog_file: Optional[Path]) -> None:
    """Show a capability and every rule that mentions it."""
    catalog, rules = load_tables(catalog_file)
    try:
        cap = catalog.lookup(name)
    except UnknownCapabilityError as exc:
        raise click.BadParameter(str(exc), param_hint="'NAME'") from None

    click.echo(f"{cap.name} ({cap.kind.value})")
    click.echo(f"  default: {cap.default}")
    if cap.owner:
        click.echo(f"  owner:   {cap.owner}")
    if cap.section:
        click.echo(f"  section: {cap.section}")
    if cap.description:
        click.echo(f"  {cap.description}")

    owned = catalog.owned_by(cap.name)
    if owned:
        click.echo(f"\nOwns: {', '.join(owned)}")

    mentioned = [
        rule for rule in rules.rules_for(cap.name) if not rule_kind or rule.kind in rule_kind
    ]
    click.echo(f"\nRules ({len(mentioned)}):")
    for rule in mentioned:
        click.echo(f"  [{rule.kind}] {format_rule(rule)}")

    dependents = rules.dependents_of(cap.name)
    if dependents:
        click.echo(f"\nNeeded by: {', '.join(dependents)}")


@click.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "defines"]),
    default="yaml",
    help="yaml: a selection file; defines: one -D entry per line",
)
@click.option("--prefix", default="", help="Prefix for --format defines (e.g. MBEDCRYPTO_)")
@_catalog_option
def defaults(output_format: str, prefix: str, catalog_file: Optional[Path]) -> None:
    """Dump the catalog default configuration."""
    catalog, _ = load_tables(catalog_file)
    snapshot = catalog.default_snapshot()

    if output_format == "defines":
        for define in snapshot.as_defines(prefix):
            click.echo(define)
        return

    doc = {
        "catalog_id": catalog.catalog_id,
        "selections": _selection_values(catalog, snapshot),
    }
    click.echo(yaml.safe_dump(doc, sort_keys=False), nl=False)
