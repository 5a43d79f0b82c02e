"""
``cryptoconf check``: validate one configuration.

Selection sources are merged in a fixed order, later ones winning:

1. ``--header config.h``
2. the selection YAML file
3. ``CRYPTOCONF_SET_<NAME>=value`` environment variables
4. ``-D NAME[=VALUE]`` then ``-U NAME``

Exit codes: 0 accepted, 1 violations, 2 usage error, 3 broken catalog.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from cryptoconf.config import get_config
from cryptoconf.errors import SelectionError
from cryptoconf.snapshot.header import read_config_header
from cryptoconf.snapshot.loader import (
    SelectionLoader,
    SelectionPair,
    merge_selections,
    parse_define,
    parse_undefine,
    selections_from_env,
)
from cryptoconf.validation.otel import emit_validation_result, emit_violation
from cryptoconf.validation.reporter import format_result, result_to_dict
from cryptoconf.validation.validator import ConfigValidator

from ._tables import load_tables


def _parse_options(values: tuple[str, ...], parser, option: str) -> list[SelectionPair]:
    pairs: list[SelectionPair] = []
    for text in values:
        try:
            pairs.append(parser(text))
        except SelectionError as exc:
            raise click.BadParameter(str(exc), param_hint=option) from None
    return pairs


def _load_selection_file(path: Path) -> list[SelectionPair]:
    try:
        return SelectionLoader().load(path).pairs()
    except (ValidationError, SelectionError) as exc:
        raise click.ClickException(f"Invalid selection file {path}: {exc}") from None


@click.command()
@click.argument(
    "selection_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--header",
    "header_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read selections from an mbed-style config.h",
)
@click.option(
    "-D", "--define", "defines", multiple=True, metavar="NAME[=VALUE]",
    help="Enable a capability or set a parameter (repeatable)",
)
@click.option(
    "-U", "--undefine", "undefines", multiple=True, metavar="NAME",
    help="Disable a capability (repeatable)",
)
@click.option(
    "--catalog",
    "catalog_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Alternative catalog YAML (default: built-in mbed-crypto catalog)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Report format (default: CRYPTOCONF_REPORT_FORMAT or text)",
)
@click.option("--no-env", is_flag=True, help="Ignore CRYPTOCONF_SET_* variables")
def check(
    selection_file: Optional[Path],
    header_file: Optional[Path],
    defines: tuple[str, ...],
    undefines: tuple[str, ...],
    catalog_file: Optional[Path],
    output_format: Optional[str],
    no_env: bool,
) -> None:
    """Validate a feature configuration against the capability catalog."""
    config = get_config()
    catalog, rules = load_tables(catalog_file)

    sources: list[list[SelectionPair]] = []
    if header_file is not None:
        sources.append(read_config_header(header_file, config.header_prefix))
    if selection_file is not None:
        sources.append(_load_selection_file(selection_file))
    if not no_env:
        try:
            sources.append(selections_from_env(config.env_selection_prefix))
        except SelectionError as exc:
            raise click.ClickException(str(exc)) from None
    sources.append(_parse_options(defines, parse_define, "'-D'"))
    sources.append(_parse_options(undefines, parse_undefine, "'-U'"))

    result = ConfigValidator(catalog, rules).validate(merge_selections(*sources))

    emit_validation_result(result)
    for violation in result.violations:
        emit_violation(violation)

    if (output_format or config.report_format) == "json":
        click.echo(json.dumps(result_to_dict(result), indent=2))
    else:
        click.echo(format_result(result))

    if not result.passed:
        raise SystemExit(1)
