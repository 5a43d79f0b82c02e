"""
Selection sources: turn files, ``-D`` text and environment variables into
the ordered ``(identifier, value)`` pairs the validator consumes.

Values are kept as the integrator wrote them (bool, int or ``None``).
Whether a value fits a capability is the validator's decision and is
reported as a violation, not raised here.  Only text that cannot be
parsed at all raises ``SelectionError``.

Usage::

    from cryptoconf.snapshot.loader import SelectionLoader, merge_selections, parse_define

    pairs = merge_selections(
        SelectionLoader().load(Path("board.yaml")).pairs(),
        [parse_define("GCM_C=off"), parse_define("MPI_WINDOW_SIZE=4")],
    )
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cryptoconf._loader_base import BaseYamlLoader
from cryptoconf.errors import SelectionError

SelectionValue = Union[bool, int, None]
SelectionPair = tuple[str, Any]

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INT_SUFFIX_RE = re.compile(r"(?<=[0-9a-f])[ul]+$")
_TRUE_WORDS = {"true", "on", "yes", "enable", "enabled"}
_FALSE_WORDS = {"false", "off", "no", "disable", "disabled"}


# ---------------------------------------------------------------------------
# YAML selection files
# ---------------------------------------------------------------------------


class SelectionDocument(BaseModel):
    """Root model for a selection YAML file.

    ``selections`` is either a mapping (``{GCM_C: false}``) or a list of
    single-key mappings when the integrator wants repeated keys with
    last-one-wins semantics.
    """

    model_config = ConfigDict(extra="forbid")

    selections: Union[dict[str, Any], list[dict[str, Any]]] = Field(
        default_factory=dict
    )
    catalog_id: Optional[str] = Field(
        None, description="Catalog the selection was written for"
    )
    description: Optional[str] = Field(None)

    @field_validator("selections")
    @classmethod
    def _single_key_items(cls, v: Any) -> Any:
        if isinstance(v, list):
            for pos, item in enumerate(v):
                if len(item) != 1:
                    raise ValueError(
                        f"selection item #{pos} must have exactly one key, "
                        f"got {len(item)}"
                    )
        return v

    def pairs(self) -> list[SelectionPair]:
        """Selections as ordered pairs."""
        if isinstance(self.selections, dict):
            return list(self.selections.items())
        return [next(iter(item.items())) for item in self.selections]


class SelectionLoader(BaseYamlLoader[SelectionDocument]):
    """Loads and caches selection documents from YAML files."""

    _model_class = SelectionDocument
    _document_error = SelectionError

    def _log_loaded(self, doc: SelectionDocument, key: str) -> None:
        self._logger.debug(
            "Loaded selection file: entries=%d, catalog=%s (%s)",
            len(doc.selections),
            doc.catalog_id or "-",
            key,
        )


# ---------------------------------------------------------------------------
# Text forms (-D / -U, environment)
# ---------------------------------------------------------------------------


def parse_value(text: str) -> SelectionValue:
    """Parse a textual value: boolean words, or a (C-style) integer.

    Raises:
        SelectionError: If *text* is neither.
    """
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    try:
        return int(_INT_SUFFIX_RE.sub("", word), 0)
    except ValueError:
        raise SelectionError(f"Cannot parse selection value {text!r}") from None


def _check_name(name: str, source: str) -> str:
    name = name.strip()
    if not _NAME_RE.match(name):
        raise SelectionError(f"Invalid capability name {name!r} in {source!r}")
    return name


def parse_define(text: str) -> SelectionPair:
    """Parse ``NAME`` or ``NAME=VALUE``.  A bare name means enabled."""
    name, sep, value = text.partition("=")
    name = _check_name(name, text)
    if not sep:
        return name, True
    return name, parse_value(value)


def parse_undefine(text: str) -> SelectionPair:
    """Parse ``NAME`` from a ``-U`` option: explicitly disabled."""
    return _check_name(text, text), False


def selections_from_env(
    prefix: str,
    environ: Optional[Mapping[str, str]] = None,
) -> list[SelectionPair]:
    """Collect ``<prefix><NAME>=value`` environment variables.

    Sorted by name so the result does not depend on environment order.
    """
    env = os.environ if environ is None else environ
    pairs: list[SelectionPair] = []
    for key in sorted(env):
        if key.startswith(prefix) and len(key) > len(prefix):
            name = _check_name(key[len(prefix):], key)
            pairs.append((name, parse_value(env[key])))
    return pairs


def merge_selections(*sources: Iterable[SelectionPair]) -> list[SelectionPair]:
    """Merge selection sources; later values win, first-seen order is kept."""
    merged: dict[str, Any] = {}
    for source in sources:
        for name, value in source:
            merged[name] = value
    return list(merged.items())
