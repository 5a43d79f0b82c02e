"""
Read selections out of an mbed-style C configuration header.

The header expresses a selection with preprocessor toggles:

- ``#define MBEDCRYPTO_GCM_C``            enabled
- ``#define MBEDCRYPTO_MPI_WINDOW_SIZE 4`` enabled with value 4
- ``//#define MBEDCRYPTO_THREADING_C``     explicitly disabled
- ``/* #define MBEDCRYPTO_X */``           explicitly disabled

Include guards (names ending in ``_H``) and reserved names starting with
``_`` are skipped.  The catalog prefix is stripped so header names map
onto catalog identifiers; names without the prefix pass through
unchanged and are left for the validator to judge.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from cryptoconf.snapshot.loader import SelectionPair

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "MBEDCRYPTO_"

_ACTIVE_RE = re.compile(
    r"^\s*#\s*define\s+(?P<name>[A-Za-z_]\w*)(?P<rest>.*)$"
)
_COMMENTED_RE = re.compile(
    r"^\s*(?://+|/\*+)\s*#\s*define\s+(?P<name>[A-Za-z_]\w*)"
)
_INT_RE = re.compile(r"^(?P<num>0[xX][0-9a-fA-F]+|-?\d+)[uUlL]*$")
_TRAILING_COMMENT_RE = re.compile(r"(//.*|/\*.*?(\*/|$))")


def _header_value(rest: str) -> bool | int:
    value = _TRAILING_COMMENT_RE.sub("", rest).strip()
    if not value:
        return True
    match = _INT_RE.match(value)
    if match:
        return int(match.group("num"), 0)
    # Non-numeric replacement text (a function name, a header path)
    return True


def _skip(name: str) -> bool:
    return name.startswith("_") or name.endswith("_H")


def parse_config_header(text: str, prefix: str = DEFAULT_PREFIX) -> list[SelectionPair]:
    """Extract ``(identifier, value)`` pairs from header *text*.

    Later lines override earlier ones for the same identifier; the
    position of its first appearance is kept.
    """
    selections: dict[str, bool | int] = {}
    for line in text.splitlines():
        active = _ACTIVE_RE.match(line)
        if active:
            name, value = active.group("name"), _header_value(active.group("rest"))
        else:
            commented = _COMMENTED_RE.match(line)
            if not commented:
                continue
            name, value = commented.group("name"), False

        if _skip(name):
            continue
        if prefix and name.startswith(prefix):
            name = name[len(prefix):]
        selections[name] = value

    logger.debug(
        "Parsed config header: %d selections (%d enabled)",
        len(selections),
        sum(1 for v in selections.values() if v is not False),
    )
    return list(selections.items())


def read_config_header(path: Path, prefix: str = DEFAULT_PREFIX) -> list[SelectionPair]:
    """Read and parse a header file.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config header not found: {path}")
    return parse_config_header(path.read_text(encoding="utf-8", errors="replace"), prefix)
