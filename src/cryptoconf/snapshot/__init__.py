"""
Configuration snapshots and the selection sources that feed them.

Public API::

    from cryptoconf.snapshot import (
        # Models
        CapabilityState,
        Snapshot,
        # Selection sources
        SelectionDocument,
        SelectionLoader,
        merge_selections,
        parse_define,
        parse_undefine,
        parse_value,
        selections_from_env,
        # C header
        parse_config_header,
        read_config_header,
    )
"""

from cryptoconf.snapshot.header import parse_config_header, read_config_header
from cryptoconf.snapshot.loader import (
    SelectionDocument,
    SelectionLoader,
    merge_selections,
    parse_define,
    parse_undefine,
    parse_value,
    selections_from_env,
)
from cryptoconf.snapshot.schema import CapabilityState, Snapshot

__all__ = [
    # Models
    "CapabilityState",
    "Snapshot",
    # Selection sources
    "SelectionDocument",
    "SelectionLoader",
    "merge_selections",
    "parse_define",
    "parse_undefine",
    "parse_value",
    "selections_from_env",
    # C header
    "parse_config_header",
    "read_config_header",
]
