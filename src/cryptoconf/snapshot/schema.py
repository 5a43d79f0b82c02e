"""
Snapshot models: the normalized state of every capability for one run.

A ``Snapshot`` is built per validation call by merging an integrator's
explicit selections with catalog defaults.  It only ever contains
identifiers known to the catalog, in catalog declaration order.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CapabilityState(BaseModel):
    """State of one capability inside a snapshot.

    For parameters ``enabled`` means an override is defined (the
    ``#define`` is present) and ``value`` is the effective value: the
    override, or the catalog default once normalized.  Flags and hooks
    leave ``value`` as ``None``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool
    value: Optional[int] = None
    explicit: bool = Field(
        False, description="True when set by the integrator rather than defaulted"
    )


class Snapshot(BaseModel):
    """Ordered, normalized mapping of identifier to ``CapabilityState``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    states: dict[str, CapabilityState] = Field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.states

    def __len__(self) -> int:
        return len(self.states)

    def get(self, name: str) -> Optional[CapabilityState]:
        return self.states.get(name)

    def is_enabled(self, name: str) -> bool:
        state = self.states.get(name)
        return state is not None and state.enabled

    def value_of(self, name: str) -> Optional[int]:
        state = self.states.get(name)
        return None if state is None else state.value

    def names(self) -> list[str]:
        return list(self.states)

    def enabled_names(self) -> list[str]:
        return [name for name, state in self.states.items() if state.enabled]

    def explicit_names(self) -> list[str]:
        return [name for name, state in self.states.items() if state.explicit]

    def as_defines(self, prefix: str = "") -> list[str]:
        """Compiler ``-D`` style entries for everything enabled.

        Parameters render as ``NAME=value``, flags and hooks as ``NAME``.
        """
        defines: list[str] = []
        for name, state in self.states.items():
            if not state.enabled:
                continue
            if state.value is None:
                defines.append(f"{prefix}{name}")
            else:
                defines.append(f"{prefix}{name}={state.value}")
        return defines
