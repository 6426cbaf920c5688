"""Per-engine probe weight table.

Wraps the static weights document in a read-only lookup.  The table
is shared by every concurrent run and never mutated after load, so
it needs no locking.
"""

from __future__ import annotations

import types
from collections.abc import Iterable, Mapping

from src.data import loader
from src.models import probes

_TIER_RANK: dict[probes.Tier, int] = {"LOW": 0, "MEDIUM": 1, "HIGH": 2}


class WeightTable:
    """Read-only mapping of engine profile to applicable weight entries."""

    def __init__(
        self,
        engines: Mapping[probes.EngineProfile, Iterable[probes.WeightEntry]],
        agnostic: Iterable[probes.WeightEntry] = (),
    ) -> None:
        self._engines = types.MappingProxyType({engine: tuple(entries) for engine, entries in engines.items()})
        self._agnostic = tuple(agnostic)

    @property
    def agnostic(self) -> tuple[probes.WeightEntry, ...]:
        return self._agnostic

    def engine_entries(self, profile: probes.EngineProfile) -> tuple[probes.WeightEntry, ...]:
        """Return the engine-specific entries for *profile*.

        ``unknown`` uses its own list when the table defines one,
        otherwise the union of every engine's list.
        """
        if profile in self._engines:
            return self._engines[profile]
        if profile == "unknown":
            return _union(self._engines.values())
        return ()

    def entries_for(self, profile: probes.EngineProfile) -> dict[str, probes.WeightEntry]:
        """All entries applicable to *profile*, keyed by probe id.

        Engine-specific entries come first so their order drives
        probe scheduling and finding order.
        """
        applicable: dict[str, probes.WeightEntry] = {}
        for entry in (*self.engine_entries(profile), *self._agnostic):
            applicable.setdefault(entry.probe_id, entry)
        return applicable


def _union(tables: Iterable[tuple[probes.WeightEntry, ...]]) -> tuple[probes.WeightEntry, ...]:
    """Merge engine lists, keeping the weakest weight and tier per probe."""
    merged: dict[str, probes.WeightEntry] = {}
    for entries in tables:
        for entry in entries:
            current = merged.get(entry.probe_id)
            if current is None:
                merged[entry.probe_id] = entry
                continue
            weaker_tier = min(current.tier, entry.tier, key=_TIER_RANK.__getitem__)
            merged[entry.probe_id] = current.model_copy(
                update={"weight": min(current.weight, entry.weight), "tier": weaker_tier}
            )
    return tuple(merged.values())


_default_table: WeightTable | None = None


def get_weight_table() -> WeightTable:
    """Get the default weight table built from ``weights.json``."""
    global _default_table
    if _default_table is None:
        engines, agnostic = loader.get_weight_data()
        _default_table = WeightTable(engines, agnostic)
    return _default_table
