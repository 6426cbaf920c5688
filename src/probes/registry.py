"""Probe registry.

Maps probe ids to factories that build a probe for one run.  The
pipeline asks for exactly the probes the weight table scores for the
run's engine profile; a weighted id with no registered factory is a
configuration gap and is skipped rather than failing the run.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from src import config
from src.models import environment, probes
from src.probes import base, extensions, observed, signals, storage, tor
from src.utils import logger

log = logger.create_logger("Probe-Registry")


@dataclass(frozen=True)
class ProbeContext:
    """Everything a probe factory may draw on for one run."""

    snapshot: environment.EnvironmentSnapshot
    signals: environment.ClientSignals
    settings: config.EngineSettings
    engine_profile: probes.EngineProfile = "unknown"

    def observation(self, probe_id: str) -> environment.ProbeObservation | None:
        return self.snapshot.observations.get(probe_id)


ProbeFactory = Callable[[ProbeContext], base.Probe]


class ProbeRegistry:
    """Ordered collection of probe factories keyed by probe id."""

    def __init__(self) -> None:
        self._factories: dict[str, ProbeFactory] = {}

    def register(self, probe_id: str, factory: ProbeFactory) -> None:
        """Add or replace the factory for *probe_id*."""
        self._factories[probe_id] = factory

    def __contains__(self, probe_id: object) -> bool:
        return probe_id in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def build(self, context: ProbeContext, probe_ids: Iterable[str] | None = None) -> list[base.Probe]:
        """Instantiate probes for one run.

        Args:
            context: The run's snapshot, signals, and settings.
            probe_ids: Ids to build, in order; every registered
                probe when omitted.  Unknown ids are skipped.

        Returns:
            Fresh probe instances, one per known id.
        """
        ids = list(self._factories) if probe_ids is None else list(dict.fromkeys(probe_ids))
        built: list[base.Probe] = []
        for probe_id in ids:
            factory = self._factories.get(probe_id)
            if factory is None:
                log.debug("No probe registered for weighted id, skipping", {"probe": probe_id})
                continue
            built.append(factory(context))
        return built


# ── Default registry ────────────────────────────────────────


def _reported(probe_id: str, evidence: str) -> ProbeFactory:
    return lambda ctx: observed.ReportedProbe(probe_id, ctx.observation(probe_id), evidence)


def _tor_exit_node(ctx: ProbeContext) -> base.Probe:
    return tor.TorExitNodeProbe(
        ctx.signals.client_ip,
        enabled=ctx.settings.tor_exit_list_enabled,
        url=ctx.settings.tor_exit_list_url,
        timeout_ms=ctx.settings.tor_exit_list_timeout_ms,
        ttl_seconds=ctx.settings.tor_exit_list_ttl_seconds,
        retry_seconds=ctx.settings.tor_exit_list_retry_seconds,
    )


@functools.lru_cache(maxsize=1)
def default_registry() -> ProbeRegistry:
    """Return the registry of every built-in probe (created once)."""
    registry = ProbeRegistry()

    registry.register("quotaHeapRatio", lambda ctx: storage.QuotaHeapRatioProbe(ctx.observation("quotaHeapRatio")))
    registry.register("storageQuota", lambda ctx: storage.StorageQuotaProbe(ctx.observation("storageQuota")))
    registry.register(
        "storageDirectory",
        lambda ctx: storage.StorageDirectoryProbe(ctx.observation("storageDirectory"), ctx.engine_profile),
    )
    for probe_id, evidence in storage.REPORTED_STORAGE_EVIDENCE.items():
        registry.register(probe_id, _reported(probe_id, evidence))
    for probe_id, evidence in extensions.REPORTED_EXTENSION_EVIDENCE.items():
        registry.register(probe_id, _reported(probe_id, evidence))

    registry.register("globalPrivacyControl", lambda ctx: signals.GlobalPrivacyControlProbe(ctx.signals))
    registry.register("doNotTrack", lambda ctx: signals.DoNotTrackProbe(ctx.signals))
    registry.register(
        "deviceMemoryHidden", lambda ctx: signals.DeviceMemoryHiddenProbe(ctx.snapshot, ctx.engine_profile)
    )

    registry.register("torHeuristics", lambda ctx: tor.TorHeuristicProbe(ctx.snapshot))
    registry.register("torExitNode", _tor_exit_node)

    return registry
