"""Evidence aggregation — probe results to a scoring tally.

A pure fold over the probe batch.  The rules that keep the score
honest:

- An indeterminate probe adds nothing to either the achieved or the
  maximum score, so an environment that blocks many APIs looks
  neither more nor less private through absence of signal.
- A negative probe adds its weight to the maximum only.
- Probes in the same correlation group observe one behaviour and
  are scored as one signal.
- Results with no weight entry for the active profile are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.detection import weights
from src.models import classification, probes
from src.utils import logger

log = logger.create_logger("Aggregator")


class _Signal:
    """One scorable unit: a single probe or a collapsed group."""

    __slots__ = ("attempted", "positive")

    def __init__(self) -> None:
        self.attempted: list[tuple[probes.WeightEntry, probes.ProbeResult]] = []
        self.positive: list[tuple[probes.WeightEntry, probes.ProbeResult]] = []

    def add(self, entry: probes.WeightEntry, result: probes.ProbeResult) -> None:
        if not result.is_attempted:
            return
        self.attempted.append((entry, result))
        if result.is_positive:
            self.positive.append((entry, result))


def _collect_signals(
    applicable: dict[str, probes.WeightEntry],
    probe_results: Iterable[probes.ProbeResult],
) -> list[_Signal]:
    """Group weighted results into signals, preserving first-seen order."""
    signals: dict[str, _Signal] = {}
    seen: set[str] = set()

    for result in probe_results:
        entry = applicable.get(result.probe_id)
        if entry is None:
            log.debug("No weight entry for probe, excluded", {"probe": result.probe_id})
            continue
        if result.probe_id in seen:
            log.debug("Duplicate probe result ignored", {"probe": result.probe_id})
            continue
        seen.add(result.probe_id)

        key = f"group:{entry.group}" if entry.group else f"probe:{entry.probe_id}"
        signals.setdefault(key, _Signal()).add(entry, result)

    return list(signals.values())


def _fold(tally: classification.Tally, signal: _Signal) -> None:
    """Apply one signal to the running tally."""
    if not signal.attempted:
        return

    if any(entry.tier == "HIGH" for entry, _ in signal.attempted):
        tally.high_tier_attempts += 1

    if signal.positive:
        entry, result = max(signal.positive, key=lambda pair: pair[0].weight)
        tally.achieved_score += entry.weight
        tally.max_score += entry.weight
        tally.triggered_findings.append(result.evidence or entry.probe_id)
        if entry.tier == "HIGH":
            tally.high_tier_hits += 1
        return

    tally.max_score += max(entry.weight for entry, _ in signal.attempted)


def aggregate(
    engine_profile: probes.EngineProfile,
    probe_results: Iterable[probes.ProbeResult],
    table: weights.WeightTable | None = None,
) -> classification.Tally:
    """Fold a settled probe batch into a :class:`Tally`.

    Args:
        engine_profile: The run's engine profile; selects which
            weight entries apply (plus the engine-agnostic list).
        probe_results: Every result from the batch, in any order.
        table: Weight table to score against; defaults to the
            bundled table.

    Returns:
        The completed tally.
    """
    applicable = (table or weights.get_weight_table()).entries_for(engine_profile)
    tally = classification.Tally()

    for signal in _collect_signals(applicable, probe_results):
        _fold(tally, signal)

    log.info(
        "Evidence aggregated",
        {
            "engine": engine_profile,
            "achieved": tally.achieved_score,
            "max": tally.max_score,
            "highTier": f"{tally.high_tier_hits}/{tally.high_tier_attempts}",
            "findings": len(tally.triggered_findings),
        },
    )
    return tally
