"""Tor override signal.

The Tor decision is made from the dedicated Tor probes, independently
of the general tally: a definite match forces the verdict no matter
how the other probes scored.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.models import classification, probes

TOR_HEURISTICS_PROBE = "torHeuristics"
TOR_EXIT_NODE_PROBE = "torExitNode"

# Heuristic score thresholds.
TOR_LIKELY_THRESHOLD = 50
TOR_DEFINITE_THRESHOLD = 80


def derive_tor_signal(probe_results: Iterable[probes.ProbeResult]) -> classification.TorSignal:
    """Build the Tor signal from the Tor probes in a settled batch.

    The heuristic probe reports its raw score as ``aux_value``; the
    exit-list probe is positive only when the client IP is a known
    exit node, which counts as definite on its own.
    """
    heuristic_score = 0
    indicators: list[str] = []
    exit_node_match = False

    for result in probe_results:
        if result.probe_id == TOR_HEURISTICS_PROBE and result.is_attempted:
            heuristic_score = int(result.aux_value or 0)
            if heuristic_score > 0 and result.evidence:
                indicators.append(result.evidence)
        elif result.probe_id == TOR_EXIT_NODE_PROBE and result.is_positive:
            exit_node_match = True
            indicators.append(result.evidence)

    return classification.TorSignal(
        heuristic_score=heuristic_score,
        is_likely=heuristic_score >= TOR_LIKELY_THRESHOLD or exit_node_match,
        is_definite=heuristic_score >= TOR_DEFINITE_THRESHOLD or exit_node_match,
        exit_node_match=exit_node_match,
        indicators=indicators,
    )
