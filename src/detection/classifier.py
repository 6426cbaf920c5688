"""Classifier — tally to verdict.

Pure and total: any valid tally yields a result, and the same tally
always yields the same result.
"""

from __future__ import annotations

from src.models import classification


def _normalize(tally: classification.Tally) -> int:
    """Map achieved/maximum score to 0–100; an empty denominator scores 0."""
    score = round(100 * tally.achieved_score / max(tally.max_score, 1))
    return max(0, min(100, score))


def _confidence(tally: classification.Tally) -> classification.ConfidenceTier:
    """Judge certainty from how many reliable probes actually triggered."""
    if tally.achieved_score == 0:
        return "NONE"
    hits = tally.high_tier_hits
    if hits >= 2 or (hits == 1 and tally.high_tier_attempts == 1):
        return "HIGH"
    if hits == 1 or len(tally.triggered_findings) >= 3:
        return "MEDIUM"
    return "LOW"


def _status(score: int) -> str:
    if score >= 60:
        return classification.STATUS_PRIVATE
    if score >= 35:
        return classification.STATUS_ENHANCED
    if score >= 15:
        return classification.STATUS_SOME_FEATURES
    return classification.STATUS_STANDARD


def classify(
    tally: classification.Tally,
    tor_signal: classification.TorSignal | None = None,
) -> classification.ClassificationResult:
    """Convert a completed tally into a :class:`ClassificationResult`.

    A definite Tor signal wins outright: the status becomes
    "Tor Browser Detected" and confidence is forced to HIGH,
    whatever the numeric score says.

    Args:
        tally: The aggregated evidence.
        tor_signal: Dedicated Tor evidence, if any was gathered.

    Returns:
        The verdict, with findings carried through unmodified.
    """
    score = _normalize(tally)
    is_tor = tor_signal is not None and tor_signal.is_definite

    return classification.ClassificationResult(
        normalized_score=score,
        confidence="HIGH" if is_tor else _confidence(tally),
        status_label=classification.STATUS_TOR if is_tor else _status(score),
        is_tor_override=is_tor,
        findings=list(tally.triggered_findings),
        high_tier_hits=tally.high_tier_hits,
        high_tier_attempts=tally.high_tier_attempts,
    )
