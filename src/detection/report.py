"""Report assembler.

Projects a verdict, its suggestions, and the raw probe batch into the
public :class:`Report`.  Nothing is recomputed here and no probe
diagnostics (durations, methods, auxiliary values) leave this module.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.models import classification, probes, report, suggestions

DEFAULT_DISPLAY_LIMIT = 5


def _dedupe(findings: Iterable[str]) -> list[str]:
    """Drop repeated findings, keeping first-seen order."""
    return list(dict.fromkeys(findings))


def assemble(
    result: classification.ClassificationResult,
    suggestion_list: Sequence[suggestions.Suggestion],
    probe_results: Iterable[probes.ProbeResult],
    *,
    engine_profile: probes.EngineProfile = "unknown",
    browser_name: str = "Unknown",
    display_limit: int = DEFAULT_DISPLAY_LIMIT,
) -> report.Report:
    """Build the report handed to the UI layer.

    Args:
        result: The classifier's verdict.
        suggestion_list: Ordered suggestions for this verdict.
        probe_results: The settled probe batch.
        engine_profile: Engine profile the run was scored against.
        browser_name: Display name of the detected browser.
        display_limit: Findings shown before the overflow count.

    Returns:
        A read-only report.  The verdict is marked tentative when
        confidence is LOW or NONE.
    """
    findings = _dedupe(result.findings)
    limit = max(display_limit, 0)

    return report.Report(
        status_label=result.status_label,
        normalized_score=result.normalized_score,
        confidence_tier=result.confidence,
        findings=findings,
        suggestions=list(suggestion_list),
        is_tor=result.is_tor_override,
        is_tentative=result.confidence in ("NONE", "LOW"),
        engine_profile=engine_profile,
        browser_name=browser_name,
        strong_indicators=f"{result.high_tier_hits}/{result.high_tier_attempts}",
        display_findings=findings[:limit],
        additional_findings_count=max(len(findings) - limit, 0),
        evidence=[
            report.ProbeEvidence(probe_id=r.probe_id, outcome=r.outcome, evidence=r.evidence)
            for r in probe_results
        ],
    )
