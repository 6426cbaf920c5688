"""Tests for src.detection.report — report assembly."""

from __future__ import annotations

import pytest

from src.detection import report
from src.models import classification, probes, suggestions


def _verdict(
    findings: list[str] | None = None,
    confidence: classification.ConfidenceTier = "HIGH",
) -> classification.ClassificationResult:
    return classification.ClassificationResult(
        normalized_score=72,
        confidence=confidence,
        status_label=classification.STATUS_PRIVATE,
        findings=findings or [],
        high_tier_hits=2,
        high_tier_attempts=3,
    )


_SUGGESTION = suggestions.Suggestion(action="Do it", description="d", impact="LOW", reason="r")


class TestAssemble:
    def test_carries_verdict(self) -> None:
        result = report.assemble(_verdict(), [_SUGGESTION], [], engine_profile="gecko", browser_name="Firefox")
        assert result.status_label == classification.STATUS_PRIVATE
        assert result.normalized_score == 72
        assert result.confidence_tier == "HIGH"
        assert result.engine_profile == "gecko"
        assert result.browser_name == "Firefox"
        assert result.suggestions == [_SUGGESTION]
        assert result.strong_indicators == "2/3"

    def test_findings_deduplicated_in_order(self) -> None:
        result = report.assemble(_verdict(["b", "a", "b", "c", "a"]), [], [])
        assert result.findings == ["b", "a", "c"]

    def test_display_limit_and_overflow(self) -> None:
        findings = [f"f{i}" for i in range(8)]
        result = report.assemble(_verdict(findings), [], [], display_limit=5)
        assert result.display_findings == findings[:5]
        assert result.additional_findings_count == 3

    def test_no_overflow_under_limit(self) -> None:
        result = report.assemble(_verdict(["a", "b"]), [], [])
        assert result.display_findings == ["a", "b"]
        assert result.additional_findings_count == 0

    @pytest.mark.parametrize(
        ("confidence", "tentative"),
        [("NONE", True), ("LOW", True), ("MEDIUM", False), ("HIGH", False)],
    )
    def test_tentative(self, confidence: classification.ConfidenceTier, tentative: bool) -> None:
        assert report.assemble(_verdict(confidence=confidence), [], []).is_tentative is tentative

    def test_evidence_strips_diagnostics(self) -> None:
        results = [
            probes.ProbeResult(
                probe_id="quotaHeapRatio",
                outcome="positive",
                evidence="Low quota",
                method="webkitTemporaryStorage",
                aux_value=120,
                duration_ms=4.2,
            )
        ]
        evidence = report.assemble(_verdict(), [], results).evidence
        assert evidence[0].model_dump() == {
            "probe_id": "quotaHeapRatio",
            "outcome": "positive",
            "evidence": "Low quota",
        }

    def test_serializes_camel_case(self) -> None:
        data = report.assemble(_verdict(["a"]), [], []).model_dump(by_alias=True)
        assert "statusLabel" in data
        assert "additionalFindingsCount" in data
        assert "confidenceTier" in data
