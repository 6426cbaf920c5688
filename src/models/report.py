"""Pydantic models for the report handed to the UI layer.

The report is a read-only projection: it carries the verdict, the
ranked suggestions, and a redacted per-probe evidence trail.
"""

from __future__ import annotations

import pydantic

from src.models import classification, probes
from src.models.suggestions import Suggestion
from src.utils import serialization


# ── Evidence ────────────────────────────────────────────────────

class ProbeEvidence(pydantic.BaseModel):
    """Public view of one probe result (diagnostics stripped)."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    probe_id: str
    outcome: probes.ProbeOutcome
    evidence: str


# ── Report ──────────────────────────────────────────────────────

class Report(pydantic.BaseModel):
    """Complete result of one classification run."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    status_label: str
    normalized_score: int
    confidence_tier: classification.ConfidenceTier
    findings: list[str] = pydantic.Field(default_factory=list)
    suggestions: list[Suggestion] = pydantic.Field(default_factory=list)

    is_tor: bool = False
    is_tentative: bool = True
    engine_profile: probes.EngineProfile = "unknown"
    browser_name: str = "Unknown"
    strong_indicators: str = "0/0"
    display_findings: list[str] = pydantic.Field(default_factory=list)
    additional_findings_count: int = 0
    evidence: list[ProbeEvidence] = pydantic.Field(default_factory=list)
