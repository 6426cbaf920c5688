"""Pydantic models for the scoring tally, Tor signal, and verdict."""

from __future__ import annotations

from typing import Literal

import pydantic

from src.utils import serialization

ConfidenceTier = Literal["NONE", "LOW", "MEDIUM", "HIGH"]

STATUS_TOR = "Tor Browser Detected"
STATUS_PRIVATE = "Private / Incognito Detected"
STATUS_ENHANCED = "Privacy-Enhanced Mode"
STATUS_SOME_FEATURES = "Some Privacy Features Active"
STATUS_STANDARD = "Standard Mode"


class Tally(pydantic.BaseModel):
    """Accumulated evidence from one probe batch.

    ``max_score`` only counts probes that actually produced a
    verdict, so it can be far below the nominal table total.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    achieved_score: int = 0
    max_score: int = 0
    high_tier_hits: int = 0
    high_tier_attempts: int = 0
    triggered_findings: list[str] = pydantic.Field(default_factory=list)


class TorSignal(pydantic.BaseModel):
    """Dedicated Tor evidence, judged independently of the tally."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    heuristic_score: int = 0
    is_likely: bool = False
    is_definite: bool = False
    exit_node_match: bool = False
    indicators: list[str] = pydantic.Field(default_factory=list)


class ClassificationResult(pydantic.BaseModel):
    """Final verdict derived deterministically from a completed tally."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    normalized_score: int = pydantic.Field(ge=0, le=100)
    confidence: ConfidenceTier
    status_label: str
    is_tor_override: bool = False
    findings: list[str] = pydantic.Field(default_factory=list)
    high_tier_hits: int = 0
    high_tier_attempts: int = 0
