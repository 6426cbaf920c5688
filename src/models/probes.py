"""Pydantic models for probe outcomes, engine profiles, and weights."""

from __future__ import annotations

from typing import Literal

import pydantic

from src.utils import serialization

ProbeOutcome = Literal["positive", "negative", "indeterminate"]

Tier = Literal["HIGH", "MEDIUM", "LOW"]

EngineProfile = Literal["chromium", "gecko", "webkit", "unknown"]

ENGINE_PROFILES: tuple[EngineProfile, ...] = ("chromium", "gecko", "webkit", "unknown")


class ProbeResult(pydantic.BaseModel):
    """Outcome of a single probe execution.

    Immutable once produced.  ``evidence`` is always human readable:
    for a positive result it becomes a finding, for an indeterminate
    one it says why nothing could be measured.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    probe_id: str
    outcome: ProbeOutcome
    evidence: str = ""
    method: str | None = None
    aux_value: float | None = None
    duration_ms: float = 0.0

    @property
    def is_positive(self) -> bool:
        return self.outcome == "positive"

    @property
    def is_attempted(self) -> bool:
        """True when the probe produced a usable verdict."""
        return self.outcome != "indeterminate"


class WeightEntry(pydantic.BaseModel):
    """Scoring weight and reliability tier for one probe.

    Probes sharing a ``group`` observe the same underlying behaviour
    and are scored as a single signal by the aggregator.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    probe_id: str
    weight: int = pydantic.Field(ge=0)
    tier: Tier
    group: str | None = None


class BrowserInfo(pydantic.BaseModel):
    """Engine family plus the browser key and display name."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    engine: EngineProfile = "unknown"
    browser: str = "unknown"
    name: str = "Unknown"
