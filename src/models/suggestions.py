"""Pydantic models for privacy recommendations."""

from __future__ import annotations

from typing import Literal

import pydantic

from src.models import probes
from src.utils import serialization

Impact = Literal["HIGH", "MEDIUM", "LOW", "INFO"]


class SuggestionContext(pydantic.BaseModel):
    """Flat, read-only input to the suggestion rule table."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    is_tor: bool = False
    is_incognito: bool = False
    has_gpc: bool = False
    has_dnt: bool = False
    protection_score: int = 0
    has_ad_blocker: bool = False
    browser: probes.BrowserInfo = pydantic.Field(default_factory=probes.BrowserInfo)
    is_vpn_detected: bool = False

    @property
    def is_brave(self) -> bool:
        return self.browser.browser == "brave"


class Suggestion(pydantic.BaseModel):
    """A single actionable recommendation."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    action: str
    description: str
    impact: Impact
    reason: str
