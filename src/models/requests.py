"""Pydantic models for classification API request bodies."""

from __future__ import annotations

import pydantic

from src.models.environment import ClientSignals, EnvironmentSnapshot
from src.utils import serialization


class ClassificationRequest(pydantic.BaseModel):
    """Body of ``POST /api/privacy-mode``."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    environment: EnvironmentSnapshot = pydantic.Field(default_factory=EnvironmentSnapshot)
    signals: ClientSignals = pydantic.Field(default_factory=ClientSignals)


class ReclassifyRequest(ClassificationRequest):
    """Body of ``POST /api/privacy-mode/reclassify``: the original input plus the late VPN verdict."""

    vpn_detected: bool
