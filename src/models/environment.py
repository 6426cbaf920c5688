"""Pydantic models for data reported by the visiting browser.

The browser-side checks run in JavaScript and post their raw
observations here; nothing in these models is interpreted yet.
"""

from __future__ import annotations

import pydantic

from src.utils import serialization


class ProbeObservation(pydantic.BaseModel):
    """Raw output of one browser-side capability check.

    Attributes:
        supported: Whether the API under test exists at all.
        triggered: The client's own verdict, or ``None`` when it
            could not decide (the interpreting probe may still
            decide from ``value`` / ``error``).
        error: Error message thrown by the API, if any.
        error_name: Error class name (``SecurityError`` etc.).
        value: A measured number, e.g. storage quota in MB.
        limit: A reference number the value is compared with,
            e.g. the JS heap size limit in MB.
        method: Which technique produced the observation.
        reason: Client-supplied explanation for a positive verdict.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    supported: bool = True
    triggered: bool | None = None
    error: str | None = None
    error_name: str | None = None
    value: float | None = None
    limit: float | None = None
    method: str | None = None
    reason: str | None = None


class EnvironmentSnapshot(pydantic.BaseModel):
    """Environment markers and probe observations from one page visit."""

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    user_agent: str = ""
    vendor: str = ""
    to_fixed_error_length: int | None = None
    has_brave_api: bool = False
    timezone: str | None = None
    timezone_offset_minutes: int | None = None
    hardware_concurrency: int | None = None
    screen_width: int | None = None
    screen_height: int | None = None
    plugin_count: int | None = None
    languages: list[str] = pydantic.Field(default_factory=list)
    platform: str | None = None
    has_device_memory: bool | None = None
    observations: dict[str, ProbeObservation] = pydantic.Field(default_factory=dict)


class ClientSignals(pydantic.BaseModel):
    """Signals supplied by the caller rather than probed.

    ``vpn_detected`` comes from a separate network module and may
    arrive after the first report; the caller then re-runs the
    whole classification with the updated value.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    global_privacy_control: bool | None = None
    do_not_track: str | None = None
    vpn_detected: bool = False
    browser_name: str | None = None
    client_ip: str | None = None

    @property
    def has_gpc(self) -> bool:
        return self.global_privacy_control is True

    @property
    def has_dnt(self) -> bool:
        return self.do_not_track in ("1", "yes")
