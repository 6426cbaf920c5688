"""
Engine configuration.

Centralises the environment variable names and defaults for probe
timeouts, the Tor exit-list lookup, and report presentation.

Uses ``pydantic_settings.BaseSettings`` for automatic environment
variable binding, type coercion, and validation.
"""

from __future__ import annotations

import functools

import pydantic
import pydantic_settings

TOR_BULK_EXIT_LIST_URL = "https://check.torproject.org/torbulkexitlist"


class EngineSettings(pydantic_settings.BaseSettings):
    """Runtime settings for a classification run.

    Attributes:
        probe_timeout_ms: Default per-probe budget.  Probes are
            local environment checks, so this stays short.
        tor_exit_list_enabled: Whether the exit-list probe may
            reach the network at all.
        tor_exit_list_url: Source of the bulk exit-node list.
        tor_exit_list_timeout_ms: Budget for the exit-list probe,
            independent of ``probe_timeout_ms``.
        tor_exit_list_ttl_seconds: How long a fetched list is reused.
        tor_exit_list_retry_seconds: How long a failed fetch is
            remembered before the network is tried again.
        findings_display_limit: Findings shown before the overflow
            counter kicks in.
    """

    model_config = pydantic_settings.SettingsConfigDict(populate_by_name=True)

    probe_timeout_ms: int = pydantic.Field(
        default=1500, gt=0, validation_alias="PROBE_TIMEOUT_MS"
    )
    tor_exit_list_enabled: bool = pydantic.Field(
        default=True, validation_alias="TOR_EXIT_LIST_ENABLED"
    )
    tor_exit_list_url: str = pydantic.Field(
        default=TOR_BULK_EXIT_LIST_URL, validation_alias="TOR_EXIT_LIST_URL"
    )
    tor_exit_list_timeout_ms: int = pydantic.Field(
        default=10000, gt=0, validation_alias="TOR_EXIT_LIST_TIMEOUT_MS"
    )
    tor_exit_list_ttl_seconds: int = pydantic.Field(
        default=24 * 60 * 60, ge=0, validation_alias="TOR_EXIT_LIST_TTL_SECONDS"
    )
    tor_exit_list_retry_seconds: int = pydantic.Field(
        default=60, ge=0, validation_alias="TOR_EXIT_LIST_RETRY_SECONDS"
    )
    findings_display_limit: int = pydantic.Field(
        default=5, ge=1, validation_alias="FINDINGS_DISPLAY_LIMIT"
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Return the process-wide settings, read once from the environment."""
    return EngineSettings()
