"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from src import config
from src.detection import weights
from src.models import environment, probes

# ── Environment Snapshots ───────────────────────────────────────

CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
FIREFOX_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0"
SAFARI_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Safari/605.1.15"
)


@pytest.fixture()
def chrome_snapshot() -> environment.EnvironmentSnapshot:
    """A regular Chrome window on a desktop."""
    return environment.EnvironmentSnapshot(
        user_agent=CHROME_UA,
        vendor="Google Inc.",
        to_fixed_error_length=51,
        timezone="Europe/London",
        timezone_offset_minutes=-60,
        hardware_concurrency=8,
        screen_width=1920,
        screen_height=1080,
        plugin_count=5,
        languages=["en-GB", "en"],
        platform="Win32",
        has_device_memory=True,
    )


@pytest.fixture()
def chrome_incognito_snapshot(chrome_snapshot: environment.EnvironmentSnapshot) -> environment.EnvironmentSnapshot:
    """Chrome incognito: tiny quota, FileSystem API blocked."""
    return chrome_snapshot.model_copy(
        update={
            "observations": {
                "quotaHeapRatio": environment.ProbeObservation(value=120, limit=4096, method="webkitTemporaryStorage"),
                "fileSystemAPI": environment.ProbeObservation(triggered=True),
                "serviceWorker": environment.ProbeObservation(supported=False),
            }
        }
    )


@pytest.fixture()
def firefox_snapshot() -> environment.EnvironmentSnapshot:
    """A regular Firefox window."""
    return environment.EnvironmentSnapshot(
        user_agent=FIREFOX_UA,
        to_fixed_error_length=25,
        timezone="America/New_York",
        timezone_offset_minutes=240,
        hardware_concurrency=8,
        screen_width=2560,
        screen_height=1440,
        plugin_count=5,
        languages=["en-US", "en"],
        platform="Win32",
    )


@pytest.fixture()
def safari_snapshot() -> environment.EnvironmentSnapshot:
    """A regular Safari window."""
    return environment.EnvironmentSnapshot(
        user_agent=SAFARI_UA,
        vendor="Apple Computer, Inc.",
        to_fixed_error_length=43,
        timezone="Europe/Paris",
        timezone_offset_minutes=-120,
        hardware_concurrency=10,
        screen_width=1512,
        screen_height=982,
        plugin_count=5,
        languages=["fr-FR", "en"],
        platform="MacIntel",
    )


@pytest.fixture()
def tor_snapshot() -> environment.EnvironmentSnapshot:
    """Tor Browser with its default letterboxing and UTC clock."""
    return environment.EnvironmentSnapshot(
        user_agent="Mozilla/5.0 (Windows NT 10.0; rv:115.0) Gecko/20100101 Firefox/115.0",
        to_fixed_error_length=25,
        timezone="UTC",
        timezone_offset_minutes=0,
        hardware_concurrency=2,
        screen_width=1000,
        screen_height=1000,
        plugin_count=0,
        languages=["en-US"],
        platform="Win32",
    )


# ── Signals & Settings ──────────────────────────────────────────


@pytest.fixture()
def no_signals() -> environment.ClientSignals:
    """No GPC, no DNT, no VPN, no client IP."""
    return environment.ClientSignals()


@pytest.fixture()
def offline_settings() -> config.EngineSettings:
    """Settings with the network exit-list lookup switched off."""
    return config.EngineSettings().model_copy(update={"tor_exit_list_enabled": False})


# ── Weight Tables ───────────────────────────────────────────────


@pytest.fixture()
def small_table() -> weights.WeightTable:
    """A compact table covering each tier, a group, and an agnostic probe."""
    return weights.WeightTable(
        engines={
            "chromium": [
                probes.WeightEntry(probe_id="quotaHeapRatio", weight=40, tier="HIGH"),
                probes.WeightEntry(probe_id="fileSystemAPI", weight=35, tier="HIGH"),
                probes.WeightEntry(probe_id="serviceWorker", weight=10, tier="LOW"),
            ],
            "gecko": [
                probes.WeightEntry(probe_id="storageDirectory", weight=45, tier="HIGH"),
                probes.WeightEntry(probe_id="serviceWorker", weight=15, tier="MEDIUM"),
            ],
        },
        agnostic=[
            probes.WeightEntry(probe_id="adBlockElementHiding", weight=25, tier="MEDIUM", group="contentBlocking"),
            probes.WeightEntry(probe_id="adBlockNetwork", weight=20, tier="MEDIUM", group="contentBlocking"),
        ],
    )


@pytest.fixture()
def empty_table() -> weights.WeightTable:
    """A table with no entries at all."""
    return weights.WeightTable(engines={})
