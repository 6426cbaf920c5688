"""Browser engine and browser name detection.

Probe reliability depends on the engine, so the profile is decided
once per run from a handful of environment markers.  The primary
marker is the length of the error message V8, SpiderMonkey and
JavaScriptCore produce for ``(-1).toFixed(-1)``; the User-Agent
and vendor strings are only a fallback because they are trivially
spoofed.
"""

from __future__ import annotations

import re

from src.models import environment, probes
from src.utils import logger

log = logger.create_logger("Engine-Profile")

# ``toFixed`` RangeError message lengths per engine.
_TO_FIXED_ENGINE_IDS: dict[int, probes.EngineProfile] = {
    51: "chromium",
    25: "gecko",
    43: "webkit",
    44: "webkit",
}

_EDGE_PATTERN = re.compile(r"Edg")
_OPERA_PATTERN = re.compile(r"OPR")
_CHROME_PATTERN = re.compile(r"Chrome")
_FIREFOX_PATTERN = re.compile(r"Firefox")
_SAFARI_PATTERN = re.compile(r"Safari")
_APPLE_VENDOR_PATTERN = re.compile(r"Apple Computer")


def _engine_from_user_agent(snapshot: environment.EnvironmentSnapshot) -> probes.EngineProfile:
    """Best-effort engine guess from the UA and vendor strings."""
    ua = snapshot.user_agent or ""
    if snapshot.has_brave_api:
        return "chromium"
    if _SAFARI_PATTERN.search(ua) and _APPLE_VENDOR_PATTERN.search(snapshot.vendor or "") and not _CHROME_PATTERN.search(ua):
        return "webkit"
    if _FIREFOX_PATTERN.search(ua):
        return "gecko"
    if _CHROME_PATTERN.search(ua):
        return "chromium"
    return "unknown"


def detect_engine_profile(snapshot: environment.EnvironmentSnapshot) -> probes.EngineProfile:
    """Classify the host browser into an engine family.

    Never raises: anything that cannot be resolved maps to
    ``"unknown"``, which makes the pipeline fall back to the union
    of all engine-specific probes.
    """
    engine_id = snapshot.to_fixed_error_length
    if engine_id is not None and engine_id in _TO_FIXED_ENGINE_IDS:
        return _TO_FIXED_ENGINE_IDS[engine_id]

    engine = _engine_from_user_agent(snapshot)
    log.debug(
        "Engine fingerprint unavailable, used User-Agent",
        {"engineId": engine_id, "engine": engine},
    )
    return engine


def detect_browser(snapshot: environment.EnvironmentSnapshot) -> probes.BrowserInfo:
    """Resolve the engine plus browser key and display name."""
    engine = detect_engine_profile(snapshot)
    ua = snapshot.user_agent or ""

    if engine == "chromium":
        if snapshot.has_brave_api:
            return probes.BrowserInfo(engine=engine, browser="brave", name="Brave")
        if _EDGE_PATTERN.search(ua):
            return probes.BrowserInfo(engine=engine, browser="edge", name="Edge")
        if _OPERA_PATTERN.search(ua):
            return probes.BrowserInfo(engine=engine, browser="opera", name="Opera")
        return probes.BrowserInfo(engine=engine, browser="chrome", name="Chrome")
    if engine == "gecko":
        return probes.BrowserInfo(engine=engine, browser="firefox", name="Firefox")
    if engine == "webkit":
        return probes.BrowserInfo(engine=engine, browser="safari", name="Safari")
    return probes.BrowserInfo()
