"""Privacy-signal probes: headers and navigator properties the user opts into."""

from __future__ import annotations

from src.models import environment, probes
from src.probes import base
from src.utils import errors


class GlobalPrivacyControlProbe(base.Probe):
    probe_id = "globalPrivacyControl"

    def __init__(self, signals: environment.ClientSignals) -> None:
        self.signals = signals

    async def execute(self) -> probes.ProbeResult:
        if self.signals.global_privacy_control is None:
            raise errors.ProbeUnsupportedError("navigator.globalPrivacyControl not exposed")
        if self.signals.has_gpc:
            return self.positive("Global Privacy Control enabled")
        return self.negative()


class DoNotTrackProbe(base.Probe):
    probe_id = "doNotTrack"

    def __init__(self, signals: environment.ClientSignals) -> None:
        self.signals = signals

    async def execute(self) -> probes.ProbeResult:
        if self.signals.do_not_track is None:
            raise errors.ProbeUnsupportedError("Do Not Track not reported")
        if self.signals.has_dnt:
            return self.positive("Do Not Track enabled")
        return self.negative()


class DeviceMemoryHiddenProbe(base.Probe):
    """``navigator.deviceMemory`` missing on an engine that normally exposes it.

    Only Chromium ships the API, so any other engine is unsupported
    rather than negative.
    """

    probe_id = "deviceMemoryHidden"

    def __init__(self, snapshot: environment.EnvironmentSnapshot, engine_profile: probes.EngineProfile) -> None:
        self.snapshot = snapshot
        self.engine_profile = engine_profile

    async def execute(self) -> probes.ProbeResult:
        if self.engine_profile != "chromium":
            raise errors.ProbeUnsupportedError("deviceMemory is Chromium-only")
        if self.snapshot.has_device_memory is None:
            raise errors.ProbeUnsupportedError("deviceMemory not reported")
        if not self.snapshot.has_device_memory:
            return self.positive("navigator.deviceMemory hidden")
        return self.negative()
