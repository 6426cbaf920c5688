"""Storage-behaviour probes.

Private browsing modes keep site data in memory only, which shows up
as shrunken quotas, refused persistence, and storage APIs that throw.
Each engine does this differently, hence the per-engine weights.
"""

from __future__ import annotations

from src.models import environment, probes
from src.probes import observed
from src.utils import errors

# Chromium quota threshold: incognito quota sits below twice the JS
# heap limit.  1 GiB is the heap limit assumed when none is reported.
DEFAULT_HEAP_LIMIT_MB = 1024.0
QUOTA_HEAP_FACTOR = 2

LOW_QUOTA_MB = 50.0

# OPFS error markers per engine.
_GECKO_DIRECTORY_MARKERS = ("security", "not allowed", "denied")
_WEBKIT_DIRECTORY_MARKER = "unknown transient reason"

# Finding text for storage checks reported as a plain verdict.
REPORTED_STORAGE_EVIDENCE: dict[str, str] = {
    "fileSystemAPI": "FileSystem API blocked",
    "indexedDB": "IndexedDB restricted",
    "serviceWorker": "ServiceWorker restricted",
    "cacheAPI": "Cache API restricted",
    "credentialManagement": "Credential Management API restricted",
    "localStorageException": "localStorage write throws",
    "storagePersist": "Persistent storage refused",
}


class QuotaHeapRatioProbe(observed.ObservationProbe):
    """Chromium incognito: temporary-storage quota below 2× the heap limit.

    ``value`` is the quota in MB and ``limit`` the heap limit in MB.
    """

    def __init__(self, observation: environment.ProbeObservation | None) -> None:
        super().__init__("quotaHeapRatio", observation)

    async def execute(self) -> probes.ProbeResult:
        observation = self.require_observation()
        if observation.value is None:
            return self.indeterminate("Quota not measured", method=observation.method)

        quota_mb = observation.value
        threshold_mb = (observation.limit or DEFAULT_HEAP_LIMIT_MB) * QUOTA_HEAP_FACTOR
        if quota_mb < threshold_mb:
            return self.positive(
                f"Storage quota {quota_mb:.0f}MB below {threshold_mb:.0f}MB limit",
                method=observation.method,
                aux_value=quota_mb,
            )
        return self.negative(
            f"Storage quota {quota_mb:.0f}MB", method=observation.method, aux_value=quota_mb
        )


class StorageQuotaProbe(observed.ObservationProbe):
    """Very low ``navigator.storage.estimate()`` quota.

    An estimate call that throws says nothing about the browsing mode,
    so the probe is unsupported rather than positive.
    """

    def __init__(self, observation: environment.ProbeObservation | None) -> None:
        super().__init__("storageQuota", observation)

    async def execute(self) -> probes.ProbeResult:
        observation = self.require_observation()
        if observation.error:
            raise errors.ProbeUnsupportedError(f"storage estimate failed ({observation.error})")
        if observation.value is None:
            return self.indeterminate("Quota not measured", method=observation.method)
        if observation.value < LOW_QUOTA_MB:
            return self.positive(
                f"Very low storage quota: {observation.value:.0f}MB",
                method=observation.method,
                aux_value=observation.value,
            )
        return self.negative(aux_value=observation.value)


def _gecko_blocked(observation: environment.ProbeObservation) -> bool:
    if observation.error_name == "SecurityError":
        return True
    message = (observation.error or "").lower()
    return any(marker in message for marker in _GECKO_DIRECTORY_MARKERS)


def _webkit_blocked(observation: environment.ProbeObservation) -> bool:
    return _WEBKIT_DIRECTORY_MARKER in (observation.error or "").lower()


class StorageDirectoryProbe(observed.ObservationProbe):
    """Origin private file system (``storage.getDirectory()``) refusal.

    Firefox private windows reject with a security error; Safari
    private windows reject with "unknown transient reason".  Other
    errors say nothing about the browsing mode.
    """

    def __init__(
        self,
        observation: environment.ProbeObservation | None,
        engine_profile: probes.EngineProfile,
    ) -> None:
        super().__init__("storageDirectory", observation)
        self.engine_profile = engine_profile

    def _is_private_error(self, observation: environment.ProbeObservation) -> bool:
        if self.engine_profile == "gecko":
            return _gecko_blocked(observation)
        if self.engine_profile == "webkit":
            return _webkit_blocked(observation)
        return _gecko_blocked(observation) or _webkit_blocked(observation)

    async def execute(self) -> probes.ProbeResult:
        observation = self.require_observation()
        if not observation.error:
            if observation.triggered:
                return self.positive(observation.reason or "OPFS blocked", method=observation.method)
            return self.negative("OPFS directory available", method=observation.method)

        label = observation.error_name or observation.error
        if self._is_private_error(observation):
            return self.positive(f"OPFS blocked ({label})", method=observation.method)
        return self.negative(f"OPFS error not mode-specific ({label})", method=observation.method)
