"""Probes that interpret a browser-reported observation.

The capability checks themselves run in the visitor's browser; the
server receives one :class:`ProbeObservation` per check and these
probes turn it into a tri-state result.
"""

from __future__ import annotations

from src.models import environment, probes
from src.probes import base
from src.utils import errors


class ObservationProbe(base.Probe):
    """Base for probes backed by a single client observation."""

    def __init__(self, probe_id: str, observation: environment.ProbeObservation | None) -> None:
        self.probe_id = probe_id
        self.observation = observation

    def require_observation(self) -> environment.ProbeObservation:
        """Return the observation, or raise when nothing usable was reported."""
        if self.observation is None:
            raise errors.ProbeUnsupportedError("not reported by the client")
        if not self.observation.supported:
            raise errors.ProbeUnsupportedError("API not available in this browser")
        return self.observation


class ReportedProbe(ObservationProbe):
    """Takes the client's own triggered / not-triggered verdict at face value.

    Args:
        probe_id: Probe identifier.
        observation: The client observation, if any.
        default_evidence: Finding text used when the client gives no
            reason of its own.
    """

    def __init__(
        self,
        probe_id: str,
        observation: environment.ProbeObservation | None,
        default_evidence: str,
    ) -> None:
        super().__init__(probe_id, observation)
        self.default_evidence = default_evidence

    async def execute(self) -> probes.ProbeResult:
        observation = self.require_observation()
        if observation.triggered is None:
            return self.indeterminate("No verdict reported", method=observation.method)
        if observation.triggered:
            return self.positive(observation.reason or self.default_evidence, method=observation.method)
        return self.negative(method=observation.method)
