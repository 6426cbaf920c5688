"""Probe abstraction shared by every environment check.

A probe is a named, independently executed async test.  It returns a
:class:`ProbeResult` or raises; the execution harness turns any
exception (including :class:`ProbeUnsupportedError`) and any timeout
into an indeterminate result, so probe code never needs its own
catch-all handling.
"""

from __future__ import annotations

import abc
import inspect
from collections.abc import Awaitable, Callable

from src.models import probes


class Probe(abc.ABC):
    """Base class for environment probes.

    Attributes:
        probe_id: Stable identifier matching the weight table.
        timeout_ms: Per-probe budget overriding the harness
            default, or ``None`` to use the default.
    """

    probe_id: str = ""
    timeout_ms: int | None = None

    @abc.abstractmethod
    async def execute(self) -> probes.ProbeResult:
        """Run the check and report its outcome."""

    def positive(
        self,
        evidence: str,
        *,
        method: str | None = None,
        aux_value: float | None = None,
    ) -> probes.ProbeResult:
        return probes.ProbeResult(
            probe_id=self.probe_id,
            outcome="positive",
            evidence=evidence,
            method=method,
            aux_value=aux_value,
        )

    def negative(
        self,
        evidence: str = "",
        *,
        method: str | None = None,
        aux_value: float | None = None,
    ) -> probes.ProbeResult:
        return probes.ProbeResult(
            probe_id=self.probe_id,
            outcome="negative",
            evidence=evidence,
            method=method,
            aux_value=aux_value,
        )

    def indeterminate(self, evidence: str, *, method: str | None = None) -> probes.ProbeResult:
        return probes.ProbeResult(
            probe_id=self.probe_id,
            outcome="indeterminate",
            evidence=evidence,
            method=method,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(probe_id={self.probe_id!r})"


ProbeFunction = Callable[[], probes.ProbeResult | Awaitable[probes.ProbeResult]]


class FunctionProbe(Probe):
    """Adapts a plain sync or async callable to the probe interface."""

    def __init__(self, probe_id: str, fn: ProbeFunction, *, timeout_ms: int | None = None) -> None:
        self.probe_id = probe_id
        self.timeout_ms = timeout_ms
        self._fn = fn

    async def execute(self) -> probes.ProbeResult:
        result = self._fn()
        if inspect.isawaitable(result):
            result = await result
        return result
