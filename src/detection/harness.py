"""Probe execution harness.

Runs probes concurrently behind a wait-for-all barrier.  Every probe
fault is absorbed here: an exception, an unsupported capability, or
an exceeded timeout becomes an ``indeterminate`` result whose evidence
says why, and the batch always settles with one result per probe.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence

from src.models import probes
from src.probes import base
from src.utils import errors, logger

log = logger.create_logger("Probe-Harness")

DEFAULT_PROBE_TIMEOUT_MS = 1500


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 1)


def _indeterminate(probe_id: str, evidence: str, start: float) -> probes.ProbeResult:
    return probes.ProbeResult(
        probe_id=probe_id,
        outcome="indeterminate",
        evidence=evidence,
        duration_ms=_elapsed_ms(start),
    )


async def run_probe(
    probe: base.Probe,
    timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
) -> probes.ProbeResult:
    """Execute one probe, never raising.

    The probe's own ``timeout_ms`` takes precedence over
    *timeout_ms*.  On timeout the probe task is cancelled and its
    eventual output discarded.

    Returns:
        The probe's result stamped with the measured duration and
        the probe's id, or an indeterminate result on any fault.
    """
    budget_ms = probe.timeout_ms or timeout_ms
    start = time.monotonic()

    try:
        async with asyncio.timeout(budget_ms / 1000):
            result = await probe.execute()
    except TimeoutError:
        log.debug("Probe timed out", {"probe": probe.probe_id, "timeoutMs": budget_ms})
        return _indeterminate(probe.probe_id, f"Timed out after {budget_ms}ms", start)
    except errors.ProbeUnsupportedError as exc:
        return _indeterminate(probe.probe_id, f"Unsupported: {errors.get_error_message(exc)}", start)
    except Exception as exc:
        log.warn("Probe failed", {"probe": probe.probe_id, "error": errors.get_error_message(exc)})
        return _indeterminate(probe.probe_id, f"Probe error: {errors.get_error_message(exc)}", start)

    if not isinstance(result, probes.ProbeResult):
        log.warn("Probe returned an invalid result", {"probe": probe.probe_id, "type": type(result).__name__})
        return _indeterminate(probe.probe_id, "Probe returned no result", start)

    return result.model_copy(update={"probe_id": probe.probe_id, "duration_ms": _elapsed_ms(start)})


async def run_probe_set(
    probe_set: Sequence[base.Probe],
    per_probe_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
) -> list[probes.ProbeResult]:
    """Run every probe concurrently and wait for all of them to settle.

    Each probe has an independent timeout, so one slow probe (the
    Tor exit-list fetch, say) cannot hold back or fail the others.
    Results are returned in the order the probes were given.
    """
    if not probe_set:
        return []

    log.start_timer("probe-batch")
    results = await asyncio.gather(*(run_probe(p, per_probe_timeout_ms) for p in probe_set))
    log.end_timer("probe-batch", f"{len(results)} probes settled")

    log.info(
        "Probe batch outcomes",
        {
            "positive": sum(1 for r in results if r.outcome == "positive"),
            "negative": sum(1 for r in results if r.outcome == "negative"),
            "indeterminate": sum(1 for r in results if r.outcome == "indeterminate"),
        },
    )
    return list(results)
