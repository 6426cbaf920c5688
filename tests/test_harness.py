"""Tests for src.detection.harness — concurrent probe execution."""

from __future__ import annotations

import asyncio

from src.detection import harness
from src.models import probes
from src.probes import base
from src.utils import errors


def _positive() -> probes.ProbeResult:
    return probes.ProbeResult(probe_id="ignored", outcome="positive", evidence="hit", aux_value=3)


async def _slow() -> probes.ProbeResult:
    await asyncio.sleep(5)
    return _positive()


def _boom() -> probes.ProbeResult:
    raise RuntimeError("kaboom")


def _unsupported() -> probes.ProbeResult:
    raise errors.ProbeUnsupportedError("no OPFS")


class TestRunProbe:
    def test_sync_callable(self) -> None:
        result = asyncio.run(harness.run_probe(base.FunctionProbe("a", _positive)))
        assert result.outcome == "positive"
        assert result.evidence == "hit"

    def test_probe_id_is_stamped(self) -> None:
        result = asyncio.run(harness.run_probe(base.FunctionProbe("realId", _positive)))
        assert result.probe_id == "realId"

    def test_duration_recorded(self) -> None:
        result = asyncio.run(harness.run_probe(base.FunctionProbe("a", _positive)))
        assert result.duration_ms >= 0

    def test_async_callable(self) -> None:
        async def fn() -> probes.ProbeResult:
            return probes.ProbeResult(probe_id="b", outcome="negative")

        result = asyncio.run(harness.run_probe(base.FunctionProbe("b", fn)))
        assert result.outcome == "negative"

    def test_timeout_is_indeterminate(self) -> None:
        result = asyncio.run(harness.run_probe(base.FunctionProbe("slow", _slow), timeout_ms=20))
        assert result.outcome == "indeterminate"
        assert "Timed out" in result.evidence

    def test_probe_timeout_overrides_default(self) -> None:
        probe = base.FunctionProbe("slow", _slow, timeout_ms=20)
        result = asyncio.run(harness.run_probe(probe, timeout_ms=60_000))
        assert result.evidence == "Timed out after 20ms"

    def test_exception_is_indeterminate(self) -> None:
        result = asyncio.run(harness.run_probe(base.FunctionProbe("boom", _boom)))
        assert result.outcome == "indeterminate"
        assert result.evidence == "Probe error: kaboom"

    def test_unsupported_is_indeterminate(self) -> None:
        result = asyncio.run(harness.run_probe(base.FunctionProbe("opfs", _unsupported)))
        assert result.outcome == "indeterminate"
        assert result.evidence == "Unsupported: no OPFS"

    def test_non_result_is_indeterminate(self) -> None:
        result = asyncio.run(harness.run_probe(base.FunctionProbe("none", lambda: None)))  # type: ignore[arg-type, return-value]
        assert result.outcome == "indeterminate"


class TestRunProbeSet:
    def test_empty(self) -> None:
        assert asyncio.run(harness.run_probe_set([])) == []

    def test_one_result_per_probe_in_order(self) -> None:
        probe_set = [
            base.FunctionProbe("first", _positive),
            base.FunctionProbe("second", _boom),
            base.FunctionProbe("third", _unsupported),
        ]
        results = asyncio.run(harness.run_probe_set(probe_set))
        assert [r.probe_id for r in results] == ["first", "second", "third"]
        assert [r.outcome for r in results] == ["positive", "indeterminate", "indeterminate"]

    def test_slow_probe_does_not_block_others(self) -> None:
        probe_set = [base.FunctionProbe("slow", _slow), base.FunctionProbe("fast", _positive)]
        results = asyncio.run(harness.run_probe_set(probe_set, per_probe_timeout_ms=50))
        assert results[0].outcome == "indeterminate"
        assert results[1].outcome == "positive"

    def test_probes_run_concurrently(self) -> None:
        async def nap() -> probes.ProbeResult:
            await asyncio.sleep(0.1)
            return probes.ProbeResult(probe_id="n", outcome="negative")

        async def run() -> float:
            loop = asyncio.get_running_loop()
            start = loop.time()
            await harness.run_probe_set([base.FunctionProbe(f"n{i}", nap) for i in range(10)])
            return loop.time() - start

        assert asyncio.run(run()) < 0.9
