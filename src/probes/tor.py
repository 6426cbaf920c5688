"""Tor Browser probes.

Two independent signals: a heuristic score over the environment
markers Tor Browser normalises (timezone, cores, letterboxed screen
size, plugins, language), and a lookup of the client IP in the Tor
Project's bulk exit-node list.
"""

from __future__ import annotations

import asyncio
import ipaddress
import time

import aiohttp

from src.detection import tor_override
from src.models import environment, probes
from src.probes import base
from src.utils import errors, logger

log = logger.create_logger("Tor")

# ── Heuristics ──────────────────────────────────────────────

_UTC_ZONES = frozenset({"UTC", "Etc/UTC"})
_LETTERBOX_WIDTHS = frozenset({1000, 1200, 1400, 1600})
_LETTERBOX_HEIGHTS = frozenset({900, 1000})


def evaluate_tor_heuristics(snapshot: environment.EnvironmentSnapshot) -> tuple[int, list[str]]:
    """Score how closely the environment matches Tor Browser defaults.

    Returns:
        ``(score, indicators)``.  50 or more is "likely Tor", 80 or
        more "definitely Tor".
    """
    score = 0
    indicators: list[str] = []

    if snapshot.timezone in _UTC_ZONES or snapshot.timezone_offset_minutes == 0:
        indicators.append("UTC timezone")
        score += 20

    if snapshot.hardware_concurrency == 2:
        indicators.append("2 CPU cores reported")
        score += 15

    if snapshot.screen_width in _LETTERBOX_WIDTHS or snapshot.screen_height in _LETTERBOX_HEIGHTS:
        indicators.append("Tor-like screen dimensions")
        score += 20

    if snapshot.screen_width == 1000 and snapshot.screen_height == 1000:
        indicators.append("Exact Tor dimensions (1000x1000)")
        score += 25

    if snapshot.plugin_count == 0:
        indicators.append("No plugins detected")
        score += 20

    if snapshot.languages == ["en-US"]:
        indicators.append("Single en-US language")
        score += 10

    if snapshot.platform == "Win32" and snapshot.screen_width == 1000:
        indicators.append("Platform/dimension mismatch")
        score += 15

    return score, indicators


class TorHeuristicProbe(base.Probe):
    """Positive once the heuristic score reaches the "likely Tor" threshold.

    A single common marker (a UTC clock, one ``en-US`` language) is
    not evidence on its own.  The raw score always rides along in
    ``aux_value`` for the Tor signal.
    """

    probe_id = "torHeuristics"

    def __init__(self, snapshot: environment.EnvironmentSnapshot) -> None:
        self.snapshot = snapshot

    async def execute(self) -> probes.ProbeResult:
        score, indicators = evaluate_tor_heuristics(self.snapshot)
        if score >= tor_override.TOR_LIKELY_THRESHOLD:
            return self.positive(
                f"Tor indicators: {', '.join(indicators)}", method="heuristics", aux_value=score
            )
        if indicators:
            return self.negative(
                f"Weak Tor indicators: {', '.join(indicators)}", method="heuristics", aux_value=score
            )
        return self.negative(method="heuristics", aux_value=0)


# ── Exit-node list ──────────────────────────────────────────

# url -> (fetched_at monotonic seconds, addresses)
_exit_list_cache: dict[str, tuple[float, frozenset[str]]] = {}
# url -> (failed_at monotonic seconds, error message)
_exit_list_failures: dict[str, tuple[float, str]] = {}
_refresh_locks: dict[str, asyncio.Lock] = {}

DEFAULT_RETRY_SECONDS = 60


class ExitListUnavailableError(Exception):
    """Raised while a recent exit-list fetch failure is still cached."""


def clear_exit_list_cache() -> None:
    """Drop every cached exit list, cached failure, and refresh lock."""
    _exit_list_cache.clear()
    _exit_list_failures.clear()
    _refresh_locks.clear()


def parse_exit_list(text: str) -> frozenset[str]:
    """Extract valid IPv4 addresses, one per line, ignoring anything else."""
    addresses: set[str] = set()
    for line in text.splitlines():
        candidate = line.strip()
        if not candidate:
            continue
        try:
            addresses.add(str(ipaddress.IPv4Address(candidate)))
        except ValueError:
            continue
    return frozenset(addresses)


async def _fetch_exit_list(url: str, timeout_ms: int) -> frozenset[str]:
    """Download and parse the bulk exit list.

    Raises:
        aiohttp.ClientError: On connection failure or an HTTP error.
        ValueError: If the body holds no valid addresses.
    """
    timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
    async with aiohttp.ClientSession(timeout=timeout) as http_session:
        async with http_session.get(url) as response:
            response.raise_for_status()
            text = await response.text()

    addresses = parse_exit_list(text)
    if not addresses:
        raise ValueError("No valid IPs found in Tor exit list")
    return addresses


def _cached_exit_list(url: str, ttl_seconds: int, retry_seconds: int) -> frozenset[str] | None:
    """Return a fresh cached list, or raise while a recent failure is cached."""
    now = time.monotonic()
    cached = _exit_list_cache.get(url)
    if cached is not None and now - cached[0] < ttl_seconds:
        return cached[1]
    failure = _exit_list_failures.get(url)
    if failure is not None and now - failure[0] < retry_seconds:
        raise ExitListUnavailableError(f"Tor exit list unavailable: {failure[1]}")
    return None


async def get_exit_list(
    url: str,
    timeout_ms: int,
    ttl_seconds: int,
    retry_seconds: int = DEFAULT_RETRY_SECONDS,
) -> frozenset[str]:
    """Return the exit list for *url*, refreshing it once the TTL lapses.

    Concurrent callers share one download.  A failed download is
    remembered for *retry_seconds*, during which callers fail fast
    instead of waiting on the network again.

    Raises:
        ExitListUnavailableError: While a recent failure is cached.
        aiohttp.ClientError: If the download fails.
        ValueError: If the downloaded list is empty.
    """
    addresses = _cached_exit_list(url, ttl_seconds, retry_seconds)
    if addresses is not None:
        return addresses

    async with _refresh_locks.setdefault(url, asyncio.Lock()):
        addresses = _cached_exit_list(url, ttl_seconds, retry_seconds)
        if addresses is not None:
            return addresses

        log.start_timer("tor-exit-list")
        try:
            addresses = await _fetch_exit_list(url, timeout_ms)
        except (aiohttp.ClientError, TimeoutError, ValueError, asyncio.CancelledError) as exc:
            _exit_list_failures[url] = (time.monotonic(), errors.get_error_message(exc))
            log.warn("Tor exit list fetch failed", {"url": url, "error": errors.get_error_message(exc)})
            raise
        log.end_timer("tor-exit-list", f"Fetched {len(addresses)} exit nodes")
        _exit_list_cache[url] = (time.monotonic(), addresses)
        _exit_list_failures.pop(url, None)
        return addresses


class TorExitNodeProbe(base.Probe):
    """Positive when the client IP is a published Tor exit node.

    Runs on its own (longer) timeout since it may hit the network.
    Unsupported when lookups are disabled or no client IP is known.
    """

    probe_id = "torExitNode"

    def __init__(
        self,
        client_ip: str | None,
        *,
        enabled: bool = True,
        url: str,
        timeout_ms: int,
        ttl_seconds: int,
        retry_seconds: int = DEFAULT_RETRY_SECONDS,
    ) -> None:
        self.client_ip = client_ip
        self.enabled = enabled
        self.url = url
        self.timeout_ms = timeout_ms
        self.ttl_seconds = ttl_seconds
        self.retry_seconds = retry_seconds

    async def execute(self) -> probes.ProbeResult:
        if not self.enabled:
            raise errors.ProbeUnsupportedError("exit-list lookup disabled")
        if not self.client_ip:
            raise errors.ProbeUnsupportedError("client IP unknown")
        try:
            address = str(ipaddress.ip_address(self.client_ip))
        except ValueError as exc:
            raise errors.ProbeUnsupportedError(f"invalid client IP {self.client_ip!r}") from exc

        exit_nodes = await get_exit_list(self.url, self.timeout_ms, self.ttl_seconds, self.retry_seconds)
        if address in exit_nodes:
            return self.positive(f"IP {address} is a known Tor exit node", method="exit-list")
        return self.negative(method="exit-list")
