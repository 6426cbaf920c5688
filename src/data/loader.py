"""
Data loader for the probe weight table and browser settings copy.

Both are static reference data: JSON files living alongside this
module, parsed into models once and cached for the life of the
process.  Re-tuning a weight or adding an engine is a data change.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

from src.models import probes

# Resolve path to the data directory (same directory as this module)
_DATA_DIR = pathlib.Path(__file__).resolve().parent

# ============================================================================
# JSON File Loading
# ============================================================================


def _load_json(relative_path: str) -> Any:
    """Load and parse a JSON file relative to the data directory.

    Raises:
        FileNotFoundError: If the JSON file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
    """
    full_path = _DATA_DIR / relative_path
    if not full_path.exists():
        raise FileNotFoundError(f"Data file not found: {relative_path}")
    with open(full_path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise json.JSONDecodeError(
                f"Invalid JSON in {relative_path}: {exc.msg}",
                exc.doc,
                exc.pos,
            ) from exc


# ============================================================================
# Weight Table Loading
# ============================================================================


def _parse_entries(raw: list[dict[str, Any]]) -> tuple[probes.WeightEntry, ...]:
    """Validate raw weight entries, rejecting duplicate probe ids."""
    entries = tuple(probes.WeightEntry.model_validate(item) for item in raw)
    seen: set[str] = set()
    for entry in entries:
        if entry.probe_id in seen:
            raise ValueError(f"Duplicate weight entry for probe: {entry.probe_id}")
        seen.add(entry.probe_id)
    return entries


def parse_weight_data(
    raw: dict[str, Any],
) -> tuple[dict[probes.EngineProfile, tuple[probes.WeightEntry, ...]], tuple[probes.WeightEntry, ...]]:
    """Turn the raw weights document into per-engine and agnostic entries.

    Raises:
        ValueError: If an engine key is not a known profile or a
            probe id appears twice in one list.
    """
    engines: dict[probes.EngineProfile, tuple[probes.WeightEntry, ...]] = {}
    for engine, entries in raw.get("engines", {}).items():
        if engine not in probes.ENGINE_PROFILES:
            raise ValueError(f"Unknown engine profile in weight table: {engine}")
        engines[engine] = _parse_entries(entries)
    return engines, _parse_entries(raw.get("agnostic", []))


_weight_data: tuple[dict[probes.EngineProfile, tuple[probes.WeightEntry, ...]], tuple[probes.WeightEntry, ...]] | None = None


def get_weight_data() -> tuple[dict[probes.EngineProfile, tuple[probes.WeightEntry, ...]], tuple[probes.WeightEntry, ...]]:
    """Get the (engine weights, agnostic weights) pair (lazy loaded and cached)."""
    global _weight_data
    if _weight_data is None:
        _weight_data = parse_weight_data(_load_json("weights.json"))
    return _weight_data


# ============================================================================
# Browser Settings Copy
# ============================================================================

_browser_settings_cache: dict[str, dict[str, str]] | None = None


def get_browser_privacy_settings() -> dict[str, dict[str, str]]:
    """Get browser-specific tracking-protection copy (lazy loaded and cached).

    Keys are browser keys (``firefox``, ``chrome`` ...) plus a
    ``default`` entry used for anything unrecognised.  Each value
    holds ``action``, ``description``, and ``reason`` strings.
    """
    global _browser_settings_cache
    if _browser_settings_cache is None:
        _browser_settings_cache = _load_json("browser-settings.json")
    return _browser_settings_cache
