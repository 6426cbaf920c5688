"""Detection package — the pure core of privacy-mode classification.

Stages run in a fixed order: engine profile, probe harness,
evidence aggregation, classification, suggestions, report.  Only
the harness is async; every other stage is a pure function.  The
full run is wired in :mod:`src.pipeline.classification`.
"""

from __future__ import annotations

from src.detection.aggregator import aggregate
from src.detection.classifier import classify
from src.detection.engine_profile import detect_browser, detect_engine_profile
from src.detection.harness import run_probe, run_probe_set
from src.detection.report import assemble
from src.detection.suggestions import build_suggestion_context, generate_suggestions
from src.detection.tor_override import derive_tor_signal
from src.detection.weights import WeightTable, get_weight_table

__all__ = [
    "WeightTable",
    "aggregate",
    "assemble",
    "build_suggestion_context",
    "classify",
    "derive_tor_signal",
    "detect_browser",
    "detect_engine_profile",
    "generate_suggestions",
    "get_weight_table",
    "run_probe",
    "run_probe_set",
]
