"""Classification pipeline.

Runs the fixed stage order for one page visit:

1. Detect the engine profile and browser.
2. Build the probes the weight table scores for that profile and
   run them concurrently behind a wait-for-all barrier.
3. Aggregate the settled batch into a tally and derive the Tor
   signal.
4. Classify, generate suggestions, assemble the report.

Every stage is total, so a run always produces a :class:`Report`;
missing evidence lowers confidence instead of raising.
"""

from __future__ import annotations

from src import config
from src.detection import aggregator, classifier, engine_profile, harness, report, suggestions, tor_override, weights
from src.models import environment
from src.models import report as report_models
from src.probes import registry as probe_registry
from src.utils import logger

log = logger.create_logger("Pipeline")


async def run_classification(
    snapshot: environment.EnvironmentSnapshot,
    signals: environment.ClientSignals,
    *,
    settings: config.EngineSettings | None = None,
    registry: probe_registry.ProbeRegistry | None = None,
    table: weights.WeightTable | None = None,
) -> report_models.Report:
    """Classify the browsing mode of one environment snapshot.

    Args:
        snapshot: Environment markers and raw probe observations.
        signals: Caller-supplied signals (GPC, DNT, VPN, client IP).
        settings: Engine settings; the process-wide settings when
            omitted.
        registry: Probe factories; the built-in registry when omitted.
        table: Weight table; the bundled table when omitted.

    Returns:
        The assembled report.
    """
    settings = settings or config.get_settings()
    if registry is None:
        registry = probe_registry.default_registry()
    table = table or weights.get_weight_table()

    browser = engine_profile.detect_browser(snapshot)
    profile = browser.engine

    logger.reset_timers()
    logger.start_log_file(f"{browser.browser}-{profile}")
    try:
        log.section(f"Classifying: {browser.name} ({profile})")
        log.start_timer("classification")

        applicable = table.entries_for(profile)
        context = probe_registry.ProbeContext(
            snapshot=snapshot, signals=signals, settings=settings, engine_profile=profile
        )
        probe_set = registry.build(context, applicable.keys())
        log.info("Probes scheduled", {"engine": profile, "weighted": len(applicable), "scheduled": len(probe_set)})

        results = await harness.run_probe_set(probe_set, settings.probe_timeout_ms)

        tally = aggregator.aggregate(profile, results, table)
        tor_signal = tor_override.derive_tor_signal(results)
        if tor_signal.is_likely:
            log.info(
                "Tor indicators present",
                {"score": tor_signal.heuristic_score, "definite": tor_signal.is_definite, "exitNode": tor_signal.exit_node_match},
            )

        verdict = classifier.classify(tally, tor_signal)
        context_for_rules = suggestions.build_suggestion_context(verdict, signals, browser, results)
        suggestion_list = suggestions.generate_suggestions(context_for_rules)

        result = report.assemble(
            verdict,
            suggestion_list,
            results,
            engine_profile=profile,
            browser_name=signals.browser_name or browser.name,
            display_limit=settings.findings_display_limit,
        )

        log.end_timer("classification", "Classification complete")
        log.success(
            result.status_label,
            {
                "score": result.normalized_score,
                "confidence": result.confidence_tier,
                "strongIndicators": result.strong_indicators,
                "suggestions": len(result.suggestions),
            },
        )
        return result
    finally:
        logger.end_log_file()


async def reclassify(
    snapshot: environment.EnvironmentSnapshot,
    signals: environment.ClientSignals,
    *,
    vpn_detected: bool,
    settings: config.EngineSettings | None = None,
    registry: probe_registry.ProbeRegistry | None = None,
    table: weights.WeightTable | None = None,
) -> report_models.Report:
    """Re-run the full pipeline once a late VPN verdict is known.

    Nothing from the previous run is reused: the probes run again
    and the report is rebuilt from scratch with the updated signal.
    """
    log.info("Reclassifying with late signal", {"vpnDetected": vpn_detected})
    updated = signals.model_copy(update={"vpn_detected": vpn_detected})
    return await run_classification(snapshot, updated, settings=settings, registry=registry, table=table)
