"""Privacy suggestion generator.

A fixed, ordered rule table over a flat :class:`SuggestionContext`.
Each rule that matches contributes one suggestion; two short-circuit
rules (Tor, and an already excellent setup) return a single
informational entry instead.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.data import loader
from src.models import classification, environment, probes, suggestions

# Probes that reveal a content blocker or fingerprint protection.
CONTENT_BLOCKING_PROBES = frozenset(
    {"adBlockElementHiding", "adBlockNetwork", "adBlockScript", "canvasProtection", "webrtcProtection"}
)

INCOGNITO_SCORE_THRESHOLD = 60
EXCELLENT_SCORE_THRESHOLD = 80
VPN_SCORE_THRESHOLD = 40
DOH_SCORE_THRESHOLD = 60


# ── Context ─────────────────────────────────────────────────


def build_suggestion_context(
    result: classification.ClassificationResult,
    signals: environment.ClientSignals,
    browser: probes.BrowserInfo,
    probe_results: Iterable[probes.ProbeResult],
) -> suggestions.SuggestionContext:
    """Flatten a verdict and the caller's signals into rule input."""
    has_ad_blocker = any(
        r.probe_id in CONTENT_BLOCKING_PROBES and r.is_positive for r in probe_results
    )
    return suggestions.SuggestionContext(
        is_tor=result.is_tor_override,
        is_incognito=result.normalized_score >= INCOGNITO_SCORE_THRESHOLD,
        has_gpc=signals.has_gpc,
        has_dnt=signals.has_dnt,
        protection_score=result.normalized_score,
        has_ad_blocker=has_ad_blocker,
        browser=browser,
        is_vpn_detected=signals.vpn_detected,
    )


# ── Rule helpers ────────────────────────────────────────────


def _browser_settings_suggestion(browser: probes.BrowserInfo) -> suggestions.Suggestion:
    """Look up tracking-protection copy for the detected browser."""
    settings = loader.get_browser_privacy_settings()
    copy = settings.get(browser.browser) or settings["default"]
    return suggestions.Suggestion(
        action=copy["action"],
        description=copy["description"],
        impact="MEDIUM",
        reason=copy["reason"],
    )


def _doh_description(browser: probes.BrowserInfo) -> str:
    if browser.browser == "firefox":
        return "Settings → Privacy & Security → DNS over HTTPS → Max Protection"
    return "Turn on secure DNS in your browser or OS, e.g. Cloudflare 1.1.1.1 or Google DNS with DoH"


# ── Public API ──────────────────────────────────────────────


def generate_suggestions(context: suggestions.SuggestionContext) -> list[suggestions.Suggestion]:
    """Produce ordered, de-duplicated privacy recommendations.

    Args:
        context: Flat view of the verdict and caller signals.

    Returns:
        At least one suggestion; the first rule that fires comes
        first and each rule fires at most once.
    """
    if context.is_tor:
        return [
            suggestions.Suggestion(
                action="You're using Tor Browser",
                description="Maximum anonymity through onion routing",
                impact="INFO",
                reason="Tor offers the strongest browsing privacy available",
            )
        ]

    if (
        context.protection_score >= EXCELLENT_SCORE_THRESHOLD
        and context.is_incognito
        and context.has_ad_blocker
    ):
        return [
            suggestions.Suggestion(
                action="Excellent Privacy Setup",
                description="Your current configuration is well protected",
                impact="INFO",
                reason="Private mode combined with a content blocker gives strong protection",
            )
        ]

    result: list[suggestions.Suggestion] = []

    if not context.is_incognito:
        result.append(
            suggestions.Suggestion(
                action="Use Private/Incognito Mode",
                description="Keeps history, cookies, and cache from being saved after you close the window",
                impact="HIGH",
                reason="You are browsing in standard mode, so history and cookies are being stored",
            )
        )

    if not context.has_ad_blocker:
        result.append(
            suggestions.Suggestion(
                action="Install a Content Blocker",
                description="uBlock Origin is a good choice: it blocks ads, trackers, and malware domains",
                impact="HIGH",
                reason="No content blocker detected, so tracking scripts load freely",
            )
        )

    if not context.is_brave:
        result.append(_browser_settings_suggestion(context.browser))

    if not context.has_gpc:
        result.append(
            suggestions.Suggestion(
                action="Enable Global Privacy Control (GPC)",
                description="A legally recognised opt-out signal in several US states",
                impact="MEDIUM",
                reason="GPC tells websites not to sell or share your personal data",
            )
        )

    if not context.is_vpn_detected and context.protection_score < VPN_SCORE_THRESHOLD:
        result.append(
            suggestions.Suggestion(
                action="Consider Using a VPN",
                description="Hides your IP address from websites and encrypts traffic from your ISP",
                impact="LOW",
                reason="Your real IP address is visible to every site you visit",
            )
        )

    if context.protection_score < DOH_SCORE_THRESHOLD:
        result.append(
            suggestions.Suggestion(
                action="Enable DNS over HTTPS (DoH)",
                description=_doh_description(context.browser),
                impact="LOW",
                reason="Encrypted DNS stops your ISP from seeing which sites you look up",
            )
        )

    if not result:
        result.append(
            suggestions.Suggestion(
                action="Your privacy setup looks good",
                description="Keep your browser and extensions up to date",
                impact="INFO",
                reason="Updates patch security and privacy issues as they are found",
            )
        )

    return result
