"""Tests for src.detection.engine_profile — engine and browser detection."""

from __future__ import annotations

import pytest

from src.detection import engine_profile
from src.models import environment


class TestDetectEngineProfile:
    @pytest.mark.parametrize(
        ("length", "expected"),
        [(51, "chromium"), (25, "gecko"), (43, "webkit"), (44, "webkit")],
    )
    def test_to_fixed_length_decides(self, length: int, expected: str) -> None:
        snapshot = environment.EnvironmentSnapshot(to_fixed_error_length=length)
        assert engine_profile.detect_engine_profile(snapshot) == expected

    def test_fingerprint_beats_user_agent(self, chrome_snapshot: environment.EnvironmentSnapshot) -> None:
        snapshot = chrome_snapshot.model_copy(update={"to_fixed_error_length": 25})
        assert engine_profile.detect_engine_profile(snapshot) == "gecko"

    @pytest.mark.parametrize(
        ("fixture", "expected"),
        [("chrome_snapshot", "chromium"), ("firefox_snapshot", "gecko"), ("safari_snapshot", "webkit")],
    )
    def test_user_agent_fallback(self, fixture: str, expected: str, request: pytest.FixtureRequest) -> None:
        snapshot = request.getfixturevalue(fixture).model_copy(update={"to_fixed_error_length": 99})
        assert engine_profile.detect_engine_profile(snapshot) == expected

    def test_brave_api_means_chromium(self) -> None:
        snapshot = environment.EnvironmentSnapshot(has_brave_api=True)
        assert engine_profile.detect_engine_profile(snapshot) == "chromium"

    def test_nothing_known_is_unknown(self) -> None:
        assert engine_profile.detect_engine_profile(environment.EnvironmentSnapshot()) == "unknown"

    def test_garbage_user_agent_is_unknown(self) -> None:
        snapshot = environment.EnvironmentSnapshot(user_agent="curl/8.4.0")
        assert engine_profile.detect_engine_profile(snapshot) == "unknown"


class TestDetectBrowser:
    def test_chrome(self, chrome_snapshot: environment.EnvironmentSnapshot) -> None:
        info = engine_profile.detect_browser(chrome_snapshot)
        assert (info.engine, info.browser, info.name) == ("chromium", "chrome", "Chrome")

    def test_brave(self, chrome_snapshot: environment.EnvironmentSnapshot) -> None:
        info = engine_profile.detect_browser(chrome_snapshot.model_copy(update={"has_brave_api": True}))
        assert info.browser == "brave"
        assert info.name == "Brave"

    def test_edge(self, chrome_snapshot: environment.EnvironmentSnapshot) -> None:
        ua = chrome_snapshot.user_agent + " Edg/124.0.0.0"
        info = engine_profile.detect_browser(chrome_snapshot.model_copy(update={"user_agent": ua}))
        assert info.browser == "edge"

    def test_opera(self, chrome_snapshot: environment.EnvironmentSnapshot) -> None:
        ua = chrome_snapshot.user_agent + " OPR/109.0.0.0"
        info = engine_profile.detect_browser(chrome_snapshot.model_copy(update={"user_agent": ua}))
        assert info.browser == "opera"

    def test_firefox(self, firefox_snapshot: environment.EnvironmentSnapshot) -> None:
        info = engine_profile.detect_browser(firefox_snapshot)
        assert (info.engine, info.browser) == ("gecko", "firefox")

    def test_safari(self, safari_snapshot: environment.EnvironmentSnapshot) -> None:
        info = engine_profile.detect_browser(safari_snapshot)
        assert (info.engine, info.browser) == ("webkit", "safari")

    def test_unknown_defaults(self) -> None:
        info = engine_profile.detect_browser(environment.EnvironmentSnapshot())
        assert info.engine == "unknown"
        assert info.browser == "unknown"
        assert info.name == "Unknown"
