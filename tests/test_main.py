"""Tests for src.main — HTTP endpoints."""

from __future__ import annotations

from unittest import mock

import pytest
from fastapi import testclient

from src import config, main


@pytest.fixture()
def client(offline_settings: config.EngineSettings):
    with mock.patch.object(config, "get_settings", return_value=offline_settings):
        yield testclient.TestClient(main.app)


_CHROME_INCOGNITO = {
    "environment": {
        "userAgent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/124.0.0.0 Safari/537.36",
        "toFixedErrorLength": 51,
        "hasDeviceMemory": True,
        "observations": {
            "quotaHeapRatio": {"value": 120, "limit": 4096},
            "fileSystemAPI": {"triggered": True},
        },
    },
    "signals": {"globalPrivacyControl": False, "doNotTrack": "1"},
}


class TestHealth:
    def test_ok(self, client: testclient.TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestClassifyEndpoint:
    def test_returns_camel_case_report(self, client: testclient.TestClient) -> None:
        response = client.post("/api/privacy-mode", json=_CHROME_INCOGNITO)
        assert response.status_code == 200
        body = response.json()
        assert body["statusLabel"] == "Private / Incognito Detected"
        assert body["engineProfile"] == "chromium"
        assert body["confidenceTier"] == "HIGH"
        assert "displayFindings" in body
        assert all("durationMs" not in e for e in body["evidence"])

    def test_empty_body_defaults(self, client: testclient.TestClient) -> None:
        response = client.post("/api/privacy-mode", json={})
        assert response.status_code == 200
        assert response.json()["engineProfile"] == "unknown"

    def test_invalid_body(self, client: testclient.TestClient) -> None:
        response = client.post("/api/privacy-mode", json={"environment": {"screenWidth": "wide"}})
        assert response.status_code == 422

    def test_client_ip_defaults_to_peer(self, client: testclient.TestClient) -> None:
        with mock.patch.object(main.classification, "run_classification", mock.AsyncMock()) as run:
            run.return_value = main.report.Report(status_label="x", normalized_score=0, confidence_tier="NONE")
            client.post("/api/privacy-mode", json={})
        signals = run.await_args.args[1]
        assert signals.client_ip == "testclient"

    def test_explicit_client_ip_kept(self, client: testclient.TestClient) -> None:
        with mock.patch.object(main.classification, "run_classification", mock.AsyncMock()) as run:
            run.return_value = main.report.Report(status_label="x", normalized_score=0, confidence_tier="NONE")
            client.post("/api/privacy-mode", json={"signals": {"clientIp": "1.2.3.4"}})
        assert run.await_args.args[1].client_ip == "1.2.3.4"


class TestReclassifyEndpoint:
    def test_vpn_flag_applied(self, client: testclient.TestClient) -> None:
        body = {**_CHROME_INCOGNITO, "vpnDetected": True}
        response = client.post("/api/privacy-mode/reclassify", json=body)
        assert response.status_code == 200
        actions = [s["action"] for s in response.json()["suggestions"]]
        assert "Consider Using a VPN" not in actions

    def test_vpn_flag_required(self, client: testclient.TestClient) -> None:
        response = client.post("/api/privacy-mode/reclassify", json=_CHROME_INCOGNITO)
        assert response.status_code == 422
