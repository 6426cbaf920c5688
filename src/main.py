"""
Server entry point — FastAPI app setup and route configuration.
Sets up the FastAPI server with CORS and the privacy-mode classification routes.
"""

from __future__ import annotations

import contextlib
import os
from collections.abc import AsyncGenerator

import dotenv
import fastapi
import uvicorn
from fastapi.middleware import cors

from src import config
from src.models import environment, report, requests
from src.pipeline import classification
from src.utils import logger

dotenv.load_dotenv()

log = logger.create_logger("Server")

HOST = os.environ.get("UVICORN_HOST", "0.0.0.0")
PORT = int(os.environ.get("UVICORN_PORT", "3001"))
IS_PRODUCTION = os.environ.get("ENVIRONMENT", "development") == "production"


@contextlib.asynccontextmanager
async def lifespan(_app: fastapi.FastAPI) -> AsyncGenerator[None]:
    """Log server start and the active settings on startup."""
    settings = config.get_settings()
    log.section("Privacy Mode Classifier Started")
    log.info(
        "Settings",
        {
            "env": "production" if IS_PRODUCTION else "development",
            "probeTimeoutMs": settings.probe_timeout_ms,
            "torExitList": settings.tor_exit_list_enabled,
        },
    )
    yield


app = fastapi.FastAPI(title="Privacy Mode Classifier", lifespan=lifespan)

# ============================================================================
# Middleware
# ============================================================================

app.add_middleware(
    cors.CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# API Routes
# ============================================================================


def _with_client_ip(signals: environment.ClientSignals, request: fastapi.Request) -> environment.ClientSignals:
    """Default the client IP to the connection peer when the body omits it."""
    if signals.client_ip or request.client is None:
        return signals
    return signals.model_copy(update={"client_ip": request.client.host})


@app.get("/api/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


@app.post("/api/privacy-mode", response_model=report.Report)
async def classify_endpoint(
    body: requests.ClassificationRequest,
    request: fastapi.Request,
) -> report.Report:
    """
    Classify the visitor's browsing mode from posted probe observations.
    """
    log.info("Incoming classification request", {"userAgent": body.environment.user_agent[:80]})
    return await classification.run_classification(
        body.environment,
        _with_client_ip(body.signals, request),
    )


@app.post("/api/privacy-mode/reclassify", response_model=report.Report)
async def reclassify_endpoint(
    body: requests.ReclassifyRequest,
    request: fastapi.Request,
) -> report.Report:
    """
    Re-run classification once the separate VPN check has finished.
    """
    log.info("Incoming reclassification request", {"vpnDetected": body.vpn_detected})
    return await classification.reclassify(
        body.environment,
        _with_client_ip(body.signals, request),
        vpn_detected=body.vpn_detected,
    )


# ============================================================================
# Start Server
# ============================================================================


def run() -> None:
    """Entry point for running the server."""
    log.success(f"Server listening on {HOST}:{PORT}")
    uvicorn.run(
        "src.main:app",
        host=HOST,
        port=PORT,
        reload=not IS_PRODUCTION,
    )


if __name__ == "__main__":
    run()
