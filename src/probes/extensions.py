"""Content-blocker and anti-fingerprinting probes.

The page runs bait elements, bait requests, a tracking pixel, and
canvas / WebRTC readouts; the client reports whether each was
interfered with.  The tracking pixel also catches Firefox's built-in
Enhanced Tracking Protection, which is strict in private windows.
"""

from __future__ import annotations

# Finding text for extension checks reported as a plain verdict.
REPORTED_EXTENSION_EVIDENCE: dict[str, str] = {
    "adBlockElementHiding": "Ad bait element hidden",
    "adBlockNetwork": "Ad bait request blocked",
    "adBlockScript": "Ad bait script blocked",
    "canvasProtection": "Canvas readout randomised",
    "webrtcProtection": "WebRTC local IP hidden",
    "trackingProtection": "Tracking pixel blocked",
}
