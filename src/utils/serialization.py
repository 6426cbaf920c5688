"""Shared serialization helpers for camelCase conversion.

The browser client posts snapshots with camelCase keys and renders
reports from camelCase JSON, so every public model uses
``snake_to_camel`` as its alias generator.
"""

from __future__ import annotations


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"high_tier_hits"``.

    Returns:
        The camelCase equivalent, e.g. ``"highTierHits"``.
    """
    parts = name.split("_")
    return parts[0] + "".join(w.capitalize() for w in parts[1:])
