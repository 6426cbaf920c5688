"""Probes package — one independent environment check per probe.

Browser-side checks post their raw observations; the probes here
interpret them into positive / negative / indeterminate results.
:func:`registry.default_registry` wires every built-in probe.
"""
