"""
core/timing.py
Timeout profiles for the probe chain.

Every strategy owns its deadline; nothing here is shared mutable state.
The profile only decides the numbers handed to each probe's constructor.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Optional

from utils.constants import ProbeTimeouts, TIMEOUT_PROFILES, DEFAULT_TIMEOUTS


def get_timeouts(name: str = DEFAULT_TIMEOUTS) -> ProbeTimeouts:
    """
    Get a timeout profile by name.
    Accepts: fast, normal, patient (case-insensitive).
    """
    key = name.lower()
    if key not in TIMEOUT_PROFILES:
        raise ValueError(
            f"Unknown timeout profile {name!r}. "
            f"Choose from: {list(TIMEOUT_PROFILES)}"
        )
    return TIMEOUT_PROFILES[key]


def override_timeouts(
    base: ProbeTimeouts, overrides: Optional[Mapping[str, float]] = None
) -> ProbeTimeouts:
    """Return ``base`` with individual deadlines replaced from a config dict."""
    if not overrides:
        return base
    known = {"echo_ms", "http_ms", "tcp_port_ms", "tcp_overall_ms"}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown timeout keys: {sorted(unknown)}")
    values = {}
    for key, value in overrides.items():
        value = float(value)
        if value <= 0:
            raise ValueError(f"{key} must be positive, got {value}")
        values[key] = value
    return replace(base, name=f"{base.name}+custom", **values)
