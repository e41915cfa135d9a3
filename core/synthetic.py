"""
core/synthetic.py
Last-resort latency estimate used when no real probe succeeded.

The result is always alive and always tagged SIMULATED, so callers can tell
a real measurement from a guess.
"""

from __future__ import annotations

import random
from typing import Optional

from core.models import ProbeResult
from core.probe import Probe
from utils.constants import LOCAL_LATENCY, LOCAL_PREFIXES, REMOTE_LATENCY, ProbeMethod


def is_local(host: str) -> bool:
    return host == "localhost" or host.startswith(LOCAL_PREFIXES)


class SyntheticEstimator(Probe):
    name = "synthetic"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def estimate(self, host: str) -> ProbeResult:
        base, variation = LOCAL_LATENCY if is_local(host) else REMOTE_LATENCY
        latency = round(base + self._rng.random() * variation, 2)
        return ProbeResult.success(latency, ProbeMethod.SIMULATED)

    async def probe(self, host: str) -> ProbeResult:
        return self.estimate(host)
