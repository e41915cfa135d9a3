"""
core/probe.py
Common capability shared by every probing strategy.
"""

from __future__ import annotations

from core.models import ProbeResult


class Probe:
    """
    One reachability strategy.

    Subclasses implement ``probe(host)`` and return a ProbeResult. A strategy
    may raise; the orchestrator treats any exception as a failed attempt.
    """

    name: str = "probe"

    async def probe(self, host: str) -> ProbeResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
