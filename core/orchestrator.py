"""
core/orchestrator.py
"Smart probe": fixed-priority chain of strategies with local failure capture.

  1. EchoProbe         (left out in restricted deployments)
  2. ApplicationProbe  (falls back to the TCP race on connection errors)
  3. SyntheticEstimator (always answers)

The first alive result wins. A strategy that raises counts as a failure.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from core.config import ProbeConfig
from core.echo_probe import EchoProbe
from core.http_probe import ApplicationProbe
from core.models import ProbeResult
from core.probe import Probe
from core.synthetic import SyntheticEstimator
from core.transport_probe import TransportProbe
from utils.logger import get_logger

log = get_logger("reachprobe.orchestrator")


class ReachabilityOrchestrator:
    """
    Runs ``strategies`` in order and returns the first alive result; if none
    answers, returns the ``fallback`` estimate. ``probe()`` never raises.
    """

    def __init__(
        self,
        strategies: Sequence[Probe],
        fallback: Optional[SyntheticEstimator] = None,
    ):
        self.strategies: List[Probe] = list(strategies)
        self.fallback = fallback or SyntheticEstimator()

    @classmethod
    def from_config(cls, config: Optional[ProbeConfig] = None) -> "ReachabilityOrchestrator":
        config = config or ProbeConfig()
        t = config.timeouts
        transport = TransportProbe(
            ports=config.transport_ports,
            per_port_timeout_ms=t.tcp_port_ms,
            overall_timeout_ms=t.tcp_overall_ms,
        )
        strategies: List[Probe] = []
        if not config.restricted:
            strategies.append(EchoProbe(timeout_ms=t.echo_ms))
        strategies.append(ApplicationProbe(
            transport=transport,
            secure_hosts=config.secure_hosts,
            remapped_urls=config.remapped_urls,
            timeout_ms=t.http_ms,
        ))
        return cls(strategies)

    async def probe(self, host: str) -> ProbeResult:
        for strategy in self.strategies:
            try:
                result = await strategy.probe(host)
            except Exception as exc:
                log.warning(f"{host}: {strategy.name} probe raised {type(exc).__name__}: {exc}")
                continue
            if result.alive:
                return result
            log.debug(f"{host}: {strategy.name} -> {result.method}, trying next")

        result = self.fallback.estimate(host)
        log.debug(f"{host}: all probes failed, simulated {result.latency_ms}ms")
        return result
