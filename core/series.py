"""
core/series.py
Repeated probes per host, aggregated into loss / min / max / avg.

Hosts run in input order and attempts run one after another with a short
pause between them, so a batch never floods its targets.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from core.models import BatchResult, HostSeriesSummary, SeriesSample
from core.orchestrator import ReachabilityOrchestrator
from utils.constants import SERIES_PAUSE_MS
from utils.logger import get_logger
from utils.validators import validate_host

log = get_logger("reachprobe.series")


class SeriesAggregator:
    def __init__(
        self,
        orchestrator: ReachabilityOrchestrator,
        pause_ms: float = SERIES_PAUSE_MS,
    ):
        self._orchestrator = orchestrator
        self._pause_s = pause_ms / 1000.0

    async def run_series(self, hosts: Sequence[str], count: int) -> BatchResult:
        """
        Probe every host ``count`` times.

        The count limit is enforced by the caller; this only requires
        ``hosts`` to be a sequence. ``len(results) == len(hosts)`` always.
        """
        results = []
        for host in hosts:
            if not validate_host(host):
                log.info(f"Skipping invalid host {host!r}")
                results.append(HostSeriesSummary.invalid(host))
                continue
            results.append(await self.run_host(host, count))

        return BatchResult(
            results=results,
            total_hosts=len(hosts),
            requested_count=count,
        )

    async def run_host(self, host: str, count: int) -> HostSeriesSummary:
        log.info(f"{host}: starting {count} probes")
        summary = HostSeriesSummary(host=host)

        for seq in range(1, count + 1):
            if seq > 1 and self._pause_s > 0:
                await asyncio.sleep(self._pause_s)
            try:
                result = await self._orchestrator.probe(host)
            except Exception as exc:
                log.warning(f"{host}: attempt {seq} failed: {exc}")
                summary.add(SeriesSample.from_error(seq, exc))
                continue
            summary.add(SeriesSample.from_result(seq, result))

        summary.finalize()
        log.info(f"{host}: {summary.successes}/{count} successful")
        return summary
