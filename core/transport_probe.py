"""
core/transport_probe.py
TCP connect race across a handful of well-known ports.

  • asyncio.open_connection — non-blocking, no raw sockets needed
  • every port dialled at once; the first completed handshake wins
  • losers are cancelled and every opened socket is closed
  • per-port and overall deadlines are independent
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional, Sequence, Tuple

from core.models import ProbeResult
from core.probe import Probe
from utils.constants import DEFAULT_TRANSPORT_PORTS, ProbeMethod, tcp_method
from utils.logger import get_logger

log = get_logger("reachprobe.transport")


class TransportProbe(Probe):
    """First-success race of TCP connects. Never raises for network errors."""

    name = "tcp"

    def __init__(
        self,
        ports: Sequence[int] = DEFAULT_TRANSPORT_PORTS,
        per_port_timeout_ms: float = 3000,
        overall_timeout_ms: float = 4000,
    ):
        if not ports:
            raise ValueError("TransportProbe needs at least one port")
        self.ports = tuple(ports)
        self._per_port_s = per_port_timeout_ms / 1000.0
        self._overall_s = overall_timeout_ms / 1000.0

    async def probe(self, host: str) -> ProbeResult:
        tasks = [asyncio.ensure_future(self._connect(host, p)) for p in self.ports]
        try:
            for coro in asyncio.as_completed(tasks, timeout=self._overall_s):
                try:
                    won = await coro
                except asyncio.TimeoutError:
                    # overall deadline: as_completed gives up on the rest
                    break
                if won is not None:
                    port, latency = won
                    log.debug(f"{host}: TCP/{port} connected in {latency:.2f}ms")
                    return ProbeResult.success(latency, tcp_method(port))
        finally:
            # Abandon the losers; their late results and errors are dropped.
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        log.debug(f"{host}: no TCP port in {list(self.ports)} answered")
        return ProbeResult.failure(ProbeMethod.TIMEOUT)

    async def _connect(self, host: str, port: int) -> Optional[Tuple[int, float]]:
        """Dial one port. Returns (port, latency_ms) or None on any failure."""
        writer: Optional[asyncio.StreamWriter] = None
        t0 = time.monotonic()
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=self._per_port_s,
            )
            return port, round((time.monotonic() - t0) * 1000, 2)
        except asyncio.TimeoutError:
            return None          # filtered / silent
        except OSError:
            return None          # refused, unreachable, DNS failure
        finally:
            if writer is not None:
                writer.close()
                try:
                    await writer.wait_closed()
                except OSError:
                    pass
