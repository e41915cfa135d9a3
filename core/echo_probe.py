"""
core/echo_probe.py
ICMP echo via the system ``ping`` binary, run as an async subprocess.

One packet, deadline equal to the probe timeout. Any failure (binary
missing, permission denied, unreachable, timeout) is reported as a
not-alive ECHO result. This probe never raises for those.
"""

from __future__ import annotations

import asyncio
import platform
import re
import time
from math import ceil
from typing import List, Optional

from core.models import ProbeResult
from core.probe import Probe
from utils.constants import ProbeMethod
from utils.logger import get_logger

log = get_logger("reachprobe.echo")

# "time<1ms" (Windows sub-millisecond reply)
_LESS_THAN_RE = re.compile(r"time<(\d+)", re.IGNORECASE)
# "time=12.3 ms" / "time = 12 ms" / "time=12ms"
_LATENCY_RE = re.compile(r"time\s*[=<]\s*(\d+(?:\.\d+)?)\s*ms", re.IGNORECASE)


def parse_ping_latency_ms(output: str) -> Optional[float]:
    """
    Parse the round-trip time out of ``ping`` output.

    ``time<N`` is read as N/2 (midpoint estimate), so "time<1ms" gives 0.5.

    >>> parse_ping_latency_ms("64 bytes from 8.8.8.8: icmp_seq=1 ttl=117 time=12.3 ms")
    12.3
    >>> parse_ping_latency_ms("Request timed out.") is None
    True
    """
    if not output:
        return None

    match = _LESS_THAN_RE.search(output)
    if match:
        return float(match.group(1)) / 2.0

    match = _LATENCY_RE.search(output)
    if match:
        return float(match.group(1))

    return None


class EchoProbe(Probe):
    """One-packet system ping bounded by ``timeout_ms``."""

    name = "echo"

    def __init__(self, timeout_ms: float = 5000, system: Optional[str] = None):
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        self.timeout_ms = timeout_ms
        self._timeout_s = timeout_ms / 1000.0
        self._system = system or platform.system()

    def build_command(self, host: str) -> List[str]:
        """Platform-specific one-packet ping command."""
        if self._system == "Windows":
            return ["ping", "-n", "1", "-w", str(int(self.timeout_ms)), host]

        secs = str(max(1, ceil(self._timeout_s)))
        if self._system == "Linux":
            # -w is the overall deadline; -W would only bound each reply wait
            return ["ping", "-c", "1", "-w", secs, host]
        # macOS / BSD: -t is the overall deadline
        return ["ping", "-c", "1", "-t", secs, host]

    async def probe(self, host: str) -> ProbeResult:
        cmd = self.build_command(host)
        t0 = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            # ping missing or not executable in this environment
            log.debug(f"{host}: echo unavailable ({exc})")
            return ProbeResult.failure(ProbeMethod.ECHO)

        try:
            # Small grace over the ping's own deadline
            stdout, _ = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout_s + 0.5
            )
        except asyncio.TimeoutError:
            log.debug(f"{host}: echo timeout after {self._timeout_s:.1f}s")
            await self._kill(proc)
            return ProbeResult.failure(ProbeMethod.ECHO)

        elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

        if proc.returncode != 0:
            log.debug(f"{host}: echo failed (returncode={proc.returncode})")
            return ProbeResult.failure(ProbeMethod.ECHO)

        output = stdout.decode("utf-8", errors="replace") if stdout else ""
        latency = parse_ping_latency_ms(output)
        if latency is None:
            # Reply received but output unparseable (localized ping); use wall-clock
            latency = elapsed_ms
        log.debug(f"{host}: echo reply in {latency:.2f}ms")
        return ProbeResult.success(latency, ProbeMethod.ECHO)

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is not None:
            return
        try:
            proc.kill()
        except ProcessLookupError:
            return
        await proc.wait()
