"""
core/models.py
Result types shared by every probe, the orchestrator and the series runner.

Each type has a ``to_dict()`` producing the JSON shape served by the API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from statistics import fmean
from datetime import datetime, timezone
from typing import List, Optional

from utils.constants import ProbeMethod


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ─── Single probe ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProbeResult:
    alive:       bool
    latency_ms:  Optional[float]
    method:      str

    def __post_init__(self):
        if self.alive and self.latency_ms is None:
            raise ValueError("alive result requires latency_ms")
        if not self.alive and self.latency_ms is not None:
            raise ValueError("failed result must not carry latency_ms")
        # Normalise enum members to their plain string tag
        object.__setattr__(self, "method", str(getattr(self.method, "value", self.method)))

    @classmethod
    def success(cls, latency_ms: float, method: str) -> "ProbeResult":
        return cls(alive=True, latency_ms=float(latency_ms), method=method)

    @classmethod
    def failure(cls, method: str = ProbeMethod.TIMEOUT) -> "ProbeResult":
        return cls(alive=False, latency_ms=None, method=method)

    def to_dict(self) -> dict:
        return {"alive": self.alive, "time": self.latency_ms, "method": self.method}


# ─── Series ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SeriesSample:
    sequence:    int
    alive:       bool
    latency_ms:  Optional[float]
    method:      str
    timestamp:   str = ""
    error:       Optional[str] = None

    @classmethod
    def from_result(cls, sequence: int, result: ProbeResult) -> "SeriesSample":
        return cls(
            sequence=sequence,
            alive=result.alive,
            latency_ms=result.latency_ms,
            method=result.method,
            timestamp=utc_now(),
        )

    @classmethod
    def from_error(cls, sequence: int, exc: BaseException) -> "SeriesSample":
        return cls(
            sequence=sequence,
            alive=False,
            latency_ms=None,
            method=ProbeMethod.TIMEOUT.value,
            timestamp=utc_now(),
            error=str(exc) or type(exc).__name__,
        )

    def to_dict(self) -> dict:
        d = {
            "sequence":  self.sequence,
            "time":      self.latency_ms,
            "alive":     self.alive,
            "method":    self.method,
            "timestamp": self.timestamp,
        }
        if self.error is not None:
            d["error"] = self.error
        return d


@dataclass
class HostSeriesSummary:
    """
    Statistics for one host's series.

    Filled with ``add()`` as attempts complete, then closed with
    ``finalize()``. ``avg``/``min``/``max`` cover successful samples only.
    """
    host:      str
    samples:   List[SeriesSample] = field(default_factory=list)
    lost:      int = 0
    avg:       Optional[float] = None
    min:       Optional[float] = None
    max:       Optional[float] = None
    error:     Optional[str] = None
    _final:    bool = field(default=False, repr=False, compare=False)

    @classmethod
    def invalid(cls, host, reason: str = "invalid host") -> "HostSeriesSummary":
        summary = cls(host=host, error=reason)
        summary.finalize()
        return summary

    def add(self, sample: SeriesSample) -> None:
        if self._final:
            raise RuntimeError(f"series for {self.host!r} is already finalized")
        self.samples.append(sample)
        if not sample.alive:
            self.lost += 1

    def finalize(self) -> "HostSeriesSummary":
        latencies = self.latencies()
        if latencies:
            self.min = min(latencies)
            self.max = max(latencies)
            # rounding can push the mean just past min or max
            self.avg = min(max(fmean(latencies), self.min), self.max)
        self._final = True
        return self

    def latencies(self) -> List[float]:
        return [s.latency_ms for s in self.samples
                if s.alive and s.latency_ms is not None]

    @property
    def successes(self) -> int:
        return len(self.samples) - self.lost

    @property
    def finalized(self) -> bool:
        return self._final

    def to_dict(self) -> dict:
        d = {
            "host":  self.host,
            "pings": [s.to_dict() for s in self.samples],
            "avg":   self.avg,
            "min":   self.min,
            "max":   self.max,
            "lost":  self.lost,
        }
        if self.error is not None:
            d["error"] = self.error
        return d


@dataclass
class BatchResult:
    results:          List[HostSeriesSummary]
    total_hosts:      int
    requested_count:  int
    timestamp:        str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = utc_now()

    def to_dict(self) -> dict:
        return {
            "results":        [r.to_dict() for r in self.results],
            "timestamp":      self.timestamp,
            "totalHosts":     self.total_hosts,
            "requestedCount": self.requested_count,
        }
