"""
ReachProbe Constants & Enums
Probe method tags, timeout profiles and the static host tables used by the
application probe.
"""

from enum import Enum
from dataclasses import dataclass


# ─── Probe Methods (tag carried by every ProbeResult) ─────────────────────────
class ProbeMethod(str, Enum):
    ECHO      = "ECHO"        # system ping, one packet
    HTTP      = "HTTP"        # any HTTP response counts
    SIMULATED = "SIMULATED"   # synthetic estimate, last resort
    TIMEOUT   = "TIMEOUT"     # nothing answered in time


def tcp_method(port: int) -> str:
    """Method tag for a transport race won by ``port``."""
    return f"TCP_{port}"


# ─── Timeout Presets ──────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ProbeTimeouts:
    """Per-strategy deadlines, all in milliseconds."""
    name: str
    echo_ms: float
    http_ms: float
    tcp_port_ms: float
    tcp_overall_ms: float


TIMEOUT_PROFILES = {
    "fast":    ProbeTimeouts("fast",    echo_ms=2000,  http_ms=2000,
                             tcp_port_ms=1000, tcp_overall_ms=1500),

    "normal":  ProbeTimeouts("normal",  echo_ms=5000,  http_ms=5000,
                             tcp_port_ms=3000, tcp_overall_ms=4000),

    "patient": ProbeTimeouts("patient", echo_ms=10000, http_ms=10000,
                             tcp_port_ms=6000, tcp_overall_ms=8000),
}

DEFAULT_TIMEOUTS = "normal"

# ─── Transport race ───────────────────────────────────────────────────────────
DEFAULT_TRANSPORT_PORTS = (80, 443, 53, 22)
PORT_MIN        = 1
PORT_MAX        = 65535
PORT_MAX_BATCH  = 32      # a race wider than this is a port scan, not a probe

# ─── Series ───────────────────────────────────────────────────────────────────
MAX_SERIES_COUNT   = 20
DEFAULT_SERIES_COUNT = 5
SERIES_PAUSE_MS    = 100

# ─── Application probe host tables ────────────────────────────────────────────
# Matched exactly or as a dot-suffix ("www.google.com" -> "google.com").
SECURE_HOSTS = (
    "google.com",
    "github.com",
    "cloudflare.com",
    "microsoft.com",
    "amazon.com",
    "dns.google",
    "8.8.8.8",
    "8.8.4.4",
    "1.1.1.1",
    "1.0.0.1",
)

# A bare GET / against these resolvers is not meaningful; ask a real question.
REMAPPED_URLS = {
    "8.8.8.8": "https://dns.google/resolve?name=example.com&type=A",
    "1.1.1.1": "https://cloudflare-dns.com/dns-query?name=example.com&type=A",
}

# ─── Synthetic estimate ───────────────────────────────────────────────────────
LOCAL_PREFIXES = ("192.168", "10.", "172.16")
LOCAL_LATENCY  = (2.0, 3.0)     # (base, variation) ms
REMOTE_LATENCY = (25.0, 20.0)

USER_AGENT = "ReachProbe/1.0 (+reachability-check)"

# ─── Layering Contract (hard import rules - enforced by tests) ───────────────
# core  → may import: utils
# api   → may import: core, utils
# utils → stdlib only
# NEVER: core imports api
