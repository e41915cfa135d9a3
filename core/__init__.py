"""
ReachProbe Core — Public API

from core import ReachabilityOrchestrator, SeriesAggregator, ProbeConfig
"""
from core.models        import ProbeResult, SeriesSample, HostSeriesSummary, BatchResult
from core.probe         import Probe
from core.port_parser   import PortParser, parse_ports, PortParseError
from core.timing        import get_timeouts
from core.config        import ProbeConfig, ConfigError, load_config
from core.echo_probe    import EchoProbe, parse_ping_latency_ms
from core.transport_probe import TransportProbe
from core.http_probe    import ApplicationProbe, matches_allow_list
from core.synthetic     import SyntheticEstimator, is_local
from core.orchestrator  import ReachabilityOrchestrator
from core.series        import SeriesAggregator

__all__ = [
    "ProbeResult", "SeriesSample", "HostSeriesSummary", "BatchResult",
    "Probe",
    "PortParser", "parse_ports", "PortParseError",
    "get_timeouts",
    "ProbeConfig", "ConfigError", "load_config",
    "EchoProbe", "parse_ping_latency_ms",
    "TransportProbe",
    "ApplicationProbe", "matches_allow_list",
    "SyntheticEstimator", "is_local",
    "ReachabilityOrchestrator",
    "SeriesAggregator",
]
