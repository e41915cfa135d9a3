"""
core/config.py
Explicit configuration for the probe chain.

Nothing in ``core`` reads environment variables: the CLI or server builds a
ProbeConfig (usually from the ``probe:`` section of config.yaml) and hands
it to the orchestrator.

Example config.yaml:

    probe:
      restricted: true          # no ICMP (containers, PaaS)
      timeouts: fast            # or a mapping of overrides
      transport_ports: "80,443,53,22"
      secure_hosts: [google.com, github.com]
      series_pause_ms: 100
    server:
      host: 127.0.0.1
      port: 3001
      environment: production
      cors_origin: http://localhost:3000
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

import yaml

from core.port_parser import parse_ports
from core.timing import get_timeouts, override_timeouts
from utils.constants import (
    DEFAULT_TIMEOUTS, DEFAULT_TRANSPORT_PORTS, MAX_SERIES_COUNT,
    REMAPPED_URLS, SECURE_HOSTS, SERIES_PAUSE_MS, ProbeTimeouts,
)


class ConfigError(ValueError):
    """Raised when a configuration value is unusable."""


@dataclass
class ProbeConfig:
    restricted:        bool = False
    timeouts:          ProbeTimeouts = field(default_factory=get_timeouts)
    transport_ports:   Tuple[int, ...] = DEFAULT_TRANSPORT_PORTS
    secure_hosts:      Tuple[str, ...] = SECURE_HOSTS
    remapped_urls:     Dict[str, str] = field(default_factory=lambda: dict(REMAPPED_URLS))
    series_pause_ms:   float = SERIES_PAUSE_MS
    max_series_count:  int = MAX_SERIES_COUNT

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ProbeConfig":
        """Build from the ``probe:`` section of a config file."""
        data = dict(data or {})
        cfg = cls()
        try:
            restricted = data.get("restricted", cfg.restricted)
            if not isinstance(restricted, bool):
                raise ConfigError(f"restricted must be true or false, got {restricted!r}")
            cfg.restricted = restricted

            timeouts = data.get("timeouts", DEFAULT_TIMEOUTS)
            if isinstance(timeouts, str):
                cfg.timeouts = get_timeouts(timeouts)
            elif isinstance(timeouts, Mapping):
                overrides = dict(timeouts)
                base = get_timeouts(overrides.pop("profile", DEFAULT_TIMEOUTS))
                cfg.timeouts = override_timeouts(base, overrides)
            else:
                raise ConfigError(f"timeouts must be a name or mapping, got {timeouts!r}")

            ports = data.get("transport_ports")
            if isinstance(ports, str):
                cfg.transport_ports = tuple(parse_ports(ports))
            elif ports is not None:
                cfg.transport_ports = tuple(parse_ports(",".join(str(p) for p in ports)))

            if "secure_hosts" in data:
                cfg.secure_hosts = tuple(str(h) for h in data["secure_hosts"] or ())
            if "remapped_urls" in data:
                cfg.remapped_urls = {str(k): str(v) for k, v in (data["remapped_urls"] or {}).items()}

            cfg.series_pause_ms = float(data.get("series_pause_ms", cfg.series_pause_ms))
            cfg.max_series_count = int(data.get("max_series_count", cfg.max_series_count))
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid probe configuration: {exc}") from exc

        if cfg.series_pause_ms < 0:
            raise ConfigError("series_pause_ms must be >= 0")
        if cfg.max_series_count < 1:
            raise ConfigError("max_series_count must be >= 1")
        return cfg


def load_config(path: str | Path) -> dict:
    """Read a YAML config file. A missing file yields an empty config."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data
