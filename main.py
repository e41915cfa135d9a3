#!/usr/bin/env python3
"""
ReachProbe v1.0 — Host Reachability Prober
main.py — CLI entry point

Usage:
  python3 main.py --ping 8.8.8.8
  python3 main.py --ping example.com --restricted --json
  python3 main.py --series 8.8.8.8 github.com 192.168.1.1 --count 10
  python3 main.py --series localhost --ports 80,443,8080 --timeouts fast
  python3 main.py --serve --host 127.0.0.1 --port 3001
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
import time

from core.config import ConfigError, ProbeConfig, load_config
from core.models import utc_now
from core.orchestrator import ReachabilityOrchestrator
from core.port_parser import PortParseError, parse_ports
from core.series import SeriesAggregator
from core.timing import get_timeouts
from utils.constants import DEFAULT_SERIES_COUNT, TIMEOUT_PROFILES
from utils.logger import get_logger, set_level
from utils.validators import validate_count, validate_host

log = get_logger("reachprobe")

BANNER = r"""
  ╔══════════════════════════════════════════════╗
  ║   ReachProbe v1.0                            ║
  ║   echo · http · tcp race · estimate          ║
  ╚══════════════════════════════════════════════╝"""


def _probe_config(args: argparse.Namespace, cfg: dict) -> ProbeConfig:
    """Merge config file, environment and CLI flags. CLI wins."""
    pc = ProbeConfig.from_mapping(cfg.get("probe", {}))
    if args.restricted or os.environ.get("REACHPROBE_RESTRICTED") == "1":
        pc.restricted = True
    if args.timeouts:
        pc.timeouts = get_timeouts(args.timeouts)
    if args.ports:
        pc.transport_ports = tuple(parse_ports(args.ports))
    return pc


# ─── Single probe ─────────────────────────────────────────────────────────────

async def _run_ping(host: str, pc: ProbeConfig, as_json: bool) -> int:
    if not validate_host(host):
        log.error(f"Invalid host address: {host!r}")
        return 2

    orchestrator = ReachabilityOrchestrator.from_config(pc)
    t0 = time.monotonic()
    result = await orchestrator.probe(host)
    total_ms = round((time.monotonic() - t0) * 1000)

    if as_json:
        print(json.dumps({
            "host": host, **result.to_dict(),
            "timestamp": utc_now(), "totalRequestTime": total_ms,
        }, indent=2))
        return 0

    note = "  (estimate, no real probe answered)" if result.method == "SIMULATED" else ""
    print(f"\n  {host}: {result.latency_ms:.2f}ms via {result.method}{note}")
    print(f"  total {total_ms}ms\n")
    return 0


# ─── Series ───────────────────────────────────────────────────────────────────

async def _run_series(hosts: list, count: int, pc: ProbeConfig, as_json: bool) -> int:
    ok, msg = validate_count(count, pc.max_series_count)
    if not ok:
        log.error(msg)
        return 2

    orchestrator = ReachabilityOrchestrator.from_config(pc)
    aggregator = SeriesAggregator(orchestrator, pause_ms=pc.series_pause_ms)
    batch = await aggregator.run_series(hosts, count)

    if as_json:
        print(json.dumps(batch.to_dict(), indent=2))
        return 0

    print(f"\n{'═'*64}")
    print(f"  SERIES  {len(hosts)} host(s) × {count}")
    print(f"{'─'*64}")
    print(f"  {'HOST':<28} {'OK':>5} {'LOST':>5} {'MIN':>7} {'AVG':>7} {'MAX':>7}")
    for s in batch.results:
        if s.error:
            print(f"  {str(s.host):<28} {s.error}")
            continue
        fmt = lambda v: f"{v:.1f}" if v is not None else "—"
        print(f"  {s.host:<28} {s.successes:>5} {s.lost:>5} "
              f"{fmt(s.min):>7} {fmt(s.avg):>7} {fmt(s.max):>7}")
    print(f"{'═'*64}\n")
    return 0


# ─── CLI ─────────────────────────────────────────────────────────────────────

def build_cli() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="reachprobe",
        description="ReachProbe v1.0 — Host Reachability Prober",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Probe chain:  echo (skipped with --restricted) → http → tcp race → estimate
Timeouts:     fast  normal  patient

Examples:
  %(prog)s --ping 8.8.8.8
  %(prog)s --series 1.1.1.1 github.com --count 10
  %(prog)s --serve --port 3001
""",
    )
    g = ap.add_argument_group
    p = g("Probe")
    p.add_argument("--ping",       metavar="HOST",    help="Probe one host once")
    p.add_argument("--series",     metavar="HOST",    nargs="+", help="Probe hosts repeatedly")
    p.add_argument("--count",      type=int, default=DEFAULT_SERIES_COUNT,
                   help=f"Probes per host for --series (default: {DEFAULT_SERIES_COUNT})")
    p.add_argument("--restricted", action="store_true",
                   help="Skip the ICMP echo probe (sandboxed deployments)")
    p.add_argument("--timeouts",   metavar="PROFILE", choices=list(TIMEOUT_PROFILES))
    p.add_argument("--ports",      metavar="SPEC",
                   help="TCP race ports (default: 80,443,53,22)")
    p.add_argument("--json",       action="store_true", help="JSON output")

    s = g("Server")
    s.add_argument("--serve",      action="store_true", help="Start the HTTP API")
    s.add_argument("--host",       default=None)
    s.add_argument("--port",       type=int, default=None)

    ap.add_argument("--config",    default="config.yaml", metavar="FILE")
    ap.add_argument("--quiet",     action="store_true", help="Only log warnings")
    ap.add_argument("--verbose",   action="store_true", help="Log every probe step")
    ap.add_argument("--no-logo",   action="store_true", help="Hide ASCII banner")
    ap.add_argument("--version",   action="version",   version="ReachProbe 1.0")
    return ap


def main(argv: list | None = None) -> int:
    ap = build_cli()
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        ap.print_help()
        return 0
    args = ap.parse_args(argv)

    if args.json:
        # errors only: they are logged on paths that print no document
        set_level(logging.ERROR)
    elif args.quiet:
        set_level(logging.WARNING)
    elif args.verbose:
        set_level(logging.DEBUG)

    if not (args.no_logo or args.json):
        print(BANNER)

    try:
        cfg = load_config(args.config)
        pc = _probe_config(args, cfg)
    except (ConfigError, PortParseError, ValueError) as exc:
        log.error(f"Configuration error: {exc}")
        return 2

    try:
        if args.ping:
            return asyncio.run(_run_ping(args.ping, pc, args.json))

        if args.series:
            return asyncio.run(_run_series(args.series, args.count, pc, args.json))

        if args.serve:
            server_cfg = dict(cfg.get("server", {}))
            if args.host:
                server_cfg["host"] = args.host
            if args.port:
                server_cfg["port"] = args.port
            from api.app import run_server
            run_server(server_cfg, probe_config=pc)
            return 0

        ap.print_help()
        return 0

    except KeyboardInterrupt:
        print("\n  [!] Interrupted by user")
        return 130
    except Exception as exc:
        log.exception(f"Fatal error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
