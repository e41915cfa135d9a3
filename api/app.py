"""
api/app.py
Flask front for the probing engine.

Routes:
  GET  /api/ping/<host>    one orchestrated probe
  POST /api/ping-series    {hosts: [...], count: 5}
  GET  /api/status         liveness / uptime

Properties:
  - debug=False enforced programmatically (cannot be overridden by env)
  - stacktraces never exposed to client; the exception text is only
    returned when environment == "development"
  - CORS header only when ``cors_origin`` is configured

Layering: api -> core, utils
"""

from __future__ import annotations

import asyncio
import platform
import time
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from core.config import ProbeConfig
from core.models import utc_now
from core.orchestrator import ReachabilityOrchestrator
from core.series import SeriesAggregator
from utils.constants import DEFAULT_SERIES_COUNT
from utils.logger import get_logger
from utils.validators import validate_count, validate_host

log = get_logger("reachprobe.api")

VERSION = "1.0.0"
_GENERIC_ERROR = "An error occurred"


# -- Factory ------------------------------------------------------------------

def create_app(
    cfg: Optional[dict] = None,
    orchestrator: Optional[ReachabilityOrchestrator] = None,
    aggregator: Optional[SeriesAggregator] = None,
    probe_config: Optional[ProbeConfig] = None,
) -> Flask:
    """
    Application factory.

    cfg keys (the ``server:`` section of config.yaml):
      environment    str  -- "development" exposes exception text in 500s
      cors_origin    str  -- value for Access-Control-Allow-Origin
      host           str
      port           int
    """
    cfg = cfg or {}
    probe_config = probe_config or ProbeConfig()
    orchestrator = orchestrator or ReachabilityOrchestrator.from_config(probe_config)
    aggregator = aggregator or SeriesAggregator(
        orchestrator, pause_ms=probe_config.series_pause_ms
    )
    max_count = probe_config.max_series_count

    app = Flask(__name__)
    app.config["DEBUG"]                = False   # HARD -- no env override
    app.config["PROPAGATE_EXCEPTIONS"] = False
    app.config["TRAP_HTTP_EXCEPTIONS"] = False

    development = cfg.get("environment", "production") == "development"
    cors_origin = cfg.get("cors_origin")
    started = time.monotonic()

    def _fault_message(exc: Exception) -> str:
        return str(exc) if development else _GENERIC_ERROR

    @app.before_request
    def _log_request():
        log.info(f"{request.method} {request.path}")

    @app.after_request
    def _cors(resp):
        if cors_origin:
            resp.headers["Access-Control-Allow-Origin"] = cors_origin
            resp.headers["Access-Control-Allow-Credentials"] = "true"
            resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return resp

    # Error handlers (no stacktrace leakage)
    @app.errorhandler(404)
    def _e404(e):
        return jsonify({"error": "Endpoint not found", "path": request.path}), 404

    @app.errorhandler(405)
    def _e405(e):
        return jsonify({"error": "Method not allowed", "path": request.path}), 405

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.name, "path": request.path}), e.code
        log.exception("Unhandled exception")
        return jsonify({"error": "Server error", "message": _fault_message(e)}), 500

    # Routes
    @app.route("/api/ping/<path:host>")
    def api_ping(host: str):
        if not validate_host(host):
            return jsonify({"error": "Invalid host address", "host": host}), 400

        log.info(f"Probing {host}")
        t0 = time.monotonic()
        try:
            result = asyncio.run(orchestrator.probe(host))
        except Exception as exc:
            log.exception(f"Probe of {host} failed")
            return jsonify({
                "error": "Ping failed",
                "message": _fault_message(exc),
                "host": host,
            }), 500
        total_ms = round((time.monotonic() - t0) * 1000)

        log.info(f"{host}: {result.latency_ms}ms via {result.method} "
                 f"({'alive' if result.alive else 'down'})")
        return jsonify({
            "host":             host,
            **result.to_dict(),
            "timestamp":        utc_now(),
            "totalRequestTime": total_ms,
        })

    @app.route("/api/ping-series", methods=["POST"])
    def api_ping_series():
        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            return jsonify({"error": "hosts array required"}), 400
        hosts = body.get("hosts")
        count = body.get("count", DEFAULT_SERIES_COUNT)

        if not isinstance(hosts, list):
            return jsonify({"error": "hosts array required"}), 400

        ok, msg = validate_count(count, max_count)
        if not ok:
            return jsonify({"error": msg}), 400
        count = int(count)

        try:
            batch = asyncio.run(aggregator.run_series(hosts, count))
        except Exception as exc:
            log.exception("Ping series failed")
            return jsonify({
                "error": "Ping series failed",
                "message": _fault_message(exc),
            }), 500
        return jsonify(batch.to_dict())

    @app.route("/api/status")
    def api_status():
        return jsonify({
            "status":    "OK",
            "timestamp": utc_now(),
            "uptime":    round(time.monotonic() - started, 3),
            "version":   VERSION,
            "python":    platform.python_version(),
            "restricted": probe_config.restricted,
        })

    return app


# -- Server runner ------------------------------------------------------------

def run_server(
    cfg: dict,
    probe_config: Optional[ProbeConfig] = None,
) -> None:
    app = create_app(cfg, probe_config=probe_config)
    host = cfg.get("host", "127.0.0.1")
    port = cfg.get("port", 3001)
    restricted = probe_config.restricted if probe_config else False
    print(f"[*] ReachProbe API at http://{host}:{port}")
    print(f"[*] Try: http://{host}:{port}/api/ping/8.8.8.8")
    print(f"[*] Echo probe: {'OFF (restricted)' if restricted else 'ON'}")
    app.run(host=host, port=port, debug=False, use_reloader=False)
