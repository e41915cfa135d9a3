"""ReachProbe API — Public API

Flask application exposing single probes and probe series over HTTP.

Usage:
    from api.app import create_app, run_server
"""
from api.app import create_app, run_server

__all__ = [
    "create_app",
    "run_server",
]
