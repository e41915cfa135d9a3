"""
tests/test_cli.py
CLI smoke tests for main.py (network-free: the probe chain is stubbed).
Run: pytest tests/test_cli.py -v
"""

import sys
import os
import json
import logging
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import patch

import main
from utils.logger import set_level
from core.orchestrator import ReachabilityOrchestrator


@pytest.fixture
def no_config(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("probe:\n  series_pause_ms: 0\n")
    return ["--config", str(cfg), "--no-logo", "--quiet"]


@pytest.fixture
def logs_on_stdout(capsys):
    """Point every reachprobe handler at the captured stdout, at INFO."""
    moved = []
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith("reachprobe"):
            for h in logger.handlers:
                moved.append((h, h.stream))
                h.setStream(sys.stdout)
    set_level(logging.INFO)
    yield
    for h, old in moved:
        h.setStream(old)
    set_level(logging.INFO)


@pytest.fixture
def synthetic_only():
    with patch.object(main.ReachabilityOrchestrator, "from_config",
                      return_value=ReachabilityOrchestrator([])) as m:
        yield m


class TestCli:

    def test_no_args_prints_help(self, capsys):
        assert main.main([]) == 0
        assert "reachprobe" in capsys.readouterr().out

    def test_invalid_host(self, no_config):
        assert main.main(["--ping", "not a host!", *no_config]) == 2

    def test_ping_json(self, no_config, synthetic_only, capsys):
        assert main.main(["--ping", "localhost", "--json", *no_config]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["host"] == "localhost"
        assert data["alive"] is True
        assert data["method"] == "SIMULATED"

    def test_restricted_flag_reaches_config(self, no_config, synthetic_only):
        main.main(["--ping", "localhost", "--restricted", "--json", *no_config])
        pc = synthetic_only.call_args[0][0]
        assert pc.restricted is True

    def test_ports_flag(self, no_config, synthetic_only):
        main.main(["--ping", "localhost", "--ports", "8080,443", "--json", *no_config])
        assert synthetic_only.call_args[0][0].transport_ports == (8080, 443)

    def test_bad_ports_flag(self, no_config):
        assert main.main(["--ping", "localhost", "--ports", "http", *no_config]) == 2

    def test_series_json(self, no_config, synthetic_only, capsys):
        rc = main.main(["--series", "localhost", "bad host!!", "--count", "2",
                        "--json", *no_config])
        assert rc == 0
        data = json.loads(capsys.readouterr().out)
        assert data["totalHosts"] == 2
        assert len(data["results"][0]["pings"]) == 2

    def test_series_count_limit(self, no_config):
        assert main.main(["--series", "localhost", "--count", "21", *no_config]) == 2

    def test_json_output_not_mixed_with_logs(self, tmp_path, synthetic_only,
                                             logs_on_stdout, capsys):
        cfg = tmp_path / "config.yaml"
        cfg.write_text("probe:\n  series_pause_ms: 0\n")
        rc = main.main(["--series", "bad host!!", "localhost", "--count", "1",
                        "--json", "--no-logo", "--config", str(cfg)])
        assert rc == 0
        data = json.loads(capsys.readouterr().out)
        assert data["results"][0]["error"]

    def test_series_table(self, no_config, synthetic_only, capsys):
        main.main(["--series", "10.0.0.1", "???", "--count", "1", *no_config])
        out = capsys.readouterr().out
        assert "10.0.0.1" in out
        assert "invalid host" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
