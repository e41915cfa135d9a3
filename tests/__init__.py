"""ReachProbe Test Suite

Test modules:
    test_validators   — Host, port and count validation
    test_port_parser  — Unit tests for core/port_parser.py (all edge cases)
    test_models       — ProbeResult / SeriesSample / HostSeriesSummary
                        invariants and their JSON wire forms
    test_probes       — Transport race, HTTP probe, echo probe, synthetic
                        estimator and the orchestrator chain (loopback only)
    test_series       — Series aggregation and batch statistics
    test_config       — Timeout profiles and YAML-backed ProbeConfig
    test_api          — Flask routes through the test client
    test_cli          — main.py argument handling and output
    test_layering     — Static import analysis enforcing architectural
                        layering rules (core / api / utils)

Run all tests:
    pytest tests/ -v

Run standalone (no pytest):
    python3 tests/run_all.py
    python3 tests/run_all.py -v       # verbose
"""
