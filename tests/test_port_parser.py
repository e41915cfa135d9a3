"""
tests/test_port_parser.py
Unit tests for core/port_parser.py — every edge case.
Run: pytest tests/test_port_parser.py -v
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from core.port_parser import PortParser, PortParseError, parse_ports


@pytest.fixture
def parser():
    return PortParser()


# ── Single port ────────────────────────────────────────────────────────────────

class TestSinglePort:
    def test_min_port(self, parser):              assert parser.parse("1") == [1]
    def test_max_port(self, parser):              assert parser.parse("65535") == [65535]
    def test_common_http(self, parser):           assert parser.parse("80") == [80]
    def test_common_https(self, parser):          assert parser.parse("443") == [443]

    def test_zero_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="out of valid range"):
            parser.parse("0")

    def test_above_max_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="out of valid range"):
            parser.parse("65536")

    def test_negative_port_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Invalid port token"):
            parser.parse("-80")

    def test_float_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Invalid port token"):
            parser.parse("80.5")

    def test_alpha_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Invalid port token"):
            parser.parse("http")


# ── Multiple ports ────────────────────────────────────────────────────────────

class TestMultiplePorts:
    def test_default_race_ports(self, parser):
        assert parser.parse("80,443,53,22") == [80, 443, 53, 22]

    def test_order_preserved(self, parser):
        assert parser.parse("443,22,80") == [443, 22, 80]

    def test_duplicates_removed(self, parser):
        assert parser.parse("80,80,80") == [80]

    def test_first_occurrence_wins(self, parser):
        assert parser.parse("443,80,443,22,80") == [443, 80, 22]

    def test_whitespace_stripped(self, parser):
        assert parser.parse("  80 , 443 , 8080  ") == [80, 443, 8080]

    def test_trailing_comma_ignored(self, parser):
        assert parser.parse("80,443,") == [80, 443]


# ── Ranges ────────────────────────────────────────────────────────────────────

class TestRanges:
    def test_small_range(self, parser):
        assert parser.parse("8000-8003") == [8000, 8001, 8002, 8003]

    def test_single_element_range(self, parser):
        assert parser.parse("80-80") == [80]

    def test_range_start_gt_end_invalid(self, parser):
        with pytest.raises(PortParseError, match="start > end"):
            parser.parse("100-50")

    def test_range_contains_invalid_port(self, parser):
        with pytest.raises(PortParseError, match="out of valid range"):
            parser.parse("65534-65537")

    def test_range_alpha_invalid(self, parser):
        with pytest.raises(PortParseError):
            parser.parse("a-z")

    def test_range_too_wide_for_race(self, parser):
        with pytest.raises(PortParseError, match="race limit"):
            parser.parse("1-1000")

    def test_mixed_with_overlap(self, parser):
        assert parser.parse("22,80-82,81,443") == [22, 80, 81, 82, 443]


# ── Limits ────────────────────────────────────────────────────────────────────

class TestLimits:
    def test_custom_limit(self):
        p = PortParser(max_ports=2)
        assert p.parse("80,443") == [80, 443]
        with pytest.raises(PortParseError, match="race limit"):
            p.parse("80,443,22")


# ── Validation helper ─────────────────────────────────────────────────────────

class TestValidate:
    def test_valid_returns_true(self, parser):
        ok, msg = parser.validate("80,443")
        assert ok is True
        assert msg == ""

    def test_invalid_returns_false(self, parser):
        ok, msg = parser.validate("abc")
        assert ok is False
        assert msg != ""

    def test_out_of_range_returns_false(self, parser):
        ok, msg = parser.validate("99999")
        assert ok is False
        assert "99999" in msg


# ── Edge / security ───────────────────────────────────────────────────────────

class TestEdgeCases:
    def test_empty_string(self, parser):
        with pytest.raises(PortParseError, match="empty"):
            parser.parse("")

    def test_only_whitespace(self, parser):
        with pytest.raises(PortParseError, match="empty"):
            parser.parse("   ")

    def test_only_commas(self, parser):
        with pytest.raises(PortParseError, match="No valid ports"):
            parser.parse(",,,")

    def test_none_raises(self, parser):
        with pytest.raises(PortParseError, match="Expected string"):
            parser.parse(None)

    def test_list_raises(self, parser):
        with pytest.raises(PortParseError, match="Expected string"):
            parser.parse([80, 443])

    def test_injection_attempt(self, parser):
        with pytest.raises(PortParseError):
            parser.parse("80; rm -rf /")

    def test_module_level_parse(self):
        assert parse_ports("80,443") == [80, 443]


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
