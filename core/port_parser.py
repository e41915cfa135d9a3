"""
core/port_parser.py
Port list parser for the transport race.

Accepts:
  "80"                 → [80]
  "80,443,53,22"       → [80, 443, 53, 22]   (order kept)
  "8000-8003"          → [8000, 8001, 8002, 8003]
  "443,80,443"         → [443, 80]           (first occurrence wins)

Rejects:
  "abc", "99999", "-5", "100-50", "", None, lists longer than the race limit
"""

from __future__ import annotations

import re
from typing import List, Tuple

from utils.constants import PORT_MAX_BATCH
from utils.validators import validate_port


# ─── Custom Exceptions ────────────────────────────────────────────────────────

class PortParseError(ValueError):
    """Raised when port specification is invalid."""


# ─── Parser ───────────────────────────────────────────────────────────────────

class PortParser:
    """
    Parse a comma separated port list with optional ranges.

    All errors raise PortParseError with a human-readable message.
    """

    _SINGLE_RE = re.compile(r"^\d+$")
    _RANGE_RE  = re.compile(r"^(\d+)-(\d+)$")

    def __init__(self, max_ports: int = PORT_MAX_BATCH):
        self._max_ports = max_ports

    # ── Public API ────────────────────────────────────────────────────────────

    def parse(self, spec: str) -> List[int]:
        """
        Parse port spec → ordered deduplicated list.

        Raises PortParseError on any invalid input.
        """
        if not isinstance(spec, str):
            raise PortParseError(f"Expected string, got {type(spec).__name__}")

        spec = spec.strip()
        if not spec:
            raise PortParseError("Port specification is empty")

        ports: List[int] = []
        for part in spec.split(","):
            part = part.strip()
            if not part:
                continue
            for port in self._parse_token(part):
                if port not in ports:
                    ports.append(port)

        if not ports:
            raise PortParseError(f"No valid ports parsed from: {spec!r}")

        if len(ports) > self._max_ports:
            raise PortParseError(
                f"Parsed {len(ports)} ports, exceeds race limit {self._max_ports}"
            )

        return ports

    def validate(self, spec: str) -> Tuple[bool, str]:
        """Return (ok, error_message). Never raises."""
        try:
            self.parse(spec)
            return True, ""
        except PortParseError as exc:
            return False, str(exc)

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _parse_token(self, token: str) -> List[int]:
        if self._SINGLE_RE.match(token):
            return [self._validated(int(token))]

        m = self._RANGE_RE.match(token)
        if m:
            start, end = self._validated(int(m.group(1))), self._validated(int(m.group(2)))
            if start > end:
                raise PortParseError(
                    f"Invalid range {start}-{end}: start > end"
                )
            size = end - start + 1
            if size > self._max_ports:
                raise PortParseError(
                    f"Range {start}-{end} spans {size} ports, "
                    f"exceeds race limit {self._max_ports}"
                )
            return list(range(start, end + 1))

        raise PortParseError(
            f"Invalid port token: {token!r}  "
            f"(expected integer or start-end range)"
        )

    @staticmethod
    def _validated(port: int) -> int:
        ok, msg = validate_port(port)
        if not ok:
            raise PortParseError(msg)
        return port


# ── Module-level convenience ──────────────────────────────────────────────────

_default_parser = PortParser()


def parse_ports(spec: str) -> List[int]:
    return _default_parser.parse(spec)
