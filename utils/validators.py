"""
utils/validators.py
Input validation for hosts, ports and series counts.

Host checks are purely syntactic: no DNS lookup, no octet range check.
"""

import re
from typing import Tuple

from utils.constants import MAX_SERIES_COUNT, PORT_MIN, PORT_MAX


_LOOPBACK = ("localhost", "127.0.0.1")
_IPV4_SHAPE_RE = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
_DOMAIN_RE = re.compile(r"^[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def validate_host(host) -> bool:
    """
    Return True if ``host`` looks like something we can probe.

    Accepts "localhost", "127.0.0.1", any dotted quad (999.1.1.1 included)
    and domain names ending in an alphabetic label of two or more letters.
    """
    if not host or not isinstance(host, str):
        return False

    if host in _LOOPBACK:
        return True

    return bool(_IPV4_SHAPE_RE.fullmatch(host) or _DOMAIN_RE.fullmatch(host))


def validate_port(port: int) -> Tuple[bool, str]:
    """
    Validate that port number is in valid range [1-65535].

    Returns:
        (is_valid, error_message) tuple
    """
    if not isinstance(port, int) or isinstance(port, bool):
        return (False, "Port must be an integer")

    if port < PORT_MIN or port > PORT_MAX:
        return (False, f"Port {port} out of valid range [{PORT_MIN}-{PORT_MAX}]")

    return (True, "")


def validate_count(count, limit: int = MAX_SERIES_COUNT) -> Tuple[bool, str]:
    """
    Validate the number of probes requested per host in a series.

    Zero is allowed (an empty series). Integral floats such as 5.0 pass,
    since JSON clients do not distinguish them from integers.

    Returns:
        (is_valid, error_message) tuple
    """
    if isinstance(count, bool) or not isinstance(count, (int, float)):
        return (False, "count must be an integer")

    if isinstance(count, float) and not count.is_integer():
        return (False, "count must be an integer")

    if count < 0:
        return (False, "count must not be negative")

    if count > limit:
        return (False, f"Maximum {limit} pings per host")

    return (True, "")


__all__ = ["validate_host", "validate_port", "validate_count"]
