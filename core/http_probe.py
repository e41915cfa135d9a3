"""
core/http_probe.py
Application-layer probe: one HTTP(S) GET, any response means "up".

Scheme selection:
  - hosts listed in ``remapped_urls`` get a fixed, meaningful URL
    (public DNS resolvers answer nothing useful on a bare "/")
  - hosts on the secure allow-list (exact or dot-suffix match) use https
  - everything else uses plain http

Outcomes:
  - any response, 4xx/5xx included  → alive, method HTTP
  - timeout                         → not alive, method TIMEOUT (no fallback)
  - connection error                → hand over to the TCP race

The blocking GET runs on the default executor and cannot be interrupted.
When the asyncio deadline fires first, the worker thread keeps its socket
until urllib's own timeout (the same ``timeout_ms``, applied to the connect
and to each read) expires, and its late result is discarded.
"""

from __future__ import annotations

import asyncio
import http.client
import socket
import ssl
import time
import urllib.error
import urllib.request
from typing import Iterable, Mapping, Optional

from core.models import ProbeResult
from core.probe import Probe
from core.transport_probe import TransportProbe
from utils.constants import (
    ProbeMethod, REMAPPED_URLS, SECURE_HOSTS, USER_AGENT,
)
from utils.logger import get_logger

log = get_logger("reachprobe.http")


class ProbeTimeout(Exception):
    """The HTTP request did not complete within its deadline."""


def matches_allow_list(host: str, allow_list: Iterable[str]) -> bool:
    """True if ``host`` equals an entry or is a subdomain of one."""
    host = host.lower().rstrip(".")
    for entry in allow_list:
        entry = entry.lower().rstrip(".")
        if host == entry or host.endswith("." + entry):
            return True
    return False


class ApplicationProbe(Probe):
    """Single GET with a bounded deadline; falls back to TCP on connect errors."""

    name = "http"

    def __init__(
        self,
        transport: Optional[TransportProbe] = None,
        secure_hosts: Iterable[str] = SECURE_HOSTS,
        remapped_urls: Optional[Mapping[str, str]] = None,
        timeout_ms: float = 5000,
    ):
        self._transport = transport or TransportProbe()
        self._secure_hosts = tuple(secure_hosts)
        self._remapped = dict(REMAPPED_URLS if remapped_urls is None else remapped_urls)
        self._timeout_s = timeout_ms / 1000.0

    def url_for(self, host: str) -> str:
        if host in self._remapped:
            return self._remapped[host]
        scheme = "https" if matches_allow_list(host, self._secure_hosts) else "http"
        return f"{scheme}://{host}/"

    async def probe(self, host: str) -> ProbeResult:
        url = self.url_for(host)
        loop = asyncio.get_running_loop()
        t0 = time.monotonic()
        try:
            await asyncio.wait_for(
                loop.run_in_executor(None, self._sync_get, url),
                timeout=self._timeout_s,
            )
        except (asyncio.TimeoutError, ProbeTimeout):
            log.debug(f"{host}: HTTP timeout after {self._timeout_s:.1f}s ({url})")
            return ProbeResult.failure(ProbeMethod.TIMEOUT)
        except (urllib.error.URLError, http.client.HTTPException,
                OSError, ValueError) as exc:
            log.debug(f"{host}: HTTP connection error ({exc}), trying TCP race")
            return await self._transport.probe(host)

        latency = round((time.monotonic() - t0) * 1000, 2)
        log.debug(f"{host}: HTTP response in {latency:.2f}ms ({url})")
        return ProbeResult.success(latency, ProbeMethod.HTTP)

    def _sync_get(self, url: str) -> int:
        """
        Blocking GET (run in the executor). Returns the status code.

        Raises ProbeTimeout on socket timeouts and lets every other
        connection error through.
        """
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE

        req = urllib.request.Request(
            url,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/dns-json, */*",
            },
            method="GET",
        )
        # Talk to the host directly; a proxy answering would prove nothing.
        opener = urllib.request.build_opener(
            urllib.request.ProxyHandler({}),
            urllib.request.HTTPSHandler(context=ctx),
        )
        try:
            with opener.open(req, timeout=self._timeout_s) as resp:
                return resp.status
        except urllib.error.HTTPError as e:
            # The server answered; the status is irrelevant to reachability.
            e.close()
            return e.code
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                raise ProbeTimeout(str(e.reason)) from e
            raise
        except (socket.timeout, TimeoutError) as e:
            raise ProbeTimeout(str(e)) from e
