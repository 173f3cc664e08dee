"""
chronoscope/transport.py
Round-trip capability over a caller-owned httpx.Client.

The caller decides how a delay becomes a request (payload, parameter, method);
this adapter only sends it and times the exchange. Transport errors are left
to propagate so the timing check can hand them back unchanged.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

import httpx

logger = logging.getLogger(__name__)


class HttpxRoundTrip:
    """Implements RoundTrip.measure by timing one httpx request per delay."""

    def __init__(
        self,
        client: httpx.Client,
        build_request: Callable[[float], httpx.Request],
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.client = client
        self.build_request = build_request
        self.clock = clock

    def measure(self, delay: float) -> float:
        request = self.build_request(delay)
        start = self.clock()
        # send() reads the whole body, so the timing covers the full response.
        response = self.client.send(request)
        elapsed = self.clock() - start
        logger.debug(
            f"[HttpxRoundTrip] {request.method} {request.url} delay={delay:.2f}s "
            f"-> {response.status_code} in {elapsed:.3f}s"
        )
        return elapsed
