"""Pytest configuration for chronoscope."""
import random

import pytest

from chronoscope.config import set_config


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    # Every test reads CHRONOSCOPE_* from a clean environment.
    for name in [
        "CHRONOSCOPE_MIN_LATENCY_RATIO",
        "CHRONOSCOPE_FLAT_SLOPE_THRESHOLD",
        "CHRONOSCOPE_FLAT_CHECK_MAX_PROBES",
        "CHRONOSCOPE_CONFIRMATION_FRACTION",
        "CHRONOSCOPE_CONFIRMATION_MIN_PROBES",
        "CHRONOSCOPE_REQUESTS_LIMIT",
        "CHRONOSCOPE_UPPER_LIMIT",
        "CHRONOSCOPE_CORRELATION_ERROR_RANGE",
        "CHRONOSCOPE_SLOPE_ERROR_RANGE",
        "CHRONOSCOPE_LOG_LEVEL",
        "CHRONOSCOPE_LOG_FILE",
        "CHRONOSCOPE_DEBUG",
    ]:
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


class RecordingRoundTrip:
    """Round-trip double: answers with respond(delay) and records every delay asked for."""

    def __init__(self, respond):
        self.respond = respond
        self.delays = []

    def measure(self, delay):
        self.delays.append(delay)
        return self.respond(delay)


@pytest.fixture
def recorder():
    return RecordingRoundTrip


@pytest.fixture
def rng():
    # Seeded per test so noisy fixtures stay reproducible.
    return random.Random(1337)
