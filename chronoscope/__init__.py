# Chronoscope
# Timing-dependence detection for blind time-based injection checks

"""
Decides whether a target's response latency is causally controlled by an
attacker-supplied delay, using as few (slow) round-trips as possible.

Callers supply the round-trip: anything with ``measure(delay) -> seconds``
or a plain callable. See ``chronoscope.transport.HttpxRoundTrip`` for an
httpx-based one.
"""

from .contracts import Sample, TimingParameters
from .errors import ChronoscopeError, ConfigurationError, ContractViolation, ErrorCode, ProbeTransportError
from .timing import (
    CorrelationReport,
    ExitReason,
    RoundTrip,
    TimingDependenceCheck,
    TimingOutcome,
    check_timing_dependence,
)

__version__ = "0.1.0"

__all__ = [
    "Sample",
    "TimingParameters",
    "ChronoscopeError",
    "ConfigurationError",
    "ContractViolation",
    "ErrorCode",
    "ProbeTransportError",
    "CorrelationReport",
    "ExitReason",
    "RoundTrip",
    "TimingDependenceCheck",
    "TimingOutcome",
    "check_timing_dependence",
]
