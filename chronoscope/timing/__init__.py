"""Module __init__: timing-dependence detection for chronoscope."""
#
# PURPOSE:
# Decides from a handful of sequential round-trips whether an endpoint's
# response time is controlled by a delay we inject (blind time-based SQL or
# command injection).
#
# KEY MODULES:
# - **sequence.py**: Requested-delay generator (ascending + confirmation cadence)
# - **probe.py**: One round-trip per probe, transport failures passed through
# - **heuristics.py**: Early negative exits after probes 1-3
# - **stats.py**: Pearson correlation and least-squares slope
# - **detector.py**: PROBING -> CONFIRMING -> DONE control loop
#
# WORKFLOW:
# Sequence picks delay → Executor measures → Heuristics may bail → Stats accept → Confirmation re-tests
#
# KEY CONCEPTS:
# - **Seconds budget**: upper_limit minus observed time already spent
# - **Confirmation pass**: short low-delay runs that expose monotonic drift
#

from .detector import TimingDependenceCheck, TimingOutcome, check_timing_dependence
from .heuristics import ExitReason
from .probe import RoundTrip, TRANSPORT_ERRORS
from .stats import CorrelationReport, analyze

__all__ = [
    "TimingDependenceCheck",
    "TimingOutcome",
    "check_timing_dependence",
    "ExitReason",
    "RoundTrip",
    "TRANSPORT_ERRORS",
    "CorrelationReport",
    "analyze",
]
