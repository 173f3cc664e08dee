"""
chronoscope/timing/sequence.py
Requested-delay generator for timing-dependence checks.

Delays ascend 1, 2, 3, ... while they fit in the remaining seconds budget.
Once the control loop enters confirmation, the basis restarts at 1 and keeps
wrapping back to 1 whenever the next delay would overrun the budget, which
yields short low-delay runs such as 1, 2, 1, 1.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class SequencePhase(str, Enum):
    ASCENDING = "ascending"
    CONFIRMING = "confirming"


class DelaySequence:
    """Deterministic source of requested delays bounded by a seconds budget."""

    START = 1
    INCREMENT = 1

    def __init__(self, upper_limit: float):
        self.upper_limit = float(upper_limit)
        self.phase = SequencePhase.ASCENDING
        self._basis = self.START
        self._spent = 0.0

    @property
    def remaining(self) -> float:
        return self.upper_limit - self._spent

    def charge(self, observed: float) -> None:
        """Deduct time spent on a round-trip from the budget."""
        self._spent += observed

    def fits(self, delay: float) -> bool:
        return delay <= self.remaining

    def start_confirmation(self) -> None:
        self.phase = SequencePhase.CONFIRMING
        self._basis = self.START

    def next_delay(self) -> Optional[float]:
        """
        Return the next delay to request, or None when nothing fits any more.

        The ascending run ends (None) as soon as its basis overruns the budget;
        only the confirmation cadence wraps back to the start.
        """
        if not self.fits(self._basis):
            if self.phase is SequencePhase.ASCENDING:
                return None
            self._basis = self.START
            if not self.fits(self._basis):
                return None

        delay = float(self._basis)
        self._basis += self.INCREMENT
        return delay
