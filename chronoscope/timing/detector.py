"""
chronoscope/timing/detector.py

Timing-dependence check: decides whether an endpoint's latency follows the
delay we ask it to sleep for.

The check runs a small state machine, PROBING -> CONFIRMING -> DONE:
  - PROBING sends ascending delays (1, 2, 3, ...) until the request or seconds
    budget runs out, bailing out early on endpoints that are clearly fast or
    uniformly slow.
  - If the ascending samples correlate, CONFIRMING sends a bounded number of
    extra probes (on top of requests_limit) as short low-delay runs, within
    the remaining seconds budget, and re-tests the combined sample set. A
    latency drift that merely grows over time fails this second test.
  - DONE returns the verdict.

Probes are strictly sequential; concurrent requests would perturb the very
latency being measured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..config import HeuristicConfig, get_config
from ..contracts import Sample, TimingParameters
from ..errors import describe_failure
from .heuristics import ExitReason, early_exit
from .probe import TRANSPORT_ERRORS, ProbeExecutor, RoundTripLike
from .sequence import DelaySequence
from .stats import CorrelationReport, analyze

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimingOutcome:
    """
    Result of one check: either a verdict or the transport failure that
    aborted it, never both.
    """
    reason: ExitReason
    samples: Tuple[Sample, ...] = ()
    verdict: Optional[bool] = None
    report: Optional[CorrelationReport] = None
    failure: Optional[BaseException] = field(default=None, compare=False)

    @classmethod
    def decided(cls, verdict: bool, reason: ExitReason, samples: List[Sample], report: Optional[CorrelationReport] = None) -> "TimingOutcome":
        return cls(reason=reason, samples=tuple(samples), verdict=verdict, report=report)

    @classmethod
    def failed(cls, failure: BaseException, samples: List[Sample]) -> "TimingOutcome":
        return cls(reason=ExitReason.TRANSPORT_FAILURE, samples=tuple(samples), failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def delays(self) -> List[float]:
        return [s.delay for s in self.samples]

    def unwrap(self) -> bool:
        """Return the verdict, or re-raise the original transport failure unchanged."""
        if self.failure is not None:
            raise self.failure
        return bool(self.verdict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict,
            "reason": self.reason.value,
            "probes": len(self.samples),
            "samples": [s.model_dump() for s in self.samples],
            "report": self.report.to_dict() if self.report else None,
            "failure": describe_failure(self.failure) if self.failure is not None else None,
        }


class TimingDependenceCheck:
    """
    Reusable check bound to one round-trip capability and one set of limits.

    Every run() starts from an empty sample set and a fresh delay sequence.
    """

    def __init__(
        self,
        round_trip: RoundTripLike,
        parameters: TimingParameters,
        heuristics: Optional[HeuristicConfig] = None,
    ):
        self.round_trip = round_trip
        self.parameters = parameters
        self.heuristics = heuristics or get_config().heuristics

    @classmethod
    def from_config(cls, round_trip: RoundTripLike) -> "TimingDependenceCheck":
        cfg = get_config()
        return cls(round_trip, TimingParameters.from_defaults(cfg.defaults), cfg.heuristics)

    def run(self) -> TimingOutcome:
        samples: List[Sample] = []
        sequence = DelaySequence(self.parameters.upper_limit)
        executor = ProbeExecutor(self.round_trip)

        try:
            outcome = self._run(executor, sequence, samples)
        except TRANSPORT_ERRORS as exc:
            logger.warning(f"[TimingCheck] round-trip failed after {len(samples)} probes: {exc!r}")
            return TimingOutcome.failed(exc, samples)

        logger.info(
            f"[TimingCheck] verdict={outcome.verdict} reason={outcome.reason.value} "
            f"probes={len(outcome.samples)} delays={outcome.delays}"
        )
        return outcome

    def _run(self, executor: ProbeExecutor, sequence: DelaySequence, samples: List[Sample]) -> TimingOutcome:
        limit = self.parameters.requests_limit

        while len(samples) < limit:
            delay = sequence.next_delay()
            if delay is None:
                break
            self._record(executor, sequence, samples, delay)

            reason = early_exit(samples, self.heuristics)
            if reason is not None:
                return TimingOutcome.decided(False, reason, samples)

        report = analyze(samples)
        if not report.accepts(self.parameters):
            logger.debug(f"[TimingCheck] ascending phase rejected: {report.to_dict()}")
            return TimingOutcome.decided(False, ExitReason.UNCORRELATED, samples, report)

        if not sequence.fits(DelaySequence.START):
            # No seconds left to confirm; the ascending run is all the evidence there is.
            return TimingOutcome.decided(True, ExitReason.CORRELATED, samples, report)

        # Confirmation probes come on top of requests_limit.
        budget = self.heuristics.confirmation_budget(limit)
        logger.debug(f"[TimingCheck] confirming with up to {budget} probes, {sequence.remaining:.2f}s left")
        sequence.start_confirmation()

        for _ in range(budget):
            delay = sequence.next_delay()
            if delay is None:
                break
            self._record(executor, sequence, samples, delay)

        report = analyze(samples)
        if report.accepts(self.parameters):
            return TimingOutcome.decided(True, ExitReason.CONFIRMED, samples, report)
        return TimingOutcome.decided(False, ExitReason.CONFIRMATION_FAILED, samples, report)

    @staticmethod
    def _record(executor: ProbeExecutor, sequence: DelaySequence, samples: List[Sample], delay: float) -> None:
        sample = executor.probe(delay)
        samples.append(sample)
        sequence.charge(sample.observed)


def check_timing_dependence(
    requests_limit: int,
    upper_limit: float,
    round_trip: RoundTripLike,
    correlation_error_range: float,
    slope_error_range: float,
) -> bool:
    """
    Return True when response time is controlled by the requested delay.

    Raises ConfigurationError before any probe for invalid limits, and
    re-raises the round-trip's own exception if the transport fails.
    """
    parameters = TimingParameters.create(requests_limit, upper_limit, correlation_error_range, slope_error_range)
    return TimingDependenceCheck(round_trip, parameters).run().unwrap()
