from __future__ import annotations

import logging
from typing import Callable, Protocol, Union, runtime_checkable

import httpx
from pydantic import ValidationError

from ..contracts import Sample
from ..errors import ContractViolation, ProbeTransportError

logger = logging.getLogger(__name__)

# Failures of the round-trip itself. They end a check without a verdict and
# reach the caller unchanged.
TRANSPORT_ERRORS = (OSError, httpx.TransportError, ProbeTransportError)


@runtime_checkable
class RoundTrip(Protocol):
    def measure(self, delay: float) -> float: ...


RoundTripLike = Union[RoundTrip, Callable[[float], float]]


def resolve_measure(round_trip: RoundTripLike) -> Callable[[float], float]:
    if isinstance(round_trip, RoundTrip):
        return round_trip.measure
    if callable(round_trip):
        return round_trip
    raise TypeError(f"round_trip must provide measure(delay) or be callable, got {type(round_trip).__name__}")


class ProbeExecutor:
    """Sends exactly one round-trip per probe and records it as a Sample."""

    def __init__(self, round_trip: RoundTripLike):
        self._measure = resolve_measure(round_trip)
        self.probes_sent = 0

    def probe(self, delay: float) -> Sample:
        # No retry here: transport failures propagate as raised.
        observed = self._measure(delay)
        self.probes_sent += 1

        try:
            sample = Sample(delay=delay, observed=observed)
        except ValidationError as exc:
            raise ContractViolation(
                f"round-trip returned an impossible measurement for delay {delay}",
                details={"delay": delay, "observed": repr(observed)},
            ) from exc

        logger.debug(f"[ProbeExecutor] probe #{self.probes_sent}: delay={delay:.2f}s observed={sample.observed:.3f}s")
        return sample
