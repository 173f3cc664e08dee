"""Cheap negative-only checks run while the ascending phase is still probing."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

from ..config import HeuristicConfig
from ..contracts import Sample
from .stats import regression_slope

logger = logging.getLogger(__name__)


class ExitReason(str, Enum):
    FAST_RESPONSE = "fast_response"
    FLAT_LATENCY = "flat_latency"
    UNCORRELATED = "uncorrelated"
    CORRELATED = "correlated"
    CONFIRMED = "confirmed"
    CONFIRMATION_FAILED = "confirmation_failed"
    TRANSPORT_FAILURE = "transport_failure"


def responded_too_fast(sample: Sample, config: HeuristicConfig) -> bool:
    """The endpoint answered well before the requested delay could have elapsed."""
    return sample.observed < sample.delay * config.min_latency_ratio


def latency_is_flat(samples: Sequence[Sample], config: HeuristicConfig) -> bool:
    """
    Uniformly slow endpoint: latency already covers every requested delay
    but barely grows with it.
    """
    slope = regression_slope(samples)
    if slope is None:
        return False
    slow = min(s.observed for s in samples) > max(s.delay for s in samples)
    return slow and slope < config.flat_slope_threshold


def early_exit(samples: Sequence[Sample], config: HeuristicConfig) -> Optional[ExitReason]:
    count = len(samples)

    if count == 1 and responded_too_fast(samples[0], config):
        logger.debug(
            f"[Heuristics] first probe answered in {samples[0].observed:.3f}s "
            f"for a {samples[0].delay:.2f}s delay"
        )
        return ExitReason.FAST_RESPONSE

    if 2 <= count <= config.flat_check_max_probes and latency_is_flat(samples, config):
        logger.debug(f"[Heuristics] latency flat after {count} probes")
        return ExitReason.FLAT_LATENCY

    return None
