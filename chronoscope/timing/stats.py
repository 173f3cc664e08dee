"""
chronoscope/timing/stats.py
Correlation engine: Pearson r and least-squares slope of observed time on
requested delay.

Both statistics are symmetric in the sample order. Anything that cannot be
computed (fewer than two distinct delays, constant observed times) is
reported as None and never counts as acceptance.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..contracts import Sample, TimingParameters


@dataclass(frozen=True)
class CorrelationReport:
    sample_count: int
    correlation: Optional[float] = None
    slope: Optional[float] = None
    intercept: Optional[float] = None

    @property
    def determinate(self) -> bool:
        return self.correlation is not None and self.slope is not None

    def accepts(self, parameters: TimingParameters) -> bool:
        """True when both r and m sit within tolerance of the ideal 1.0."""
        if not self.determinate:
            return False
        return (
            abs(self.correlation - 1.0) <= parameters.correlation_error_range
            and abs(self.slope - 1.0) <= parameters.slope_error_range
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sample_count": self.sample_count,
            "correlation": self.correlation,
            "slope": self.slope,
            "intercept": self.intercept,
        }


def regression_slope(samples: Sequence[Sample]) -> Optional[float]:
    """OLS slope, or None with fewer than two distinct delays."""
    delays = [s.delay for s in samples]
    if len(set(delays)) < 2:
        return None
    slope, _ = statistics.linear_regression(delays, [s.observed for s in samples])
    return slope


def analyze(samples: Sequence[Sample]) -> CorrelationReport:
    delays = [s.delay for s in samples]
    observed = [s.observed for s in samples]

    if len(set(delays)) < 2:
        return CorrelationReport(sample_count=len(samples))

    slope, intercept = statistics.linear_regression(delays, observed)
    try:
        correlation: Optional[float] = statistics.correlation(delays, observed)
    except statistics.StatisticsError:
        # Constant observed times.
        correlation = None

    return CorrelationReport(
        sample_count=len(samples),
        correlation=correlation,
        slope=slope,
        intercept=intercept,
    )
