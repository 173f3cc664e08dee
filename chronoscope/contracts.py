from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import ProbeDefaults
from .errors import ConfigurationError


class Sample(BaseModel):
    """One probe: the delay we asked for and the round-trip time we saw (seconds)."""
    model_config = ConfigDict(frozen=True)

    delay: float = Field(ge=1.0, allow_inf_nan=False)
    observed: float = Field(ge=0.0, allow_inf_nan=False)


class TimingParameters(BaseModel):
    """
    Per-invocation limits of a timing-dependence check.

    ``upper_limit`` is the seconds budget: observed round-trip time is charged
    against it and a delay is only requested while it still fits, so no
    requested delay ever exceeds it.
    """
    model_config = ConfigDict(frozen=True)

    requests_limit: int = Field(gt=0)
    upper_limit: float = Field(ge=1.0, allow_inf_nan=False)
    correlation_error_range: float = Field(ge=0.0, le=1.0)
    slope_error_range: float = Field(ge=0.0, allow_inf_nan=False)

    @classmethod
    def create(
        cls,
        requests_limit: int,
        upper_limit: float,
        correlation_error_range: float,
        slope_error_range: float,
    ) -> "TimingParameters":
        """Validate raw values, raising ConfigurationError instead of pydantic's ValidationError."""
        try:
            return cls(
                requests_limit=requests_limit,
                upper_limit=upper_limit,
                correlation_error_range=correlation_error_range,
                slope_error_range=slope_error_range,
            )
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            raise ConfigurationError(
                f"invalid timing parameters: {', '.join(fields)}",
                details={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc

    @classmethod
    def from_defaults(cls, defaults: ProbeDefaults) -> "TimingParameters":
        return cls.create(
            defaults.requests_limit,
            defaults.upper_limit,
            defaults.correlation_error_range,
            defaults.slope_error_range,
        )
