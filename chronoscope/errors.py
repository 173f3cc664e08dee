"""Module errors: structured error taxonomy for chronoscope."""
#
from enum import Enum
from typing import Dict, Any, Optional
# PURPOSE:
# Gives every failure a timing check can surface a searchable code and a
# consistent shape, so scan rules calling into chronoscope can tell a bad
# configuration apart from a broken transport.
#
# ERROR CODE FORMAT:
# - CONFIG_XXX: Parameter / environment configuration errors
# - PROBE_XXX: Round-trip capability errors
#
# USAGE:
#   from chronoscope.errors import ConfigurationError, ErrorCode
#
#   raise ConfigurationError(
#       "requests_limit must be greater than 0",
#       details={"requests_limit": 0},
#       code=ErrorCode.CONFIG_INVALID,
#   )
#
class ErrorCode(Enum):
    # Config Errors
    CONFIG_INVALID = "CONFIG_001"
    CONFIG_PARSE_ERROR = "CONFIG_002"

    # Probe Errors
    PROBE_TRANSPORT_FAILED = "PROBE_001"
    PROBE_CONTRACT_VIOLATION = "PROBE_002"


class ChronoscopeError(Exception):
    """
    Base exception class for chronoscope with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "CONFIG_001")
        message: Human-readable error message
        details: Optional dictionary with additional context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}

        # Build exception message with code for easy debugging
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message and details
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(ChronoscopeError):
    """Raised before any probe is sent when parameters or tunables are invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, code: ErrorCode = ErrorCode.CONFIG_INVALID):
        super().__init__(code, message, details)


class ProbeTransportError(ChronoscopeError):
    """
    Explicit failure channel for round-trip capabilities.

    Raise this (or let an OSError / httpx.TransportError escape) from
    ``measure`` when the network round-trip itself failed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.PROBE_TRANSPORT_FAILED, message, details)


class ContractViolation(ChronoscopeError):
    """Raised when a round-trip capability returns an impossible measurement."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.PROBE_CONTRACT_VIOLATION, message, details)


# ============================================================================
# Convenience Functions
# ============================================================================

def describe_failure(error: BaseException) -> Dict[str, Any]:
    """
    Render any failure captured by a timing check as a dictionary.

    Structured errors keep their own code; foreign exceptions (socket errors,
    httpx transport errors) are reported as transport failures with their
    original type preserved.
    """
    if isinstance(error, ChronoscopeError):
        return error.to_dict()

    return {
        "code": ErrorCode.PROBE_TRANSPORT_FAILED.value,
        "message": str(error),
        "details": {"original_type": type(error).__name__},
    }


# ============================================================================
# Module-Level Exports
# ============================================================================

__all__ = [
    "ErrorCode",
    "ChronoscopeError",
    "ConfigurationError",
    "ProbeTransportError",
    "ContractViolation",
    "describe_failure",
]
