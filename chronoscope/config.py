# chronoscope/config.py
# Tunable detection constants, default probe parameters and logging setup

from __future__ import annotations

import os
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from .errors import ConfigurationError, ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class HeuristicConfig:
    # First probe must take at least this fraction of the requested delay.
    min_latency_ratio: float = 0.9
    # OLS slope below this after probes 2-3 counts as "no growth".
    flat_slope_threshold: float = 0.3
    # Last probe index at which the flat-latency check still applies.
    flat_check_max_probes: int = 3
    confirmation_fraction: float = 0.5
    confirmation_min_probes: int = 2

    def __post_init__(self):
        if self.min_latency_ratio < 0:
            raise ConfigurationError("min_latency_ratio must be non-negative", {"min_latency_ratio": self.min_latency_ratio})
        if self.flat_slope_threshold < 0:
            raise ConfigurationError("flat_slope_threshold must be non-negative", {"flat_slope_threshold": self.flat_slope_threshold})
        if self.flat_check_max_probes < 2:
            raise ConfigurationError("flat_check_max_probes must be at least 2", {"flat_check_max_probes": self.flat_check_max_probes})
        if not 0 < self.confirmation_fraction <= 1:
            raise ConfigurationError("confirmation_fraction must be in (0, 1]", {"confirmation_fraction": self.confirmation_fraction})
        if self.confirmation_min_probes < 1:
            raise ConfigurationError("confirmation_min_probes must be at least 1", {"confirmation_min_probes": self.confirmation_min_probes})

    def confirmation_budget(self, requests_limit: int) -> int:
        return max(self.confirmation_min_probes, int(requests_limit * self.confirmation_fraction))


@dataclass(frozen=True)
class ProbeDefaults:
    requests_limit: int = 5
    upper_limit: float = 15.0
    correlation_error_range: float = 0.1
    slope_error_range: float = 0.2


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class ChronoscopeConfig:
    heuristics: HeuristicConfig = field(default_factory=HeuristicConfig)
    defaults: ProbeDefaults = field(default_factory=ProbeDefaults)
    log: LogConfig = field(default_factory=LogConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ChronoscopeConfig":
        heuristics = HeuristicConfig(
            min_latency_ratio=_env("CHRONOSCOPE_MIN_LATENCY_RATIO", float, 0.9),
            flat_slope_threshold=_env("CHRONOSCOPE_FLAT_SLOPE_THRESHOLD", float, 0.3),
            flat_check_max_probes=_env("CHRONOSCOPE_FLAT_CHECK_MAX_PROBES", int, 3),
            confirmation_fraction=_env("CHRONOSCOPE_CONFIRMATION_FRACTION", float, 0.5),
            confirmation_min_probes=_env("CHRONOSCOPE_CONFIRMATION_MIN_PROBES", int, 2),
        )

        defaults = ProbeDefaults(
            requests_limit=_env("CHRONOSCOPE_REQUESTS_LIMIT", int, 5),
            upper_limit=_env("CHRONOSCOPE_UPPER_LIMIT", float, 15.0),
            correlation_error_range=_env("CHRONOSCOPE_CORRELATION_ERROR_RANGE", float, 0.1),
            slope_error_range=_env("CHRONOSCOPE_SLOPE_ERROR_RANGE", float, 0.2),
        )

        log = LogConfig(
            level=os.getenv("CHRONOSCOPE_LOG_LEVEL", "INFO"),
            file_path=os.getenv("CHRONOSCOPE_LOG_FILE") or None,
        )

        return cls(
            heuristics=heuristics,
            defaults=defaults,
            log=log,
            debug=os.getenv("CHRONOSCOPE_DEBUG", "false").lower() == "true",
        )


def _env(name: str, parse: Callable[[str], T], default: T) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} is not a valid {parse.__name__}",
            details={"variable": name, "value": raw},
            code=ErrorCode.CONFIG_PARSE_ERROR,
        ) from exc


_config: Optional[ChronoscopeConfig] = None


def get_config() -> ChronoscopeConfig:
    global _config
    if _config is None:
        _config = ChronoscopeConfig.from_env()
    return _config


def set_config(config: Optional[ChronoscopeConfig]) -> None:
    global _config
    _config = config


def setup_logging(config: Optional[ChronoscopeConfig] = None) -> None:
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if cfg.log.file_path:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            cfg.log.file_path,
            maxBytes=cfg.log.max_file_size_mb * 1024 * 1024,
            backupCount=cfg.log.backup_count,
        )
        handlers.append(file_handler)

    level = "DEBUG" if cfg.debug else cfg.log.level.upper()
    logging.basicConfig(
        level=getattr(logging, level),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
