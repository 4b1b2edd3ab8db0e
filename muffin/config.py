"""Logging configuration for the Muffin SDK.

The math itself is parameter-free; the only runtime knobs are how structlog
renders the debug events emitted by entity construction and analytics.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import structlog

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class LoggingConfig:
    """Structlog settings.

    Attributes:
        level: Standard library level name (e.g. "DEBUG", "INFO")
        json: Render events as JSON lines instead of the dev console format
    """

    level: str = "INFO"
    json: bool = False

    @classmethod
    def from_env(cls) -> LoggingConfig:
        """Build a config from MUFFIN_LOG_LEVEL and MUFFIN_LOG_JSON."""
        return cls(
            level=os.environ.get("MUFFIN_LOG_LEVEL", "INFO").upper(),
            json=os.environ.get("MUFFIN_LOG_JSON", "false").lower() in _TRUTHY,
        )

    @property
    def level_number(self) -> int:
        """Numeric log level; unknown names fall back to INFO."""
        value = logging.getLevelName(self.level)
        return value if isinstance(value, int) else logging.INFO


DEFAULT_LOGGING_CONFIG = LoggingConfig()


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Install the structlog processor pipeline.

    Args:
        config: Settings to apply. Reads the environment when omitted.
    """
    config = config or LoggingConfig.from_env()
    renderer = structlog.processors.JSONRenderer() if config.json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(config.level_number),
    )


__all__ = ["LoggingConfig", "DEFAULT_LOGGING_CONFIG", "configure_logging"]
