"""Telemetry sinks for bonus events and the console logging setup."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.logging import RichHandler


class Telemetry(Protocol):
    """Reports bonus alerts and other operational events."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Forwards telemetry events to a logger as structured records."""

    def __init__(self, logger: logging.Logger | None = None, *, enabled: bool = True) -> None:
        self._logger = logger or logging.getLogger("seated_fishing.telemetry")
        self._enabled = enabled

    def emit(self, event_name: str, payload: dict) -> None:
        if not self._enabled:
            return
        self._logger.info(event_name, extra={"payload": payload})


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
