"""Contract for runtime telemetry and structured logging sinks."""

from __future__ import annotations

import logging
from typing import Protocol

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class Telemetry(Protocol):
    """Reports AI decisions and scan outcomes."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Telemetry sink that writes each event as a structured log record."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("monster_ai.telemetry")

    def emit(self, event_name: str, payload: dict) -> None:
        self._logger.info(event_name, extra={"payload": payload})


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
