"""Observability scaffolding."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List

from .config import ObservabilityConfig
from .models import ObservabilityEvent

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s %(message)s",
    )


@dataclass
class TelemetryCollector:
    config: ObservabilityConfig
    events: Deque[ObservabilityEvent] = field(init=False)

    def __post_init__(self) -> None:
        self.events = deque(maxlen=max(1, self.config.max_events))

    def emit_event(self, message: str, attributes: Dict[str, str] | None = None) -> None:
        self.events.append(ObservabilityEvent(event_type="audit", message=message, attributes=attributes))
        logger.debug("%s %s", message, attributes or {})

    def events_named(self, message: str) -> List[ObservabilityEvent]:
        return [event for event in self.events if event.message == message]

    def flush(self) -> None:
        self.events.clear()
