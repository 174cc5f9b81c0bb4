"""Document events for decoupled side effects."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all document events."""
    event_id: str
    timestamp: datetime
    aggregate_id: str

    def __post_init__(self):
        if not self.event_id:
            self.event_id = str(uuid4())
        if not self.timestamp:
            self.timestamp = datetime.now()


@dataclass
class DocumentCreated(DomainEvent):
    """Raised when a document is created from an example."""
    kind: str
    source: str


@dataclass
class DocumentUpdated(DomainEvent):
    """Raised when fields of a document are overwritten and saved."""
    fields: List[str]


@dataclass
class MetricsRecorded(DomainEvent):
    """Raised when performance metrics are written to a metadata document."""
    project_name: str
    metrics: Dict[str, Any]


class DomainEventPublisher:
    """Singleton publisher for document events."""

    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[DomainEvent], None]]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance

    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        self._subscribers.setdefault(event_type, []).append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        for handler in self._subscribers.get(type(event), []):
            try:
                handler(event)
            except Exception:
                # Handlers never fail the operation that raised the event
                logger.exception(f"Event handler error for {type(event).__name__}")

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()
